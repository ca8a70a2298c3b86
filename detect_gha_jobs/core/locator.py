# detect_gha_jobs/core/locator.py
from __future__ import annotations

"""Workflow file discovery
--------------------------
Recursively collects files that sit under a `.github/workflows` segment and
end in `.yml` / `.yaml`. Any I/O error while walking aborts the whole scan.
"""

import os
from typing import List, Optional

from detect_gha_jobs.core.exceptions import TraversalError
from detect_gha_jobs.utils.config import Settings, get_settings
from detect_gha_jobs.utils.logger import get_logger

log = get_logger(__name__)


def is_workflow_path(path: str, settings: Optional[Settings] = None) -> bool:
    """True if `path` contains the workflows segment and ends in a workflow suffix."""
    s = settings or get_settings()
    normalized = path.replace(os.sep, "/").replace("\\", "/")
    return s.WORKFLOWS_SEGMENT in normalized and normalized.endswith(tuple(s.WORKFLOW_SUFFIXES))


def find_workflow_files(root: str, settings: Optional[Settings] = None) -> List[str]:
    """Return every workflow file beneath `root`, siblings in lexical order."""
    s = settings or get_settings()
    root = os.path.normpath(root)

    def _raise(err: OSError) -> None:
        raise TraversalError(f"failed to search workflow files: {err}") from err

    files: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            path = os.path.join(dirpath, name)
            if is_workflow_path(path, s):
                files.append(path)

    log.debug(f"Found {len(files)} workflow file(s) under {root}")
    return files


__all__ = ["is_workflow_path", "find_workflow_files"]
