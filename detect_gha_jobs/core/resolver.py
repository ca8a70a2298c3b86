# detect_gha_jobs/core/resolver.py
from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import Callable, Sequence

from detect_gha_jobs.core.exceptions import PathError, UsageError, WorkingDirectoryError
from detect_gha_jobs.utils.logger import get_logger

USAGE = "usage: detect-gha-jobs <workflow-file-or-directory>"

log = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedTarget:
    """Absolute path of the scan target and whether it is a directory."""
    path: str
    is_dir: bool


def resolve_target(args: Sequence[str], getcwd: Callable[[], str] = os.getcwd) -> ResolvedTarget:
    """Turn the first command-line argument into a ResolvedTarget.

    Arguments after the first are ignored.
    """
    if not args:
        raise UsageError(USAGE)

    path = args[0]
    if not os.path.isabs(path):
        try:
            cwd = getcwd()
        except OSError as e:
            raise WorkingDirectoryError(f"failed to get current directory: {e}") from e
        path = os.path.normpath(os.path.join(cwd, path))

    try:
        info = os.stat(path)
    except OSError as e:
        raise PathError(f"failed to get path info: {e}") from e

    target = ResolvedTarget(path=path, is_dir=stat.S_ISDIR(info.st_mode))
    log.debug(f"Resolved {args[0]!r} -> {target.path} ({'directory' if target.is_dir else 'file'})")
    return target
