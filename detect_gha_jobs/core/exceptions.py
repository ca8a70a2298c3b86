# detect_gha_jobs/core/exceptions.py
from __future__ import annotations

"""Error kinds
--------------
Every failure the command can report. The message of each error is the exact
line printed to stderr; causes are chained with ``raise ... from``.
"""


class DetectGhaJobsError(Exception):
    """Base class for all errors raised by detect-gha-jobs."""


class UsageError(DetectGhaJobsError):
    """No path argument was given."""


class WorkingDirectoryError(DetectGhaJobsError):
    """The current working directory could not be determined."""


class PathError(DetectGhaJobsError):
    """The target path does not exist or cannot be stat'd."""


class TraversalError(DetectGhaJobsError):
    """Walking the directory tree failed; the whole scan is aborted."""


class NoWorkflowsFoundError(DetectGhaJobsError):
    """A directory scan found no candidate workflow files."""


class WorkflowFileError(DetectGhaJobsError):
    """A single workflow file could not be reported.

    Fatal for a single-file run; a directory run warns and moves on.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class FileReadError(WorkflowFileError):
    pass


class ParseError(WorkflowFileError):
    pass


__all__ = [
    "DetectGhaJobsError",
    "UsageError",
    "WorkingDirectoryError",
    "PathError",
    "TraversalError",
    "NoWorkflowsFoundError",
    "WorkflowFileError",
    "FileReadError",
    "ParseError",
]
