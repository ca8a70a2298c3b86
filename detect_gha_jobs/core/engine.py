# detect_gha_jobs/core/engine.py
from __future__ import annotations

"""Scan engine
--------------
Entry procedure behind the command line: resolve the target, then report a
single file or every workflow file found under a directory. Arguments and
output streams are passed in so the whole run can be driven from tests.
"""

import sys
from typing import Optional, Sequence, TextIO

import click

from detect_gha_jobs.core.exceptions import (
    DetectGhaJobsError,
    NoWorkflowsFoundError,
    WorkflowFileError,
)
from detect_gha_jobs.core.locator import find_workflow_files
from detect_gha_jobs.core.reporter import report_workflow
from detect_gha_jobs.core.resolver import resolve_target
from detect_gha_jobs.utils.config import Settings, get_settings
from detect_gha_jobs.utils.logger import get_logger, bind, unbind


class Engine:
    """Runs one scan, writing reports to `out` and warnings to `err`."""

    def __init__(self, out: TextIO, err: TextIO, settings: Optional[Settings] = None):
        self.out = out
        self.err = err
        self.settings = settings or get_settings()
        self.log = get_logger(__name__)

    def scan_file(self, path: str) -> None:
        report_workflow(path, self.out)

    def scan_directory(self, root: str) -> int:
        """Report every workflow under `root`; returns how many were skipped."""
        files = find_workflow_files(root, self.settings)
        if not files:
            raise NoWorkflowsFoundError("no workflow files found")

        skipped = 0
        for path in files:
            click.echo(self.settings.separator, file=self.out, color=True)
            try:
                report_workflow(path, self.out)
            except WorkflowFileError as e:
                skipped += 1
                click.echo(f"warning: error processing {path}: {e}", file=self.err, color=True)
                self.log.debug(f"Skipped {path}", exc_info=True)
        self.log.info(f"Reported {len(files) - skipped} of {len(files)} workflow file(s)")
        return skipped

    def run(self, args: Sequence[str]) -> None:
        target = resolve_target(args)
        bind(target=target.path)
        try:
            if target.is_dir:
                self.scan_directory(target.path)
            else:
                self.scan_file(target.path)
        finally:
            unbind("target")


def run(args: Sequence[str], out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """Run a scan and return the process exit code (0 or 1).

    Fatal errors are printed to `err` as a single unprefixed line. A
    directory run that skipped files still succeeds.
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    try:
        Engine(out, err).run(args)
    except DetectGhaJobsError as e:
        click.echo(str(e), file=err, color=True)
        return 1
    return 0


__all__ = ["Engine", "run"]
