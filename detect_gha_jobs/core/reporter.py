# detect_gha_jobs/core/reporter.py
from __future__ import annotations

from typing import List, TextIO

import click

from detect_gha_jobs.core.workflow_loader import WorkflowDocument, load_workflow


def render_report(path: str, document: WorkflowDocument) -> List[str]:
    """Lines of the report for one workflow file, without trailing newlines."""
    lines = [
        f"File: {path}",
        f"Workflow: {document.name}",
    ]
    for job_id, job in document.jobs.items():
        lines.append(f"Job ID: {job_id}")
        if job.name:
            lines.append(f"Job Name: {job.name}")
        lines.append("")
    return lines


def report_workflow(path: str, out: TextIO) -> WorkflowDocument:
    """Load `path` and write its report to `out`.

    Raises FileReadError / ParseError before anything is written.
    """
    document = load_workflow(path)
    for line in render_report(path, document):
        click.echo(line, file=out, color=True)
    return document


__all__ = ["render_report", "report_workflow"]
