# detect_gha_jobs/cli.py
from __future__ import annotations

"""Command-line interface
------------------------
`detect-gha-jobs <workflow-file-or-directory>`: print the jobs declared in a
GitHub Actions workflow file, or in every workflow found under a directory.
Thin wrapper around core.engine.run.
"""
import sys
from typing import Optional, Tuple

import click

from detect_gha_jobs.core.engine import run
from detect_gha_jobs.utils.config import get_settings
from detect_gha_jobs.utils.logger import set_log_level


class ScanCommand(click.Command):
    """Command whose usage errors exit 1, like every other failure."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@click.command(
    "detect-gha-jobs",
    cls=ScanCommand,
    context_settings=dict(help_option_names=["-h", "--help"]),
)
@click.argument("targets", nargs=-1, metavar="<workflow-file-or-directory>")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override GHA_JOBS_LOG_LEVEL from settings",
)
@click.version_option(package_name="detect-gha-jobs")
def cli(targets: Tuple[str, ...], log_level: Optional[str]):
    """Print the job IDs and names of GitHub Actions workflows.

    Given a file, reports that file. Given a directory, reports every
    .yml/.yaml file under a .github/workflows path beneath it.

    Put `--` before a path that starts with a dash.
    """
    _ = get_settings()
    if log_level:
        set_log_level(log_level.upper())
    sys.exit(run(list(targets)))


def main() -> None:
    cli(prog_name="detect-gha-jobs")


if __name__ == "__main__":
    main()
