from pathlib import Path
import textwrap

import pytest

from detect_gha_jobs.core.exceptions import FileReadError, ParseError
from detect_gha_jobs.core.workflow_loader import (
    JobDescriptor,
    WorkflowDocument,
    load_workflow,
    parse_workflow,
)


def write(tmp_path: Path, text: str, name: str = "ci.yml") -> Path:
    p = tmp_path / name
    p.write_text(textwrap.dedent(text), encoding="utf-8")
    return p


def test_load_workflow_reads_name_and_jobs(tmp_path: Path):
    f = write(
        tmp_path,
        """
        name: Test Workflow
        on:
          push:
            branches: [main]
        jobs:
          build:
            name: Build Job
            runs-on: ubuntu-latest
            steps:
              - uses: actions/checkout@v4
          test:
            runs-on: [self-hosted, linux]
            needs: build
            if: github.event_name == 'push'
            environment:
              name: staging
            steps:
              - run: pytest
        """,
    )

    wf = load_workflow(f)
    assert wf.name == "Test Workflow"
    assert list(wf.jobs) == ["build", "test"]
    assert wf.jobs["build"].name == "Build Job"
    assert wf.jobs["build"].runs_on == "ubuntu-latest"
    assert wf.jobs["test"].name == ""
    assert wf.jobs["test"].needs == "build"
    assert wf.jobs["test"].if_ == "github.event_name == 'push'"
    assert wf.jobs["test"].steps == [{"run": "pytest"}]


def test_bare_on_key_is_kept_as_trigger():
    wf = parse_workflow("on: [push, pull_request]\njobs: {}\n")
    assert wf.on == ["push", "pull_request"]


def test_job_order_follows_document():
    wf = parse_workflow(
        textwrap.dedent(
            """
            jobs:
              zeta: {}
              alpha: {}
              mid: {}
            """
        )
    )
    assert list(wf.jobs) == ["zeta", "alpha", "mid"]


def test_unknown_keys_are_ignored():
    wf = parse_workflow(
        textwrap.dedent(
            """
            name: Extras
            permissions:
              contents: read
            concurrency: ci-${{ github.ref }}
            jobs:
              build:
                strategy:
                  matrix:
                    python: ["3.11", "3.12"]
                timeout-minutes: 10
                steps: []
            """
        )
    )
    assert wf.name == "Extras"
    assert wf.jobs["build"] == JobDescriptor(steps=[])


def test_missing_and_null_fields_default_to_blank():
    wf = parse_workflow(
        textwrap.dedent(
            """
            name:
            jobs:
              lint:
            """
        )
    )
    assert wf.name == ""
    assert wf.jobs["lint"].name == ""
    assert wf.jobs["lint"].steps is None


def test_empty_file_is_an_empty_workflow(tmp_path: Path):
    f = write(tmp_path, "# nothing here\n")
    assert load_workflow(f) == WorkflowDocument()


def test_scalar_names_keep_their_text():
    wf = parse_workflow(
        textwrap.dedent(
            """
            name: 2024
            jobs:
              1:
                name: true
                if: false
            """
        )
    )
    assert wf.name == "2024"
    assert wf.jobs["1"].name == "true"
    assert wf.jobs["1"].if_ == "false"


def test_merge_keys_may_override_anchored_values():
    wf = parse_workflow(
        textwrap.dedent(
            """
            x-defaults: &defaults
              runs-on: ubuntu-latest
              name: Default
            jobs:
              build:
                <<: *defaults
                name: Build
            """
        )
    )
    assert wf.jobs["build"].name == "Build"
    assert wf.jobs["build"].runs_on == "ubuntu-latest"


def test_only_first_document_is_used():
    wf = parse_workflow(
        textwrap.dedent(
            """
            name: first
            jobs:
              one: {}
            ---
            name: second
            jobs:
              two: {}
            """
        )
    )
    assert wf.name == "first"
    assert list(wf.jobs) == ["one"]


def test_malformed_yaml_raises_parse_error(tmp_path: Path):
    f = write(tmp_path, "invalid: yaml: content\n  - not properly formatted\n")
    with pytest.raises(ParseError) as exc:
        load_workflow(f)
    assert str(exc.value).startswith("failed to parse YAML: line 1:")
    assert exc.value.path == str(f)


def test_duplicate_job_ids_are_rejected():
    with pytest.raises(ParseError, match="already defined"):
        parse_workflow(
            textwrap.dedent(
                """
                jobs:
                  build: {}
                  build: {}
                """
            )
        )


@pytest.mark.parametrize(
    "text, where",
    [
        ("- just\n- a list\n", "expected a mapping"),
        ("name: [a, b]\n", "name:"),
        ("jobs: [build]\n", "jobs:"),
        ("jobs:\n  build: oops\n", "jobs.build:"),
        ("jobs:\n  build:\n    steps: run tests\n", "jobs.build.steps:"),
        ("jobs:\n  build:\n    name: {a: 1}\n", "jobs.build.name:"),
    ],
)
def test_schema_mismatch_raises_parse_error(text: str, where: str):
    with pytest.raises(ParseError) as exc:
        parse_workflow(text)
    assert str(exc.value).startswith("failed to parse YAML:")
    assert where in str(exc.value)


def test_unreadable_file_raises_file_read_error(tmp_path: Path):
    missing = tmp_path / "missing.yml"
    with pytest.raises(FileReadError) as exc:
        load_workflow(missing)
    assert str(exc.value).startswith("failed to read file:")


def test_directory_path_raises_file_read_error(tmp_path: Path):
    d = tmp_path / "dir.yml"
    d.mkdir()
    with pytest.raises(FileReadError):
        load_workflow(d)


@pytest.mark.parametrize("text", ["3.10", "yes", "0x1A", "010", "12:30", "2024-01-01", "~/notnull"])
def test_plain_scalars_keep_their_source_text(text: str):
    wf = parse_workflow(f"name: {text}\njobs:\n  {text}:\n    name: {text}\n")
    assert wf.name == text
    assert list(wf.jobs) == [text]
    assert wf.jobs[text].name == text


def test_null_spellings_still_mean_blank():
    wf = parse_workflow("name: ~\njobs:\n  a:\n    name: null\n  b:\n    name: Null\n")
    assert wf.name == ""
    assert [job.name for job in wf.jobs.values()] == ["", ""]


def test_quoted_and_plain_job_ids_with_same_text_are_duplicates():
    with pytest.raises(ParseError, match="already defined"):
        parse_workflow('jobs:\n  1: {name: a}\n  "1": {name: b}\n')


def test_explicitly_tagged_ids_colliding_with_text_are_rejected():
    with pytest.raises(ParseError, match="already defined"):
        parse_workflow('jobs:\n  !!int 1: {name: a}\n  "1": {name: b}\n')
