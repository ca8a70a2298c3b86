# detect_gha_jobs/core/workflow_loader.py
from __future__ import annotations

"""Workflow schema and loader
-----------------------------
Pydantic models for the handful of GitHub Actions workflow fields we read,
and a YAML loader that decodes one workflow file into them. A document is
either accepted whole or rejected with ParseError.
"""

import datetime as dt
from pathlib import Path
from typing import Annotated, Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.functional_validators import BeforeValidator

from detect_gha_jobs.core.exceptions import FileReadError, ParseError
from detect_gha_jobs.utils.logger import get_logger

log = get_logger(__name__)


# ---------- Helpers ----------


def _scalar_text(v: Any) -> str:
    """Text of a YAML scalar; reject collections.

    Plain scalars already arrive as their source text (see _UniqueKeyLoader);
    typed values only come from explicit tags such as `!!int 3`.
    """
    if v is None:
        return ""
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, (str, int, float)):
        return str(v)
    if isinstance(v, (dt.date, dt.datetime)):
        return v.isoformat()
    raise ValueError(f"expected a scalar value, got {type(v).__name__}")


ScalarText = Annotated[str, BeforeValidator(_scalar_text)]


_NULL_TAG = "tag:yaml.org,2002:null"
_MERGE_TAG = "tag:yaml.org,2002:merge"


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that keeps plain scalars as text and refuses repeated keys.

    Only the null and merge implicit resolvers are kept, so `3.10`, `yes`,
    `0x1A` or `12:30` reach the models exactly as written.
    """

    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag in (_NULL_TAG, _MERGE_TAG)]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                # keys pulled in through a merge (<<) may be overridden
                if key_node.tag == _MERGE_TAG:
                    continue
                try:
                    text = _scalar_text(self.construct_object(key_node, deep=True))
                except ValueError:
                    # non-scalar key; the base constructor reports it if unhashable
                    continue
                if text in seen:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"mapping key {text!r} already defined",
                        key_node.start_mark,
                    )
                seen.add(text)
        return super().construct_mapping(node, deep=deep)


def _describe_yaml_error(err: yaml.YAMLError) -> str:
    if isinstance(err, yaml.MarkedYAMLError) and err.problem:
        mark = err.problem_mark or err.context_mark
        if mark is not None:
            return f"line {mark.line + 1}: {err.problem}"
        return err.problem
    return " ".join(str(err).split())


def _describe_validation_error(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", []))
        msg = e.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


# ---------- Models ----------


class JobDescriptor(BaseModel):
    """One entry under `jobs:`. Only `name` is reported; the rest just has to parse."""

    model_config = ConfigDict(extra="ignore")

    name: ScalarText = ""
    runs_on: Any = Field(default=None, alias="runs-on")
    environment: Any = None
    steps: Optional[list[Any]] = None
    needs: Any = None
    if_: ScalarText = Field(default="", alias="if")


class WorkflowDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: ScalarText = ""
    on: Any = Field(default=None, description="Trigger spec; kept opaque")
    jobs: dict[str, JobDescriptor] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        jobs = data.get("jobs")
        if jobs is None:
            data.pop("jobs", None)
        elif isinstance(jobs, dict):
            normalized: dict[str, Any] = {}
            for key, job in jobs.items():
                job_id = _scalar_text(key)
                if job_id in normalized:
                    raise ValueError(f"job id {job_id!r} already defined")
                normalized[job_id] = {} if job is None else job
            data["jobs"] = normalized
        return data


# ---------- Public API ----------


def parse_workflow(content: bytes | str, *, source: str | None = None) -> WorkflowDocument:
    """Decode workflow YAML into a WorkflowDocument.

    Only the first document of a multi-document stream is read. An empty
    stream yields an empty WorkflowDocument.
    """
    try:
        loader = _UniqueKeyLoader(content)
        try:
            data = loader.get_data() if loader.check_data() else None
        finally:
            loader.dispose()
    except yaml.YAMLError as ye:
        raise ParseError(f"failed to parse YAML: {_describe_yaml_error(ye)}", path=source) from ye

    if data is None:
        return WorkflowDocument()
    if not isinstance(data, dict):
        raise ParseError(
            f"failed to parse YAML: expected a mapping at the top level, got {type(data).__name__}",
            path=source,
        )

    try:
        return WorkflowDocument.model_validate(data)
    except ValidationError as ve:
        raise ParseError(f"failed to parse YAML: {_describe_validation_error(ve)}", path=source) from ve


def load_workflow(path: Path | str) -> WorkflowDocument:
    """Read and decode one workflow file.

    Raises FileReadError when the file cannot be read and ParseError when its
    contents do not decode into a WorkflowDocument.
    """
    wf_path = Path(path)
    try:
        raw = wf_path.read_bytes()
    except OSError as e:
        raise FileReadError(f"failed to read file: {e}", path=str(path)) from e

    doc = parse_workflow(raw, source=str(path))
    log.debug(f"Parsed {path}: {len(doc.jobs)} job(s)")
    return doc


__all__ = [
    "JobDescriptor",
    "WorkflowDocument",
    "parse_workflow",
    "load_workflow",
]
