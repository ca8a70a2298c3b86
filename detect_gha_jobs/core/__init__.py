"""
Core package for detect-gha-jobs.
Lightweight package init to avoid import cycles.

Consumers should import submodules directly, e.g.:
  from detect_gha_jobs.core.workflow_loader import load_workflow, WorkflowDocument
  from detect_gha_jobs.core.engine import run, Engine
"""

__all__: list[str] = []
