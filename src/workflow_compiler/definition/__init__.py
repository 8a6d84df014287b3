"""Serverless Workflow definition model and JSON loading."""

from .loader import WorkflowSource, parse_workflow, read_workflow_source
from .models import ActionKind, ActionSpec, FunctionRef, StateSpec, StateType, WorkflowSpec

__all__ = [
    "ActionKind",
    "ActionSpec",
    "FunctionRef",
    "StateSpec",
    "StateType",
    "WorkflowSource",
    "WorkflowSpec",
    "parse_workflow",
    "read_workflow_source",
]
