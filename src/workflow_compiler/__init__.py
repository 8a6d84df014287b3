"""Serverless Workflow graph compiler.

Compiles a state-based workflow definition into a validated process graph:
- configuration loaded from `.env`
- structured logging
- composite node per operation state, wired by declared transitions
"""

__version__ = "0.1.0"

from workflow_compiler.compiler import WorkflowCompiler
from workflow_compiler.config import CompilerSettings
from workflow_compiler.definition import WorkflowSpec, parse_workflow
from workflow_compiler.errors import (
    PreconditionViolation,
    UnknownNodeReference,
    UnresolvedTransition,
    UnsupportedActionKind,
    ValidationFailed,
    WorkflowCompilationError,
    WorkflowParseError,
)
from workflow_compiler.graph import ProcessGraph

__all__ = [
    "__version__",
    "CompilerSettings",
    "PreconditionViolation",
    "ProcessGraph",
    "UnknownNodeReference",
    "UnresolvedTransition",
    "UnsupportedActionKind",
    "ValidationFailed",
    "WorkflowCompilationError",
    "WorkflowCompiler",
    "WorkflowParseError",
    "WorkflowSpec",
    "parse_workflow",
]
