"""Errors raised while loading and compiling a workflow.

Every failure is fatal for the compilation that raised it. No partially built
graph is ever attached to an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from workflow_compiler.graph.validation import GraphValidationIssue


class WorkflowCompilationError(Exception):
    """Base class for all compilation failures."""


class PreconditionViolation(WorkflowCompilationError, ValueError):
    """Raised on malformed input, e.g. a missing container or workflow."""


class WorkflowParseError(WorkflowCompilationError):
    """Raised when a workflow source cannot be read or does not match the model."""


class UnresolvedTransition(WorkflowCompilationError):
    """A declared `nextState` does not name a known operation state."""

    def __init__(self, source_state: str, target_state: str) -> None:
        super().__init__(
            f"State '{source_state}' transitions to unknown state '{target_state}'"
        )
        self.source_state = source_state
        self.target_state = target_state


class UnknownNodeReference(WorkflowCompilationError):
    """A connection referenced an identity that is not in its container.

    This indicates a compiler bug rather than bad input.
    """

    def __init__(self, identity: int, container_id: int) -> None:
        super().__init__(f"Node {identity} does not exist in container {container_id}")
        self.identity = identity
        self.container_id = container_id


class UnsupportedActionKind(WorkflowCompilationError):
    """An action's function type cannot be compiled into a node."""

    def __init__(self, state: str, action: str, kind: str) -> None:
        super().__init__(
            f"Action '{action}' in state '{state}' has unsupported function type '{kind}'"
        )
        self.state = state
        self.action = action
        self.kind = kind


class ValidationFailed(WorkflowCompilationError):
    """The finished graph was rejected by the validator."""

    def __init__(self, errors: list[GraphValidationIssue]) -> None:
        lines = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Process could not be validated ({len(errors)} error(s)):\n{lines}")
        self.errors = list(errors)
