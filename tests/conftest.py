"""Test configuration and fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from workflow_compiler.compiler import WorkflowCompiler
from workflow_compiler.config import CompilerSettings
from workflow_compiler.definition import WorkflowSpec
from workflow_compiler.graph import ConnectionBuilder, IdentityAllocator, NodeFactory

_SETTINGS_ENV = (
    "WORKFLOW_COMPILER_LOG_LEVEL",
    "WORKFLOW_COMPILER_PACKAGE_NAME",
    "WORKFLOW_COMPILER_SCRIPT_DIALECT",
    "WORKFLOW_COMPILER_START_NODE_NAME",
    "WORKFLOW_COMPILER_END_NODE_NAME",
    "WORKFLOW_COMPILER_SKIP_UNSUPPORTED_ACTIONS",
)


def script(name: str, body: str) -> dict[str, object]:
    return {"function": {"name": name, "type": "script", "parameters": {"script": body}}}


@pytest.fixture(autouse=True)
def _clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of the tests."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> CompilerSettings:
    """Provide compiler settings that ignore any local `.env`."""
    return CompilerSettings(_env_file=None)


@pytest.fixture
def compiler(settings: CompilerSettings) -> WorkflowCompiler:
    return WorkflowCompiler(settings)


@pytest.fixture
def factory() -> NodeFactory:
    return NodeFactory(IdentityAllocator())


@pytest.fixture
def builder() -> ConnectionBuilder:
    return ConnectionBuilder()


@pytest.fixture
def two_state_document() -> dict[str, object]:
    """A -> B, one script action each, B ends the workflow."""
    return {
        "id": "w1",
        "name": "Two states",
        "version": "1.0",
        "startsAt": "A",
        "states": [
            {
                "name": "A",
                "type": "operation",
                "actions": [script("s1", "x=1")],
                "nextState": "B",
            },
            {
                "name": "B",
                "type": "operation",
                "actions": [script("s2", "y=2")],
                "end": True,
            },
        ],
    }


@pytest.fixture
def two_state_workflow(two_state_document: dict[str, object]) -> WorkflowSpec:
    return WorkflowSpec.model_validate(two_state_document)


@pytest.fixture
def workflow_file(tmp_path: Path, two_state_document: dict[str, object]) -> Path:
    path = tmp_path / "workflow.sw.json"
    path.write_text(json.dumps(two_state_document), encoding="utf-8")
    return path
