"""Pydantic models for Serverless Workflow definitions.

Field aliases follow the JSON document (`startsAt`, `nextState`). Only the
shape is validated here; cross references between states are resolved by the
compiler.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StateType(str, Enum):
    EVENT = "event"
    OPERATION = "operation"
    SWITCH = "switch"
    DELAY = "delay"
    PARALLEL = "parallel"
    SUBFLOW = "subflow"
    INJECT = "inject"
    FOREACH = "foreach"
    CALLBACK = "callback"


class ActionKind(str, Enum):
    """Function types an action can reference.

    The compiler currently builds nodes for `SCRIPT` only.
    """

    SCRIPT = "script"
    REST = "rest"
    RPC = "rpc"
    EXPRESSION = "expression"

    @classmethod
    def from_tag(cls, tag: str) -> ActionKind | None:
        try:
            return cls(tag.strip().lower())
        except ValueError:
            return None


class _SpecModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class FunctionRef(_SpecModel):
    name: str
    type: str = ""
    parameters: dict[str, Any] = Field(default_factory=dict)


class ActionSpec(_SpecModel):
    function: FunctionRef

    @property
    def name(self) -> str:
        return self.function.name

    @property
    def kind_tag(self) -> str:
        return self.function.type

    @property
    def script(self) -> str | None:
        value = self.function.parameters.get("script")
        return value if isinstance(value, str) else None


class StateSpec(_SpecModel):
    name: str
    type: StateType = StateType.OPERATION
    actions: list[ActionSpec] = Field(default_factory=list)
    next_state: str | None = Field(default=None, alias="nextState")
    end: bool = False

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def is_operation(self) -> bool:
        return self.type is StateType.OPERATION


class WorkflowSpec(_SpecModel):
    id: str
    name: str
    version: str = "1.0"
    starts_at: str = Field(alias="startsAt")
    states: list[StateSpec] = Field(default_factory=list)

    @property
    def operation_states(self) -> list[StateSpec]:
        return [s for s in self.states if s.is_operation]
