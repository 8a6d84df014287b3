"""Configuration for the workflow compiler.

Configuration is loaded from:
- environment variables (prefix `WORKFLOW_COMPILER_`)
- and a local `.env` file (if present)
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CompilerSettings(BaseSettings):
    """Settings for graph compilation.

    Environment variables:
    - WORKFLOW_COMPILER_LOG_LEVEL
    - WORKFLOW_COMPILER_PACKAGE_NAME
    - WORKFLOW_COMPILER_SCRIPT_DIALECT
    - WORKFLOW_COMPILER_START_NODE_NAME
    - WORKFLOW_COMPILER_END_NODE_NAME
    - WORKFLOW_COMPILER_SKIP_UNSUPPORTED_ACTIONS

    Notes:
        Tests can point at a different env file with
        `CompilerSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )
    package_name: str = Field(
        default="org.kie.kogito",
        description="Package name stamped on compiled processes",
    )
    script_dialect: str = Field(
        default="java",
        description="Dialect tag attached to every script action",
    )
    start_node_name: str = Field(
        default="start node",
        description="Display name of generated start nodes",
    )
    end_node_name: str = Field(
        default="end node",
        description="Display name of generated end nodes",
    )
    skip_unsupported_actions: bool = Field(
        default=False,
        description=(
            "Skip actions whose function type cannot be compiled instead of failing. "
            "A state whose actions are all skipped compiles to an empty composite."
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="WORKFLOW_COMPILER_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("package_name", "script_dialect")
    @classmethod
    def _require_non_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value
