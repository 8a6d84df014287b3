from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from workflow_compiler.errors import WorkflowParseError

from .models import WorkflowSpec

logger = logging.getLogger(__name__)

WorkflowSource = str | Path | TextIO


def read_workflow_source(source: WorkflowSource) -> str:
    """Return the raw JSON text of a workflow source.

    A `str` is treated as the document itself, not as a path.
    """

    if isinstance(source, str):
        return source
    try:
        if isinstance(source, Path):
            return source.read_text(encoding="utf-8")
        return source.read()
    except (OSError, UnicodeDecodeError) as e:
        raise WorkflowParseError(f"Could not read workflow source: {e}") from e


def parse_workflow(source: WorkflowSource) -> WorkflowSpec:
    text = read_workflow_source(source)
    try:
        workflow = WorkflowSpec.model_validate_json(text)
    except ValidationError as e:
        raise WorkflowParseError(f"Invalid workflow definition:\n{e}") from e

    logger.debug(
        "Workflow parsed",
        extra={"workflow_id": workflow.id, "states": len(workflow.states)},
    )
    return workflow
