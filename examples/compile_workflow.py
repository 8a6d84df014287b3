#!/usr/bin/env python3
"""Programmatic compilation example.

This demonstrates using the compiler components directly:

* load settings from `.env`
* parse a Serverless Workflow JSON document
* compile it into a validated process graph and print a short outline
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from workflow_compiler.compiler import WorkflowCompiler
from workflow_compiler.config import CompilerSettings
from workflow_compiler.errors import ValidationFailed, WorkflowCompilationError
from workflow_compiler.graph import CompositeNode, ProcessGraph
from workflow_compiler.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compile a workflow (programmatic example).")
    parser.add_argument(
        "path",
        nargs="?",
        default=str(Path(__file__).with_name("greeting.sw.json")),
        help="Workflow JSON file",
    )
    return parser.parse_args(argv)


def _outline(graph: ProcessGraph, depth: int = 0) -> None:
    pad = "  " * depth
    for node in graph.nodes.values():
        print(f"{pad}{node.id:>3} {node.kind.value:<9} {node.name}")
        if isinstance(node, CompositeNode):
            _outline(node.graph, depth + 1)
    for connection in graph.connections:
        print(f"{pad}    {connection.unique_id}")


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = CompilerSettings()
    configure_logging(settings.log_level)

    compiler = WorkflowCompiler(settings)
    try:
        graph = compiler.compile_source(Path(args.path))
    except ValidationFailed as exc:
        for issue in exc.errors:
            print(issue)
        return 1
    except WorkflowCompilationError as exc:
        print(str(exc))
        return 1

    _outline(graph)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
