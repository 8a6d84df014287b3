"""CLI entrypoint for the workflow compiler."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from workflow_compiler import __version__
from workflow_compiler.compiler import WorkflowCompiler
from workflow_compiler.config import CompilerSettings
from workflow_compiler.errors import (
    ValidationFailed,
    WorkflowCompilationError,
    WorkflowParseError,
)
from workflow_compiler.logging import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIG = 2
EXIT_PARSE = 3
EXIT_COMPILE = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-compiler",
        description="Compile Serverless Workflow definitions into process graphs",
    )
    parser.add_argument(
        "--version", action="version", version=f"workflow-compiler {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_cmd = subparsers.add_parser(
        "compile", help="Compile a workflow and print the graph as JSON"
    )
    compile_cmd.add_argument("path", type=Path, help="Path to the workflow JSON file")
    compile_cmd.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the graph to this file instead of stdout",
    )
    compile_cmd.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (0 for compact output)",
    )

    validate_cmd = subparsers.add_parser(
        "validate", help="Compile a workflow and report whether it is valid"
    )
    validate_cmd.add_argument("path", type=Path, help="Path to the workflow JSON file")

    return parser


def _summary(graph_nodes: int, graph_connections: int, workflow_id: str) -> str:
    return f"Workflow '{workflow_id}' is valid: {graph_nodes} nodes, {graph_connections} connections"


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = CompilerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_CONFIG

    configure_logging(settings.log_level)
    compiler = WorkflowCompiler(settings)

    try:
        graph = compiler.compile_source(args.path)

        if args.command == "compile":
            indent = args.indent or None
            rendered = json.dumps(graph.to_json(), indent=indent, ensure_ascii=False) + "\n"
            if args.output is None:
                sys.stdout.write(rendered)
            else:
                args.output.parent.mkdir(parents=True, exist_ok=True)
                args.output.write_text(rendered, encoding="utf-8")
                logger.info("Graph written", extra={"path": str(args.output)})
            return EXIT_OK

        # validate
        graphs = list(graph.iter_graphs())
        workflow_id = graph.metadata.id if graph.metadata is not None else "?"
        print(
            _summary(
                sum(len(g.nodes) for g in graphs),
                sum(len(g.connections) for g in graphs),
                workflow_id,
            )
        )
        return EXIT_OK

    except WorkflowParseError as e:
        print(str(e), file=sys.stderr)
        return EXIT_PARSE

    except ValidationFailed as e:
        for issue in e.errors:
            print(str(issue), file=sys.stderr)
        return EXIT_COMPILE

    except WorkflowCompilationError as e:
        print(str(e), file=sys.stderr)
        return EXIT_COMPILE

    except Exception:
        logger.exception("Command failed")
        return EXIT_UNEXPECTED


if __name__ == "__main__":
    raise SystemExit(main())
