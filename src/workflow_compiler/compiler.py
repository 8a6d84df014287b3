"""Compile a Serverless Workflow definition into a process graph.

Each operation state becomes a composite node whose inner graph chains the
state's script actions:

    start -> action_1 -> ... -> action_n -> end

At the top level the process start node is connected to the `startsAt` state,
every `end` state gets its own end node, and `nextState` transitions connect
composites. The finished graph is validated before it is returned; any failure
raises and the partial graph is dropped.
"""

from __future__ import annotations

import logging

from workflow_compiler.config import CompilerSettings
from workflow_compiler.definition import (
    ActionKind,
    ActionSpec,
    StateSpec,
    WorkflowSource,
    WorkflowSpec,
    parse_workflow,
)
from workflow_compiler.errors import (
    PreconditionViolation,
    UnresolvedTransition,
    UnsupportedActionKind,
    ValidationFailed,
)
from workflow_compiler.graph import (
    CompositeNode,
    ConnectionBuilder,
    GraphValidator,
    IdentityAllocator,
    NodeFactory,
    ProcessGraph,
    ProcessMetadata,
    ScriptAction,
    StructuralGraphValidator,
)
from workflow_compiler.logging import compile_context

logger = logging.getLogger(__name__)


class WorkflowCompiler:
    """Turns a `WorkflowSpec` into a validated `ProcessGraph`.

    A compiler instance holds no per-compilation state; every call to
    `compile` uses its own identity allocator unless one is passed in.
    """

    def __init__(
        self,
        settings: CompilerSettings | None = None,
        *,
        validator: GraphValidator | None = None,
    ) -> None:
        self._settings = settings or CompilerSettings()
        self._validator: GraphValidator = validator or StructuralGraphValidator()
        self._connections = ConnectionBuilder()

    @property
    def settings(self) -> CompilerSettings:
        return self._settings

    def compile_source(self, source: WorkflowSource) -> ProcessGraph:
        """Parse a JSON workflow document and compile it."""

        return self.compile(parse_workflow(source))

    def compile(
        self, workflow: WorkflowSpec | None, *, allocator: IdentityAllocator | None = None
    ) -> ProcessGraph:
        if workflow is None:
            raise PreconditionViolation("A workflow definition is required")

        nodes = NodeFactory(allocator or IdentityAllocator())
        with compile_context(workflow_id=workflow.id, version=workflow.version):
            return self._compile(workflow, nodes)

    def _compile(self, workflow: WorkflowSpec, nodes: NodeFactory) -> ProcessGraph:
        settings = self._settings
        logger.info("Compiling workflow", extra={"states": len(workflow.states)})

        graph = ProcessGraph(
            metadata=ProcessMetadata(
                id=workflow.id,
                name=workflow.name,
                version=workflow.version,
                package_name=settings.package_name,
            )
        )
        start = nodes.create_start(graph, settings.start_node_name)

        states = workflow.operation_states
        composite_ids: dict[str, int] = {}
        for state in states:
            composite = nodes.create_composite(graph, state.name)
            self._build_action_chain(nodes, state, composite)

            if state.name == workflow.starts_at:
                self._connections.connect(graph, start.id, composite.id)

            if state.end:
                end = nodes.create_end(graph, settings.end_node_name, terminate=True)
                self._connections.connect(graph, composite.id, end.id)

            composite_ids[state.name] = composite.id
            logger.debug(
                "State compiled",
                extra={
                    "state": state.name,
                    "node_id": composite.id,
                    "inner_nodes": len(composite.graph.nodes),
                },
            )

        for state in states:
            if state.next_state is None:
                continue
            target_id = composite_ids.get(state.next_state)
            if target_id is None:
                raise UnresolvedTransition(state.name, state.next_state)
            self._connections.connect(graph, composite_ids[state.name], target_id)

        self._validate(graph)

        logger.info(
            "Workflow compiled",
            extra={
                "nodes": sum(len(g.nodes) for g in graph.iter_graphs()),
                "connections": sum(len(g.connections) for g in graph.iter_graphs()),
            },
        )
        return graph

    def _build_action_chain(
        self, nodes: NodeFactory, state: StateSpec, composite: CompositeNode
    ) -> None:
        if not state.actions:
            return

        steps: list[tuple[str, ScriptAction]] = []
        for action in state.actions:
            payload = self._action_payload(state, action)
            if payload is not None:
                steps.append((action.name, payload))

        if not steps:
            logger.warning(
                "No compilable actions; state compiles to an empty composite",
                extra={"state": state.name},
            )
            return

        inner = composite.graph
        previous = nodes.create_start(inner, self._settings.start_node_name)
        for name, payload in steps:
            current = nodes.create_action(inner, name, payload)
            self._connections.connect(inner, previous.id, current.id)
            previous = current

        end = nodes.create_end(inner, self._settings.end_node_name, terminate=True)
        self._connections.connect(inner, previous.id, end.id)

    def _action_payload(self, state: StateSpec, action: ActionSpec) -> ScriptAction | None:
        kind = ActionKind.from_tag(action.kind_tag)

        if kind is ActionKind.SCRIPT:
            script = action.script
            if script is None:
                raise PreconditionViolation(
                    f"Script action '{action.name}' in state '{state.name}' "
                    "has no 'script' parameter"
                )
            return ScriptAction(script=script, dialect=self._settings.script_dialect)

        if self._settings.skip_unsupported_actions:
            logger.warning(
                "Skipping unsupported action",
                extra={"state": state.name, "action": action.name, "kind": action.kind_tag},
            )
            return None
        raise UnsupportedActionKind(state.name, action.name, action.kind_tag)

    def _validate(self, graph: ProcessGraph) -> None:
        issues = self._validator.validate(graph)
        if not issues:
            return
        logger.error(
            "Process could not be validated",
            extra={"issues": len(issues)},
        )
        raise ValidationFailed(issues)
