from __future__ import annotations

from workflow_compiler.errors import PreconditionViolation

from .identity import IdentityAllocator
from .nodes import (
    ActionNode,
    CompositeNode,
    EndNode,
    ProcessGraph,
    ScriptAction,
    StartNode,
    VariableScope,
)


def _require_container(container: ProcessGraph | None) -> ProcessGraph:
    if container is None:
        raise PreconditionViolation("A node container is required")
    return container


class NodeFactory:
    """Create typed nodes and register them in a container.

    Identities come from the injected allocator, so every node created through
    one factory is unique across all nested containers.
    """

    def __init__(self, allocator: IdentityAllocator) -> None:
        self._allocator = allocator

    def create_start(self, container: ProcessGraph | None, name: str) -> StartNode:
        target = _require_container(container)
        node = StartNode(id=self._allocator.next(), name=name, container_id=target.container_id)
        target.add_node(node)
        return node

    def create_end(
        self, container: ProcessGraph | None, name: str, *, terminate: bool
    ) -> EndNode:
        target = _require_container(container)
        node = EndNode(
            id=self._allocator.next(),
            name=name,
            container_id=target.container_id,
            terminate=terminate,
        )
        target.add_node(node)
        return node

    def create_action(
        self, container: ProcessGraph | None, name: str, payload: ScriptAction
    ) -> ActionNode:
        target = _require_container(container)
        node = ActionNode(
            id=self._allocator.next(),
            name=name,
            container_id=target.container_id,
            action=payload,
        )
        target.add_node(node)
        return node

    def create_composite(self, container: ProcessGraph | None, name: str) -> CompositeNode:
        target = _require_container(container)
        identity = self._allocator.next()
        node = CompositeNode(
            id=identity,
            name=name,
            container_id=target.container_id,
            graph=ProcessGraph(container_id=identity, parent_id=target.container_id),
            auto_complete=True,
            variable_scope=VariableScope(),
        )
        target.add_node(node)
        return node
