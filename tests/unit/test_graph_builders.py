"""Unit tests for identity allocation, node creation and connections."""

from __future__ import annotations

import threading

import pytest

from workflow_compiler.errors import PreconditionViolation, UnknownNodeReference
from workflow_compiler.graph import (
    ROOT_CONTAINER_ID,
    ConnectionBuilder,
    IdentityAllocator,
    NodeFactory,
    NodeKind,
    ProcessGraph,
    ScriptAction,
)


def test_allocator_starts_at_one_and_increases() -> None:
    allocator = IdentityAllocator()
    assert [allocator.next() for _ in range(4)] == [1, 2, 3, 4]
    assert allocator.next() == 5


def test_allocator_rejects_reserved_start() -> None:
    with pytest.raises(ValueError):
        IdentityAllocator(start=0)


def test_shared_allocator_never_repeats_across_threads() -> None:
    allocator = IdentityAllocator()
    seen: list[int] = []
    lock = threading.Lock()

    def worker() -> None:
        local = [allocator.next() for _ in range(500)]
        with lock:
            seen.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == len(set(seen)) == 4000
    assert sorted(seen) == list(range(1, 4001))


def test_factory_registers_each_variant(factory: NodeFactory) -> None:
    graph = ProcessGraph()

    start = factory.create_start(graph, "start node")
    action = factory.create_action(graph, "s1", ScriptAction(script="x=1", dialect="java"))
    composite = factory.create_composite(graph, "A")
    end = factory.create_end(graph, "end node", terminate=True)

    assert [start.id, action.id, composite.id, end.id] == [1, 2, 3, 4]
    assert graph.nodes == {1: start, 2: action, 3: composite, 4: end}
    assert {n.container_id for n in graph.nodes.values()} == {ROOT_CONTAINER_ID}
    assert [n.kind for n in graph.nodes.values()] == [
        NodeKind.START,
        NodeKind.ACTION,
        NodeKind.COMPOSITE,
        NodeKind.END,
    ]
    assert end.terminate is True


def test_action_payload_is_stored_verbatim(factory: NodeFactory) -> None:
    body = '  System.out.println("hi");\n  // keep me\n'
    node = factory.create_action(ProcessGraph(), "print", ScriptAction(script=body, dialect="mvel"))

    assert node.action.script == body
    assert node.action.dialect == "mvel"


def test_composite_owns_an_empty_inner_graph(factory: NodeFactory) -> None:
    graph = ProcessGraph()
    composite = factory.create_composite(graph, "A")

    assert composite.auto_complete is True
    assert composite.variable_scope.variables == {}
    assert composite.graph.container_id == composite.id
    assert composite.graph.parent_id == ROOT_CONTAINER_ID
    assert composite.graph.nodes == {}
    assert not composite.graph.is_root


def test_identities_are_global_across_containers(factory: NodeFactory) -> None:
    graph = ProcessGraph()
    composite = factory.create_composite(graph, "A")
    inner_start = factory.create_start(composite.graph, "start node")
    outer_end = factory.create_end(graph, "end node", terminate=False)

    assert inner_start.container_id == composite.id
    assert len({composite.id, inner_start.id, outer_end.id}) == 3
    assert inner_start.id not in graph.nodes


@pytest.mark.parametrize("method", ["create_start", "create_composite"])
def test_factory_requires_a_container(factory: NodeFactory, method: str) -> None:
    with pytest.raises(PreconditionViolation):
        getattr(factory, method)(None, "x")


def test_factory_end_and_action_require_a_container(factory: NodeFactory) -> None:
    with pytest.raises(PreconditionViolation):
        factory.create_end(None, "end node", terminate=True)
    with pytest.raises(PreconditionViolation):
        factory.create_action(None, "s1", ScriptAction(script="", dialect="java"))


def test_connect_stamps_unique_id(factory: NodeFactory, builder: ConnectionBuilder) -> None:
    graph = ProcessGraph()
    a = factory.create_start(graph, "start node")
    b = factory.create_end(graph, "end node", terminate=True)

    connection = builder.connect(graph, a.id, b.id)

    assert connection.unique_id == f"{a.id}_{b.id}"
    assert connection.container_id == ROOT_CONTAINER_ID
    assert graph.connections == [connection]
    assert graph.outgoing(a.id) == [connection]
    assert graph.incoming(b.id) == [connection]


def test_connect_rejects_unknown_identity(factory: NodeFactory, builder: ConnectionBuilder) -> None:
    graph = ProcessGraph()
    a = factory.create_start(graph, "start node")

    with pytest.raises(UnknownNodeReference) as excinfo:
        builder.connect(graph, a.id, 99)

    assert excinfo.value.identity == 99
    assert excinfo.value.container_id == ROOT_CONTAINER_ID
    assert graph.connections == []


def test_connect_rejects_cross_container_reference(
    factory: NodeFactory, builder: ConnectionBuilder
) -> None:
    graph = ProcessGraph()
    start = factory.create_start(graph, "start node")
    composite = factory.create_composite(graph, "A")
    inner = factory.create_start(composite.graph, "start node")

    with pytest.raises(UnknownNodeReference) as excinfo:
        builder.connect(graph, start.id, inner.id)

    assert excinfo.value.identity == inner.id


def test_connect_requires_a_container(builder: ConnectionBuilder) -> None:
    with pytest.raises(PreconditionViolation):
        builder.connect(None, 1, 2)
