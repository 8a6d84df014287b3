"""The compiled process graph: nodes, connections and nested containers."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from .identity import ROOT_CONTAINER_ID

PUBLIC_VISIBILITY = "Public"


class NodeKind(str, Enum):
    START = "start"
    END = "end"
    ACTION = "action"
    COMPOSITE = "composite"


@dataclass(frozen=True, slots=True)
class ProcessMetadata:
    """Process-level attributes carried by the top-level graph only."""

    id: str
    name: str
    version: str
    package_name: str
    visibility: str = PUBLIC_VISIBILITY
    auto_complete: bool = True

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "package_name": self.package_name,
            "visibility": self.visibility,
            "auto_complete": self.auto_complete,
        }


@dataclass(frozen=True, slots=True)
class ScriptAction:
    """Opaque script payload. The body is kept exactly as written."""

    script: str
    dialect: str

    def to_json(self) -> dict[str, object]:
        return {"script": self.script, "dialect": self.dialect}


@dataclass(slots=True)
class VariableScope:
    """Default variable scope attached to a composite node.

    Variables are not populated by the compiler; the execution engine owns them.
    """

    variables: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class BaseNode:
    kind: ClassVar[NodeKind]

    id: int
    name: str
    container_id: int

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "name": self.name,
            "container_id": self.container_id,
        }


@dataclass(frozen=True, slots=True)
class StartNode(BaseNode):
    kind: ClassVar[NodeKind] = NodeKind.START


@dataclass(frozen=True, slots=True)
class EndNode(BaseNode):
    kind: ClassVar[NodeKind] = NodeKind.END

    # Reaching this node force-completes the owning container.
    terminate: bool = True

    def to_json(self) -> dict[str, object]:
        out = BaseNode.to_json(self)
        out["terminate"] = self.terminate
        return out


@dataclass(frozen=True, slots=True)
class ActionNode(BaseNode):
    kind: ClassVar[NodeKind] = NodeKind.ACTION

    action: ScriptAction

    def to_json(self) -> dict[str, object]:
        out = BaseNode.to_json(self)
        out["action"] = self.action.to_json()
        return out


@dataclass(frozen=True, slots=True)
class CompositeNode(BaseNode):
    kind: ClassVar[NodeKind] = NodeKind.COMPOSITE

    graph: ProcessGraph
    auto_complete: bool = True
    variable_scope: VariableScope = field(default_factory=VariableScope)

    def to_json(self) -> dict[str, object]:
        out = BaseNode.to_json(self)
        out["auto_complete"] = self.auto_complete
        out["graph"] = self.graph.to_json()
        return out


Node = StartNode | EndNode | ActionNode | CompositeNode


@dataclass(frozen=True, slots=True)
class Connection:
    source_id: int
    target_id: int
    unique_id: str
    container_id: int

    def to_json(self) -> dict[str, object]:
        return {
            "source_id": self.source_id,
            "target_id": self.target_id,
            "unique_id": self.unique_id,
            "container_id": self.container_id,
        }


@dataclass
class ProcessGraph:
    """A container of nodes and the connections between them.

    The top-level graph has container id 0 and carries process metadata. Each
    composite node owns exactly one inner graph whose container id is the
    composite's identity and whose parent id is the enclosing container.
    """

    container_id: int = ROOT_CONTAINER_ID
    parent_id: int | None = None
    metadata: ProcessMetadata | None = None
    nodes: dict[int, Node] = field(default_factory=dict)
    connections: list[Connection] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def add_node(self, node: Node) -> None:
        if node.container_id != self.container_id:
            raise ValueError(
                f"Node {node.id} belongs to container {node.container_id}, "
                f"not {self.container_id}"
            )
        if node.id in self.nodes:
            raise ValueError(f"Node {node.id} already registered in container {self.container_id}")
        self.nodes[node.id] = node

    def add_connection(self, connection: Connection) -> None:
        self.connections.append(connection)

    def get_node(self, node_id: int) -> Node | None:
        return self.nodes.get(node_id)

    def nodes_of(self, kind: NodeKind) -> list[Node]:
        return [n for n in self.nodes.values() if n.kind is kind]

    @property
    def start_nodes(self) -> list[Node]:
        return self.nodes_of(NodeKind.START)

    @property
    def end_nodes(self) -> list[Node]:
        return self.nodes_of(NodeKind.END)

    def outgoing(self, node_id: int) -> list[Connection]:
        return [c for c in self.connections if c.source_id == node_id]

    def incoming(self, node_id: int) -> list[Connection]:
        return [c for c in self.connections if c.target_id == node_id]

    def iter_graphs(self) -> Iterator[ProcessGraph]:
        """Yield this graph and every nested graph, depth first."""

        yield self
        for node in self.nodes.values():
            if isinstance(node, CompositeNode):
                yield from node.graph.iter_graphs()

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {"container_id": self.container_id}
        if self.parent_id is not None:
            out["parent_id"] = self.parent_id
        if self.metadata is not None:
            out["metadata"] = self.metadata.to_json()
        out["nodes"] = [node.to_json() for node in self.nodes.values()]
        out["connections"] = [c.to_json() for c in self.connections]
        return out
