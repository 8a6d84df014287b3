"""Structural validation of compiled process graphs.

The compiler accepts any `GraphValidator`. `StructuralGraphValidator` is the
default and checks the shape of every container in the tree:

1. Exactly one start node and at least one end node (inner graphs only when
   non-empty)
2. Every connection endpoint resolves in its container
3. Connection unique ids are unique per container
4. Start nodes have no incoming and end nodes no outgoing connections
5. Every other node has both incoming and outgoing connections
6. Every node is reachable from the start node

Cycles are allowed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import networkx as nx

from .nodes import CompositeNode, NodeKind, ProcessGraph


@dataclass(frozen=True, slots=True)
class GraphValidationIssue:
    container_id: int
    message: str
    node_id: int | None = None

    def __str__(self) -> str:
        where = f"container {self.container_id}"
        if self.node_id is not None:
            where += f", node {self.node_id}"
        return f"[{where}] {self.message}"

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {"container_id": self.container_id, "message": self.message}
        if self.node_id is not None:
            out["node_id"] = self.node_id
        return out


class GraphValidator(Protocol):
    """Return every structural problem found in `graph` (empty when valid)."""

    def validate(self, graph: ProcessGraph) -> list[GraphValidationIssue]: ...


class StructuralGraphValidator:
    def validate(self, graph: ProcessGraph) -> list[GraphValidationIssue]:
        issues: list[GraphValidationIssue] = []
        self._validate_container(graph, label="Process", issues=issues)
        return issues

    def _validate_container(
        self, graph: ProcessGraph, *, label: str, issues: list[GraphValidationIssue]
    ) -> None:
        cid = graph.container_id

        def report(message: str, node_id: int | None = None) -> None:
            issues.append(GraphValidationIssue(container_id=cid, message=message, node_id=node_id))

        # An empty composite completes immediately; nothing to check inside it.
        if not graph.is_root and not graph.nodes:
            return

        starts = graph.start_nodes
        if not starts:
            report(f"{label} has no start node")
        elif len(starts) > 1:
            ids = ", ".join(str(n.id) for n in starts)
            report(f"{label} has {len(starts)} start nodes ({ids}); exactly one is required")
        if not graph.end_nodes:
            report(f"{label} has no end node")

        g: nx.DiGraph = nx.DiGraph()
        g.add_nodes_from(graph.nodes)

        seen_ids: set[str] = set()
        for connection in graph.connections:
            if connection.unique_id in seen_ids:
                report(f"Duplicate connection '{connection.unique_id}'")
            seen_ids.add(connection.unique_id)

            dangling = False
            for endpoint in (connection.source_id, connection.target_id):
                if endpoint not in graph.nodes:
                    report(
                        f"Connection '{connection.unique_id}' references unknown node {endpoint}"
                    )
                    dangling = True
            if not dangling:
                g.add_edge(connection.source_id, connection.target_id)

        for node in graph.nodes.values():
            has_in = g.in_degree(node.id) > 0
            has_out = g.out_degree(node.id) > 0
            if node.kind is NodeKind.START:
                if has_in:
                    report(f"Start node '{node.name}' has incoming connections", node.id)
            elif not has_in:
                report(f"Node '{node.name}' has no incoming connection", node.id)
            if node.kind is NodeKind.END:
                if has_out:
                    report(f"End node '{node.name}' has outgoing connections", node.id)
            elif not has_out:
                report(f"Node '{node.name}' has no outgoing connection", node.id)

        if len(starts) == 1:
            start_id = starts[0].id
            reachable = nx.descendants(g, start_id)
            reachable.add(start_id)
            for node_id in sorted(set(graph.nodes) - reachable):
                node = graph.nodes[node_id]
                report(f"Node '{node.name}' is not reachable from the start node", node_id)

        for node in graph.nodes.values():
            if isinstance(node, CompositeNode):
                self._validate_container(
                    node.graph, label=f"Composite node '{node.name}'", issues=issues
                )
