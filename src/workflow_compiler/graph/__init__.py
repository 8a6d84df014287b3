"""Compiled process graph types and builders.

This package provides:
- An identity allocator shared by every container of one compilation
- Typed nodes (start, end, action, composite) and connections
- A node factory and a connection builder
- Structural validation of the finished graph
"""

from .connections import ConnectionBuilder, connection_id
from .factory import NodeFactory
from .identity import ROOT_CONTAINER_ID, IdentityAllocator
from .nodes import (
    ActionNode,
    CompositeNode,
    Connection,
    EndNode,
    Node,
    NodeKind,
    ProcessGraph,
    ProcessMetadata,
    ScriptAction,
    StartNode,
    VariableScope,
)
from .validation import GraphValidationIssue, GraphValidator, StructuralGraphValidator

__all__ = [
    "ROOT_CONTAINER_ID",
    "ActionNode",
    "CompositeNode",
    "Connection",
    "ConnectionBuilder",
    "EndNode",
    "GraphValidationIssue",
    "GraphValidator",
    "IdentityAllocator",
    "Node",
    "NodeFactory",
    "NodeKind",
    "ProcessGraph",
    "ProcessMetadata",
    "ScriptAction",
    "StartNode",
    "StructuralGraphValidator",
    "VariableScope",
    "connection_id",
]
