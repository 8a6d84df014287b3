from __future__ import annotations

from workflow_compiler.errors import PreconditionViolation, UnknownNodeReference

from .nodes import Connection, ProcessGraph


def connection_id(source_id: int, target_id: int) -> str:
    return f"{source_id}_{target_id}"


class ConnectionBuilder:
    """Create directed connections between nodes of one container."""

    def connect(
        self, container: ProcessGraph | None, source_id: int, target_id: int
    ) -> Connection:
        """Connect `source_id` to `target_id` inside `container`.

        Both identities must already be registered in `container`; referencing a
        node from another container (or one not created yet) raises
        `UnknownNodeReference`. Duplicate edges are not detected here.
        """

        if container is None:
            raise PreconditionViolation("A node container is required")

        for identity in (source_id, target_id):
            if container.get_node(identity) is None:
                raise UnknownNodeReference(identity, container.container_id)

        connection = Connection(
            source_id=source_id,
            target_id=target_id,
            unique_id=connection_id(source_id, target_id),
            container_id=container.container_id,
        )
        container.add_connection(connection)
        return connection
