"""Assemble resolved entities and bindings into a per-vhost graph document."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Iterable

from rmqgraph.core.bindings import Binding
from rmqgraph.core.entities import Entity, Exchange, Queue
from rmqgraph.core.errors import AssemblyError
from rmqgraph.core.schema import EntityKind
from rmqgraph.graph.descriptors import (
    Cluster,
    EdgeDescriptor,
    GraphDocument,
    NodeDescriptor,
    NodeStyle,
)

# Queue arguments worth showing on the node, in display order
QUEUE_LABEL_ARGUMENTS = (
    "x-max-priority",
    "x-queue-type",
    "x-expires",
    "x-message-ttl",
    "x-max-length",
)

QUEUE_FILL = "#DAE8FC"
EXCHANGE_FILL = "#F8CECC"
DEAD_LETTER_COLOR = "red"


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def describe(entity: Entity) -> tuple[str, tuple[str, ...]]:
    """Return (title, detail lines) for an entity's node label."""
    match entity:
        case Queue():
            details = tuple(
                f"{key}: {format_value(entity.arguments[key])}"
                for key in QUEUE_LABEL_ARGUMENTS
                if key in entity.arguments
            )
            return f"Q: {entity.full_name}", details
        case Exchange():
            return f"E: {entity.full_name}", (entity.type.upper(),)
    raise TypeError(f"Not an entity: {entity!r}")


def style(entity: Entity) -> NodeStyle:
    """Queues are solid; internal exchanges get a dashed outline."""
    match entity:
        case Queue():
            return NodeStyle(shape="box", style="solid,filled", fillcolor=QUEUE_FILL)
        case Exchange():
            line_style = "dashed" if entity.internal else "solid"
            return NodeStyle(shape="box", style=f"{line_style},rounded,filled", fillcolor=EXCHANGE_FILL)
    raise TypeError(f"Not an entity: {entity!r}")


class GraphAssembler:
    """
    Builds a GraphDocument from ordered entities and bindings.

    Render handles live in this assembler, keyed by entity identity, so
    entities stay untouched. Use one assembler per run.
    """

    def __init__(self, graph_name: str = "G") -> None:
        self._graph_name = graph_name
        self._handles: dict[tuple[EntityKind, str, str], str] = {}

    def handle_for(self, entity: Entity) -> str | None:
        return self._handles.get(entity.key)

    def _add_node(self, cluster: Cluster, entity: Entity) -> NodeDescriptor:
        if entity.key in self._handles:
            raise AssemblyError(f"{entity.kind.value} {entity.full_name} added twice")
        handle = f"n{len(self._handles)}"
        self._handles[entity.key] = handle

        title, details = describe(entity)
        node_style = style(entity)
        node = NodeDescriptor(
            handle=handle,
            title=title,
            details=details,
            shape=node_style.shape,
            style=node_style.style,
            fillcolor=node_style.fillcolor,
        )
        cluster.nodes.append(node)
        return node

    def _add_edge(self, cluster: Cluster, binding: Binding) -> EdgeDescriptor:
        tail = self.handle_for(binding.source)
        head = self.handle_for(binding.destination)
        if tail is None or head is None:
            raise AssemblyError(f"Edge {binding!r} references a node that was never added")

        edge = EdgeDescriptor(
            tail=tail,
            head=head,
            label=binding.label,
            color=DEAD_LETTER_COLOR if binding.is_dead_letter else None,
        )
        cluster.edges.append(edge)
        return edge

    def assemble(self, entities: Iterable[Entity], bindings: Iterable[Binding]) -> GraphDocument:
        """
        Partition by vhost and emit nodes, then edges, per cluster.

        Vhosts are taken from both entities and bindings and emitted in
        lexicographic order. Entities keep the order they are given in.
        """
        if self._handles:
            raise AssemblyError("GraphAssembler instances are single-use")

        nodes: dict[str, list[Entity]] = defaultdict(list)
        for entity in entities:
            nodes[entity.vhost].append(entity)

        edges: dict[str, list[Binding]] = defaultdict(list)
        for binding in bindings:
            edges[binding.vhost].append(binding)

        document = GraphDocument(name=self._graph_name)
        for vhost in sorted(nodes.keys() | edges.keys()):
            cluster = Cluster(label=vhost)
            for entity in nodes[vhost]:
                self._add_node(cluster, entity)
            for binding in edges[vhost]:
                self._add_edge(cluster, binding)
            document.clusters.append(cluster)

        return document


def assemble_graph(entities: Iterable[Entity], bindings: Iterable[Binding]) -> GraphDocument:
    return GraphAssembler().assemble(entities, bindings)
