"""Single-pass pipeline from definitions to a graph document."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from rmqgraph.core.bindings import Binding, BindingResolver
from rmqgraph.core.config import RenderConfig
from rmqgraph.core.entities import Entity, EntitySet
from rmqgraph.core.ordering import apply_order
from rmqgraph.core.schema import DefinitionsSchema
from rmqgraph.graph.assembler import GraphAssembler
from rmqgraph.graph.descriptors import GraphDocument


@dataclass
class VhostSummary:
    vhost: str
    queues: int = 0
    exchanges: int = 0
    bindings: int = 0
    dead_letter_bindings: int = 0


@dataclass
class GraphBuild:
    """Everything one run produced, before rendering."""

    document: GraphDocument
    entities: list[Entity] = field(default_factory=list)
    bindings: list[Binding] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)

    def summary(self) -> list[VhostSummary]:
        """Per-vhost counts, in cluster order."""
        kinds = Counter((e.vhost, e.kind.value) for e in self.entities)
        edges = Counter((b.vhost, b.is_dead_letter) for b in self.bindings)
        return [
            VhostSummary(
                vhost=cluster.label,
                queues=kinds[(cluster.label, "queue")],
                exchanges=kinds[(cluster.label, "exchange")],
                bindings=edges[(cluster.label, False)],
                dead_letter_bindings=edges[(cluster.label, True)],
            )
            for cluster in self.document.clusters
        ]


def build_graph(definitions: DefinitionsSchema, config: RenderConfig | None = None) -> GraphBuild:
    """
    Resolve, order and assemble a definitions export.

    Pure: no I/O, and every collection is local to this call.
    """
    config = config or RenderConfig()

    entity_set = EntitySet.from_definitions(definitions)
    resolution = BindingResolver(entity_set).resolve(definitions.bindings)
    ordered = apply_order(entity_set, config.overrides)
    document = GraphAssembler().assemble(ordered, resolution.bindings)

    return GraphBuild(
        document=document,
        entities=ordered,
        bindings=resolution.bindings,
        diagnostics=resolution.diagnostics,
    )
