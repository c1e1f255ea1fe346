"""Binding resolution, including dead-letter edge synthesis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from rmqgraph.core.entities import Entity, EntitySet, Exchange, Queue
from rmqgraph.core.errors import ResolutionError
from rmqgraph.core.schema import BindingSchema


@dataclass(frozen=True)
class Binding:
    """A directed edge between two resolved entities of the same vhost."""

    source: Entity
    destination: Entity
    vhost: str
    routing_key: str = ""
    is_dead_letter: bool = False
    arguments: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if self.source.vhost != self.vhost or self.destination.vhost != self.vhost:
            raise ResolutionError(
                f"Binding {self.source.full_name} -> {self.destination.full_name} "
                f"crosses vhosts (binding vhost {self.vhost!r})"
            )

    @property
    def label(self) -> str:
        return self.routing_key or ""

    def __repr__(self) -> str:
        marker = " dlx" if self.is_dead_letter else ""
        return f"Binding({self.source.full_name} -> {self.destination.full_name}, {self.routing_key!r}{marker})"


@dataclass
class Resolution:
    """Result of resolving bindings: the edges kept and why others were dropped."""

    bindings: list[Binding] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)

    @property
    def explicit(self) -> list[Binding]:
        return [b for b in self.bindings if not b.is_dead_letter]

    @property
    def dead_letter(self) -> list[Binding]:
        return [b for b in self.bindings if b.is_dead_letter]


class BindingResolver:
    """
    Resolves raw binding records against an entity set.

    Unresolvable bindings never abort a run: each failure becomes a
    diagnostic and only that binding is dropped.
    """

    def __init__(self, entities: EntitySet) -> None:
        self._entities = entities

    def get_source(self, raw: BindingSchema) -> Exchange:
        """Bindings always originate from an exchange."""
        source = self._entities.get_exchange(raw.vhost, raw.source)
        if source is None:
            raise ResolutionError(f"{raw.source} exchange not found in vhost {raw.vhost}")
        return source

    def get_destination(self, raw: BindingSchema) -> Entity:
        destination = self._entities.get(raw.destination_type, raw.vhost, raw.destination)
        if destination is None:
            destination_type = raw.destination_type or "(no destination type)"
            raise ResolutionError(
                f"{raw.destination} {destination_type} not found in vhost {raw.vhost}"
            )
        return destination

    def resolve_binding(self, raw: BindingSchema) -> Binding:
        """Resolve one explicit binding, raising if either endpoint is missing."""
        source = self.get_source(raw)
        destination = self.get_destination(raw)
        return Binding(
            source=source,
            destination=destination,
            vhost=raw.vhost,
            routing_key=raw.routing_key,
            is_dead_letter=False,
            arguments=dict(raw.arguments),
        )

    def dead_letter_binding(self, queue: Queue) -> Binding:
        """Synthesize the implicit queue -> dead-letter-exchange edge."""
        exchange = self._entities.get_exchange(queue.vhost, queue.dead_letter_exchange or "")
        if exchange is None:
            raise ResolutionError(
                f"{queue.dead_letter_exchange} exchange not found in vhost {queue.vhost} "
                f"(dead-letter exchange of queue {queue.name})"
            )
        return Binding(
            source=queue,
            destination=exchange,
            vhost=queue.vhost,
            routing_key=queue.dead_letter_routing_key,
            is_dead_letter=True,
            arguments={},
        )

    def resolve(self, raw_bindings: Iterable[BindingSchema]) -> Resolution:
        """
        Resolve explicit bindings, then synthesize dead-letter bindings.

        Explicit bindings keep input order; synthesized ones follow in queue
        order.
        """
        result = Resolution()

        for raw in raw_bindings:
            try:
                result.bindings.append(self.resolve_binding(raw))
            except ResolutionError as e:
                result.diagnostics.append(str(e))

        for queue in self._entities.dead_letter_queues():
            try:
                result.bindings.append(self.dead_letter_binding(queue))
            except ResolutionError as e:
                result.diagnostics.append(str(e))

        return result


def resolve_bindings(entities: EntitySet, raw_bindings: Iterable[BindingSchema]) -> Resolution:
    return BindingResolver(entities).resolve(raw_bindings)

