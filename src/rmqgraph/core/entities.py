"""Queue and exchange entities resolved from a definitions export."""

from __future__ import annotations

from typing import Any, Iterator, Union

from rmqgraph.core.errors import DuplicateEntityError
from rmqgraph.core.schema import DefinitionsSchema, EntityKind, ExchangeSchema, QueueSchema

DEAD_LETTER_EXCHANGE_ARG = "x-dead-letter-exchange"
DEAD_LETTER_ROUTING_KEY_ARG = "x-dead-letter-routing-key"


def qualified_name(vhost: str, name: str) -> str:
    """Join vhost and name; the default vhost ``/`` adds no prefix."""
    return f"{vhost.removesuffix('/')}/{name}".removeprefix("/")


class _EntityBase:
    """Fields shared by queues and exchanges.

    Instances are immutable; ``with_sort_order`` returns a copy.
    """

    kind: EntityKind

    def __init__(self, schema: QueueSchema | ExchangeSchema, sort_order: int = 0) -> None:
        self._schema = schema
        self._sort_order = sort_order

    @property
    def name(self) -> str:
        return self._schema.name

    @property
    def vhost(self) -> str:
        return self._schema.vhost

    @property
    def durable(self) -> bool:
        return self._schema.durable

    @property
    def auto_delete(self) -> bool:
        return self._schema.auto_delete

    @property
    def arguments(self) -> dict[str, Any]:
        return self._schema.arguments

    @property
    def sort_order(self) -> int:
        """Presentation rank; negative sorts first, positive last."""
        return self._sort_order

    @property
    def identity(self) -> tuple[str, str]:
        """(vhost, name), unique per kind."""
        return (self.vhost, self.name)

    @property
    def key(self) -> tuple[EntityKind, str, str]:
        """Identity across kinds."""
        return (self.kind, self.vhost, self.name)

    @property
    def full_name(self) -> str:
        return qualified_name(self.vhost, self.name)

    @property
    def sort_key(self) -> tuple[str, int, str, str]:
        return (self.vhost, self._sort_order, self.kind.value, self.name)

    def with_sort_order(self, sort_order: int):
        return type(self)(self._schema, sort_order)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _EntityBase):
            return NotImplemented
        return self.key == other.key and self._sort_order == other._sort_order

    def __hash__(self) -> int:
        return hash((self.key, self._sort_order))


class Queue(_EntityBase):
    """A queue, optionally dead-lettering into an exchange."""

    kind = EntityKind.QUEUE

    def __init__(self, schema: QueueSchema, sort_order: int = 0) -> None:
        super().__init__(schema, sort_order)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Queue:
        return cls(QueueSchema(**data))

    @property
    def dead_letter_exchange(self) -> str | None:
        return self.arguments.get(DEAD_LETTER_EXCHANGE_ARG) or None

    @property
    def dead_letter_routing_key(self) -> str:
        return self.arguments.get(DEAD_LETTER_ROUTING_KEY_ARG) or ""

    @property
    def is_dead_letter_queue(self) -> bool:
        """True when the queue names a non-empty dead-letter exchange."""
        return self.dead_letter_exchange is not None

    def __repr__(self) -> str:
        return f"Queue({self.full_name!r}, sort_order={self._sort_order})"


class Exchange(_EntityBase):
    """An exchange routing messages to queues or other exchanges."""

    kind = EntityKind.EXCHANGE

    def __init__(self, schema: ExchangeSchema, sort_order: int = 0) -> None:
        super().__init__(schema, sort_order)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Exchange:
        return cls(ExchangeSchema(**data))

    @property
    def type(self) -> str:
        return self._schema.type

    @property
    def internal(self) -> bool:
        return self._schema.internal

    def __repr__(self) -> str:
        return f"Exchange({self.full_name!r}, type={self.type}, sort_order={self._sort_order})"


Entity = Union[Queue, Exchange]


class EntitySet:
    """
    Resolved queues and exchanges of one definitions export.

    Keeps input order and indexes each kind by (vhost, name) so binding
    resolution is a dictionary lookup.
    """

    def __init__(self, queues: list[Queue], exchanges: list[Exchange]) -> None:
        self._queues = queues
        self._exchanges = exchanges
        self._queue_index: dict[tuple[str, str], Queue] = self._index(queues)
        self._exchange_index: dict[tuple[str, str], Exchange] = self._index(exchanges)

    @staticmethod
    def _index(entities):
        index = {}
        for entity in entities:
            if entity.identity in index:
                raise DuplicateEntityError(
                    f"Duplicate {entity.kind.value} {entity.name!r} in vhost {entity.vhost!r}"
                )
            index[entity.identity] = entity
        return index

    @classmethod
    def from_definitions(cls, definitions: DefinitionsSchema) -> EntitySet:
        """One entity per record, in input order."""
        queues = [Queue(q) for q in definitions.queues]
        exchanges = [Exchange(x) for x in definitions.exchanges]
        return cls(queues, exchanges)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EntitySet:
        """Create entity set from a raw definitions dictionary."""
        return cls.from_definitions(DefinitionsSchema(**data))

    @property
    def queues(self) -> list[Queue]:
        return list(self._queues)

    @property
    def exchanges(self) -> list[Exchange]:
        return list(self._exchanges)

    def get_queue(self, vhost: str, name: str) -> Queue | None:
        return self._queue_index.get((vhost, name))

    def get_exchange(self, vhost: str, name: str) -> Exchange | None:
        return self._exchange_index.get((vhost, name))

    def get(self, kind: EntityKind | str | None, vhost: str, name: str) -> Entity | None:
        """Look up an entity by kind; unknown kinds resolve to nothing."""
        if kind == EntityKind.QUEUE:
            return self.get_queue(vhost, name)
        if kind == EntityKind.EXCHANGE:
            return self.get_exchange(vhost, name)
        return None

    def dead_letter_queues(self) -> list[Queue]:
        return [q for q in self._queues if q.is_dead_letter_queue]

    def vhosts(self) -> set[str]:
        return {e.vhost for e in self}

    def __len__(self) -> int:
        return len(self._queues) + len(self._exchanges)

    def __iter__(self) -> Iterator[Entity]:
        yield from self._exchanges
        yield from self._queues

    def __contains__(self, entity: object) -> bool:
        if not isinstance(entity, (Queue, Exchange)):
            return False
        return self.get(entity.kind, entity.vhost, entity.name) is not None
