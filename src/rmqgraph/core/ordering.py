"""Presentation ordering of entities."""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, Field

from rmqgraph.core.entities import Entity


def split_names(csv: str | None) -> list[str]:
    """Split a comma-separated name list, dropping blanks."""
    if not csv:
        return []
    return [name.strip() for name in csv.split(",") if name.strip()]


class OrderOverrides(BaseModel):
    """
    User-supplied "render first" and "render last" ranks.

    ``first`` maps names to negative ranks, ``last`` to positive ranks.
    Unranked entities keep rank 0.
    """

    model_config = {"frozen": True}

    first: dict[str, int] = Field(default_factory=dict)
    last: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_lists(cls, first: Iterable[str] = (), last: Iterable[str] = ()) -> OrderOverrides:
        # Reversed so the leftmost name gets the most negative rank:
        # ["a", "b"] -> a=-2, b=-1
        first_ranks = {name: -i - 1 for i, name in enumerate(reversed(list(first)))}
        last_ranks = {name: i + 1 for i, name in enumerate(last)}
        return cls(first=first_ranks, last=last_ranks)

    @classmethod
    def from_csv(cls, first: str | None = None, last: str | None = None) -> OrderOverrides:
        return cls.from_lists(split_names(first), split_names(last))

    def rank(self, name: str) -> int:
        """First-list rank wins when a name appears in both lists."""
        if name in self.first:
            return self.first[name]
        return self.last.get(name, 0)

    def is_empty(self) -> bool:
        return not self.first and not self.last


def apply_order(entities: Iterable[Entity], overrides: OrderOverrides | None = None) -> list[Entity]:
    """
    Rank entities and return them in presentation order.

    Order is (vhost, sort_order, kind, name). Kind before name means an
    exchange and a queue with the same name and rank always list the
    exchange first.
    """
    overrides = overrides or OrderOverrides()
    ranked = [e.with_sort_order(overrides.rank(e.name)) for e in entities]
    return sorted(ranked, key=lambda e: e.sort_key)
