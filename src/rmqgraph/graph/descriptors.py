"""Renderer-neutral node, edge and cluster descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class NodeStyle:
    shape: str
    style: str
    fillcolor: str


@dataclass(frozen=True)
class NodeDescriptor:
    """
    A node handed to the renderer.

    ``title`` is rendered bold; ``details`` are extra label lines.
    """

    handle: str
    title: str
    details: tuple[str, ...]
    shape: str
    style: str
    fillcolor: str

    @property
    def label_lines(self) -> tuple[str, ...]:
        return (self.title, *self.details)


@dataclass(frozen=True)
class EdgeDescriptor:
    """A directed edge between two node handles."""

    tail: str
    head: str
    label: str = ""
    color: str | None = None  # None uses the renderer default


@dataclass
class Cluster:
    """All nodes and edges of one vhost."""

    label: str
    nodes: list[NodeDescriptor] = field(default_factory=list)
    edges: list[EdgeDescriptor] = field(default_factory=list)


@dataclass
class GraphDocument:
    """The assembled graph: one cluster per vhost."""

    name: str = "G"
    clusters: list[Cluster] = field(default_factory=list)

    def cluster(self, label: str) -> Cluster | None:
        for cluster in self.clusters:
            if cluster.label == label:
                return cluster
        return None

    def nodes(self) -> Iterator[NodeDescriptor]:
        for cluster in self.clusters:
            yield from cluster.nodes

    def edges(self) -> Iterator[EdgeDescriptor]:
        for cluster in self.clusters:
            yield from cluster.edges
