"""
rmqgraph - RabbitMQ topology visualization.

This package provides tools for:
- Loading RabbitMQ definitions exports (queues, exchanges, bindings)
- Resolving bindings per vhost, including implicit dead-letter routing
- Ordering and partitioning entities into per-vhost clusters
- Generating diagrams (Graphviz DOT and image formats, Mermaid)
"""

__version__ = "0.1.0"

from rmqgraph.core.bindings import Binding, BindingResolver
from rmqgraph.core.config import RenderConfig
from rmqgraph.core.entities import EntitySet, Exchange, Queue
from rmqgraph.pipeline import build_graph

__all__ = [
    "__version__",
    "Binding",
    "BindingResolver",
    "EntitySet",
    "Exchange",
    "Queue",
    "RenderConfig",
    "build_graph",
]
