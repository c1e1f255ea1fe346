"""Core domain models for broker topology."""

from rmqgraph.core.bindings import Binding, BindingResolver, Resolution
from rmqgraph.core.config import RenderConfig
from rmqgraph.core.entities import Entity, EntitySet, Exchange, Queue
from rmqgraph.core.ordering import OrderOverrides, apply_order
from rmqgraph.core.schema import DefinitionsSchema, EntityKind, load_definitions

__all__ = [
    "Binding",
    "BindingResolver",
    "Resolution",
    "RenderConfig",
    "Entity",
    "EntitySet",
    "Exchange",
    "Queue",
    "OrderOverrides",
    "apply_order",
    "DefinitionsSchema",
    "EntityKind",
    "load_definitions",
]
