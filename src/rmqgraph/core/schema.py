"""Pydantic schemas for RabbitMQ definitions exports."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from rmqgraph.core.errors import DefinitionsError

DEFAULT_VHOST = "/"


class EntityKind(str, Enum):
    """Kind of broker entity.

    Values sort alphabetically, so exchanges order before queues.
    """

    EXCHANGE = "exchange"
    QUEUE = "queue"


class QueueSchema(BaseModel):
    """A queue record from the ``queues`` array."""

    model_config = {"extra": "ignore"}

    name: str
    vhost: str = DEFAULT_VHOST
    durable: bool = False
    auto_delete: bool = False
    arguments: dict[str, Any] = Field(default_factory=dict)

    @field_validator("durable", "auto_delete", mode="before")
    @classmethod
    def strict_flags(cls, v: Any) -> bool:
        """Only a literal JSON ``true`` counts as set."""
        return v is True

    @field_validator("arguments", mode="before")
    @classmethod
    def normalize_arguments(cls, v: Any) -> Any:
        return {} if v is None else v


class ExchangeSchema(BaseModel):
    """An exchange record from the ``exchanges`` array."""

    model_config = {"extra": "ignore"}

    name: str
    vhost: str = DEFAULT_VHOST
    type: str = "direct"
    durable: bool = False
    auto_delete: bool = False
    internal: bool = False
    arguments: dict[str, Any] = Field(default_factory=dict)

    @field_validator("durable", "auto_delete", "internal", mode="before")
    @classmethod
    def strict_flags(cls, v: Any) -> bool:
        return v is True

    @field_validator("arguments", mode="before")
    @classmethod
    def normalize_arguments(cls, v: Any) -> Any:
        return {} if v is None else v


class BindingSchema(BaseModel):
    """
    A binding record from the ``bindings`` array.

    ``destination_type`` stays a plain, optional string: missing values and
    anything other than ``queue``/``exchange`` are reported by the resolver,
    not rejected here.
    """

    model_config = {"extra": "ignore"}

    source: str
    vhost: str = DEFAULT_VHOST
    destination: str
    destination_type: str | None = None
    routing_key: str = ""
    arguments: dict[str, Any] = Field(default_factory=dict)

    @field_validator("routing_key", mode="before")
    @classmethod
    def normalize_routing_key(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("arguments", mode="before")
    @classmethod
    def normalize_arguments(cls, v: Any) -> Any:
        return {} if v is None else v


class DefinitionsSchema(BaseModel):
    """
    Schema for a complete definitions export.

    Exports also carry users, permissions, policies and so on; those
    sections are ignored.
    """

    model_config = {"extra": "ignore"}

    rabbit_version: str | None = None
    queues: list[QueueSchema] = Field(default_factory=list)
    exchanges: list[ExchangeSchema] = Field(default_factory=list)
    bindings: list[BindingSchema] = Field(default_factory=list)

    @field_validator("queues", "exchanges", "bindings", mode="before")
    @classmethod
    def normalize_sections(cls, v: Any) -> Any:
        return [] if v is None else v


def load_definitions(path: str | Path) -> DefinitionsSchema:
    """Load and validate a definitions export from a JSON file."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise DefinitionsError(f"Cannot read {path}: {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise DefinitionsError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise DefinitionsError(f"Invalid definitions in {path}: top level must be an object")

    try:
        return DefinitionsSchema(**data)
    except ValidationError as e:
        raise DefinitionsError(f"Invalid definitions in {path}: {e}") from e
