"""Run configuration for a single graph build."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from rmqgraph.core.ordering import OrderOverrides

DEFAULT_FORMAT = "dot"


class RenderConfig(BaseModel):
    """
    Everything a run needs besides the input document.

    Built once by the CLI and passed explicitly into the pipeline.
    """

    model_config = {"frozen": True}

    output_format: str = DEFAULT_FORMAT
    output: Path | None = None  # None writes to stdout
    overrides: OrderOverrides = Field(default_factory=OrderOverrides)

    @field_validator("output_format", mode="before")
    @classmethod
    def normalize_format(cls, v: str | None) -> str:
        """Formats are case-insensitive."""
        return (v or DEFAULT_FORMAT).strip().lower()

    @classmethod
    def from_options(
        cls,
        output_format: str | None = None,
        output: str | Path | None = None,
        order_first: str | None = None,
        order_last: str | None = None,
    ) -> RenderConfig:
        return cls(
            output_format=output_format or DEFAULT_FORMAT,
            output=Path(output) if output else None,
            overrides=OrderOverrides.from_csv(order_first, order_last),
        )
