"""Generators for diagrams."""

from rmqgraph.generators.dot import generate_dot
from rmqgraph.generators.mermaid import generate_mermaid
from rmqgraph.generators.rendering import render

__all__ = [
    "generate_dot",
    "generate_mermaid",
    "render",
]
