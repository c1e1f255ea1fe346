"""Render a graph document to its final output format."""

from __future__ import annotations

import shutil
import subprocess
from typing import TYPE_CHECKING

from rmqgraph.core.errors import RenderError
from rmqgraph.generators.dot import generate_dot
from rmqgraph.generators.mermaid import generate_mermaid

if TYPE_CHECKING:
    from rmqgraph.graph.descriptors import GraphDocument

GRAPHVIZ_BINARY = "dot"
RENDER_TIMEOUT_SECONDS = 120.0

# Formats produced without calling Graphviz
TEXT_GENERATORS = {
    "dot": generate_dot,
    "gv": generate_dot,
    "mermaid": generate_mermaid,
}


def run_graphviz(source: str, output_format: str) -> bytes:
    """Pipe DOT source through ``dot -T<format>`` and return its output."""
    binary = shutil.which(GRAPHVIZ_BINARY)
    if binary is None:
        raise RenderError(
            f"Graphviz '{GRAPHVIZ_BINARY}' not found on PATH; "
            f"install Graphviz to render {output_format!r} output"
        )

    try:
        result = subprocess.run(
            [binary, f"-T{output_format}"],
            input=source.encode("utf-8"),
            capture_output=True,
            timeout=RENDER_TIMEOUT_SECONDS,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise RenderError(f"Graphviz timed out after {RENDER_TIMEOUT_SECONDS:.0f}s") from e
    except OSError as e:
        raise RenderError(f"Failed to run Graphviz: {e}") from e

    if result.returncode != 0:
        message = result.stderr.decode("utf-8", errors="replace").strip()
        raise RenderError(
            f"Graphviz could not render format {output_format!r}: {message or f'exit code {result.returncode}'}"
        )
    return result.stdout


def render(document: GraphDocument, output_format: str = "dot") -> bytes:
    """
    Render a document to bytes.

    ``dot``/``gv`` and ``mermaid`` are generated directly; any other format
    (png, svg, pdf, ...) is delegated to Graphviz, which rejects formats it
    does not support.
    """
    output_format = output_format.lower()
    generator = TEXT_GENERATORS.get(output_format)
    if generator is not None:
        return generator(document).encode("utf-8")
    return run_graphviz(generate_dot(document), output_format)
