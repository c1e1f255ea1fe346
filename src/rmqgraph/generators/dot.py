"""Graphviz DOT diagram generation."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rmqgraph.graph.descriptors import EdgeDescriptor, GraphDocument, NodeDescriptor


def quote(value: str) -> str:
    """Quote a DOT ID or attribute value."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def html_label(node: NodeDescriptor) -> str:
    """Bold title plus one line per detail, as an HTML-like label."""
    title, *details = node.label_lines
    parts = [f"<B>{escape(title, quote=False)}</B>"]
    parts.extend(escape(line, quote=False) for line in details)
    return "< " + "<BR/>".join(parts) + " >"


def node_line(node: NodeDescriptor) -> str:
    return (
        f"{node.handle} [label={html_label(node)}, shape={node.shape}, "
        f"style={quote(node.style)}, fillcolor={quote(node.fillcolor)}];"
    )


def edge_line(edge: EdgeDescriptor) -> str:
    attrs = [f"label={quote(edge.label)}"]
    if edge.color:
        attrs.append(f"color={edge.color}")
    return f"{edge.tail} -> {edge.head} [{', '.join(attrs)}];"


def generate_dot(document: GraphDocument) -> str:
    """
    Generate Graphviz DOT diagram.

    Can be rendered with: dot -Tpng topology.dot -o topology.png
    """
    lines = [f"digraph {quote(document.name)} {{"]

    for cluster in document.clusters:
        lines.append(f"    subgraph {quote('cluster_' + cluster.label)} {{")
        lines.append(f"        label={quote(cluster.label)};")
        lines.append("")

        for node in cluster.nodes:
            lines.append(f"        {node_line(node)}")

        if cluster.edges:
            lines.append("")
        for edge in cluster.edges:
            lines.append(f"        {edge_line(edge)}")

        lines.append("    }")

    lines.append("}")

    return "\n".join(lines) + "\n"
