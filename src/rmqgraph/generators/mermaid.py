"""Mermaid diagram generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rmqgraph.graph.descriptors import EdgeDescriptor, GraphDocument, NodeDescriptor


def escape_text(text: str) -> str:
    # Mermaid has no backslash escapes inside quoted labels
    return text.replace('"', "#quot;")


def node_line(node: NodeDescriptor) -> str:
    title, *details = map(escape_text, node.label_lines)
    label = "<br/>".join([f"<b>{title}</b>", *details])
    return f'{node.handle}["{label}"]'


def edge_line(edge: EdgeDescriptor) -> str:
    if edge.label:
        return f'{edge.tail} -->|"{escape_text(edge.label)}"| {edge.head}'
    return f"{edge.tail} --> {edge.head}"


def generate_mermaid(document: GraphDocument) -> str:
    """
    Generate Mermaid flowchart diagram.

    Each vhost becomes a subgraph; dead-letter edges are drawn red via
    ``linkStyle``.
    """
    lines = ["flowchart LR"]
    node_classes: dict[str, list[str]] = {}
    colored_links: list[tuple[int, str]] = []
    link_index = 0

    for i, cluster in enumerate(document.clusters):
        lines.append(f'    subgraph vhost{i}["{escape_text(cluster.label)}"]')
        for node in cluster.nodes:
            lines.append(f"        {node_line(node)}")
            node_classes.setdefault(node.fillcolor, []).append(node.handle)
        for edge in cluster.edges:
            lines.append(f"        {edge_line(edge)}")
            if edge.color:
                colored_links.append((link_index, edge.color))
            link_index += 1
        lines.append("    end")

    if node_classes:
        lines.append("")
    for i, (fillcolor, handles) in enumerate(node_classes.items()):
        lines.append(f"    classDef fill{i} fill:{fillcolor}")
        lines.append(f"    class {','.join(handles)} fill{i}")

    for index, color in colored_links:
        lines.append(f"    linkStyle {index} stroke:{color}")

    return "\n".join(lines) + "\n"
