"""Graph assembly: per-vhost clusters of node and edge descriptors."""

from rmqgraph.graph.assembler import GraphAssembler, assemble_graph, describe, style
from rmqgraph.graph.descriptors import Cluster, EdgeDescriptor, GraphDocument, NodeDescriptor

__all__ = [
    "GraphAssembler",
    "assemble_graph",
    "describe",
    "style",
    "Cluster",
    "EdgeDescriptor",
    "GraphDocument",
    "NodeDescriptor",
]
