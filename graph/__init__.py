"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge, GraphError
    from graph import edge_key, directed_key
"""

from graph.node  import Node
from graph.edge  import Edge, edge_key, directed_key
from graph.graph import Graph, GraphError, LAYOUTS

__all__ = [
    "Node",
    "Edge",      "edge_key",   "directed_key",
    "Graph",     "GraphError", "LAYOUTS",
]
