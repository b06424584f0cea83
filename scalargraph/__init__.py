from .engine import Graph, Node, Ops, get_default_graph, set_default_graph, topo_sort
from .value import Value, create_leaf  # Make Value directly importable from scalargraph
from .render import render, describe

__all__ = [
    "Graph",
    "Node",
    "Ops",
    "Value",
    "create_leaf",
    "describe",
    "get_default_graph",
    "render",
    "set_default_graph",
    "topo_sort",
]
