from __future__ import annotations  # do not touch

from numbers import Real
from typing import Hashable, Optional

import numpy as np

from scalargraph.engine import get_default_graph, Graph, Node, Ops
from scalargraph.render import render

ScalarLike = int | float | np.floating | np.integer


class Value:
    """Handle to one scalar node living in a `Graph`.

    Leaves are made from a number, derived values come out of `+`, `*` and
    `tanh`. Only `label` and `grad` can be changed once a value exists.

    Without `graph=` the value goes on the module-level default graph, which
    keeps its nodes until `get_default_graph().reset()` or
    `set_default_graph(None)` is called. Pass a fresh `Graph()` to get nodes
    that are dropped together with it.
    """

    def __init__(
        self,
        data: Optional[ScalarLike] = None,
        label: str = "",
        graph: Optional[Graph] = None,
        _node_id: Optional[Hashable] = None,
    ):
        self.node_id: Hashable

        if graph is None:
            self.graph = get_default_graph()
        else:
            self.graph = graph

        if data is not None:
            if isinstance(data, bool) or not isinstance(data, (Real, np.floating, np.integer)):
                raise TypeError(
                    f"Input to value must be int, float or a numpy real scalar, got {type(data)}"
                )
            node_id = self.graph.add_node(op=Ops.CONST, static_data=data, label=label)
        elif _node_id is not None:
            node_id = _node_id
        else:
            raise TypeError("must provide data for const or node_id from operation")

        if node_id is None or node_id not in self.graph:
            raise RuntimeError(f"Value has no node in its graph (got id {node_id!r})")
        self.node_id = node_id

    @property
    def node(self) -> Node:
        return self.graph.nodes[self.node_id]

    @property
    def data(self) -> np.float64:
        return self.node.data

    @property
    def op(self) -> Ops:
        return self.node.op

    @property
    def label(self) -> str:
        return self.node.label

    @label.setter
    def label(self, label: str):
        self.node.label = label

    @property
    def grad(self) -> float:
        return self.node.grad

    @grad.setter
    def grad(self, grad: float):
        self.node.grad = float(grad)

    @property
    def dependencies(self) -> tuple[Value, ...]:
        return tuple(Value(graph=self.graph, _node_id=in_id) for in_id in self.node.inputs)

    def _derive(self, op: Ops, input_ids: tuple[Hashable, ...]) -> Value:
        result_id = self.graph.add_node(op, input_ids)
        if result_id is None:
            raise RuntimeError(f"Could not add {op} node, the graph is frozen")
        return Value(graph=self.graph, _node_id=result_id)

    def _lift(self, other: Value | ScalarLike) -> Value:
        if isinstance(other, Value):
            if other.graph is not self.graph:
                raise ValueError(
                    f"Cannot combine {self.node_id!r} and {other.node_id!r}, they live on different graphs"
                )
            return other
        return Value(data=other, graph=self.graph)

    def __add__(self, other: Value | ScalarLike) -> Value:
        other = self._lift(other)
        return self._derive(Ops.ADD, (self.node_id, other.node_id))

    def __mul__(self, other: Value | ScalarLike) -> Value:
        other = self._lift(other)
        return self._derive(Ops.MUL, (self.node_id, other.node_id))

    def __radd__(self, other: Value | ScalarLike) -> Value:
        other = self._lift(other)
        return other + self

    def __rmul__(self, other: Value | ScalarLike) -> Value:
        other = self._lift(other)
        return other * self

    def tanh(self) -> Value:
        return self._derive(Ops.TANH, (self.node_id,))

    def __repr__(self) -> str:
        return (
            f"Value(data={float(self.data)!r}, op={self.op.name}, "
            f"label={self.label!r}, grad={self.grad!r})"
        )

    def __str__(self) -> str:
        return render(self)


def create_leaf(value: ScalarLike, label: str = "", graph: Optional[Graph] = None) -> Value:
    return Value(data=value, label=label, graph=graph)
