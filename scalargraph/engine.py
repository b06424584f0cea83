from __future__ import annotations
from warnings import warn

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Hashable, Optional

import numpy as np


class FastEnum(IntEnum):
    def __str__(self):
        return Enum.__str__(self)

    @staticmethod
    def _generate_next_value_(name, start, count, last_values):
        return 1 + max([0, *last_values, *[max(c) for c in FastEnum.__subclasses__()]])


class Ops(FastEnum):
    # leaves (data given)
    CONST = auto()

    # numerical
    ADD = auto()
    MUL = auto()
    TANH = auto()


OP_SYMBOLS: dict[Ops, str] = {
    Ops.CONST: "",
    Ops.ADD: "+",
    Ops.MUL: "*",
    Ops.TANH: "tanh",
}

BINARY_OPS = (Ops.ADD, Ops.MUL)
UNARY_OPS = (Ops.TANH,)


@dataclass
class Node:
    id: Hashable
    op: Ops
    inputs: tuple[Hashable, ...] = field(default_factory=tuple)
    successors: set[Hashable] = field(default_factory=set)
    data: np.float64 = np.float64(0.0)
    label: str = ""
    grad: float = 0.0

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Node):
            return self.id == other.id
        return NotImplemented

    @property
    def is_leaf(self) -> bool:
        return not self.inputs

    def __repr__(self) -> str:
        input_ids = ", ".join(map(repr, self.inputs))
        successor_ids = ", ".join(map(repr, sorted(self.successors)))

        return (
            f"{self.__class__.__name__}("
            f"id={self.id!r}, op={self.op.name}, "
            f"inputs=({input_ids}), "
            f"successors={{{successor_ids}}}, "
            f"data={float(self.data)!r}, "
            f"label={self.label!r}, grad={self.grad!r})"
        )


_DEFAULT_GRAPH: Optional[Graph] = None


def get_default_graph() -> Graph:
    """Gets the current default graph, creating one if needed."""
    global _DEFAULT_GRAPH
    if _DEFAULT_GRAPH is None:
        print("[Graph] Initializing default graph.")
        _DEFAULT_GRAPH = Graph()
    return _DEFAULT_GRAPH


def set_default_graph(graph: Optional[Graph]):
    """Allows explicitly setting or clearing the default graph."""
    global _DEFAULT_GRAPH
    _DEFAULT_GRAPH = graph


def _exec_add_np(inputs: tuple[np.float64, ...]) -> np.float64:
    x0, x1 = inputs
    with np.errstate(over="ignore"):
        return np.add(x0, x1)


def _exec_mul_np(inputs: tuple[np.float64, ...]) -> np.float64:
    x0, x1 = inputs
    with np.errstate(over="ignore"):
        return np.multiply(x0, x1)


def _exec_tanh_np(inputs: tuple[np.float64, ...]) -> np.float64:
    (x0,) = inputs
    with np.errstate(over="ignore"):
        exp = np.exp(2.0 * x0)
    # inf / inf would give nan, the limit is 1
    if np.isinf(exp):
        return np.float64(1.0)
    return (exp - 1.0) / (exp + 1.0)


NUMPY_EXECUTION_DISPATCH = {
    Ops.ADD: _exec_add_np,
    Ops.MUL: _exec_mul_np,
    Ops.TANH: _exec_tanh_np,
}


class Graph:
    """Arena owning every node of a computation.

    Nodes are addressed by id and edges are tuples of ids, so an operand lives
    exactly as long as the graph holding it. Values are computed eagerly when
    a node is added.
    """

    def __init__(self):
        # the order here is the order of creation
        self.nodes: dict[Hashable, Node] = {}
        self.i_am_frozen = False
        self._op_counters: dict[str, int] = defaultdict(int)

    def _get_next_id(self, op_name: str) -> str:
        count = self._op_counters[op_name]
        self._op_counters[op_name] += 1
        return f"{op_name.lower()}_{count}"

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: Hashable) -> bool:
        return node_id in self.nodes

    def freeze(self) -> None:
        print("[Graph] The graph is frozen, cannot add more nodes to it")
        self.i_am_frozen = True

    def reset(self) -> None:
        self.nodes.clear()
        self._op_counters.clear()
        self.i_am_frozen = False

    def add_node(
        self,
        op: Ops,
        input_ids: tuple[Hashable, ...] = (),
        static_data: float | None = None,
        label: str = "",
    ) -> Optional[Hashable]:
        if self.i_am_frozen:
            warn(
                "was asked to add a node to myself. since i am frozen, i cannot do that."
            )
            return None

        for input_id in input_ids:
            if input_id not in self.nodes:
                raise ValueError(f"Input node {input_id!r} not found in graph")

        if op == Ops.CONST:
            if input_ids:
                raise ValueError(f"{op} takes no inputs, got {input_ids}")
            if static_data is None:
                raise ValueError("Was not provided data for a const node")
            value = np.float64(static_data)

        elif op in BINARY_OPS or op in UNARY_OPS:
            arity = 2 if op in BINARY_OPS else 1
            if len(input_ids) != arity:
                raise ValueError(
                    f"{op} expects {arity} inputs, got {len(input_ids)}: {input_ids}"
                )
            exec_fn = NUMPY_EXECUTION_DISPATCH[op]
            value = np.float64(
                exec_fn(tuple(self.nodes[in_id].data for in_id in input_ids))
            )

        else:
            raise ValueError(f"Unsuported OP found: {op}, internal error")

        new_id = self._get_next_id(op.name)
        node = Node(id=new_id, op=op, inputs=tuple(input_ids), data=value, label=label)

        for input_id in input_ids:
            self.nodes[input_id].successors.add(new_id)

        self.nodes[new_id] = node
        return new_id

    def __repr__(self) -> str:
        return " \n".join(repr(self.nodes[node_id]) for node_id in topo_sort(self.nodes))


def topo_sort(graph_nodes: dict[Hashable, Node]) -> list[Hashable]:
    in_degree: dict[Hashable, int] = defaultdict(int)

    for _, node in graph_nodes.items():
        for successor_id in node.successors:
            if successor_id not in graph_nodes:
                raise KeyError(f"node {successor_id!r} in successors not found in graph")
            in_degree[successor_id] += 1

    # initial queue with all nodes that have no inputs (source nodes)
    queue = deque([node_id for node_id in graph_nodes if in_degree[node_id] == 0])

    result: list[Hashable] = []

    while queue:
        u_id = queue.popleft()
        result.append(u_id)

        # sorted so the order does not depend on set iteration
        for v_id in sorted(graph_nodes[u_id].successors, key=str):
            in_degree[v_id] -= 1

            if in_degree[v_id] == 0:
                queue.append(v_id)

    if len(result) != len(graph_nodes):
        raise ValueError("the graph appears to have cycles, this is not supported.")

    return result
