from __future__ import annotations

from typing import TYPE_CHECKING, Hashable

from scalargraph.engine import Graph, Node, OP_SYMBOLS, Ops

if TYPE_CHECKING:
    from scalargraph.value import Value

CONNECTOR = "|----"
INDENT_STEP = 6


def describe(node: Node) -> str:
    """One-line form of a node: `(label=data, 'op', grad=g)`.

    The `label=` prefix is dropped for unlabelled nodes and the op segment
    for leaves.
    """
    head = f"{node.label}={node.data}" if node.label else f"{node.data}"
    if node.op != Ops.CONST:
        head += f", '{OP_SYMBOLS[node.op]}'"
    return f"({head}, grad={node.grad:.3f})"


def _render_lines(graph: Graph, root_id: Hashable) -> list[str]:
    lines: list[str] = []
    stack: list[tuple[Hashable, int]] = [(root_id, 0)]

    while stack:
        node_id, depth = stack.pop()
        node = graph.nodes[node_id]
        if depth == 0:
            lines.append(describe(node))
        else:
            # the first level sits flush with the root
            lines.append(" " * (INDENT_STEP * (depth - 1)) + CONNECTOR + describe(node))

        # reversed so the first operand is popped first
        for input_id in reversed(node.inputs):
            stack.append((input_id, depth + 1))

    return lines


def render(root: Value) -> str:
    """Renders `root` and everything it depends on as an indented tree.

    Walks depth first, inputs in the order they were given to the operator.
    Shared nodes are printed once per path that reaches them.
    """
    lines = _render_lines(root.graph, root.node_id)
    return "".join(line + "\n" for line in lines)
