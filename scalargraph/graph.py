import graphviz

from scalargraph.render import describe


def to_graphviz(output_node):
    """
    Builds a graphviz digraph of everything `output_node` depends on.

    Args:
        output_node: The final Value in the graph (e.g., the loss).

    Returns:
        graphviz.Digraph with one box per node and one edge per dependency.
    """
    dot = graphviz.Digraph(comment="Computation Graph")
    dot.attr(rankdir="LR")

    graph = output_node.graph
    visited = set()

    stack = [output_node.node_id]

    while stack:
        node_id = stack.pop()
        if node_id in visited:
            continue
        visited.add(node_id)

        node = graph.nodes[node_id]
        dot.node(str(node_id), label=describe(node), shape="box")

        for input_id in node.inputs:
            # edge from the operand to the value it feeds
            dot.edge(str(input_id), str(node_id))
            stack.append(input_id)

    return dot


def visualize_graph(output_node, filename="computational_graph", format="png", view=False):
    """
    Renders the graph of `output_node` to a file.

    Args:
        output_node: The final Value in the graph.
        filename: The name of the file to save the graph to (without extension).
        format: The output format (e.g., 'png', 'svg', 'pdf').
        view: If True, try to open the rendered graph automatically.

    Requires the Graphviz system library (`dot` on the PATH).
    """
    dot = to_graphviz(output_node)
    rendered_path = dot.render(filename, format=format, view=view, cleanup=True)
    print(f"Computational graph saved to {rendered_path}")
    return rendered_path
