from typing import Optional

from scalargraph.engine import Graph
from scalargraph.render import render
from scalargraph.value import Value, create_leaf


def build_example(graph: Optional[Graph] = None) -> Value:
    """Builds `L = (a*b + c) * f` with the root gradient seeded to 1."""
    if graph is None:
        graph = Graph()

    a = create_leaf(2.0, "a", graph=graph)
    b = create_leaf(-3.0, "b", graph=graph)
    c = create_leaf(10.0, "c", graph=graph)

    e = a * b
    e.label = "e"

    d = e + c
    d.label = "d"

    f = create_leaf(-2.0, "f", graph=graph)

    L = d * f
    L.label = "L"
    L.grad = 1.0

    return L


def main():
    print(render(build_example()), end="")


if __name__ == "__main__":
    main()
