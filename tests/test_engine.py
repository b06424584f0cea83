import unittest
import warnings

import numpy as np

from scalargraph import Graph, Ops, topo_sort
from scalargraph.engine import OP_SYMBOLS


class TestGraph(unittest.TestCase):
    def setUp(self):
        self.g = Graph()

    def test_ids_count_per_op(self):
        a = self.g.add_node(Ops.CONST, static_data=1.0)
        b = self.g.add_node(Ops.CONST, static_data=2.0)
        c = self.g.add_node(Ops.ADD, (a, b))
        d = self.g.add_node(Ops.MUL, (c, b))
        e = self.g.add_node(Ops.TANH, (d,))

        self.assertEqual([a, b, c, d, e], ["const_0", "const_1", "add_0", "mul_0", "tanh_0"])
        self.assertEqual(list(self.g.nodes), [a, b, c, d, e])

    def test_values_computed_on_add(self):
        a = self.g.add_node(Ops.CONST, static_data=2.0)
        b = self.g.add_node(Ops.CONST, static_data=-3.0)
        c = self.g.add_node(Ops.MUL, (a, b))

        self.assertEqual(self.g.nodes[c].data, -6.0)
        self.assertIsInstance(self.g.nodes[c].data, np.float64)
        self.assertEqual(self.g.nodes[a].successors, {c})
        self.assertEqual(self.g.nodes[b].successors, {c})

    def test_unknown_input_rejected(self):
        a = self.g.add_node(Ops.CONST, static_data=2.0)
        with self.assertRaises(ValueError):
            self.g.add_node(Ops.ADD, (a, "const_99"))

    def test_wrong_arity_rejected(self):
        a = self.g.add_node(Ops.CONST, static_data=2.0)
        with self.assertRaises(ValueError):
            self.g.add_node(Ops.ADD, (a,))
        with self.assertRaises(ValueError):
            self.g.add_node(Ops.TANH, (a, a))
        with self.assertRaises(ValueError):
            self.g.add_node(Ops.CONST, (a,), static_data=1.0)
        with self.assertRaises(ValueError):
            self.g.add_node(Ops.CONST)

    def test_frozen_graph_warns(self):
        self.g.freeze()
        with self.assertWarns(UserWarning):
            node_id = self.g.add_node(Ops.CONST, static_data=1.0)
        self.assertIsNone(node_id)
        self.assertEqual(len(self.g), 0)

    def test_reset(self):
        self.g.add_node(Ops.CONST, static_data=1.0)
        self.g.freeze()
        self.g.reset()

        self.assertEqual(len(self.g), 0)
        self.assertFalse(self.g.i_am_frozen)
        self.assertEqual(self.g.add_node(Ops.CONST, static_data=1.0), "const_0")

    def test_overflow_is_silent(self):
        a = self.g.add_node(Ops.CONST, static_data=1e308)
        b = self.g.add_node(Ops.CONST, static_data=1e308)

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            s = self.g.add_node(Ops.ADD, (a, b))
            p = self.g.add_node(Ops.MUL, (a, b))

        self.assertTrue(np.isinf(self.g.nodes[s].data))
        self.assertTrue(np.isinf(self.g.nodes[p].data))

    def test_every_op_has_a_symbol(self):
        self.assertEqual(set(OP_SYMBOLS), set(Ops))
        self.assertEqual(OP_SYMBOLS[Ops.ADD], "+")
        self.assertEqual(OP_SYMBOLS[Ops.MUL], "*")


class TestTopoSort(unittest.TestCase):
    def test_inputs_come_first(self):
        g = Graph()
        a = g.add_node(Ops.CONST, static_data=1.0)
        b = g.add_node(Ops.CONST, static_data=2.0)
        c = g.add_node(Ops.ADD, (a, b))
        d = g.add_node(Ops.MUL, (c, a))
        e = g.add_node(Ops.TANH, (d,))

        order = topo_sort(g.nodes)

        self.assertEqual(sorted(order), sorted(g.nodes))
        for node_id, node in g.nodes.items():
            for input_id in node.inputs:
                self.assertLess(order.index(input_id), order.index(node_id))
        self.assertEqual(order[-1], e)

    def test_cycle_detected(self):
        g = Graph()
        a = g.add_node(Ops.CONST, static_data=1.0)
        b = g.add_node(Ops.TANH, (a,))
        # only reachable by editing the arena by hand
        g.nodes[b].successors.add(a)

        with self.assertRaises(ValueError):
            topo_sort(g.nodes)

    def test_repr_lists_nodes_in_order(self):
        g = Graph()
        a = g.add_node(Ops.CONST, static_data=1.0, label="a")
        g.add_node(Ops.TANH, (a,))

        lines = repr(g).split(" \n")
        self.assertEqual(len(lines), 2)
        self.assertIn("id='const_0'", lines[0])
        self.assertIn("label='a'", lines[0])
        self.assertIn("op=TANH", lines[1])


if __name__ == "__main__":
    unittest.main()
