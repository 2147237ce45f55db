import unittest

from variety import (
	Registry, declare_datatype, declare_function, declare_lazy_function, caseof,
	defer, as_, one_of, either, ELSE, ALL, force, delay, is_deferred, dethunk, MatchError,
)

class RoundTripTests(unittest.TestCase):

	def setUp(self) -> None:
		self.registry = Registry()
		self.Tree = declare_datatype("Tree", ["Empty", ("Node", "left", "val", "right")], registry=self.registry)

	def test_tree_dispatch(self):
		Tree = self.Tree
		sut = declare_function("which", [
			(["_", "Empty"], lambda: 0),
			(["x", ("Node", "a", "y", "b")], lambda x, a, y, b: 1),
		], registry=self.registry)
		self.assertEqual(0, sut("anything", Tree.Empty))
		for node in [Tree.Node(Tree.Empty, 5, Tree.Empty), Tree.Node(Tree.Node(Tree.Empty, 1, Tree.Empty), "q", None)]:
			with self.subTest(node["val"]):
				self.assertEqual(1, sut(None, node))
		self.assertEqual((), sut.plan.bindings)

	def test_rule_order_is_respected(self):
		Tree = self.Tree
		sut = declare_function("order", [
			([("Node", "_", 1, "_")], "first"),
			([("Node", "_", "_", "_")], "second"),
			(["t"], "third"),
		], registry=self.registry)
		self.assertEqual("first", sut(Tree.Node(Tree.Empty, 1, Tree.Empty)))
		self.assertEqual("second", sut(Tree.Node(Tree.Empty, 2, Tree.Empty)))
		self.assertEqual("third", sut(Tree.Empty))

	def test_or_pattern(self):
		Tree = self.Tree
		leafy = declare_function("leafy", [
			(either(["Empty"], [("Node", "Empty", "_", "Empty")]), True),
			(ELSE, False),
		], registry=self.registry)
		self.assertTrue(leafy(Tree.Empty))
		self.assertTrue(leafy(Tree.Node(Tree.Empty, 0, Tree.Empty)))
		self.assertFalse(leafy(Tree.Node(Tree.Node(Tree.Empty, 0, Tree.Empty), 1, Tree.Empty)))

	def test_or_row_does_not_mix_alternatives(self):
		sut = declare_function("mixed", [
			(either([1, 2], [3, 4]), "yes"),
			(ELSE, "no"),
		], registry=self.registry)
		self.assertEqual("yes", sut(1, 2))
		self.assertEqual("yes", sut(3, 4))
		self.assertEqual("no", sut(1, 4))

	def test_as_binding_and_cell_alternation(self):
		Tree = self.Tree
		sut = declare_function("pick", [
			([as_(one_of(("Node", "Empty", "v", "_"), ("Node", "_", "v", "Empty")), "whole")], lambda v, whole: (v, whole[""])),
			(["_"], None),
		], registry=self.registry)
		self.assertEqual((4, "Tree.Node"), sut(Tree.Node(Tree.Node(Tree.Empty, 0, Tree.Empty), 4, Tree.Empty)))
		self.assertIsNone(sut(Tree.Empty))

	def test_match_error_propagates(self):
		sut = declare_function("only_empty", [(["Empty"], 0)], registry=self.registry)
		with self.assertRaises(MatchError) as cm:
			sut(self.Tree.Node(self.Tree.Empty, 1, self.Tree.Empty))
		self.assertEqual(("Tree.Node",), cm.exception.tags)

	def test_arity_is_checked(self):
		sut = declare_function("one", [(["x"], 0)], registry=self.registry)
		with self.assertRaises(TypeError):
			sut(1, 2)

	def test_caseof(self):
		Tree = self.Tree
		rules = [
			(["Empty", "n"], lambda n: n),
			([("Node", "_", "y", "_"), "n"], lambda y, n: y + n),
		]
		self.assertEqual(3, caseof([Tree.Empty, 3], rules, registry=self.registry))
		self.assertEqual(7, caseof([Tree.Node(Tree.Empty, 4, Tree.Empty), 3], rules, registry=self.registry))


class StreamTests(unittest.TestCase):

	def setUp(self) -> None:
		registry = self.registry = Registry()
		Stream = self.Stream = declare_datatype("Stream", ["Nil", ("Cons", "head", "tail")], ALL, registry=registry)
		self.started = started = []
		def body(n):
			started.append(n)
			return Stream.Cons(n, self.naturals_from(n + 1))
		self.naturals_from = declare_lazy_function("naturals_from", [(["n"], body)], registry=registry)
		self.take = declare_function("take", [
			([0, "_"], lambda: []),
			(["n", "Nil"], lambda n: []),
			(["n", ("Cons", "h", "t")], lambda n, h, t: [h] + self.take(n - 1, t)),
		], registry=registry)

	def test_take_from_infinite_stream(self):
		self.assertEqual([0, 1, 2], self.take(3, self.naturals_from(0)))
		# The third tail is forced to see it is not needed; nothing past it ever is.
		self.assertEqual([0, 1, 2, 3], self.started)

	def test_plan_forces_only_the_stream(self):
		self.assertEqual((("forced1", "arg1"),), self.take.plan.bindings)
		self.assertEqual(("arg0", "forced1"), self.take.plan.dispatch)

	def test_untouched_column_is_never_forced(self):
		def bottom(): raise AssertionError("This should never be forced.")
		first = declare_function("first", [
			(["x", "_"], lambda x: x),
		], registry=self.registry)
		keep = declare_function("keep", [
			([0, defer("s")], lambda s: s),
			(["n", defer("s")], lambda n, s: n),
		], registry=self.registry)
		self.assertEqual(1, first(1, delay(bottom)))
		self.assertTrue(is_deferred(keep(0, delay(bottom))))
		self.assertEqual(5, keep(5, delay(bottom)))
		self.assertEqual((), keep.plan.bindings)

	def test_nested_lazy_pattern(self):
		second = declare_function("second", [
			([("Cons", "_", ("Cons", "x", "_"))], lambda x: x),
			(["_"], None),
		], registry=self.registry)
		self.assertEqual(1, second(self.naturals_from(0)))
		self.assertEqual([0, 1], self.started)

	def test_lazy_function_round_trip(self):
		Tree = declare_datatype("Tree", ["Empty", ("Node", "left", "val", "right")], registry=self.registry)
		rules = [
			(["Empty"], lambda: 0),
			([("Node", "l", "v", "r")], lambda l, v, r: v + 10),
		]
		plain = declare_function("plain", rules, registry=self.registry)
		lazy = declare_lazy_function("lazy", rules, registry=self.registry)
		for tree in [Tree.Empty, Tree.Node(Tree.Empty, 5, Tree.Empty)]:
			with self.subTest(tree[""]):
				result = lazy(tree)
				self.assertTrue(is_deferred(result))
				self.assertEqual(plain(tree), force(result))

	def test_lazy_function_escape(self):
		Stream = self.Stream
		evaluated = []
		def doubled(h, t):
			evaluated.append(h)
			return Stream.Cons(2 * h, scale(t))
		scale = declare_lazy_function("scale", [
			(["Nil"], defer(lambda: Stream.Nil)),
			([("Cons", "h", "t")], doubled),
		], registry=self.registry)
		result = scale(self.naturals_from(1))
		self.assertTrue(is_deferred(result))
		self.assertEqual([], evaluated)
		self.assertEqual([2, 4, 6], self.take(3, result))
		self.assertEqual([1, 2, 3, 4], evaluated)
		finite = scale(self.Stream.Cons(1, self.Stream.Nil))
		self.assertEqual({"": "Stream.Cons", "head": 2, "tail": {"": "Stream.Nil"}}, dethunk(finite))

	def test_forcing_is_idempotent_across_calls(self):
		stream = self.naturals_from(0)
		self.take(2, stream)
		self.take(2, stream)
		self.assertEqual([0, 1, 2], self.started)

if __name__ == '__main__':
	unittest.main()
