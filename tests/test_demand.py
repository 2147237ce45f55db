import unittest

from variety import classify
from variety.syntax import coerce_rule, Defer, Nom, as_, one_of, either, ELSE, Lazy
from variety.registry import Registry
from variety.demand import analyze_demand, requires_force
from variety import rows

class DemandTests(unittest.TestCase):

	def setUp(self) -> None:
		self.registry = Registry()
		self.registry.register("Tree", ["Empty", ("Node", "left", "val", "right")])
		self.registry.register("Stream", [Lazy("Nil"), Lazy(("Cons", "head", "tail"))])

	def verdict(self, *pairs):
		rules = [coerce_rule(p) for p in pairs]
		arity = rows.arity_of(rules)
		classified = [classify.classify_row(r.row, self.registry) for r in rules]
		return analyze_demand(rows.flatten(classified), arity)

	def requires(self, token):
		return requires_force(classify.classify(token, self.registry))

	def test_requires_force(self):
		for token, expect in [
			("Nil", True),
			(("Cons", "h", "t"), True),
			("Empty", False),
			(("Node", "a", "Nil", "b"), False),
			(as_("Nil", "s"), True),
			(one_of("Empty", ("Node", "_", "_", "_")), False),
			(one_of("Empty", "Nil"), True),
			(one_of(as_("Empty", "t"), as_("Nil", "t")), True),
			(Defer(Nom("Nil")), False),
			("_", False),
			("s", False),
			(0, False),
		]:
			with self.subTest(token):
				self.assertEqual(expect, self.requires(token))

	def test_column_wide(self):
		self.assertEqual((False, True), self.verdict(
			([0, "_"], 1),
			(["n", "Nil"], 2),
			(["n", ("Cons", "h", "t")], 3),
		))

	def test_strict_datatype_never_forces(self):
		self.assertEqual((False, False), self.verdict(
			(["_", "Empty"], 0),
			(["x", ("Node", "a", "y", "b")], 1),
		))

	def test_wildcard_and_defer_columns(self):
		self.assertEqual((False, False, True), self.verdict(
			(["_", Defer(Nom("s")), "Nil"], 0),
			(["a", "_", ("Cons", "_", "_")], 1),
		))

	def test_or_groups_each_count(self):
		self.assertEqual((True, False), self.verdict(
			(either(["Empty", "x"], ["Nil", "x"]), 0),
		))

	def test_else_contributes_nothing(self):
		self.assertEqual((False,), self.verdict(
			(["x"], 0),
			(ELSE, 1),
		))
		self.assertEqual((), self.verdict((ELSE, 1)))

if __name__ == '__main__':
	unittest.main()
