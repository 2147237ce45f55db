"""
Unbalanced binary search trees, strictly evaluated.
"""
from variety import Registry, declare_datatype, declare_function, either, as_

registry = Registry()

Tree = declare_datatype("Tree", ["Empty", ("Node", "left", "val", "right")], registry=registry)

insert = declare_function("insert", [
	(["x", "Empty"], lambda x: Tree.Node(Tree.Empty, x, Tree.Empty)),
	(["x", as_(("Node", "a", "y", "b"), "t")], lambda x, a, y, b, t:
		Tree.Node(insert(x, a), y, b) if x < y else
		Tree.Node(a, y, insert(x, b)) if x > y else t),
], registry=registry)

in_order = declare_function("in_order", [
	(["Empty"], lambda: []),
	([("Node", "a", "y", "b")], lambda a, y, b: in_order(a) + [y] + in_order(b)),
], registry=registry)

is_leaf = declare_function("is_leaf", [
	(either([("Node", "Empty", "_", "Empty")]), True),
	(["_"], False),
], registry=registry)

if __name__ == "__main__":
	tree = Tree.Empty
	for item in [5, 3, 8, 1, 4, 7, 9, 3]:
		tree = insert(item, tree)
	print(in_order(tree))
	print(is_leaf(insert(1, Tree.Empty)), is_leaf(tree))
