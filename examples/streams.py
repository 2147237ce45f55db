"""
Infinite streams: the lazy constructors only ever get forced as far as somebody looks.
"""
from variety import Registry, declare_datatype, declare_function, declare_lazy_function, defer, ALL

registry = Registry()

Stream = declare_datatype("Stream", ["Nil", ("Cons", "head", "tail")], ALL, registry=registry)

naturals_from = declare_lazy_function("naturals_from", [
	(["n"], lambda n: Stream.Cons(n, naturals_from(n + 1))),
], registry=registry)

take = declare_function("take", [
	([0, "_"], lambda: []),
	(["n", "Nil"], lambda n: []),
	(["n", ("Cons", "h", "t")], lambda n, h, t: [h] + take(n - 1, t)),
], registry=registry)

drop = declare_function("drop", [
	([0, defer("s")], lambda s: s),
	(["n", "Nil"], lambda n: Stream.Nil),
	(["n", ("Cons", "_", "t")], lambda n, t: drop(n - 1, t)),
], registry=registry)

scale = declare_lazy_function("scale", [
	(["k", "Nil"], defer(lambda: Stream.Nil)),
	(["k", ("Cons", "h", "t")], lambda k, h, t: Stream.Cons(k * h, scale(k, t))),
], registry=registry)

if __name__ == "__main__":
	print(take(5, naturals_from(0)))
	print(take(3, drop(10, naturals_from(0))))
	print(take(4, scale(3, naturals_from(1))))
