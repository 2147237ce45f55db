"""
The set of pattern and rule nodes in simple form.
There is no text front end: client code builds these trees directly,
or else lets `coerce` build them out of plain Python data.
Every node can render itself back into a bracketed, s-expression-like text,
mainly so that diagnostics have something to point at.
"""
from typing import Any, NamedTuple, Optional, Sequence, Union

class Phrase:
	def write(self, out:"Writer"):
		raise NotImplementedError(type(self))
	def __str__(self):
		out = Writer()
		out.put(self)
		return out.text()

class Writer:
	""" Renders phrases, remembering where one particular (guilty) phrase landed. """
	span: Optional[tuple[int, int]]

	def __init__(self, guilty:Phrase=None):
		self._parts = []
		self._width = 0
		self._guilty = guilty
		self.span = None

	def word(self, text:str):
		self._parts.append(text)
		self._width += len(text)

	def put(self, phrase:Phrase):
		start = self._width
		phrase.write(self)
		if phrase is self._guilty:
			self.span = start, self._width - start

	def series(self, phrases:Sequence[Phrase], opener:str, closer:str):
		self.word(opener)
		for i, p in enumerate(phrases):
			if i: self.word(" ")
			self.put(p)
		self.word(closer)

	def text(self) -> str: return "".join(self._parts)

###############################################################################

class Nom(Phrase):
	""" Representing the occurrence of a bare identifier anywhere. """
	def __init__(self, text:str):
		assert isinstance(text, str), type(text)
		self.text = text
	def __repr__(self): return "<Name %r>" % self.text
	def key(self): return self.text
	def is_wildcard(self): return self.text == "_"
	def write(self, out:Writer): out.word(self.text)

WILDCARD = Nom("_")

class Literal(Phrase):
	def __init__(self, value:Any):
		self.value = value
	def __repr__(self): return "<Literal %r>" % (self.value,)
	def write(self, out:Writer): out.word(repr(self.value))

class Compound(Phrase):
	""" The structured form [Head field field ...] """
	def __init__(self, head:Nom, fields:Sequence[Phrase]):
		assert isinstance(head, Nom), head
		self.head = head
		self.fields = tuple(fields)
	def __repr__(self): return "<Compound %s/%d>" % (self.head.text, len(self.fields))
	def write(self, out:Writer): out.series((self.head,) + self.fields, "[", "]")

class Defer(Phrase):
	"""
	The explicit escape: ($ expr).
	In a pattern, it means "take this position as it comes, without forcing".
	Around an action of a lazy function, it means "this already makes a deferred value".
	"""
	def __init__(self, expr:Any):
		self.expr = expr
	def __repr__(self): return "<$ %r>" % (self.expr,)
	def write(self, out:Writer):
		out.word("($ ")
		if isinstance(self.expr, Phrase): out.put(self.expr)
		else: out.word(getattr(self.expr, "__name__", repr(self.expr)))
		out.word(")")

class AsForm(Phrase):
	""" (inner :as name) """
	def __init__(self, inner:Phrase, name:Nom):
		assert isinstance(name, Nom), name
		self.inner = inner
		self.name = name
	def write(self, out:Writer):
		out.word("(")
		out.put(self.inner)
		out.word(" :as ")
		out.put(self.name)
		out.word(")")

class OrForm(Phrase):
	""" Alternation within a single cell: (:or p q ...) """
	def __init__(self, alternatives:Sequence[Phrase]):
		self.alternatives = tuple(alternatives)
	def write(self, out:Writer): out.series(self.alternatives, "(:or ", ")")

###############################################################################

class Row(Phrase):
	""" One pattern per argument position. """
	def __init__(self, cells:Sequence[Phrase]):
		self.cells = tuple(cells)
	def __len__(self): return len(self.cells)
	def write(self, out:Writer): out.series(self.cells, "[", "]")

class OrRow(Phrase):
	""" Several whole rows sharing one action: (:or [..] [..]) """
	def __init__(self, rows:Sequence[Row]):
		assert rows and all(isinstance(r, Row) for r in rows), rows
		self.rows = tuple(rows)
	def write(self, out:Writer): out.series(self.rows, "(:or ", ")")

class Else(Phrase):
	""" The unconditional fallback. Valid only as a whole row. """
	def write(self, out:Writer): out.word(":else")

ELSE = Else()

ROW = Union[Row, OrRow, Else]

class Rule(NamedTuple):
	row: ROW
	action: Any

class Lazy(NamedTuple):
	""" Marks one constructor-spec in a datatype declaration as lazy. """
	spec: Union[str, tuple]

###############################################################################

def coerce(item:Any) -> Phrase:
	"""
	Plain data into pattern nodes:
	A string is an identifier; a tuple headed by a string is a structured form;
	phrases play themselves, and anything else is a literal.
	"""
	if isinstance(item, Phrase): return item
	if isinstance(item, str): return Nom(item)
	if isinstance(item, tuple) and item and isinstance(item[0], str):
		return Compound(Nom(item[0]), [coerce(x) for x in item[1:]])
	return Literal(item)

def coerce_row(item:Any) -> ROW:
	if isinstance(item, (Row, OrRow, Else)): return item
	if isinstance(item, (list, tuple)): return Row([coerce(x) for x in item])
	raise TypeError("A row must be a sequence of patterns, an or-group, or ELSE; not %r" % (item,))

def coerce_rule(item:Any) -> Rule:
	row, action = item
	return Rule(coerce_row(row), action)

def as_(inner:Any, name:str) -> AsForm:
	return AsForm(coerce(inner), Nom(name))

def one_of(*alternatives) -> OrForm:
	return OrForm([coerce(a) for a in alternatives])

def either(*rows) -> OrRow:
	return OrRow([coerce_row(r) for r in rows])

def defer(expr:Any) -> Defer:
	"""
	In a pattern, only a name or a literal makes sense inside: the contents are never
	taken apart, so a structured form like ("Cons", "h", "t") compares by equality and cannot match.
	Around an action, pass a callable that returns the deferred value.
	"""
	return Defer(coerce(expr) if isinstance(expr, str) else expr)
