"""
Classify pattern tokens against the registry.

The result of classification is a tree of Pattern objects whose type IS the kind.
Classification is a pure function of the token and the registry's state.
In priority order, a token is:

1. a bare identifier naming a registered constant (or, failing that, factory) constructor,
2. a structured form headed by a registered constructor,
3. an explicit defer/escape, whose insides stay opaque,
4. an as-binding (inner :as name),
5. the wildcard,
6. anything else, which goes through verbatim to the matcher.

Cell-level alternations are also recognized, and their alternatives must agree on which names they bind.
"""

from typing import Sequence
from . import syntax
from .diagnostics import UnknownConstructor, ConflictingBindingError
from .registry import Registry, Constructor, Factory

EMPTY = frozenset()

class Pattern:
	token: syntax.Phrase
	def names(self) -> frozenset: raise NotImplementedError(type(self))

class Wildcard(Pattern):
	def __init__(self, token): self.token = token
	def names(self): return EMPTY

class ConstantPattern(Pattern):
	def __init__(self, token, constructor:Constructor):
		self.token = token
		self.constructor = constructor
	def names(self): return EMPTY

class FactoryPattern(Pattern):
	def __init__(self, token, constructor:Factory, fields:Sequence[Pattern]):
		self.token = token
		self.constructor = constructor
		self.fields = tuple(fields)
	def names(self): return EMPTY.union(*(f.names() for f in self.fields))

class DeferPattern(Pattern):
	""" The inner expression is not classified. """
	def __init__(self, token:syntax.Defer):
		self.token = token
		self.expr = token.expr
	def names(self):
		expr = self.expr
		if isinstance(expr, syntax.Nom) and not expr.is_wildcard(): return frozenset([expr.text])
		return EMPTY

class AsPattern(Pattern):
	def __init__(self, token, inner:Pattern, name:str):
		self.token = token
		self.inner = inner
		self.name = name
	def names(self): return self.inner.names() | {self.name}

class OrPattern(Pattern):
	def __init__(self, token, alternatives:Sequence[Pattern]):
		self.token = token
		self.alternatives = tuple(alternatives)
	def names(self): return self.alternatives[0].names()

class Opaque(Pattern):
	""" A variable to bind, or a literal to compare. Either way, the matcher's business. """
	def __init__(self, token): self.token = token
	def names(self):
		if isinstance(self.token, syntax.Nom): return frozenset([self.token.text])
		return EMPTY

###############################################################################

def classify(token:syntax.Phrase, registry:Registry) -> Pattern:
	token = syntax.coerce(token)
	if isinstance(token, syntax.Nom):
		if token.is_wildcard(): return Wildcard(token)
		constructor = registry.symbol(token.text)
		if constructor is None: return Opaque(token)
		if constructor.is_constant(): return ConstantPattern(token, constructor)
		return FactoryPattern(token, constructor, ())
	if isinstance(token, syntax.Compound):
		constructor = registry.symbol(token.head.text)
		if constructor is None:
			raise UnknownConstructor(token.head.text, token)
		if constructor.is_constant():
			if token.fields: raise UnknownConstructor(token.head.text, token)
			return ConstantPattern(token, constructor)
		return FactoryPattern(token, constructor, [classify(f, registry) for f in token.fields])
	if isinstance(token, syntax.Defer):
		return DeferPattern(token)
	if isinstance(token, syntax.AsForm):
		return AsPattern(token, classify(token.inner, registry), token.name.text)
	if isinstance(token, syntax.OrForm):
		alternatives = [classify(a, registry) for a in token.alternatives]
		check_agreement(token, alternatives)
		return OrPattern(token, alternatives)
	return Opaque(token)

def check_agreement(token:syntax.Phrase, alternatives:Sequence):
	""" Each alternative must offer the action the same names to work with. """
	names = [a.names() for a in alternatives]
	if any(n != names[0] for n in names):
		raise ConflictingBindingError(token, names)

###############################################################################

class ClassifiedRow:
	def __init__(self, token:syntax.Row, cells:Sequence[Pattern]):
		self.token = token
		self.cells = tuple(cells)
	def names(self): return EMPTY.union(*(c.names() for c in self.cells))

class ClassifiedOrRow:
	def __init__(self, token:syntax.OrRow, rows:Sequence[ClassifiedRow]):
		self.token = token
		self.rows = tuple(rows)

class ClassifiedElse:
	def __init__(self, token:syntax.Else):
		self.token = token

def classify_row(row:syntax.ROW, registry:Registry):
	if isinstance(row, syntax.Row):
		return ClassifiedRow(row, [classify(c, registry) for c in row.cells])
	if isinstance(row, syntax.OrRow):
		rows = [classify_row(r, registry) for r in row.rows]
		for position in range(len(rows[0].cells)):
			check_agreement(row.rows[0].cells[position], [r.cells[position] for r in rows])
		return ClassifiedOrRow(row, rows)
	if isinstance(row, syntax.Else):
		return ClassifiedElse(row)
	raise TypeError(row)
