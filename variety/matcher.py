"""
The generic structural matcher.

It knows nothing about constructors or laziness declarations: it sees tags,
field projections, wildcards, bindings, alternations, and literal values.
The one concession to laziness is `Strict`, which the lowering pass places
wherever a nested position must be resolved before it can be inspected.
"""

from typing import Any, Callable, Optional, Sequence
from boozetools.support.foundation import Visitor
from .diagnostics import MatchError
from .runtime import force, tag_of

class Canon:
	pass

class Wild(Canon):
	def __repr__(self): return "_"

WILD = Wild()

class Bind(Canon):
	def __init__(self, name:str): self.name = name
	def __repr__(self): return self.name

class Equal(Canon):
	def __init__(self, value:Any): self.value = value
	def __repr__(self): return repr(self.value)

class Tag(Canon):
	def __init__(self, key:str): self.key = key
	def __repr__(self): return ":%s" % self.key

class Fields(Canon):
	""" Tag plus a mapping from field name to sub-pattern. Unconstrained fields are absent. """
	def __init__(self, key:str, fields:dict[str, Canon]):
		self.key = key
		self.fields = fields
	def __repr__(self):
		inside = ", ".join("%s: %r" % pair for pair in self.fields.items())
		return ":%s{%s}" % (self.key, inside)

class AsBind(Canon):
	def __init__(self, inner:Canon, name:str):
		self.inner = inner
		self.name = name
	def __repr__(self): return "(%r :as %s)" % (self.inner, self.name)

class Alt(Canon):
	def __init__(self, options:Sequence[Canon]): self.options = tuple(options)
	def __repr__(self): return "(:or %s)" % " ".join(map(repr, self.options))

class Strict(Canon):
	def __init__(self, inner:Canon): self.inner = inner
	def __repr__(self): return "!%r" % (self.inner,)

###############################################################################

class Row:
	def __init__(self, patterns:Sequence[Canon], action:Callable):
		self.patterns = tuple(patterns)
		self.action = action
	def __repr__(self): return "[%s]" % " ".join(map(repr, self.patterns))

class OrRow:
	def __init__(self, alternatives:Sequence[Sequence[Canon]], action:Callable):
		self.alternatives = tuple(tuple(a) for a in alternatives)
		self.action = action
	def __repr__(self):
		return "(:or %s)" % " ".join("[%s]" % " ".join(map(repr, a)) for a in self.alternatives)

class ElseRow:
	def __init__(self, action:Callable):
		self.action = action
	def __repr__(self): return ":else"

###############################################################################

class StructuralMatch(Visitor):
	"""
	Patterns visit with the value and a dictionary of bindings to fill in.
	Rows visit with the whole scrutinee vector and answer bindings or None.
	"""
	@staticmethod
	def visit_Wild(p:Wild, value, bindings:dict):
		return True

	@staticmethod
	def visit_Bind(p:Bind, value, bindings:dict):
		bindings[p.name] = value
		return True

	@staticmethod
	def visit_Equal(p:Equal, value, bindings:dict):
		return value == p.value

	@staticmethod
	def visit_Tag(p:Tag, value, bindings:dict):
		return tag_of(value) == p.key

	def visit_Fields(self, p:Fields, value, bindings:dict):
		if tag_of(value) != p.key: return False
		return all(self.visit(sub, value[field], bindings) for field, sub in p.fields.items())

	def visit_AsBind(self, p:AsBind, value, bindings:dict):
		if self.visit(p.inner, value, bindings):
			bindings[p.name] = value
			return True
		return False

	def visit_Alt(self, p:Alt, value, bindings:dict):
		for option in p.options:
			trial = dict(bindings)
			if self.visit(option, value, trial):
				bindings.update(trial)
				return True
		return False

	def visit_Strict(self, p:Strict, value, bindings:dict):
		return self.visit(p.inner, force(value), bindings)

	def _vector(self, patterns:Sequence[Canon], scrutinees:Sequence) -> Optional[dict]:
		bindings = {}
		for p, value in zip(patterns, scrutinees):
			if not self.visit(p, value, bindings): return None
		return bindings

	def visit_Row(self, row:Row, scrutinees:Sequence):
		return self._vector(row.patterns, scrutinees)

	def visit_OrRow(self, row:OrRow, scrutinees:Sequence):
		for patterns in row.alternatives:
			bindings = self._vector(patterns, scrutinees)
			if bindings is not None: return bindings

	@staticmethod
	def visit_ElseRow(row:ElseRow, scrutinees:Sequence):
		return {}

MATCHER = StructuralMatch()

def match(rows:Sequence, scrutinees:Sequence, name:str="match"):
	""" First row whose patterns all match wins; its action gets the bindings as keywords. """
	for row in rows:
		bindings = MATCHER.visit(row, scrutinees)
		if bindings is not None:
			return row.action(**bindings)
	raise MatchError(name, scrutinees)
