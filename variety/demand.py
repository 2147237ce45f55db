"""
Decide, per argument position, whether the incoming value must be forced before dispatch.

Forcing is a column-wide decision. Dispatch works on one value per position,
so if any row needs position i forced, every row sees it forced. Rows that did
not need it have a wildcard, variable, or explicit defer there, and do not care.

This must never overestimate: forcing a position no rule inspects could hang
on an infinite structure, or change what a side-effecting constructor does.
"""

from typing import Sequence
from boozetools.support.foundation import Visitor
from . import classify
from .rows import transpose

class RequiresForce(Visitor):
	""" Does this one pattern need the value at its position resolved? """

	@staticmethod
	def visit_ConstantPattern(p:classify.ConstantPattern):
		return p.constructor.lazy

	@staticmethod
	def visit_FactoryPattern(p:classify.FactoryPattern):
		return p.constructor.lazy

	def visit_AsPattern(self, p:classify.AsPattern):
		return self.visit(p.inner)

	def visit_OrPattern(self, p:classify.OrPattern):
		return any(self.visit(a) for a in p.alternatives)

	@staticmethod
	def visit_DeferPattern(_):
		return False

	@staticmethod
	def visit_Wildcard(_):
		return False

	@staticmethod
	def visit_Opaque(_):
		return False

REQUIRES_FORCE = RequiresForce()

def requires_force(pattern:classify.Pattern) -> bool:
	return REQUIRES_FORCE.visit(pattern)

def analyze_demand(flat:Sequence[tuple[classify.Pattern, ...]], arity:int) -> tuple[bool, ...]:
	return tuple(
		any(map(requires_force, column))
		for column in transpose(flat, arity)
	)
