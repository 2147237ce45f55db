"""
Lower classified patterns into the canonical tag-and-field form the structural matcher consumes.
After this pass, nothing refers to constructors any more; only to their tags and field names.
"""

from boozetools.support.foundation import Visitor
from . import classify, matcher, syntax
from .demand import requires_force

def opaque(expr) -> matcher.Canon:
	""" Pass an unclassified expression through to the matcher as it stands. """
	if isinstance(expr, syntax.Nom):
		return matcher.WILD if expr.is_wildcard() else matcher.Bind(expr.text)
	if isinstance(expr, syntax.Literal):
		return matcher.Equal(expr.value)
	return matcher.Equal(expr)

class Lower(Visitor):

	@staticmethod
	def visit_ConstantPattern(p:classify.ConstantPattern):
		return matcher.Tag(p.constructor.key)

	def visit_FactoryPattern(self, p:classify.FactoryPattern):
		fields = {}
		for name, sub in zip(p.constructor.fields, p.fields):
			if isinstance(sub, classify.Wildcard): continue
			lowered = self.visit(sub)
			# Nested positions get no column of their own, so they are forced in place.
			fields[name] = matcher.Strict(lowered) if requires_force(sub) else lowered
		return matcher.Fields(p.constructor.key, fields)

	@staticmethod
	def visit_DeferPattern(p:classify.DeferPattern):
		return opaque(p.expr)

	def visit_AsPattern(self, p:classify.AsPattern):
		return matcher.AsBind(self.visit(p.inner), p.name)

	def visit_OrPattern(self, p:classify.OrPattern):
		return matcher.Alt([self.visit(a) for a in p.alternatives])

	@staticmethod
	def visit_Wildcard(_):
		return matcher.WILD

	@staticmethod
	def visit_Opaque(p:classify.Opaque):
		return opaque(p.token)

	def visit_ClassifiedRow(self, row:classify.ClassifiedRow, action):
		return matcher.Row([self.visit(c) for c in row.cells], action)

	def visit_ClassifiedOrRow(self, group:classify.ClassifiedOrRow, action):
		return matcher.OrRow([[self.visit(c) for c in row.cells] for row in group.rows], action)

	@staticmethod
	def visit_ClassifiedElse(_, action):
		return matcher.ElseRow(action)

LOWER = Lower()

def lower(pattern:classify.Pattern) -> matcher.Canon:
	return LOWER.visit(pattern)

def lower_row(row, action):
	return LOWER.visit(row, action)
