"""
The row accumulator: two views of the same rule list.

The flattened view feeds the demand analysis. Every alternative of an or-group
counts as a row of its own, while an else-row imposes no constraints and so adds nothing.

The grouped view feeds the lowering pass. Or-groups stay a single logical row
and an else-row stays a single catch-all, each still paired with its action.
"""

from typing import Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .classify import ClassifiedRow, ClassifiedOrRow, ClassifiedElse, Pattern
from .diagnostics import NoRowsError, RaggedRowsError

def arity_of(rules:Sequence[syntax.Rule]) -> int:
	""" The width of the first normal row, taking an or-group by its first alternative. """
	if not rules: raise NoRowsError()
	for rule in rules:
		if isinstance(rule.row, syntax.Row): return len(rule.row)
		if isinstance(rule.row, syntax.OrRow): return len(rule.row.rows[0])
	return 0

def check_widths(rules:Sequence[syntax.Rule], arity:int):
	for rule in rules:
		if isinstance(rule.row, syntax.OrRow): each = rule.row.rows
		elif isinstance(rule.row, syntax.Row): each = [rule.row]
		else: continue
		for row in each:
			if len(row) != arity:
				raise RaggedRowsError(arity, row).situate(None, rule.row)

class Accumulate(Visitor):
	""" The flattened view. """
	@staticmethod
	def visit_ClassifiedRow(row:ClassifiedRow):
		return [row.cells]

	@staticmethod
	def visit_ClassifiedOrRow(group:ClassifiedOrRow):
		return [row.cells for row in group.rows]

	@staticmethod
	def visit_ClassifiedElse(_):
		return []

def flatten(classified:Sequence) -> list[tuple[Pattern, ...]]:
	accumulate = Accumulate()
	return [cells for row in classified for cells in accumulate.visit(row)]

def transpose(flat:Sequence[tuple[Pattern, ...]], arity:int) -> list[tuple[Pattern, ...]]:
	""" One column per argument position, even when there are no rows at all. """
	return [tuple(cells[i] for cells in flat) for i in range(arity)]

def grouped(classified:Sequence, actions:Sequence) -> list[tuple[object, object]]:
	"""
	Nothing is taken apart here; the lowering pass decides what each kind of row becomes.
	Order is exactly the textual order of the rules.
	"""
	assert len(classified) == len(actions)
	return list(zip(classified, actions))
