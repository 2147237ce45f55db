"""
Main driver: from a datatype registry and a list of rules, to a callable.

This is done in phases:

1. Check the rows are all the same width.
2. Classify every pattern token against the registry.
3. Accumulate the flattened rows, and decide per column what must be forced.
4. Write the binding plan: a fresh name bound to force(argument) for each forced column.
5. Lower every (grouped) row into canonical form, in textual order.
6. Hand the lot to the structural matcher at call time, maybe inside a thunk.

Compile-time errors abort only the one function being compiled.
"""
from inspect import signature, Parameter
from typing import Any, Callable, NamedTuple, Optional, Sequence
from . import syntax, rows as accumulator
from .classify import classify_row
from .demand import analyze_demand
from .diagnostics import Report, CompileError
from .lowering import lower_row
from .matcher import match
from .registry import REGISTRY, MARKED, Registry, Datatype
from .runtime import force, delay

REPORT = Report(verbose=0)

class ForcePlan(NamedTuple):
	params: tuple[str, ...]
	bindings: tuple[tuple[str, str], ...]  # (new name, argument it forces)
	dispatch: tuple[str, ...]  # What the matcher sees, by position.

	def __str__(self):
		steps = ["%s = force(%s)" % pair for pair in self.bindings]
		steps.append("dispatch on [%s]" % ", ".join(self.dispatch))
		return "; ".join(steps)

def parameter_names(arity:int) -> tuple[str, ...]:
	return tuple("arg%d" % i for i in range(arity))

def plan_bindings(params:Sequence[str], need_force:Sequence[bool]) -> ForcePlan:
	assert len(params) == len(need_force)
	dispatch = tuple("forced%d" % i if need else p for i, (p, need) in enumerate(zip(params, need_force)))
	bindings = tuple((new, old) for old, new in zip(params, dispatch) if new != old)
	return ForcePlan(tuple(params), bindings, dispatch)

###############################################################################

def _adapt(action:Any) -> Callable:
	"""
	Actions take the bound names they mention as keywords.
	A non-callable action is a constant answer.
	"""
	if not callable(action): return lambda **_: action
	try: params = signature(action).parameters.values()
	except (TypeError, ValueError): return action
	if any(p.kind == Parameter.VAR_KEYWORD for p in params): return action
	wanted = frozenset(p.name for p in params if p.kind in (Parameter.POSITIONAL_OR_KEYWORD, Parameter.KEYWORD_ONLY))
	return lambda **bindings: action(**{k:v for k,v in bindings.items() if k in wanted})

def _force_or_keep(action:Any) -> Callable:
	""" For lazy functions: escaped actions already make a deferred value; others get forced. """
	if isinstance(action, syntax.Defer): return _adapt(action.expr)
	plain = _adapt(action)
	return lambda **bindings: force(plain(**bindings))

class Compilation(NamedTuple):
	plan: ForcePlan
	rows: tuple

def compile_rules(name:str, rules:Sequence, registry:Registry, lazy:bool=False) -> Compilation:
	rules = [syntax.coerce_rule(r) for r in rules]
	try:
		arity = accumulator.arity_of(rules)
		accumulator.check_widths(rules, arity)
		classified = []
		for rule in rules:
			try: classified.append(classify_row(rule.row, registry))
			except CompileError as ex: raise ex.situate(name, rule.row)
		need_force = analyze_demand(accumulator.flatten(classified), arity)
	except CompileError as ex:
		raise ex.situate(name, None)
	plan = plan_bindings(parameter_names(arity), need_force)
	adapt = _force_or_keep if lazy else _adapt
	actions = [adapt(rule.action) for rule in rules]
	canonical = tuple(lower_row(row, action) for row, action in accumulator.grouped(classified, actions))
	return Compilation(plan, canonical)

###############################################################################

class Function:
	""" The run-time manifestation of a compiled rule set. """
	def __init__(self, name:str, compilation:Compilation):
		self.__name__ = self.name = name
		self.plan = compilation.plan
		self.rows = compilation.rows

	def __repr__(self): return "<function %s/%d>" % (self.name, len(self.plan.params))

	def _check_arity(self, args:tuple):
		if len(args) != len(self.plan.params):
			raise TypeError("%s takes %d arguments but got %d" % (self.name, len(self.plan.params), len(args)))

	def dispatch(self, args:tuple):
		"""
		Positions not in the plan keep the argument exactly as passed.
		That is what lets a rule look at a finite prefix of an infinite structure.
		"""
		frame = dict(zip(self.plan.params, args))
		for new, source in self.plan.bindings:
			frame[new] = force(frame[source])
		return match(self.rows, [frame[n] for n in self.plan.dispatch], self.name)

	def __call__(self, *args):
		self._check_arity(args)
		return self.dispatch(args)

class LazyFunction(Function):
	""" The whole dispatch happens later, inside a memoized thunk. """
	def __repr__(self): return "<lazy function %s/%d>" % (self.name, len(self.plan.params))

	def __call__(self, *args):
		self._check_arity(args)
		return delay(lambda: self.dispatch(args))

###############################################################################

def declare_datatype(name:str, specs:Sequence, lazy:str=MARKED, *, registry:Registry=None, report:Report=None) -> Datatype:
	datatype = (registry or REGISTRY).register(name, specs, lazy)
	(report or REPORT).info("datatype %s: %s" % (name, ", ".join(map(repr, datatype))))
	return datatype

def _declare(cls, name:str, rules:Sequence, registry:Optional[Registry], report:Optional[Report], lazy:bool):
	report = report or REPORT
	compilation = compile_rules(name, rules, registry or REGISTRY, lazy=lazy)
	report.info("%s: %s" % (name, compilation.plan))
	for row in compilation.rows:
		report.info("    %r" % (row,), level=2)
	return cls(name, compilation)

def declare_function(name:str, rules:Sequence, *, registry:Registry=None, report:Report=None) -> Function:
	return _declare(Function, name, rules, registry, report, lazy=False)

def declare_lazy_function(name:str, rules:Sequence, *, registry:Registry=None, report:Report=None) -> LazyFunction:
	return _declare(LazyFunction, name, rules, registry, report, lazy=True)

def caseof(values:Sequence, rules:Sequence, *, registry:Registry=None):
	""" Compile the rules against these particular values and dispatch on them straight away. """
	compilation = compile_rules("caseof", rules, registry or REGISTRY)
	return Function("caseof", compilation)(*values)
