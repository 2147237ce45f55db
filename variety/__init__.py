"""
Algebraic datatypes with lazy variants, and functions that dispatch over them by pattern.
"""
from .syntax import Nom, Literal, Compound, Defer, AsForm, OrForm, Row, OrRow, ELSE, Rule, Lazy, as_, one_of, either, defer
from .registry import Registry, REGISTRY, NONE, MARKED, ALL
from .runtime import Thunk, delay, force, dethunk, is_deferred
from .diagnostics import (
	VarietyError, DuplicateDefinition, DeclarationError, CompileError, UnknownConstructor,
	NoRowsError, RaggedRowsError, ConflictingBindingError, MatchError, CyclicForceError,
)
from .compiler import declare_datatype, declare_function, declare_lazy_function, caseof
