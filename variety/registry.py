"""
The constructor registry records, per datatype, each constructor's shape and laziness.
It is filled in at declaration time and consulted by the pattern passes afterward.
Tags are queried by value here, rather than reflected out of any Python identifier.
"""

from typing import Iterable, Optional, Sequence, Union
from .diagnostics import DuplicateDefinition, DeclarationError, UnknownConstructor
from .runtime import delay
from .syntax import Lazy

NONE, MARKED, ALL = "none", "marked", "all"
LAZY_MODES = (NONE, MARKED, ALL)

SPEC = Union[str, tuple, Lazy]

class Constructor:
	""" One variant of a datatype. The tag is unique across the registry. """
	fields: tuple[str, ...] = ()

	def __init__(self, datatype:"Datatype", name:str, lazy:bool):
		self.datatype = datatype
		self.name = name
		self.lazy = lazy
		self.key = "%s.%s" % (datatype.name, name)

	def __repr__(self): return "<%s%s>" % ("lazy " if self.lazy else "", self.key)
	def is_constant(self) -> bool: raise NotImplementedError(type(self))
	def runtime_value(self): raise NotImplementedError(type(self))

class Constant(Constructor):
	def is_constant(self): return True

	def runtime_value(self):
		structure = {"": self.key}
		return delay(lambda: structure) if self.lazy else structure

class Factory(Constructor):
	def __init__(self, datatype:"Datatype", name:str, lazy:bool, fields:Sequence[str]):
		super().__init__(datatype, name, lazy)
		self.fields = tuple(fields)

	def is_constant(self): return False
	def runtime_value(self): return self

	def __call__(self, *args):
		if len(args) != len(self.fields):
			raise TypeError("%s takes %d fields but got %d" % (self.key, len(self.fields), len(args)))
		structure = dict(zip(self.fields, args))
		structure[""] = self.key
		return delay(lambda: structure) if self.lazy else structure

class Datatype:
	"""
	Created once at declaration; immutable thereafter.
	Constructors read as attributes: constants give their value, factories are callable.
	"""
	def __init__(self, name:str):
		self.name = name
		self._constructors = {}
		self._values = {}

	def __repr__(self): return "<datatype %s>" % self.name
	def __iter__(self) -> Iterable[Constructor]: return iter(self._constructors.values())
	def __contains__(self, name:str) -> bool: return name in self._constructors
	def constructor(self, name:str) -> Constructor: return self._constructors[name]

	def __getattr__(self, name:str):
		try: return self.__dict__["_values"][name]
		except KeyError: raise AttributeError(name)

	def __setattr__(self, name:str, value):
		if self.__dict__.get("_sealed"): raise AttributeError("Datatype %s is already declared." % self.name)
		super().__setattr__(name, value)

	def _seal(self, constructors:Sequence[Constructor]):
		for c in constructors:
			self._constructors[c.name] = c
			self._values[c.name] = c.runtime_value()
		self._sealed = True

###############################################################################

def _unpack(spec:SPEC, mode:str) -> tuple[str, Optional[tuple[str, ...]], bool]:
	marked = isinstance(spec, Lazy)
	if marked:
		if mode == NONE: raise DeclarationError("Lazy marker on %r in a strict datatype." % (spec.spec,))
		spec = spec.spec
	lazy = marked or mode == ALL
	if isinstance(spec, str): return spec, None, lazy
	if isinstance(spec, tuple) and spec and all(isinstance(x, str) for x in spec):
		return spec[0], spec[1:], lazy
	raise DeclarationError("Cannot make a constructor out of %r." % (spec,))

class Registry:
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	_datatypes: dict[str, Datatype]
	_constructors: dict[str, Constructor]

	def __init__(self):
		self._datatypes, self._constructors = {}, {}

	def register(self, name:str, specs:Sequence[SPEC], lazy:str=MARKED) -> Datatype:
		"""
		Every check happens before anything is mounted,
		so a failed declaration leaves the registry as it was.
		"""
		if lazy not in LAZY_MODES: raise DeclarationError("Lazy-mode must be one of %s, not %r." % (LAZY_MODES, lazy))
		if name in self._datatypes: raise DuplicateDefinition(name)
		datatype = Datatype(name)
		constructors, seen = [], set()
		for spec in specs:
			tag, fields, is_lazy = _unpack(spec, lazy)
			if tag in seen or tag in self._constructors: raise DuplicateDefinition(tag)
			seen.add(tag)
			if fields is None: constructors.append(Constant(datatype, tag, is_lazy))
			else: constructors.append(Factory(datatype, tag, is_lazy, fields))
		datatype._seal(constructors)
		self._datatypes[name] = datatype
		for c in constructors: self._constructors[c.name] = c
		return datatype

	def symbol(self, tag:str) -> Optional[Constructor]:
		""" Like lookup, but None for a tag never registered. Qualified tags also work. """
		if tag in self._constructors: return self._constructors[tag]
		head, dot, tail = tag.rpartition(".")
		if dot and head in self._datatypes and tail in self._datatypes[head]:
			return self._datatypes[head].constructor(tail)

	def lookup(self, tag:str) -> Constructor:
		found = self.symbol(tag)
		if found is None: raise UnknownConstructor(tag)
		return found

	def is_lazy(self, tag:str) -> bool:
		return self.lookup(tag).lazy

	def __contains__(self, tag:str) -> bool:
		return self.symbol(tag) is not None

	def datatype(self, name:str) -> Datatype:
		return self._datatypes[name]

	def each_datatype(self) -> Iterable[Datatype]:
		return self._datatypes.values()

REGISTRY = Registry()
