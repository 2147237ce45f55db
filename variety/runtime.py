"""
Deferred values and the things that force them.

Variant values are plain dictionaries with the tag under the empty-string key
and each field under its own name. Anything else plays itself.
"""

from collections import deque
from threading import Lock, get_ident
from typing import Any, Callable, Optional, Union
from .diagnostics import CyclicForceError

STRICT_VALUE = Any
LAZY_VALUE = Union[STRICT_VALUE, "Thunk"]

_ABSENT = object()

class Thunk:
	"""
	A kind of not-yet-value which can be forced.
	Exactly one thread gets to run the computation; any others wait on the mutex
	and then see the same value. The computation is forgotten once it has run.
	"""
	def __init__(self, compute:Callable[[], LAZY_VALUE]):
		assert callable(compute), compute
		self._compute = compute
		self._mutex = Lock()
		self._owner = None
		self.value = _ABSENT

	def __str__(self):
		if self.value is _ABSENT:
			return "<Thunk: %s>" % getattr(self._compute, "__qualname__", "?")
		elif isinstance(self.value, Thunk):
			return "<Thunk: another deferred value>"
		else:
			return str(self.value)

	def is_resolved(self) -> bool:
		return self.value is not _ABSENT

	def force(self) -> LAZY_VALUE:
		""" Resolve exactly one layer. The result may itself be another thunk. """
		if self.value is not _ABSENT: return self.value
		if self._owner == get_ident(): raise CyclicForceError(self)
		with self._mutex:
			if self.value is _ABSENT:
				self._owner = get_ident()
				try: value = self._compute()
				finally: self._owner = None
				if value is self: raise CyclicForceError(self)
				self.value = value
				del self._compute
		return self.value

def delay(compute:Callable[[], LAZY_VALUE]) -> Thunk:
	return Thunk(compute)

def force(it:LAZY_VALUE) -> STRICT_VALUE:
	"""
	Force repeatedly until the result is no longer a thunk, then return that result.
	This means a lazy function whose action hands back another deferred value
	still looks like exactly one deferred layer to whoever forces it.
	A chain of layers that comes back around on itself is a cycle.
	"""
	seen = set()
	while isinstance(it, Thunk):
		if it in seen: raise CyclicForceError(it)
		seen.add(it)
		it = it.force()
	return it

def is_deferred(it:LAZY_VALUE) -> bool:
	return isinstance(it, Thunk)

def tag_of(value:STRICT_VALUE) -> Optional[str]:
	if isinstance(value, dict): return value.get("")

def dethunk(result:LAZY_VALUE) -> STRICT_VALUE:
	"""
	Push a finite structure to completion by forcing every thunk it holds,
	replacing each one in place. Do not feed this an infinite structure.
	"""
	result = force(result)
	dict_queue = deque()
	if isinstance(result, dict): dict_queue.append(result)
	while dict_queue:
		work_dict = dict_queue.popleft()
		for k,v in work_dict.items():
			if isinstance(v, Thunk): work_dict[k] = v = force(v)
			if isinstance(v, dict): dict_queue.append(v)
	return result
