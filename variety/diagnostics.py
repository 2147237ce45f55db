import sys, random
from typing import Any, Optional, Sequence
from boozetools.support.failureprone import illustration

from .syntax import Phrase, Writer

class VarietyError(Exception):
	""" Root of everything this package complains about on purpose. """

class DuplicateDefinition(VarietyError):
	def __init__(self, name:str):
		super().__init__("%r is already defined." % name)
		self.name = name

class DeclarationError(VarietyError):
	pass

###############################################################################

class CompileError(VarietyError):
	"""
	Aborts compilation of the one function being compiled.
	Knows how to point at the guilty phrase within the offending row.
	"""
	function: Optional[str] = None
	row: Optional[Phrase] = None

	def __init__(self, message:str, guilty:Phrase=None):
		super().__init__(message)
		self.guilty = guilty

	def situate(self, function:str, row:Optional[Phrase]):
		""" The compiler fills these in on the way out. """
		if self.function is None: self.function = function
		if self.row is None: self.row = row
		return self

	def illustrate(self) -> str:
		if self.row is None: return ""
		out = Writer(self.guilty)
		out.put(self.row)
		text = out.text()
		start, width = out.span or (0, len(text))
		caption = str(self.guilty) if self.guilty is not None else ""
		return illustration(text, start, width, prefix="%s |" % (self.function or ""), caption=caption)

	def __str__(self):
		message = self.args[0]
		if self.function is not None: message = "In %s: %s" % (self.function, message)
		if self.row is None: return message
		return message + "\n" + self.illustrate()

class UnknownConstructor(CompileError):
	def __init__(self, tag:str, guilty:Phrase=None):
		super().__init__("%r is not a registered constructor." % tag, guilty)
		self.tag = tag

class NoRowsError(CompileError):
	def __init__(self):
		super().__init__("There are no rules to compile.")

class RaggedRowsError(CompileError):
	def __init__(self, expected:int, row:Phrase):
		super().__init__("This row has %d patterns; %d are needed." % (len(row), expected), row)

class ConflictingBindingError(CompileError):
	def __init__(self, guilty:Phrase, names:Sequence[frozenset]):
		shown = " / ".join("{%s}" % ", ".join(sorted(n)) for n in names)
		super().__init__("The alternatives bind different names: %s" % shown, guilty)

###############################################################################

class MatchError(VarietyError):
	"""
	No rule matches at call time. This is a genuinely unhandled input,
	so it goes straight back to the caller.
	"""
	def __init__(self, function:str, scrutinees:Sequence[Any]):
		self.function = function
		self.tags = tuple(_describe(s) for s in scrutinees)
		super().__init__("No rule of %s matches (%s)." % (function, ", ".join(self.tags)))

def _describe(value) -> str:
	from .runtime import Thunk, tag_of
	seen = set()
	while isinstance(value, Thunk) and value.is_resolved() and value not in seen:
		seen.add(value)
		value = value.value
	if isinstance(value, Thunk): return "<deferred>"
	tag = tag_of(value)
	return repr(value) if tag is None else tag

class CyclicForceError(VarietyError):
	def __init__(self, thunk):
		super().__init__("Forcing this deferred value requires forcing itself first: %s" % thunk)

###############################################################################

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]
	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott", 'Nuts', 'Rats',
	]
	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects issues, and chatters on stderr if asked to. """
	_issues : list[Exception]

	def __init__(self, *, verbose:int):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []

	def issue(self, it:Exception):
		self._issues.append(it)

	def info(self, *args, level:int=1):
		if self._verbose >= level:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

def _bemoan(issues):
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(str(i), file=sys.stderr)
	sys.stderr.flush()
