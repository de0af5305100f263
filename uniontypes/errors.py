"""
The exceptions that the type-algebra passes raise.

Parse-time and declaration-time problems hang off the same booze-tools
exception classes the parser machinery uses, so a front-end can catch
them in one place. Run-time problems are Python TypeErrors.
"""
from typing import Optional
from boozetools.parsing.interface import ParseError, SemanticError

class TypeSyntaxError(ParseError):
	"""
	Malformed type expression or declaration. The hint, when there is one,
	is a best guess at what the author meant.
	"""
	def __init__(self, message:str, span:Optional[slice]=None, hint:str=""):
		super().__init__(message)
		self.message, self.span, self.hint = message, span, hint
	def __str__(self):
		return self.message + "\n" + self.hint if self.hint else self.message

class _Judgement(SemanticError):
	def __init__(self, message:str, span:Optional[slice]=None):
		super().__init__(message)
		self.message, self.span = message, span
	def __str__(self): return self.message

class InvalidTypeError(_Judgement):
	""" Structurally disallowed, such as void in a union or a stand-alone false. """

class RedundantTypeError(_Judgement):
	""" A union member that is obviously a duplicate of another. """

class VarianceError(_Judgement):
	def __init__(self, kind:str, detail:str):
		super().__init__("%s type is not compatible: %s" % (kind.capitalize(), detail))
		self.kind, self.detail = kind, detail

class ValueTypeError(TypeError):
	""" A run-time value does not fit (and cannot be made to fit) a declared type. """
