"""
Scanning and parsing, for type expressions, value literals and whole
declaration files. The grammar is in UnionTypes.md, next door.
"""
import sys, math
from pathlib import Path
from typing import Optional, Any

from boozetools.macroparse.runtime import TypicalApplication, make_tables
from boozetools.scanning.engine import IterableScanner
from boozetools.parsing.interface import ParseError, END_OF_TOKENS
from boozetools.support.pretty import DOT
from . import syntax, algebra
from .algebra import Simple, Nullable, Union, NULL, FALSE
from .coercion import PhpObject
from .diagnostics import Report
from .errors import TypeSyntaxError, InvalidTypeError

_tables = make_tables(Path(__file__).parent/"UnionTypes.md")
_parse_table = _tables['parser']
RESERVED = frozenset(t for t in _parse_table["terminals"] if t.isupper() and t.replace("_", "").isalpha())

_VALUE_WORDS = {"true": True, "false": False, "null": None, "inf": math.inf, "nan": math.nan}

class UnionTypesParser(TypicalApplication):
	"""
	The scanner keeps track of brace depth: the first level of braces
	belongs to a class body, and anything deeper is a method body, which
	becomes a single `body` token.
	"""
	depth: int
	nesting: int
	body_start: int

	def parse(self, text: str, **kwargs):
		self.depth = self.nesting = 0
		return super().parse(text, **kwargs)

	def scan_ignore(self, yy: IterableScanner): pass

	@staticmethod
	def scan_punctuation(yy: IterableScanner):
		punctuation = sys.intern(yy.match())
		yy.token(punctuation, yy.slice())

	@staticmethod
	def scan_integer(yy: IterableScanner): yy.token("integer", syntax.Literal(int(yy.match()), yy.slice()))

	@staticmethod
	def scan_real(yy: IterableScanner): yy.token("real", syntax.Literal(float(yy.match()), yy.slice()))

	@staticmethod
	def scan_short_string(yy: IterableScanner): yy.token("short_string", syntax.Literal(yy.match()[1:-1], yy.slice()))

	@staticmethod
	def scan_word(yy: IterableScanner):
		upper = yy.match().upper()
		if upper in RESERVED: yy.token(upper, yy.slice())
		else: yy.token("name", syntax.Nom(sys.intern(yy.match().lstrip("\\")), yy.slice()))

	@staticmethod
	def scan_variable(yy: IterableScanner): yy.token("variable", syntax.Nom(yy.match()[1:], yy.slice()))

	def scan_open_brace(self, yy: IterableScanner):
		if self.depth:
			self.nesting, self.body_start = 1, yy.left
			yy.push("BODY")
		else:
			self.depth += 1
			yy.token("{", yy.slice())

	def scan_close_brace(self, yy: IterableScanner):
		if self.depth: self.depth -= 1
		yy.token("}", yy.slice())

	def scan_enter_block(self, yy: IterableScanner):
		self.nesting += 1

	def scan_leave_block(self, yy: IterableScanner):
		self.nesting -= 1
		if not self.nesting:
			yy.pop()
			yy.token("body", slice(self.body_start, yy.right))

	def on_stuck(self, yy: IterableScanner):
		raise TypeSyntaxError("I don't recognize %r here." % yy.match(), yy.slice())

	def unexpected_token(self, kind, semantic, pds):
		if kind == END_OF_TOKENS:
			end = len(self.source.content)
			message, span = "The text ends too soon.", slice(end, end)
		elif kind == "body":
			message, span = "A method body is not expected here.", semantic
		else:
			message, span = "I was not expecting %r here." % self.yy.match(), self.yy.slice()
		raise TypeSyntaxError(message, span, _best_hint(self.stack_symbols(pds), kind))

	def exception_parsing(self, ex: Exception, constructor_id: int, args):
		if isinstance(ex, ParseError): raise ex from None
		super().exception_parsing(ex, constructor_id, args)

	@staticmethod
	def parse_nothing(): return None
	@staticmethod
	def parse_empty(): return ()
	@staticmethod
	def parse_first(item): return [item]
	@staticmethod
	def parse_more(some, another):
		some.append(another)
		return some
	@staticmethod
	def parse_pair(a, b): return [a, b]
	@staticmethod
	def parse_absent(): return False
	@staticmethod
	def parse_present(): return True

	@staticmethod
	def default_parse(ctor, *args):
		return getattr(syntax, ctor)(*args)

	# Type expressions

	@staticmethod
	def parse_type_name(nom: syntax.Nom) -> syntax.Written:
		word = nom.text.lower()
		if word == "false": value = FALSE
		elif word == "null": value = NULL
		else: value = algebra.simple(nom.text)
		return syntax.Written(value, nom.span)

	@staticmethod
	def parse_plain_type(w: syntax.Written):
		if not isinstance(w.value, Simple):
			raise InvalidTypeError("The %s pseudo-type can only be used as part of a union." % algebra.render(w.value), w.span)
		return w

	@staticmethod
	def parse_nullable_type(question: slice, w: syntax.Written):
		if not isinstance(w.value, Simple):
			raise InvalidTypeError("The %s pseudo-type cannot be nullable." % algebra.render(w.value), question)
		if w.value.is_void():
			raise InvalidTypeError("The void type cannot be nullable.", question)
		return syntax.Written(Nullable(w.value), slice(question.start, w.span.stop))

	@staticmethod
	def parse_union_type(ws: list):
		for w in ws:
			if isinstance(w.value, Simple) and w.value.is_void():
				raise InvalidTypeError("The void type cannot be part of a union.", w.span)
		return syntax.Written(Union(tuple(w.value for w in ws)), slice(ws[0].span.start, ws[-1].span.stop))

	# Value literals

	@staticmethod
	def parse_literal(lit: syntax.Literal): return lit.value
	@staticmethod
	def parse_negative(lit: syntax.Literal): return -lit.value

	@staticmethod
	def parse_word(nom: syntax.Nom):
		word = nom.text.lower()
		if word not in _VALUE_WORDS:
			raise TypeSyntaxError("I don't know how to read %r as a value." % nom.text, nom.span)
		return _VALUE_WORDS[word]

	@classmethod
	def parse_negative_word(cls, nom: syntax.Nom):
		value = cls.parse_word(nom)
		if not isinstance(value, float):
			raise TypeSyntaxError("Only a number can be negated.", nom.span)
		return -value

	@staticmethod
	def parse_empty_array(): return []
	@staticmethod
	def parse_new_object(nom: syntax.Nom): return PhpObject(nom.text)

	# Declarations

	@staticmethod
	def parse_constant(nom: syntax.Nom): return None

	@staticmethod
	def parse_string_class_ref(lit: syntax.Literal):
		return syntax.Nom(lit.value.lstrip("\\"), lit.span)

	pass

_parser = UnionTypesParser(_tables)

def parse_type(text:str):
	""" Parse a complete type expression. Extra text after the type is a syntax error. """
	return _parser.parse(text, language="type").value

def parse_value(text:str) -> Any:
	"""
	Read one value literal as written on a command line:
	42, -1.5, 1e100, INF, 'text', "text", true, null, [], new Foo
	"""
	return _parser.parse(text, language="value")

def parse_module(document:syntax.Document) -> syntax.Module:
	filename = str(document.path) if document.path else None
	return syntax.Module(document, _parser.parse(document.text, filename=filename, language="module"))

def parse_text(text:str, path:Optional[Path], report:Report) -> Optional[syntax.Module]:
	""" Parse a declaration file; on trouble, tell the report and return None. """
	document = syntax.Document(path, text)
	try:
		return parse_module(document)
	except syntax.RedeclaredMember as ex:
		what, first, again = ex.args
		report.redeclared_member(document, what, first, again)
	except TypeSyntaxError as ex:
		report.generic_parse_error(document, ex.span, ex.message, ex.hint)
	except InvalidTypeError as ex:
		report.generic_parse_error(document, ex.span, ex.message, "")

##########################
#
#  A few common mistakes deserve more than "expected X, found Y".
#  A hint reads as the top of the parse stack, a dot, and the lookahead.
#

_vocabulary = set(_parse_table['terminals']).union(_parse_table['nonterminals'])
ETC = "???"
assert ETC not in _vocabulary
_advice_tree = {t:{} for t in _parse_table['terminals']}
_advice_tree[ETC] = {}

def _hint(path, text):
	def dig(where, what):
		if what not in where: where[what] = {}
		return where[what]
	symbols = path.split()
	node = dig(_advice_tree, symbols.pop())
	for symbol in reversed(symbols):
		if symbol == DOT:
			continue
		if symbol == ETC:
			node[ETC] = True
		else:
			assert symbol in _vocabulary, symbol
			node = dig(node, symbol)
	assert '' not in node, path
	node[''] = text

def _best_hint(stack_symbols, lookahead):
	"""
	Find the deepest match between the parse stack and the hints.
	Failing that, read out the parser state so it's easy to add a hint for it.
	"""
	best = None
	nodes = [_advice_tree[ETC]]
	if lookahead in _advice_tree: nodes.append(_advice_tree[lookahead])
	for symbol in reversed(stack_symbols):
		subsequent = []
		for n in nodes:
			if symbol in n: subsequent.append(n[symbol])
			if ETC in n: subsequent.append(n)
		nodes = subsequent
		for n in nodes:
			if '' in n: best = n['']
	if best:
		return "Here's my best guess:\n\t"+best
	else:
		return "Guru Meditation:\n\t"+" ".join(stack_symbols + [DOT, lookahead])

# A ?T reduces as far as it can before the parser sees the '|' after it.
for _top in ["type", "optional_type", "return_type", "method"]:
	_hint(_top+" ● |", "Cannot mix ?T shorthand with a union; write T1|T2|null instead.")
_hint("| ● ?", "The ? shorthand only goes at the very front of a type, and not together with '|'.")
_hint("| ● |", "A union needs a type on both sides of each '|'.")
_hint("| ● <END>", "A union needs a type on both sides of each '|'.")
_hint("type_name ● name", "Perhaps a '|' is missing between these two types.")
_hint("variable ● }", "Perhaps a semicolon is missing before this brace.")
_hint("variable ● name", "Perhaps a comma or semicolon is missing. Types come before the $name, as in: int|float $x")
_hint("modifiers type_name ● (", "Perhaps 'function' is missing before the method name.")
_hint("modifiers type_name ● ;", "A property needs a $name.")
for _follow in [",", ")", ";"]:
	_hint("= ● "+_follow, "Expected a default value after '='.")
_hint("{ ● <END>", "The text ends inside a class body. Is a closing brace missing?")
_hint("some(member) ● <END>", "The text ends inside a class body. Is a closing brace missing?")
_hint("parameters ) ● ???", "Perhaps a semicolon is missing after the method signature.")
_hint("parameters ) ● <END>", "Perhaps a method body never closes, or the signature lacks its semicolon.")
_hint("CLASS_ALIAS ( ● ???", "class_alias needs the original class, then the alias: a name, a 'string', or Foo::class.")
