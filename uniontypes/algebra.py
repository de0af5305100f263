"""
The Algebra of Union Types
===========================

A type value is one of exactly five things:

	Simple      a primitive tag (int, string, iterable, ...) or a class name
	Pseudo      the "false" pseudo-type, which only makes sense in a union
	NullLiteral the "null" member, likewise
	Nullable    the ?T shorthand, wrapping one Simple
	Union       two or more of the above (except Nullable and Union)

These are immutable values with structural equality. Nothing here knows
about classes, coercion, or variance; those live in other passes which
dispatch over the five shapes with a visitor.

Class names compare case-insensitively. Builtin tags are always stored
lower-case, so for them the key is the name.
"""
from dataclasses import dataclass
from boozetools.support.foundation import Visitor
from .errors import InvalidTypeError

PRIMITIVE_NAMES = frozenset([
	"bool", "int", "float", "string", "array", "object",
	"iterable", "callable", "self", "parent",
])
VOID = "void"
RESERVED_NAMES = PRIMITIVE_NAMES | {VOID, "false", "null"}

@dataclass(frozen=True)
class Simple:
	name: str
	def key(self) -> str: return self.name.lower()
	def is_class_name(self) -> bool: return self.key() not in RESERVED_NAMES
	def is_void(self) -> bool: return self.name == VOID
	def __repr__(self): return "<%s>" % self.name

@dataclass(frozen=True)
class Pseudo:
	name: str = "false"
	def key(self) -> str: return self.name
	def __repr__(self): return "<pseudo:%s>" % self.name

@dataclass(frozen=True)
class NullLiteral:
	def key(self) -> str: return "null"
	def __repr__(self): return "<null>"

@dataclass(frozen=True)
class Nullable:
	target: Simple
	def __repr__(self): return "<?%s>" % self.target.name

@dataclass(frozen=True)
class Union:
	members: tuple
	def __post_init__(self):
		if len(self.members) < 2:
			raise InvalidTypeError("A union needs at least two members, not %d." % len(self.members))
		if any(isinstance(m, (Nullable, Union)) for m in self.members):
			raise InvalidTypeError("A union member cannot itself be a union or a ?T type.")
	def __repr__(self): return "<%s>" % render(self)

NULL = NullLiteral()
FALSE = Pseudo("false")

# Handy constants for the builtin tags.
BOOL, INT, FLOAT, STRING = Simple("bool"), Simple("int"), Simple("float"), Simple("string")
ARRAY, OBJECT, ITERABLE, CALLABLE = Simple("array"), Simple("object"), Simple("iterable"), Simple("callable")
TRAVERSABLE = Simple("Traversable")
CLOSURE = Simple("Closure")

def simple(name:str) -> Simple:
	""" Builtin tags get folded to lower-case; class names keep their spelling. """
	name = name.lstrip("\\")
	folded = name.lower()
	return Simple(folded if folded in PRIMITIVE_NAMES or folded == VOID else name)

def members_of(t) -> tuple:
	""" The union-members view of any type value. ?T reads as T|null. """
	if isinstance(t, Union): return t.members
	if isinstance(t, Nullable): return t.target, NULL
	return (t,)

def allows_null(t) -> bool:
	return any(m is NULL or isinstance(m, NullLiteral) for m in members_of(t))

def render(t) -> str:
	return Render().visit(t)

class Render(Visitor):
	""" Source text for a type value; the parser accepts whatever this produces. """
	def visit_Simple(self, t:Simple): return t.name
	def visit_Pseudo(self, t:Pseudo): return t.name
	def visit_NullLiteral(self, t:NullLiteral): return "null"
	def visit_Nullable(self, t:Nullable): return "?" + self.visit(t.target)
	def visit_Union(self, t:Union): return "|".join(self.visit(m) for m in t.members)
