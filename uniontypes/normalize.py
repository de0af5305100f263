"""
Name resolution and canonical form for type values.

This happens at "compile time", so it knows about `use` aliases and the
declared spelling of classes, but nothing about aliases made at run time.
Redundancy that only shows up through a runtime alias or a subclass
relationship is allowed to stand.
"""
from typing import Callable, Optional
from boozetools.support.foundation import Visitor

from .algebra import Simple, Pseudo, NullLiteral, Nullable, Union, members_of, render
from .errors import InvalidTypeError, RedundantTypeError

RETURN, PARAMETER, PROPERTY = "return", "parameter", "property"

# Canonical member order: class names (by key) first, then these.
_BUILTIN_ORDER = {
	name: rank for rank, name in enumerate([
		"self", "parent", "callable", "iterable", "object", "array",
		"string", "int", "float", "bool", "void", "false", "null",
	])
}

def _sort_key(member):
	key = member.key()
	if key in _BUILTIN_ORDER: return 1, _BUILTIN_ORDER[key], key
	return 0, 0, key

class Normalizer(Visitor):
	"""
	aliases: compile-time import aliases, lower-case alias -> target name.
	canonical: optional function giving the declared spelling of a class name.
	"""
	def __init__(self, aliases:Optional[dict[str, str]]=None, canonical:Optional[Callable[[str], str]]=None):
		self._aliases = {k.lower(): v.lstrip("\\") for k, v in (aliases or {}).items()}
		self._canonical = canonical or (lambda name: name)

	def normalize(self, t):
		return self.visit(t)

	def resolve(self, s:Simple) -> Simple:
		if not s.is_class_name(): return s
		name = self._aliases.get(s.key(), s.name)
		return Simple(self._canonical(name))

	def visit_Simple(self, t:Simple): return self.resolve(t)
	def visit_Pseudo(self, t:Pseudo): return t
	def visit_NullLiteral(self, t:NullLiteral): return t
	def visit_Nullable(self, t:Nullable): return Nullable(self.resolve(t.target))

	def visit_Union(self, t:Union):
		members = [m if not isinstance(m, Simple) else self.resolve(m) for m in t.members]
		seen = {}
		for m in members:
			if m.key() in seen:
				raise RedundantTypeError("Duplicate type %s is redundant." % render(m))
			seen[m.key()] = m
		if "bool" in seen and "false" in seen:
			raise RedundantTypeError("Type bool contains both true and false, therefore false is redundant.")
		if "object" in seen:
			for m in members:
				if isinstance(m, Simple) and m.is_class_name():
					raise RedundantTypeError("Type %s|object contains both object and a class type, which is redundant." % m.name)
		return canonical_union(members)

def canonical_union(members):
	"""
	Put members in the canonical order. A single survivor is no union at all:
	it collapses to itself, unless it is a pseudo-type with nothing to accompany it.
	"""
	if len(members) == 1:
		only = members[0]
		if not isinstance(only, Simple):
			raise InvalidTypeError("The %s pseudo-type can only be used as part of a union." % render(only))
		return only
	if all(isinstance(m, (Pseudo, NullLiteral)) for m in members):
		raise InvalidTypeError("A union of only %s is not a usable type." % " and ".join(map(render, members)))
	return Union(tuple(sorted(members, key=_sort_key)))

def normalize(t, aliases=None, canonical=None):
	return Normalizer(aliases, canonical).normalize(t)

###############################################################################

def validate_site(t, kind:str):
	"""
	Some types are fine in general but not at a particular kind of declaration.
	void only works by itself as a return type; callable does not work for properties.
	"""
	if t is None: return
	for m in members_of(t):
		if isinstance(m, Simple) and m.is_void():
			if kind != RETURN:
				raise InvalidTypeError("The void type can only be used as a return type.")
			if not isinstance(t, Simple):
				raise InvalidTypeError("The void type can only be used as a stand-alone type.")
		if kind == PROPERTY and isinstance(m, Simple) and m.key() == "callable":
			raise InvalidTypeError("Property cannot have type %s because callable is not supported for properties." % render(t))

class _Relative(Visitor):
	def __init__(self, self_name, parent_name):
		self.names = {"self": self_name, "parent": parent_name}
	def swap(self, s:Simple) -> Simple:
		name = self.names.get(s.key())
		return Simple(name) if name else s
	def visit_Simple(self, t:Simple): return self.swap(t)
	def visit_Pseudo(self, t): return t
	def visit_NullLiteral(self, t): return t
	def visit_Nullable(self, t:Nullable): return Nullable(self.swap(t.target))
	def visit_Union(self, t:Union):
		return Union(tuple(self.swap(m) if isinstance(m, Simple) else m for m in t.members))

def substitute_relative(t, self_name:str, parent_name:Optional[str]):
	""" Replace self and parent with the classes they stand for in some particular class. """
	if t is None: return None
	return _Relative(self_name, parent_name).visit(t)
