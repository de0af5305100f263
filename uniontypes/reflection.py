"""
A read-only, descriptive view of a type value, for whoever asks "what is
this declared as?"

Plain and nullable types come out as a named-type view; genuine unions come
out as a union view listing their members. For the sake of code that only
knows about named types, T|null with a single simple T also comes out as a
nullable named-type view.
"""
from boozetools.support.foundation import Visitor
from .algebra import Simple, Pseudo, NullLiteral, Nullable, Union, NULL, render

class NamedTypeView:
	def __init__(self, name:str, nullable:bool=False, builtin:bool=True):
		self.name, self._nullable, self._builtin = name, nullable, builtin
	def allows_null(self) -> bool: return self._nullable
	def is_builtin(self) -> bool: return self._builtin
	def __str__(self):
		if self._nullable and self.name != "null": return "?" + self.name
		return self.name
	def __repr__(self): return "<NamedTypeView %s>" % self
	def __eq__(self, other):
		return isinstance(other, NamedTypeView) and (self.name, self._nullable) == (other.name, other._nullable)
	def __hash__(self): return hash((self.name, self._nullable))

class UnionTypeView:
	def __init__(self, members:tuple, text:str):
		self._members, self._text = members, text
	def types(self) -> list[NamedTypeView]: return [_named(m) for m in self._members]
	def allows_null(self) -> bool: return NULL in self._members
	def __str__(self): return self._text
	def __repr__(self): return "<UnionTypeView %s>" % self._text

def _named(member, nullable=False) -> NamedTypeView:
	if isinstance(member, Simple):
		return NamedTypeView(member.name, nullable, not member.is_class_name())
	return NamedTypeView(render(member), isinstance(member, NullLiteral))

class Projector(Visitor):
	def visit_Simple(self, t:Simple): return _named(t)
	def visit_Pseudo(self, t:Pseudo): return _named(t)
	def visit_NullLiteral(self, t:NullLiteral): return _named(t)
	def visit_Nullable(self, t:Nullable): return _named(t.target, True)
	def visit_Union(self, t:Union):
		if len(t.members) == 2 and NULL in t.members:
			other = t.members[0] if t.members[1] == NULL else t.members[1]
			if isinstance(other, Simple): return _named(other, True)
		return UnionTypeView(t.members, render(t))

def project(t):
	return Projector().visit(t)
