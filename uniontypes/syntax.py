"""
Parse-nodes for declaration files.

Each declaration site owns the type expression exactly as written
(type_expr) and, once the resolution pass is done with it, the
normalized type value (typ). None in either place means "no declared
type", which behaves as mixed.

The constructors take their arguments in the order the grammar captures
them, so the parser can call them directly.

Class-level type annotations make peace with the IDE wherever later
passes add fields.
"""
from pathlib import Path
from typing import NamedTuple, Optional, Sequence, Any
from boozetools.parsing.interface import SemanticError

class Document(NamedTuple):
	path: Optional[Path]
	text: str

class Nom(NamedTuple):
	text: str
	span: slice

class Literal(NamedTuple):
	value: Any
	span: slice

class Written(NamedTuple):
	""" A type value, and where it came from. """
	value: Any
	span: slice

class RedeclaredMember(SemanticError):
	# Caught early enough to interrupt the parse, like any other syntax trouble.
	def __init__(self, what:str, first:slice, again:slice):
		super().__init__(what, first, again)

def _install(space:dict, key:str, site):
	if key in space:
		raise RedeclaredMember(site.name, space[key].span, site.span)
	space[key] = site

class Site:
	""" Anything that carries one declared type. """
	kind: str
	name: str
	span: slice
	type_expr: object
	type_span: Optional[slice]
	typ: object = None
	def __repr__(self): return "<%s %s>" % (type(self).__name__, self.name)
	def _written(self, written:Optional[Written]):
		if written is None: self.type_expr, self.type_span = None, None
		else: self.type_expr, self.type_span = written

class Parameter(Site):
	kind = "parameter"
	def __init__(self, written:Optional[Written], by_reference:bool, name:Nom, optional:bool):
		self._written(written)
		self.name, self.by_reference, self.optional = name.text, by_reference, optional
		start = written.span.start if written else name.span.start
		self.span = slice(start, name.span.stop)

class Method(Site):
	kind = "return"
	def __init__(self, name:Nom, params:Sequence[Parameter], result:Optional[Written]):
		self.name, self.span = name
		self.params = tuple(params)
		self._written(result)
		seen = {}
		for p in self.params: _install(seen, p.name, p)
	def key(self): return self.name.lower()

class Property(Site):
	kind = "property"
	def __init__(self, written:Optional[Written], name:Nom, has_default:bool):
		self._written(written)
		self.name, self.span = name
		self.has_default = has_default
	def key(self): return self.name

class ClassDecl:
	is_interface = False
	methods: dict[str, Method]
	properties: dict[str, Property]
	def __init__(self, name:Nom, parent:Optional[Nom], interfaces:Sequence[Nom], members:Sequence):
		self.name, self.span = name
		self.parent = parent.text if parent else None
		self.interfaces = tuple(n.text for n in interfaces)
		self.methods, self.properties = {}, {}
		for m in members:
			# Constants come through as None.
			if isinstance(m, Method): _install(self.methods, m.key(), m)
			elif isinstance(m, Property): _install(self.properties, m.key(), m)
	def key(self): return self.name.lower()
	def __repr__(self): return "<%s %s>" % ("interface" if self.is_interface else "class", self.name)
	def each_site(self):
		for m in self.methods.values():
			yield from m.params
			yield m
		yield from self.properties.values()

class InterfaceDecl(ClassDecl):
	is_interface = True
	def __init__(self, name:Nom, parents:Sequence[Nom], members:Sequence):
		super().__init__(name, None, parents, members)

class UseAlias:
	""" Without an explicit alias, the last part of the name is the alias. """
	def __init__(self, target:Nom, alias:Optional[Nom]=None):
		self.target = target.text
		self.alias = alias.text if alias else target.text.rsplit("\\", 1)[-1]
		self.span = slice(target.span.start, (alias or target).span.stop)
	def __repr__(self): return "<use %s as %s>" % (self.target, self.alias)

class RuntimeAlias:
	def __init__(self, keyword:slice, original:Nom, alias:Nom, close:slice):
		self.original, self.alias = original.text, alias.text
		self.span = slice(keyword.start, close.stop)
	def __repr__(self): return "<class_alias %s %s>" % (self.original, self.alias)

class Module:
	def __init__(self, document:Document, items:Sequence=()):
		self.document = document
		self.uses: list[UseAlias] = []
		self.runtime_aliases: list[RuntimeAlias] = []
		self.classes: list[ClassDecl] = []
		for item in items:
			# A use statement brings a list of clauses.
			if isinstance(item, list): self.uses.extend(item)
			elif isinstance(item, RuntimeAlias): self.runtime_aliases.append(item)
			else: self.classes.append(item)
	def aliases(self) -> dict[str, str]:
		return {u.alias.lower(): u.target for u in self.uses}
