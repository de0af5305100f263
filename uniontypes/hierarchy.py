"""
The class hierarchy, as far as the subtyping engine cares.

The engine never loads or resolves classes itself. It asks an oracle two
questions: does this class exist, and is one class a subtype of another?
ClassTable is the oracle that the declaration front-end fills in.

Class names are case-insensitive. Runtime aliases (class_alias) are known
to the oracle but deliberately unknown to the normalizer.
"""
from abc import ABC, abstractmethod
from typing import Iterable, Optional, NamedTuple
from boozetools.support.foundation import strongly_connected_components_hashable

class AlreadyExists(KeyError): pass
class Absent(KeyError): pass

class ClassHierarchy(ABC):
	@abstractmethod
	def is_class_subtype(self, name_a:str, name_b:str) -> bool: pass

	@abstractmethod
	def class_exists(self, name:str) -> bool: pass

class _NoClasses(ClassHierarchy):
	""" Knows no classes at all, so only identity holds. """
	def is_class_subtype(self, name_a:str, name_b:str) -> bool:
		return name_a.lower() == name_b.lower()
	def class_exists(self, name:str) -> bool: return False

NO_CLASSES = _NoClasses()

class ClassEntry(NamedTuple):
	name: str
	is_interface: bool
	parent: Optional[str]
	interfaces: tuple[str, ...]
	def supertypes(self) -> tuple[str, ...]:
		return ((self.parent,) if self.parent else ()) + self.interfaces

BUILT_IN_CLASSES = (
	ClassEntry("Traversable", True, None, ()),
	ClassEntry("Iterator", True, None, ("Traversable",)),
	ClassEntry("IteratorAggregate", True, None, ("Traversable",)),
	ClassEntry("Countable", True, None, ()),
	ClassEntry("ArrayAccess", True, None, ()),
	ClassEntry("Stringable", True, None, ()),
	ClassEntry("Closure", False, None, ()),
	ClassEntry("stdClass", False, None, ()),
)

class ClassTable(ClassHierarchy):
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	_entries: dict[str, ClassEntry]
	_aliases: dict[str, str]
	_ancestry: dict[str, frozenset[str]]

	def __init__(self, with_built_ins=True):
		self._entries, self._aliases, self._ancestry = {}, {}, {}
		if with_built_ins:
			for entry in BUILT_IN_CLASSES: self.define(entry)

	def define(self, entry:ClassEntry) -> ClassEntry:
		key = entry.name.lower()
		if key in self._entries or key in self._aliases:
			raise AlreadyExists(entry.name)
		self._entries[key] = entry
		self._ancestry.clear()
		return entry

	def define_class(self, name:str, parent:str=None, interfaces:Iterable[str]=()) -> ClassEntry:
		return self.define(ClassEntry(name, False, parent, tuple(interfaces)))

	def define_interface(self, name:str, extends:Iterable[str]=()) -> ClassEntry:
		return self.define(ClassEntry(name, True, None, tuple(extends)))

	def alias(self, original:str, alias:str):
		""" What class_alias does at runtime. """
		key = alias.lower()
		if key in self._entries or key in self._aliases:
			raise AlreadyExists(alias)
		self._aliases[key] = self.entry(original).name.lower()
		self._ancestry.clear()

	def _key(self, name:str) -> str:
		key = name.lower()
		return self._aliases.get(key, key)

	def class_exists(self, name:str) -> bool:
		return self._key(name) in self._entries

	def entry(self, name:str) -> ClassEntry:
		try: return self._entries[self._key(name)]
		except KeyError: raise Absent(name)

	def canonical(self, name:str) -> str:
		""" The declared spelling for a class name, ignoring runtime aliases. """
		entry = self._entries.get(name.lower())
		return entry.name if entry else name

	def circularities(self) -> list[list[str]]:
		""" Groups of classes that inherit from each other in a circle. """
		graph = {
			key: [self._key(s) for s in entry.supertypes() if self.class_exists(s)]
			for key, entry in self._entries.items()
		}
		found = []
		for scc in strongly_connected_components_hashable(graph):
			if len(scc) > 1 or scc[0] in graph[scc[0]]:
				found.append([self._entries[k].name for k in scc])
		return found

	def ancestry(self, name:str) -> frozenset[str]:
		""" Keys of the class itself and everything it extends or implements, transitively. """
		key = self._key(name)
		if key not in self._ancestry:
			seen, agenda = set(), [key]
			while agenda:
				k = agenda.pop()
				if k in seen or k not in self._entries: continue
				seen.add(k)
				agenda.extend(self._key(s) for s in self._entries[k].supertypes())
			seen.add(key)
			self._ancestry[key] = frozenset(seen)
		return self._ancestry[key]

	def is_class_subtype(self, name_a:str, name_b:str) -> bool:
		return self._key(name_b) in self.ancestry(name_a)
