"""
Reference sets: several storage locations aliased to one value.

Each location keeps its own declared type (None for an untyped variable).
Assigning through any of them has to satisfy all of them at once, and the
coercions must agree, or else nothing changes at all. So assignment goes in
two phases: work out every location's coerced value first, then commit.
"""
import math
from typing import Optional, Any
from .algebra import render
from .coercion import CoercionResolver, CoercedValue, type_name_of, describe
from .errors import ValueTypeError

class Location:
	def __init__(self, name:str, declared_type=None, value:Any=None):
		self.name = name
		self.declared_type = declared_type
		self.value = value
		self.reference_set: Optional["ReferenceSet"] = None
	def __repr__(self):
		typ = "mixed" if self.declared_type is None else render(self.declared_type)
		return "<%s %s = %r>" % (typ, self.name, self.value)

def _identical(a:CoercedValue, b:CoercedValue) -> bool:
	# Same type and same value. NAN counts as matching itself here.
	if a.type_name != b.type_name: return False
	if isinstance(a.value, float) and math.isnan(a.value): return math.isnan(b.value)
	return a.value == b.value

class ReferenceSet:
	def __init__(self, resolver:CoercionResolver=None):
		self.resolver = resolver or CoercionResolver()
		self.locations: list[Location] = []

	def __len__(self): return len(self.locations)
	def __iter__(self): return iter(self.locations)

	def value(self) -> Any:
		return self.locations[0].value if self.locations else None

	def join(self, location:Location):
		"""
		Make one more location share this set's value. The current value must
		already fit the newcomer exactly; joining is not an assignment.
		"""
		if location.reference_set is not None:
			location.reference_set.leave(location)
		if self.locations:
			value = self.value()
			if location.declared_type is not None and not self.resolver.accepts(value, location.declared_type):
				raise ValueTypeError("Cannot take a reference to %s of type %s from a value of type %s" % (
					location.name, render(location.declared_type), describe(value)
				))
			location.value = value
		self.locations.append(location)
		location.reference_set = self

	def leave(self, location:Location):
		""" Unbinding a location leaves its value behind; the set dissolves when nobody is left. """
		self.locations.remove(location)
		location.reference_set = None

	def assign(self, value, strict:bool=False) -> CoercedValue:
		"""
		Untyped locations take whatever the typed ones settle on,
		so only typed locations get a say in the coerced value.
		"""
		if not self.locations: raise ValueError("Cannot assign through an empty reference set.")
		# Phase one: compute, commit nothing.
		typed = [location for location in self.locations if location.declared_type is not None]
		results = [self.resolver.coerce(value, location.declared_type, strict) for location in typed]
		first = results[0] if results else CoercedValue(value, type_name_of(value))
		for location, result in zip(typed, results):
			if not _identical(first, result):
				raise ValueTypeError("Cannot assign %s to reference held by %s: coercions disagree (%s %r versus %s %r)" % (
					describe(value), location.name, first.type_name, first.value, result.type_name, result.value,
				))
		# Phase two: commit everywhere.
		for location in self.locations:
			location.value = first.value
		notices = tuple(dict.fromkeys(n for r in results for n in r.notices))
		return first._replace(notices=notices)

def make_reference(*locations:Location, resolver:CoercionResolver=None) -> ReferenceSet:
	""" What $a = &$b = &$c does. The first location's value is the one that gets shared. """
	reference_set = ReferenceSet(resolver)
	for location in locations:
		reference_set.join(location)
	return reference_set
