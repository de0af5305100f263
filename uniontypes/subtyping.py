"""
The static subtype relation over type values.

Any type reads as a set of members (?T is T|null; a plain type is a
one-member union). Then A <: B exactly when every member of A fits some
member of B. The rest of the rules are about when one lone member fits
another, which is what the visitor methods below decide, dispatching on
the shape of the member on the left.

Two extra facts:
	* iterable is interchangeable with array|Traversable, on either side.
	* Class names are the oracle's business.
"""
from boozetools.support.foundation import Visitor

from .algebra import (
	Simple, Pseudo, NullLiteral,
	members_of, ARRAY, TRAVERSABLE, CLOSURE,
)
from .hierarchy import ClassHierarchy, NO_CLASSES

def _expand(members):
	for m in members:
		if isinstance(m, Simple) and m.key() == "iterable":
			yield ARRAY
			yield TRAVERSABLE
		else:
			yield m

class SubtypeEngine(Visitor):
	def __init__(self, oracle:ClassHierarchy=NO_CLASSES):
		self.oracle = oracle

	def is_subtype(self, sub, sup) -> bool:
		targets = list(_expand(members_of(sup)))
		return all(
			any(self.visit(m, n) for n in targets)
			for m in _expand(members_of(sub))
		)

	def is_equivalent(self, a, b) -> bool:
		return self.is_subtype(a, b) and self.is_subtype(b, a)

	def visit_Simple(self, sub:Simple, sup) -> bool:
		if not isinstance(sup, Simple): return False
		if sub.key() == sup.key(): return True
		if not sub.is_class_name(): return False
		if sup.key() == "object": return True
		if sup.key() == "callable": return self.oracle.is_class_subtype(sub.name, CLOSURE.name)
		return sup.is_class_name() and self.oracle.is_class_subtype(sub.name, sup.name)

	def visit_Pseudo(self, sub:Pseudo, sup) -> bool:
		return sup.key() in (sub.key(), "bool")

	def visit_NullLiteral(self, sub:NullLiteral, sup) -> bool:
		return isinstance(sup, NullLiteral)

def is_subtype(sub, sup, oracle:ClassHierarchy=NO_CLASSES) -> bool:
	return SubtypeEngine(oracle).is_subtype(sub, sup)
