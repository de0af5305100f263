"""
Which way the subtype relation must point when a subclass redeclares something.

	return types     covariant      override <: base
	parameter types  contravariant  base <: override
	property types   invariant      both

No new subtyping logic lives here; just the direction per kind of declaration.
"""
from .algebra import render
from .errors import VarianceError
from .normalize import RETURN, PARAMETER, PROPERTY
from .subtyping import SubtypeEngine

def is_compatible(kind:str, base, override, engine:SubtypeEngine) -> bool:
	if kind == RETURN: return engine.is_subtype(override, base)
	if kind == PARAMETER: return engine.is_subtype(base, override)
	if kind == PROPERTY: return engine.is_equivalent(base, override)
	raise ValueError(kind)

def check_variance(kind:str, base, override, engine:SubtypeEngine) -> None:
	if not is_compatible(kind, base, override, engine):
		raise VarianceError(kind, _explain(kind, base, override))

def _explain(kind, base, override) -> str:
	b, o = render(base), render(override)
	if kind == RETURN:
		return "%s is not a subtype of %s; a return type may only be narrowed." % (o, b)
	if kind == PARAMETER:
		return "%s does not accept everything %s does; a parameter type may only be widened." % (o, b)
	return "%s and %s must be the same type; property types are invariant." % (o, b)
