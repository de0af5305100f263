"""
Checking overrides against what they override.

Every method a class declares is checked against the same-named method of
every ancestor (parent chain and interfaces alike) that declares one, and
likewise every property against ancestor properties. Where a declaration
has no type at all, it means mixed: parameters may drop their type and
returns may gain one, but property types have to match exactly.

self and parent are pinned to concrete classes on each side before any
comparison, so self in the parent means the parent, and self in the child
means the child.
"""
from .algebra import render
from .diagnostics import Report
from .errors import VarianceError
from .normalize import substitute_relative, RETURN, PARAMETER, PROPERTY
from .resolution import RoadMap
from .subtyping import SubtypeEngine
from .variance import check_variance
from . import syntax

class InheritanceChecker:
	def __init__(self, report:Report):
		self._report = report

	def check_program(self, roadmap:RoadMap):
		self._roadmap = roadmap
		self._document = roadmap.module.document
		self._engine = SubtypeEngine(roadmap.table)
		for decl in roadmap.module.classes:
			self._report.info("Checking", decl.name)
			for ancestor in self._ancestors(decl):
				self._check_against(ancestor, decl)

	def _ancestors(self, decl:syntax.ClassDecl) -> list[syntax.ClassDecl]:
		""" User-declared ancestors, nearest first, each once. """
		found, agenda, seen = [], [decl], {decl.key()}
		while agenda:
			here = agenda.pop(0)
			for name in ((here.parent,) if here.parent else ()) + here.interfaces:
				up = self._roadmap.decl(name)
				if up is not None and up.key() not in seen:
					seen.add(up.key())
					found.append(up)
					agenda.append(up)
		return found

	def _check_against(self, base:syntax.ClassDecl, decl:syntax.ClassDecl):
		for key, method in decl.methods.items():
			if key in base.methods:
				self.check_method(base, base.methods[key], decl, method)
		if not base.is_interface:
			for key, prop in decl.properties.items():
				if key in base.properties:
					self.check_property(base, base.properties[key], decl, prop)

	def _pin(self, site:syntax.Site, owner:syntax.ClassDecl):
		return substitute_relative(site.typ, owner.name, owner.parent)

	def check_method(self, base_owner, base:syntax.Method, owner, method:syntax.Method):
		where = "%s::%s()" % (owner.name, method.name)
		against = "%s::%s()" % (base_owner.name, base.name)
		if len(method.params) < len(base.params):
			self._complain("%s takes fewer parameters than %s." % (where, against), base, method)
			return
		for i, param in enumerate(method.params):
			if i >= len(base.params):
				if not param.optional:
					self._complain("%s adds required parameter $%s, which %s does not have." % (where, param.name, against), base, param)
				continue
			base_param = base.params[i]
			if base_param.optional and not param.optional:
				self._complain("Parameter $%s of %s must stay optional as in %s." % (param.name, where, against), base_param, param)
			self._compare(PARAMETER, base_owner, base_param, owner, param, "Parameter $%s of %s" % (param.name, where), against)
		self._compare(RETURN, base_owner, base, owner, method, "Return type of %s" % where, against)

	def check_property(self, base_owner, base:syntax.Property, owner, prop:syntax.Property):
		self._compare(
			PROPERTY, base_owner, base, owner, prop,
			"Type of %s::$%s" % (owner.name, prop.name), "%s::$%s" % (base_owner.name, base.name),
		)

	def _compare(self, kind:str, base_owner, base:syntax.Site, owner, site:syntax.Site, what:str, against:str):
		base_type, site_type = self._pin(base, base_owner), self._pin(site, owner)
		if base_type is None and site_type is None: return
		if base_type is None or site_type is None:
			# One side is mixed: a parameter may widen to it, a return may narrow from it.
			if kind == PARAMETER and site_type is None: return
			if kind == RETURN and base_type is None: return
			self._complain("%s must be %s, to match %s." % (
				what, "mixed (untyped)" if base_type is None else render(base.typ), against,
			), base, site)
			return
		try: check_variance(kind, base_type, site_type, self._engine)
		except VarianceError as ex:
			self._complain("%s is incompatible with %s. %s" % (what, against, ex.detail), base, site)

	def _complain(self, message:str, base:syntax.Site, site:syntax.Site):
		self._report.incompatible_override(
			self._document, message,
			base.type_span or base.span, site.type_span or site.span,
		)

