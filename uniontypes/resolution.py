"""
Everything between parsing and inheritance checking goes here.
By the time this pass is finished, every declared class is in the class
table and every declaration site holds a normalized, validated type.
"""
from pathlib import Path
from typing import Optional

from . import syntax
from .algebra import members_of
from .front_end import parse_text
from .diagnostics import Report
from .errors import InvalidTypeError, RedundantTypeError
from .hierarchy import ClassTable, ClassEntry, AlreadyExists, Absent
from .normalize import Normalizer, validate_site

class Yuck(Exception):
	"""
	The first argument will be the name of the pass fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

class RoadMap:
	module: syntax.Module
	table: ClassTable
	classes: dict[str, syntax.ClassDecl]

	def __init__(self, path:Optional[Path], report:Report, text:Optional[str]=None):
		if text is None: text = _read(path, report)
		report.info("Parsing", path or "<text>")
		self.module = parse_text(text, path, report)
		if self.module is None: raise Yuck("parse")
		report.assert_no_issues("Parser reported an error but failed to fail.")

		report.info("Defining classes")
		self.table, self.classes = _build_class_table(self.module, report)
		if report.sick(): raise Yuck("define")

		report.info("Resolving declared types")
		_resolve_sites(self.module, self.table, report)
		if report.sick(): raise Yuck("resolve")

	def decl(self, name:str) -> Optional[syntax.ClassDecl]:
		""" The user's declaration for a class (by any spelling or runtime alias), if there is one. """
		try: entry = self.table.entry(name)
		except Absent: return None
		return self.classes.get(entry.name.lower())

def _read(path:Path, report:Report) -> str:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except OSError:
		report.broken_file(path)
	raise Yuck("read")

def _build_class_table(module:syntax.Module, report:Report):
	document = module.document
	table = ClassTable()
	classes = {}
	for decl in module.classes:
		entry = ClassEntry(decl.name, decl.is_interface, decl.parent, decl.interfaces)
		try: table.define(entry)
		except AlreadyExists:
			first = classes.get(decl.key())
			report.redefined_class(document, decl.name, first.span if first else None, decl.span)
		else: classes[decl.key()] = decl
	for ra in module.runtime_aliases:
		try: table.alias(ra.original, ra.alias)
		except Absent: report.undefined_class(document, ra.original, ra.span)
		except AlreadyExists: report.redefined_class(document, ra.alias, _span_of(classes, ra.alias), ra.span)
	for decl in classes.values():
		if decl.parent is not None:
			_check_supertype(table, document, decl, decl.parent, False, report)
		for name in decl.interfaces:
			_check_supertype(table, document, decl, name, True, report)
	for cycle in table.circularities():
		report.circular_inheritance(document, [(name, classes[name.lower()].span) for name in cycle])
	return table, classes

def _span_of(classes, name):
	decl = classes.get(name.lower())
	return decl.span if decl else None

def _check_supertype(table:ClassTable, document, decl:syntax.ClassDecl, name:str, want_interface:bool, report:Report):
	if not table.class_exists(name):
		report.undefined_class(document, name, decl.span)
	elif table.entry(name).is_interface != want_interface:
		report.wrong_kind_of_supertype(document, name, decl.span, "an interface" if want_interface else "a class")

def _resolve_sites(module:syntax.Module, table:ClassTable, report:Report):
	normalizer = Normalizer(module.aliases(), table.canonical)
	document = module.document
	for decl in module.classes:
		for site in decl.each_site():
			if site.type_expr is None: continue
			span = site.type_span or site.span
			try:
				site.typ = normalizer.normalize(site.type_expr)
				validate_site(site.typ, site.kind)
			except (InvalidTypeError, RedundantTypeError) as ex:
				report.bad_declared_type(document, span, str(ex))
				continue
			if decl.parent is None and _mentions(site.typ, "parent"):
				report.bad_declared_type(document, span, "Cannot use \"parent\" when %s has no parent." % decl.name)

def _mentions(t, key:str) -> bool:
	return any(m.key() == key for m in members_of(t))
