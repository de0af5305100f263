"""
This is a checker for union types in PHP-style declarations.

{0}

For example:

    uniontypes shapes.decl

will check every override in shapes.decl for variance, or else explain why not.

    uniontypes --show "int|float|null"

will describe a type the way reflection would.

    uniontypes --coerce "int|string" 42.0

will show what a call in weak mode makes of that value.

    uniontypes -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="uniontypes",
	description="Checker for union types in PHP-style declarations.",
)
parser.add_argument("source", nargs="?", help="a declaration file to check; try zoo/ok/shapes.decl for example.")
parser.add_argument('-v', "--verbose", action="count", help="Say what is going on along the way.")
parser.add_argument("--max-issues", type=int, default=3, metavar="N", help="Give up after this many issues (default %(default)s).")
parser.add_argument("--show", metavar="TYPE", help="Describe a type expression as reflection would.")
parser.add_argument("--coerce", nargs=2, metavar=("TYPE", "VALUE"), help="Coerce a value literal to a type.")
parser.add_argument("--strict", action="store_true", help="With --coerce: use strict mode instead of weak mode.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	report = Report(verbose=args.verbose, max_issues=args.max_issues)
	try:
		if args.show: return show(args.show)
		if args.coerce: return coerce(*args.coerce, strict=args.strict, report=report)
		return check(Path.cwd() / args.source, report)
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("That is %d issues already. Sort these out and try again." % args.max_issues, file=sys.stderr)
		return 1

def check(path:Path, report) -> int:
	from .resolution import RoadMap, Yuck
	from .inheritance import InheritanceChecker
	try: roadmap = RoadMap(path, report)
	except Yuck:
		assert report.sick()
		report.complain_to_console()
		return 1
	assert report.ok()
	InheritanceChecker(report).check_program(roadmap)
	if report.sick():
		report.complain_to_console()
		return 1
	print("Looks plausible to me.", file=sys.stderr)
	return 0

def _complain(ex) -> int:
	print("%s: %s" % (type(ex).__name__, ex), file=sys.stderr)
	return 1

def show(text:str) -> int:
	from .errors import TypeSyntaxError, InvalidTypeError, RedundantTypeError
	from .front_end import parse_type
	from .normalize import normalize
	from .reflection import project, UnionTypeView
	try: view = project(normalize(parse_type(text)))
	except (TypeSyntaxError, InvalidTypeError, RedundantTypeError) as ex: return _complain(ex)
	if isinstance(view, UnionTypeView):
		print("union %s" % view)
		for member in view.types(): print("  - %s" % member)
	else:
		print("named %s" % view)
	print("allows null: %s" % ("yes" if view.allows_null() else "no"))
	return 0

def coerce(type_text:str, value_text:str, strict:bool, report) -> int:
	from .errors import TypeSyntaxError, InvalidTypeError, RedundantTypeError, ValueTypeError
	from .front_end import parse_type, parse_value
	from .normalize import normalize
	from .coercion import coerce as do_coerce, php_float_to_string
	try:
		target = normalize(parse_type(type_text))
		result = do_coerce(parse_value(value_text), target, strict=strict)
	except (TypeSyntaxError, InvalidTypeError, RedundantTypeError, ValueTypeError) as ex: return _complain(ex)
	for text in result.notices: report.notice(text)
	value = result.value
	if isinstance(value, bool): shown = "true" if value else "false"
	elif isinstance(value, float): shown = php_float_to_string(value)
	elif isinstance(value, str): shown = '"%s"' % value
	else: shown = repr(value)
	print("%s(%s)" % (result.type_name, shown))
	return 0

def main():
	if len(sys.argv) > 1:
		args = parser.parse_args()
		if not (args.source or args.show or args.coerce):
			parser.error("Give a declaration file, --show, or --coerce.")
		exit(run(args))
	else:
		print(__doc__.strip().format(parser.format_usage()))
