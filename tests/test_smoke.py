from pathlib import Path
import io, unittest
from contextlib import redirect_stdout, redirect_stderr
from uniontypes import diagnostics, resolution, cmdline
from uniontypes.algebra import render
from uniontypes.inheritance import InheritanceChecker

base_folder = Path(__file__).parent.parent
zoo_ok = base_folder/"zoo/ok"


def _good(folder, which) -> resolution.RoadMap:
	report = diagnostics.Report(verbose=False)
	try:
		roadmap = resolution.RoadMap(folder / (which + ".decl"), report)
	except resolution.Yuck as ex:
		assert report.sick()
		report.complain_to_console()
		assert False, "Test failed %s phase"%ex.args[0]
	else:
		report.assert_no_issues("Ostensibly-good example broke before the override check, but failed to fail properly.")
		InheritanceChecker(report).check_program(roadmap)
		report.assert_no_issues("Ostensibly-good example failed the override check.")
		return roadmap

class ZooOfOk(unittest.TestCase):
	""" Check all the good specimens; Test for no smoke. """

	def test_zoo_of_ok(self):
		for name in ["shapes", "iterables", "aliases"]:
			with self.subTest(name):
				_good(zoo_ok, name)

	def test_sites_are_normalized(self):
		roadmap = _good(zoo_ok, "shapes")
		square = roadmap.decl("square")
		self.assertEqual("Square", square.name)
		self.assertEqual("int|float", render(square.properties["perimeter"].typ))
		self.assertIsNone(square.methods["nameit"].params[0].typ)
		self.assertEqual("?string", render(roadmap.decl("Polygon").properties["label"].typ))
		self.assertEqual("string|null", render(square.properties["label"].typ))

	def test_runtime_alias_finds_the_declaration(self):
		roadmap = _good(zoo_ok, "aliases")
		self.assertIs(roadmap.decl("Money"), roadmap.decl("coin"))
		self.assertTrue(roadmap.table.is_class_subtype("Price", "Coin"))

class CommandLine(unittest.TestCase):

	def run_quietly(self, *argv):
		out, err = io.StringIO(), io.StringIO()
		args = cmdline.parser.parse_args(list(argv))
		with redirect_stdout(out), redirect_stderr(err):
			code = cmdline.run(args)
		return code, out.getvalue(), err.getvalue()

	def test_check_good_file(self):
		code, out, err = self.run_quietly(str(zoo_ok/"shapes.decl"))
		self.assertEqual(0, code)
		self.assertIn("Looks plausible", err)

	def test_check_bad_file(self):
		code, out, err = self.run_quietly(str(base_folder/"zoo/fail/variance/widened_return.decl"))
		self.assertEqual(1, code)
		self.assertIn("Savings::balance()", err)

	def test_show(self):
		code, out, err = self.run_quietly("--show", "null|FLOAT|int")
		self.assertEqual(0, code)
		self.assertIn("union int|float|null", out)
		self.assertIn("allows null: yes", out)
		code, out, err = self.run_quietly("--show", "string|null")
		self.assertIn("named ?string", out)

	def test_show_rejects_bad_types(self):
		code, out, err = self.run_quietly("--show", "int|void")
		self.assertEqual(1, code)
		self.assertIn("InvalidTypeError", err)

	def test_coerce(self):
		code, out, err = self.run_quietly("--coerce", "int|string", "42.0")
		self.assertEqual(0, code)
		self.assertEqual("int(42)\n", out)
		code, out, err = self.run_quietly("--coerce", "int|string", "1e100")
		self.assertEqual('string("1.0E+100")\n', out)

	def test_coerce_strict(self):
		code, out, err = self.run_quietly("--strict", "--coerce", "int|string", "42.0")
		self.assertEqual(1, code)
		self.assertIn("ValueTypeError", err)

	def test_coerce_with_notice(self):
		code, out, err = self.run_quietly("--coerce", "int|bool", "'45 apples'")
		self.assertEqual("int(45)\n", out)
		self.assertIn("non well formed", err)


if __name__ == '__main__':
	unittest.main()
