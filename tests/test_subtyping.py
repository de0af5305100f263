import unittest

from uniontypes.algebra import Simple, Nullable, NULL, FALSE, INT, FLOAT, STRING, BOOL, ARRAY, ITERABLE, CALLABLE, OBJECT
from uniontypes.errors import VarianceError
from uniontypes.front_end import parse_type
from uniontypes.hierarchy import ClassTable, AlreadyExists, Absent, NO_CLASSES
from uniontypes.normalize import normalize, RETURN, PARAMETER, PROPERTY
from uniontypes.subtyping import SubtypeEngine, is_subtype
from uniontypes.variance import check_variance, is_compatible

def T(text):
	return normalize(parse_type(text))

def _zoo() -> ClassTable:
	table = ClassTable()
	table.define_class("Money")
	table.define_class("Price", "Money", ["Countable"])
	table.define_interface("Ledger", ["Traversable"])
	table.define_class("Book", None, ["Ledger"])
	table.define_class("Handler", "Closure")
	return table

class Relation(unittest.TestCase):

	def setUp(self):
		self.engine = SubtypeEngine(_zoo())

	def sub(self, a, b): return self.engine.is_subtype(T(a), T(b))

	def test_reflexive(self):
		for text in ["int", "?int", "int|string|null", "Money", "iterable", "string|false", "void", "self"]:
			with self.subTest(text):
				self.assertTrue(self.sub(text, text))

	def test_members_fit_the_union(self):
		self.assertTrue(self.sub("int", "int|string"))
		self.assertTrue(self.sub("string", "int|string"))
		self.assertFalse(self.sub("int|string", "int"))
		self.assertTrue(self.sub("Price|Money", "Money"))

	def test_false_and_bool(self):
		self.assertTrue(is_subtype(FALSE, BOOL))
		self.assertFalse(is_subtype(BOOL, FALSE))
		self.assertTrue(self.sub("int|false", "int|bool"))
		self.assertFalse(self.sub("int|bool", "int|false"))

	def test_iterable_both_ways(self):
		self.assertTrue(self.sub("iterable", "array|Traversable"))
		self.assertTrue(self.sub("array|Traversable", "iterable"))
		self.assertTrue(self.sub("array", "iterable"))
		self.assertTrue(self.sub("Book", "iterable"))
		self.assertFalse(self.sub("iterable", "array"))
		self.assertFalse(self.sub("Money", "iterable"))

	def test_null(self):
		self.assertTrue(self.sub("?int", "int|null"))
		self.assertTrue(self.sub("int|null", "?int"))
		self.assertFalse(self.sub("?int", "int"))
		self.assertTrue(self.sub("int", "?int"))

	def test_classes_ask_the_oracle(self):
		self.assertTrue(self.sub("Price", "Money"))
		self.assertTrue(self.sub("Price", "countable"))
		self.assertFalse(self.sub("Money", "Price"))
		self.assertTrue(self.sub("Money", "object"))
		self.assertFalse(self.sub("object", "Money"))

	def test_callable(self):
		self.assertTrue(self.sub("Closure", "callable"))
		self.assertTrue(self.sub("Handler", "callable"))
		self.assertFalse(self.sub("Money", "callable"))
		self.assertFalse(self.sub("callable", "Closure"))

	def test_no_scalar_coercion(self):
		self.assertFalse(self.sub("int", "float"))
		self.assertFalse(self.sub("int", "string"))
		self.assertFalse(self.sub("bool", "int"))

	def test_without_classes(self):
		self.assertTrue(is_subtype(Simple("Foo"), Simple("foo")))
		self.assertFalse(is_subtype(Simple("Foo"), Simple("Bar")))
		self.assertFalse(NO_CLASSES.class_exists("Foo"))

	def test_equivalence(self):
		self.assertTrue(self.engine.is_equivalent(T("Money|Price"), T("Money")))
		self.assertFalse(self.engine.is_equivalent(T("int"), T("int|float")))

	def test_idempotent_normalization(self):
		for text in ["null|float|int", "Money|string|false", "?int", "iterable|Book"]:
			with self.subTest(text):
				once = T(text)
				self.assertEqual(once, normalize(once))

class Variance(unittest.TestCase):

	def setUp(self):
		self.engine = SubtypeEngine(_zoo())

	def check(self, kind, base, override):
		check_variance(kind, T(base), T(override), self.engine)

	def test_parameter_may_only_widen(self):
		self.check(PARAMETER, "int", "int|float")
		with self.assertRaises(VarianceError) as context:
			self.check(PARAMETER, "int|float", "int")
		self.assertEqual(PARAMETER, context.exception.kind)
		self.assertIn("Parameter type is not compatible", str(context.exception))

	def test_return_may_only_narrow(self):
		self.check(RETURN, "int|float", "int")
		with self.assertRaises(VarianceError) as context:
			self.check(RETURN, "int", "int|float")
		self.assertEqual(RETURN, context.exception.kind)

	def test_individual_members_may_vary(self):
		self.check(RETURN, "Money|null", "Price")
		self.check(PARAMETER, "Price", "Money|false")
		self.check(RETURN, "bool|string", "false|string")

	def test_property_is_invariant(self):
		self.check(PROPERTY, "int|float", "float|int")
		self.check(PROPERTY, "Money", "Money|Price")
		for override in ["int", "int|float|string"]:
			with self.subTest(override):
				with self.assertRaises(VarianceError):
					self.check(PROPERTY, "int|float", override)

	def test_kind_must_be_known(self):
		with self.assertRaises(ValueError):
			is_compatible("constant", INT, INT, self.engine)

class Hierarchy(unittest.TestCase):

	def test_built_ins(self):
		table = ClassTable()
		self.assertTrue(table.class_exists("traversable"))
		self.assertTrue(table.is_class_subtype("Iterator", "Traversable"))
		self.assertFalse(ClassTable(with_built_ins=False).class_exists("Closure"))

	def test_duplicates_and_absentees(self):
		table = _zoo()
		with self.assertRaises(AlreadyExists):
			table.define_class("MONEY")
		with self.assertRaises(Absent):
			table.entry("Nowhere")
		with self.assertRaises(Absent):
			table.alias("Nowhere", "Anywhere")

	def test_alias(self):
		table = _zoo()
		table.alias("Money", "Coin")
		self.assertTrue(table.class_exists("coin"))
		self.assertTrue(table.is_class_subtype("Price", "Coin"))
		self.assertTrue(table.is_class_subtype("Coin", "Money"))
		self.assertEqual("Money", table.entry("Coin").name)
		self.assertEqual("Coin", table.canonical("Coin"))
		self.assertEqual("Money", table.canonical("MONEY"))
		with self.assertRaises(AlreadyExists):
			table.alias("Price", "coin")

	def test_circularities(self):
		table = ClassTable()
		table.define_class("Egg", "Chicken")
		table.define_class("Chicken", "Egg")
		table.define_class("Ouroboros", "Ouroboros")
		table.define_class("Bystander", "Egg")
		found = sorted(sorted(c) for c in table.circularities())
		self.assertEqual([["Chicken", "Egg"], ["Ouroboros"]], found)
		self.assertFalse(_zoo().circularities())


if __name__ == '__main__':
	unittest.main()
