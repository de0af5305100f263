import math
import unittest

from uniontypes.coercion import NON_WELL_FORMED
from uniontypes.errors import ValueTypeError
from uniontypes.front_end import parse_type
from uniontypes.normalize import normalize
from uniontypes.references import Location, ReferenceSet, make_reference

def T(text):
	return normalize(parse_type(text))

class Joining(unittest.TestCase):

	def test_first_value_is_shared(self):
		a, b, c = Location("a", T("int"), 1), Location("b", T("int|string"), "x"), Location("c")
		refs = make_reference(a, b, c)
		self.assertEqual(3, len(refs))
		self.assertEqual([1, 1, 1], [x.value for x in refs])
		self.assertIs(refs, b.reference_set)

	def test_join_is_not_an_assignment(self):
		refs = make_reference(Location("a", T("string"), "42"))
		with self.assertRaises(ValueTypeError):
			refs.join(Location("b", T("int"), 0))
		self.assertEqual(1, len(refs))

	def test_leave(self):
		a, b = Location("a", T("int"), 7), Location("b", None)
		refs = make_reference(a, b)
		refs.leave(b)
		self.assertIsNone(b.reference_set)
		self.assertEqual(7, b.value)
		refs.assign(8)
		self.assertEqual((8, 7), (a.value, b.value))

	def test_join_moves_between_sets(self):
		a, b = Location("a", None, 1), Location("b", None, 2)
		first, second = make_reference(a), make_reference(b)
		second.join(a)
		self.assertEqual(0, len(first))
		self.assertEqual([b, a], list(second))
		self.assertEqual(2, a.value)

class Assigning(unittest.TestCase):

	def test_agreement_commits_everywhere(self):
		a, b, c = Location("a", T("int"), 0), Location("b", T("int|string"), 0), Location("c")
		refs = make_reference(a, b, c)
		result = refs.assign(5)
		self.assertEqual(("int", 5), (result.type_name, result.value))
		self.assertEqual([5, 5, 5], [x.value for x in refs])

	def test_coerced_agreement(self):
		a, b = Location("a", T("int"), 0), Location("b", T("int|bool"), 0)
		refs = make_reference(a, b)
		refs.assign(3.0)
		self.assertEqual([3, 3], [x.value for x in refs])
		self.assertIsInstance(a.value, int)

	def test_disagreement_changes_nothing(self):
		a, b, c = Location("a", T("int"), 0), Location("b", T("int|string"), 0), Location("c")
		refs = make_reference(a, b, c)
		with self.assertRaises(ValueTypeError) as context:
			refs.assign("42")
		self.assertIn("coercions disagree", str(context.exception))
		self.assertEqual([0, 0, 0], [x.value for x in refs])

	def test_same_value_different_type_disagrees(self):
		refs = make_reference(Location("a", T("int|float"), 0.0), Location("b", T("float"), 0.0))
		with self.assertRaises(ValueTypeError):
			refs.assign(42)

	def test_one_location_refusing_stops_everyone(self):
		a, b = Location("a", T("int|string"), 0), Location("b", T("int"), 0)
		refs = make_reference(a, b)
		with self.assertRaises(ValueTypeError):
			refs.assign("abc")
		self.assertEqual([0, 0], [x.value for x in refs])

	def test_nan_agrees_with_itself(self):
		refs = make_reference(Location("a", T("float"), 0.0), Location("b", T("float|string"), 0.0))
		refs.assign(math.nan)
		self.assertTrue(all(math.isnan(x.value) for x in refs))

	def test_untyped_locations_take_anything(self):
		refs = make_reference(Location("a"), Location("b"))
		result = refs.assign([])
		self.assertEqual(("array", []), (result.type_name, result.value))

	def test_notices_are_merged(self):
		refs = make_reference(Location("a", T("int"), 0), Location("b", T("int|bool"), 0))
		result = refs.assign("45 apples")
		self.assertEqual(45, result.value)
		self.assertEqual((NON_WELL_FORMED,), result.notices)

	def test_strict(self):
		refs = make_reference(Location("a", T("float"), 0.0), Location("b", T("?float"), 0.0))
		self.assertEqual(42.0, refs.assign(42, strict=True).value)
		with self.assertRaises(ValueTypeError):
			refs.assign("42", strict=True)

	def test_empty_set(self):
		with self.assertRaises(ValueError):
			ReferenceSet().assign(1)


if __name__ == '__main__':
	unittest.main()
