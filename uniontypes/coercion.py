"""
Fitting run-time values to declared union types.

Values are plain Python values standing in for PHP ones:

	None -> null, bool, int, float, str -> string,
	list / tuple / dict -> array, PhpObject -> an instance

In strict mode a value must already fit some member (an int may still widen
to float). In weak mode, a value that does not fit is converted to the first
of int, float, string, bool that the union offers and that will take it.
A numeric string facing both int and float goes by what the string looks like.
"""
import math
from typing import NamedTuple, Optional, Any, Callable

from .algebra import Simple, Pseudo, NullLiteral, members_of, render
from .errors import ValueTypeError
from .numeric import classify, NumericString, INTEGER, FLOAT, LONG_MIN, LONG_MAX
from .subtyping import SubtypeEngine

NON_WELL_FORMED = "A non well formed numeric value encountered"

class PhpObject(NamedTuple):
	""" Stand-in for an instance; string_form models a __toString method. """
	class_name: str
	string_form: Optional[str] = None

class CoercedValue(NamedTuple):
	value: Any
	type_name: str
	notices: tuple[str, ...] = ()

def type_name_of(value) -> str:
	if value is None: return "null"
	if isinstance(value, bool): return "bool"
	if isinstance(value, int): return "int"
	if isinstance(value, float): return "float"
	if isinstance(value, str): return "string"
	if isinstance(value, PhpObject): return "object"
	if isinstance(value, (list, tuple, dict)): return "array"
	raise ValueError("Not a PHP value: %r" % (value,))

def describe(value) -> str:
	kind = type_name_of(value)
	return value.class_name if kind == "object" else kind

def php_float_to_string(value:float, precision:int=14) -> str:
	""" What PHP's (string) cast makes of a float at the default precision. """
	if math.isnan(value): return "NAN"
	if math.isinf(value): return "INF" if value > 0 else "-INF"
	sign = "-" if math.copysign(1.0, value) < 0 else ""
	if value == 0: return sign + "0"
	mantissa, exponent = ("%.*e" % (precision - 1, abs(value))).split("e")
	digits = mantissa.replace(".", "").rstrip("0")
	point = int(exponent) + 1   # value is 0.digits * 10**point
	if point < -3 or point > precision:
		power = point - 1
		return "%s%s.%sE%s%d" % (sign, digits[0], digits[1:] or "0", "-" if power < 0 else "+", abs(power))
	if point <= 0:
		return sign + "0." + "0" * -point + digits
	if len(digits) <= point:
		return sign + digits + "0" * (point - len(digits))
	return sign + digits[:point] + "." + digits[point:]

def _fits_long(f:float) -> bool:
	return math.isfinite(f) and LONG_MIN <= f < LONG_MAX + 1

class CoercionResolver:
	def __init__(self, engine:SubtypeEngine=None, classify:Callable[[str], NumericString]=classify):
		self.engine = engine or SubtypeEngine()
		self._classify = classify
		self._convert = {
			"int": self._to_int,
			"float": self._to_float,
			"string": self._to_string,
			"bool": self._to_bool,
		}

	def fits(self, value, member) -> bool:
		""" Does the value belong to this one member without any conversion? """
		if isinstance(member, NullLiteral): return value is None
		if isinstance(member, Pseudo): return value is False
		assert isinstance(member, Simple), member
		kind, key = type_name_of(value), member.key()
		if kind == "object":
			oracle = self.engine.oracle
			if key == "object": return True
			if key == "iterable": return oracle.is_class_subtype(value.class_name, "Traversable")
			if key == "callable": return oracle.is_class_subtype(value.class_name, "Closure")
			return member.is_class_name() and oracle.is_class_subtype(value.class_name, member.name)
		if kind == "array": return key in ("array", "iterable")
		return key == kind

	def accepts(self, value, target) -> bool:
		return any(self.fits(value, m) for m in members_of(target))

	def coerce(self, value, target, strict:bool=False) -> CoercedValue:
		members = members_of(target)
		kind = type_name_of(value)
		if any(self.fits(value, m) for m in members):
			return CoercedValue(value, kind)
		offered = [m.key() for m in members if isinstance(m, Simple)]
		if strict:
			if kind == "int" and "float" in offered:
				return CoercedValue(float(value), "float")
			raise self._refuse(value, target)
		if kind == "string" and "int" in offered and "float" in offered:
			if self._classify(value).kind == FLOAT: offered.remove("int")
		for candidate in ("int", "float", "string", "bool"):
			if candidate in offered:
				result = self._convert[candidate](value)
				if result is not None: return result
		raise self._refuse(value, target)

	@staticmethod
	def _refuse(value, target) -> ValueTypeError:
		return ValueTypeError("Value of type %s is not compatible with type %s" % (describe(value), render(target)))

	def _numeric(self, text:str, want:str) -> Optional[CoercedValue]:
		reading = self._classify(text)
		if not reading.is_numeric(): return None
		notices = () if reading.well_formed else (NON_WELL_FORMED,)
		if want == "float": return CoercedValue(float(reading.value), "float", notices)
		if reading.kind == INTEGER: return CoercedValue(reading.value, "int", notices)
		if _fits_long(reading.value): return CoercedValue(int(reading.value), "int", notices)

	def _to_int(self, value) -> Optional[CoercedValue]:
		if isinstance(value, bool): return CoercedValue(int(value), "int")
		if isinstance(value, int): return CoercedValue(value, "int")
		if isinstance(value, float):
			if _fits_long(value): return CoercedValue(int(value), "int")
			return None
		if isinstance(value, str): return self._numeric(value, "int")

	def _to_float(self, value) -> Optional[CoercedValue]:
		if isinstance(value, (bool, int, float)): return CoercedValue(float(value), "float")
		if isinstance(value, str): return self._numeric(value, "float")

	@staticmethod
	def _to_string(value) -> Optional[CoercedValue]:
		if isinstance(value, bool): return CoercedValue("1" if value else "", "string")
		if isinstance(value, int): return CoercedValue(str(value), "string")
		if isinstance(value, float): return CoercedValue(php_float_to_string(value), "string")
		if isinstance(value, str): return CoercedValue(value, "string")
		if isinstance(value, PhpObject) and value.string_form is not None:
			return CoercedValue(value.string_form, "string")

	@staticmethod
	def _to_bool(value) -> Optional[CoercedValue]:
		if isinstance(value, (bool, int, float)): return CoercedValue(bool(value), "bool")
		if isinstance(value, str): return CoercedValue(value not in ("", "0"), "bool")

def coerce(value, target, engine:SubtypeEngine=None, strict:bool=False, classify=classify) -> CoercedValue:
	return CoercionResolver(engine, classify).coerce(value, target, strict)
