"""
Numeric-string classification, following the usual weak-typing grammar:

	optional whitespace, optional sign, digits with an optional fraction
	and exponent, optional whitespace.

A string with a numeric prefix and junk after it (like "45X") still has a
numeric reading, but it is not well-formed; whoever uses that reading owes
the user a notice. Integers too big for 64 bits read as floats.
"""
import re
from typing import NamedTuple, Union

INTEGER, FLOAT, NON_NUMERIC = "integer", "float", "non-numeric"

LONG_MIN, LONG_MAX = -2**63, 2**63 - 1

_WHITESPACE = " \t\n\r\v\f"
_PREFIX = re.compile(r"[ \t\n\r\v\f]*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_INTEGRAL = re.compile(r"[+-]?\d+")

class NumericString(NamedTuple):
	kind: str
	value: Union[int, float, None] = None
	well_formed: bool = True

	def is_numeric(self) -> bool: return self.kind != NON_NUMERIC

NOT_NUMERIC = NumericString(NON_NUMERIC, None, False)

def classify(text:str) -> NumericString:
	match = _PREFIX.match(text)
	if match is None: return NOT_NUMERIC
	well_formed = not text[match.end():].strip(_WHITESPACE)
	digits = match.group(1)
	if _INTEGRAL.fullmatch(digits):
		value = int(digits)
		if LONG_MIN <= value <= LONG_MAX:
			return NumericString(INTEGER, value, well_formed)
	return NumericString(FLOAT, float(digits), well_formed)
