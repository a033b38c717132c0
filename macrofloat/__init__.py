import logging

from .arrays import from_array, to_array, view_fields
from .core import ABSORPTION_DIGITS, BigFloat, as_bigfloat
from .format import DEFAULT_FORMAT, NotationFormat, ParseError, format_value, parse
from .ops import add, compare, divide, maximum, minimum, multiply, negate, subtract
from .transcendental import exp, ln, log10, pow, powi, sqrt

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
	"BigFloat",
	"ABSORPTION_DIGITS",
	"as_bigfloat",
	"NotationFormat",
	"DEFAULT_FORMAT",
	"ParseError",
	"parse",
	"format_value",
	"add",
	"subtract",
	"multiply",
	"divide",
	"negate",
	"compare",
	"minimum",
	"maximum",
	"sqrt",
	"ln",
	"log10",
	"exp",
	"pow",
	"powi",
	"from_array",
	"to_array",
	"view_fields",
]
