from __future__ import annotations

import logging
import math
import numbers
import operator
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

logger = logging.getLogger(__name__)

I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1

# Exponent gap past which the smaller addend cannot move a double mantissa.
ABSORPTION_DIGITS = 17

Exponent = Union[int, "BigFloat"]
Operand = Union["BigFloat", int, float]


def _fits_i64(value: int) -> bool:
	return I64_MIN <= value <= I64_MAX


def _decompose(value: float) -> tuple[float, int]:
	"""Split a finite non-zero double into a decimal mantissa and power of ten.

	Uses the shortest digit string that round-trips, so 0.15 splits into
	(1.5, -1) rather than the binary neighbour 1.4999999999999998.
	"""
	digits, _, power = np.format_float_scientific(value).partition("e")
	mantissa = float(digits)
	shift = int(power)
	if abs(mantissa) >= 10.0:
		mantissa /= 10.0
		shift += 1
	return mantissa, shift


def _exponent_from_int(value: int) -> Exponent:
	if _fits_i64(value):
		return value
	logger.debug("exponent %d escalated past the int64 range", value)
	return BigFloat.from_int(value)


def _demote(value: BigFloat) -> Exponent:
	native = value.to_f64()
	if I64_MIN <= native <= I64_MAX:
		return int(native)
	return value


def _exp_add(a: Exponent, b: Exponent) -> Exponent:
	if isinstance(a, int) and isinstance(b, int):
		return _exponent_from_int(a + b)
	return _demote(as_bigfloat(a) + as_bigfloat(b))


def _exp_neg(a: Exponent) -> Exponent:
	if isinstance(a, int):
		return _exponent_from_int(-a)
	return -a


def _exp_sub(a: Exponent, b: Exponent) -> Exponent:
	return _exp_add(a, _exp_neg(b))


def _exp_cmp(a: Exponent, b: Exponent) -> int:
	if isinstance(a, int) and isinstance(b, int):
		return (a > b) - (a < b)
	return compare(as_bigfloat(a), as_bigfloat(b))


def _settle_exponent(mantissa: float, exponent: BigFloat) -> tuple[float, Optional[Exponent]]:
	"""Demote a boxed exponent that fits the native range.

	A fractional part of a demoted exponent is folded into the mantissa. The
	returned exponent is None when the exponent itself is NaN or infinite and
	the mantissa already holds the final special value.
	"""
	if exponent.is_nan():
		return math.nan, None
	if exponent.is_infinite():
		if exponent.mantissa > 0:
			return math.copysign(math.inf, mantissa), None
		return 0.0, None
	native = exponent.to_f64()
	if I64_MIN <= native <= I64_MAX:
		whole = math.floor(native)
		if native != whole:
			mantissa *= 10.0 ** (native - whole)
		return mantissa, whole
	return mantissa, exponent


def _normalize(mantissa: float, exponent: Exponent) -> tuple[float, Exponent]:
	if math.isnan(mantissa):
		return math.nan, 0
	if mantissa == 0.0:
		return 0.0, 0
	if math.isinf(mantissa):
		return mantissa, 0
	if isinstance(exponent, BigFloat):
		mantissa, settled = _settle_exponent(mantissa, exponent)
		if settled is None:
			return _normalize(mantissa, 0)
		exponent = settled
	else:
		exponent = _exponent_from_int(operator.index(exponent))
	if not 1.0 <= abs(mantissa) < 10.0:
		mantissa, shift = _decompose(mantissa)
		exponent = _exp_add(exponent, shift)
	return mantissa, exponent


@dataclass(frozen=True, eq=False)
class BigFloat:
	"""Decimal floating-point value with an unbounded exponent.

	The value is ``mantissa * 10 ** exponent``.

	- mantissa: double with 1 <= |mantissa| < 10; its sign is the sign of the value
	- exponent: int in the int64 range, or a BigFloat once it leaves that range

	Zero is mantissa 0.0 with exponent 0. NaN and the two infinities keep the
	special double in the mantissa and exponent 0. Every instance is normalized
	on construction, so arithmetic results never expose a denormalized state.
	Augmented assignment rebinds the name to a new instance.
	"""

	mantissa: float = 0.0
	exponent: Exponent = 0

	def __post_init__(self):
		mantissa, exponent = _normalize(float(self.mantissa), self.exponent)
		object.__setattr__(self, "mantissa", mantissa)
		object.__setattr__(self, "exponent", exponent)

	@classmethod
	def new(cls, mantissa: float, exponent: Exponent = 0) -> BigFloat:
		return cls(mantissa, exponent)

	@classmethod
	def zero(cls) -> BigFloat:
		return cls(0.0, 0)

	@classmethod
	def from_f64(cls, value: float) -> BigFloat:
		return cls(float(value), 0)

	@classmethod
	def from_int(cls, value: int) -> BigFloat:
		magnitude = abs(value)
		if magnitude.bit_length() <= 1000:
			return cls.from_f64(float(value))
		# keep ~18 leading digits; the rest sits below double precision
		shift = int(math.log10(magnitude)) - 17
		head = magnitude // 10 ** shift
		return cls(-float(head) if value < 0 else float(head), shift)

	@classmethod
	def parse(cls, text: str) -> BigFloat:
		from .format import parse

		return parse(text)

	@property
	def is_escalated(self) -> bool:
		return isinstance(self.exponent, BigFloat)

	def is_zero(self) -> bool:
		return self.mantissa == 0.0

	def is_nan(self) -> bool:
		return math.isnan(self.mantissa)

	def is_infinite(self) -> bool:
		return math.isinf(self.mantissa)

	def is_finite(self) -> bool:
		return math.isfinite(self.mantissa)

	def is_sign_positive(self) -> bool:
		return math.copysign(1.0, self.mantissa) > 0

	def is_sign_negative(self) -> bool:
		return math.copysign(1.0, self.mantissa) < 0

	def signum(self) -> BigFloat:
		if self.is_nan() or self.is_zero():
			return self
		return BigFloat(math.copysign(1.0, self.mantissa))

	def to_f64(self) -> float:
		"""Nearest double; ±inf past the double range, ±0.0 below it."""
		if self.is_zero() or not self.is_finite():
			return self.mantissa
		if isinstance(self.exponent, BigFloat):
			magnitude = math.inf if self.exponent.mantissa > 0 else 0.0
			return math.copysign(magnitude, self.mantissa)
		# the decimal literal parse is correctly rounded and saturates
		return float(f"{self.mantissa!r}e{self.exponent}")

	def try_to_f64(self) -> Optional[float]:
		native = self.to_f64()
		if math.isinf(native) and self.is_finite():
			return None
		return native

	def sqrt(self) -> BigFloat:
		from .transcendental import sqrt

		return sqrt(self)

	def ln(self) -> BigFloat:
		from .transcendental import ln

		return ln(self)

	def log10(self) -> BigFloat:
		from .transcendental import log10

		return log10(self)

	def exp(self) -> BigFloat:
		from .transcendental import exp

		return exp(self)

	def pow(self, exponent: Operand) -> BigFloat:
		from .transcendental import pow

		return pow(self, exponent)

	def powi(self, n: int) -> BigFloat:
		from .transcendental import powi

		return powi(self, n)

	def __str__(self) -> str:
		from .format import format_value

		return format_value(self)

	def __float__(self) -> float:
		return self.to_f64()

	def __int__(self) -> int:
		return int(self.to_f64())

	def __bool__(self) -> bool:
		return not self.is_zero()

	def __hash__(self) -> int:
		native = self.try_to_f64()
		if native is not None and BigFloat.from_f64(native) == self:
			return hash(native)
		return hash((self.mantissa, self.exponent))

	def __neg__(self) -> BigFloat:
		return BigFloat(-self.mantissa, self.exponent)

	def __pos__(self) -> BigFloat:
		return self

	def __abs__(self) -> BigFloat:
		return BigFloat(abs(self.mantissa), self.exponent)

	def __add__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return _add(self, other)

	def __radd__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return _add(other, self)

	def __sub__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return _add(self, -other)

	def __rsub__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return _add(other, -self)

	def __mul__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return _mul(self, other)

	def __rmul__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return _mul(other, self)

	def __truediv__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return _div(self, other)

	def __rtruediv__(self, other):
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return _div(other, self)

	def __pow__(self, other):
		from .transcendental import pow, powi

		if isinstance(other, numbers.Integral):
			return powi(self, int(other))
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return pow(self, other)

	def __rpow__(self, other):
		from .transcendental import pow

		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return pow(other, self)

	def __eq__(self, other):
		if isinstance(other, numbers.Integral):
			return _equals_int(self, int(other))
		other = _coerce(other)
		if other is NotImplemented:
			return NotImplemented
		return compare(self, other) == 0

	def __ne__(self, other):
		result = self.__eq__(other)
		if result is NotImplemented:
			return NotImplemented
		return not result

	def __lt__(self, other):
		return _ordered(self, other, lambda order: order < 0)

	def __le__(self, other):
		return _ordered(self, other, lambda order: order <= 0)

	def __gt__(self, other):
		return _ordered(self, other, lambda order: order > 0)

	def __ge__(self, other):
		return _ordered(self, other, lambda order: order >= 0)


def as_bigfloat(value: Operand) -> BigFloat:
	"""Convert a BigFloat, int or real number to a BigFloat."""
	coerced = _coerce(value)
	if coerced is NotImplemented:
		raise TypeError(f"cannot convert {type(value).__name__} to BigFloat")
	return coerced


def _coerce(value):
	if isinstance(value, BigFloat):
		return value
	if isinstance(value, numbers.Integral):
		return BigFloat.from_int(int(value))
	if isinstance(value, numbers.Real):
		return BigFloat.from_f64(float(value))
	return NotImplemented


def _equals_int(a: BigFloat, value: int) -> bool:
	"""Equal only when a is exactly the double that equals value.

	Matches float == int, so equal values share a hash.
	"""
	native = a.try_to_f64()
	return native is not None and native == value and BigFloat.from_f64(native) == a


def _ordered(a: BigFloat, b, predicate) -> bool:
	b = _coerce(b)
	if b is NotImplemented:
		return NotImplemented
	order = compare(a, b)
	return order is not None and predicate(order)


def _cmp_floats(a: float, b: float) -> int:
	return (a > b) - (a < b)


def compare(a: BigFloat, b: BigFloat) -> Optional[int]:
	"""Three-way compare; None when either side is NaN."""
	if a.is_nan() or b.is_nan():
		return None
	if not (a.is_finite() and b.is_finite()) or a.is_zero() or b.is_zero():
		return _cmp_floats(a.mantissa, b.mantissa)
	if (a.mantissa > 0) != (b.mantissa > 0):
		return 1 if a.mantissa > 0 else -1
	order = _exp_cmp(a.exponent, b.exponent)
	if order == 0:
		return _cmp_floats(a.mantissa, b.mantissa)
	return order if a.mantissa > 0 else -order


def _add(a: BigFloat, b: BigFloat) -> BigFloat:
	if not (a.is_finite() and b.is_finite()):
		return BigFloat(a.mantissa + b.mantissa)
	if a.is_zero():
		return b
	if b.is_zero():
		return a
	if _exp_cmp(a.exponent, b.exponent) < 0:
		a, b = b, a
	delta = _exp_sub(a.exponent, b.exponent)
	if isinstance(delta, BigFloat) or delta > ABSORPTION_DIGITS:
		return a
	return BigFloat(a.mantissa + b.mantissa / 10.0 ** delta, a.exponent)


def _mul(a: BigFloat, b: BigFloat) -> BigFloat:
	if not (a.is_finite() and b.is_finite()) or a.is_zero() or b.is_zero():
		return BigFloat(a.mantissa * b.mantissa)
	return BigFloat(a.mantissa * b.mantissa, _exp_add(a.exponent, b.exponent))


def _div(a: BigFloat, b: BigFloat) -> BigFloat:
	if a.is_nan() or b.is_nan():
		return BigFloat(math.nan)
	if b.is_zero():
		if a.is_zero():
			return BigFloat(math.nan)
		return BigFloat(math.copysign(math.inf, a.mantissa))
	if not (a.is_finite() and b.is_finite()) or a.is_zero():
		return BigFloat(a.mantissa / b.mantissa)
	return BigFloat(a.mantissa / b.mantissa, _exp_sub(a.exponent, b.exponent))
