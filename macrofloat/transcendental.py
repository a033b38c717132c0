from __future__ import annotations

import math

from .core import BigFloat, Operand, as_bigfloat, compare

LN10 = math.log(10.0)

# Beyond this |x| math.exp overflows or underflows.
EXP_NATIVE_LIMIT = 700.0

# Largest integral exponent raised by repeated squaring in pow().
POWI_LIMIT = 1 << 53

_ONE = BigFloat(1.0)
_TWO = BigFloat(2.0)
_LN10 = BigFloat(LN10)
_NAN = BigFloat(math.nan)


def _exponent_value(x: BigFloat) -> BigFloat:
	return as_bigfloat(x.exponent)


def _is_integral(x: BigFloat) -> bool:
	if x.is_escalated:
		return x.exponent.mantissa > 0
	if x.exponent >= 16:
		return True
	return x.exponent >= 0 and x.to_f64().is_integer()


def sqrt(x: Operand) -> BigFloat:
	x = as_bigfloat(x)
	if x.is_nan() or x.mantissa < 0:
		return _NAN
	if x.is_zero() or x.is_infinite():
		return x
	mantissa, exponent = x.mantissa, x.exponent
	if x.is_escalated:
		return BigFloat(math.sqrt(mantissa), exponent / _TWO)
	if exponent % 2:
		mantissa *= 10.0
		exponent -= 1
	return BigFloat(math.sqrt(mantissa), exponent // 2)


def ln(x: Operand) -> BigFloat:
	"""Natural logarithm: ln(m) + exponent * ln(10)."""
	x = as_bigfloat(x)
	if x.is_nan() or x.mantissa < 0:
		return _NAN
	if x.is_zero():
		return BigFloat(-math.inf)
	if x.is_infinite():
		return x
	return BigFloat(math.log(x.mantissa)) + _exponent_value(x) * _LN10


def log10(x: Operand) -> BigFloat:
	x = as_bigfloat(x)
	if x.is_nan() or x.mantissa < 0:
		return _NAN
	if x.is_zero():
		return BigFloat(-math.inf)
	if x.is_infinite():
		return x
	return BigFloat(math.log10(x.mantissa)) + _exponent_value(x)


def exp(x: Operand) -> BigFloat:
	"""e ** x.

	Outside the native range the result is built as 10 ** (x / ln 10); the
	constructor folds the fractional part of that exponent into the mantissa
	and escalates the integral part when it leaves the int64 range.
	"""
	x = as_bigfloat(x)
	if x.is_nan():
		return x
	if x.is_infinite():
		return x if x.mantissa > 0 else BigFloat.zero()
	native = x.to_f64()
	if abs(native) < EXP_NATIVE_LIMIT:
		return BigFloat(math.exp(native))
	return BigFloat(1.0, x / _LN10)


def powi(base: Operand, n: int) -> BigFloat:
	"""base ** n by repeated squaring."""
	base = as_bigfloat(base)
	if n < 0:
		return _ONE / powi(base, -n)
	result = _ONE
	while n:
		if n & 1:
			result = result * base
		n >>= 1
		if n:
			base = base * base
	return result


def pow(base: Operand, exponent: Operand) -> BigFloat:
	"""base ** exponent via exp(exponent * ln(base)).

	Integral exponents up to POWI_LIMIT go through powi, so negative bases keep
	the sign rule of integer powers and small powers stay exact.
	"""
	base = as_bigfloat(base)
	exponent = as_bigfloat(exponent)
	if exponent.is_zero():
		return _ONE
	if base.is_nan() or exponent.is_nan():
		return _NAN
	if exponent.is_finite() and _is_integral(exponent):
		native = exponent.to_f64()
		if abs(native) <= POWI_LIMIT:
			return powi(base, int(native))
	if exponent.is_infinite():
		# decided by |base| against 1, never by the saturated double
		grows = compare(abs(base), _ONE)
		if grows == 0:
			return _ONE
		return BigFloat(math.inf) if (grows > 0) == (exponent.mantissa > 0) else BigFloat.zero()
	if base.is_infinite():
		return BigFloat(math.pow(base.mantissa, exponent.to_f64()))
	if base.is_zero():
		return BigFloat.zero() if exponent.mantissa > 0 else BigFloat(math.inf)
	if base.mantissa < 0:
		if not _is_integral(exponent):
			return _NAN
		# integral doubles past 2**53 are all even
		base = -base
	return exp(exponent * ln(base))
