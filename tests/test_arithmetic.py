import math

import pytest

from macrofloat import BigFloat, ops
from macrofloat.core import I64_MAX

FINITE = [
	BigFloat(1.5, 2),
	BigFloat(-2.25, 7),
	BigFloat(9.75, -3),
	BigFloat(3.0, 400),
	BigFloat(-1.0, -400),
	BigFloat(4.4, I64_MAX),
	BigFloat(2.0, BigFloat(1.0, 30)),
]


class TestAddition:
	def test_same_exponent(self):
		result = BigFloat(1.5, 2) + BigFloat(2.5, 2)
		assert result == BigFloat(4.0, 2)

	def test_within_precision_is_retained(self):
		assert BigFloat(1.0, 2) + BigFloat(1.0, 0) == BigFloat(1.01, 2)
		assert (BigFloat(1.0, 15) + BigFloat(1.0, 0)).mantissa > 1.0

	def test_below_precision_is_discarded(self):
		assert BigFloat(1.0, 100) + BigFloat(1.0, 0) == BigFloat(1.0, 100)
		assert BigFloat(1.0, 18) + BigFloat(9.9, 0) == BigFloat(1.0, 18)

	def test_escalated_dominates(self):
		big = BigFloat(2.0, BigFloat(1.0, 30))
		assert big + BigFloat(9.0, I64_MAX) == big
		assert BigFloat(9.0, I64_MAX) - big == -big

	def test_carry_into_next_power(self):
		assert BigFloat(9.0, 5) + BigFloat(2.0, 5) == BigFloat(1.1, 6)

	def test_cancellation(self):
		result = BigFloat(1.01, 2) - BigFloat(1.0, 2)
		assert result.exponent == 0
		assert result.mantissa == pytest.approx(1.0, rel=1e-12)
		assert (BigFloat(3.0, 50) - BigFloat(3.0, 50)).is_zero()

	def test_mixed_signs(self):
		assert BigFloat(-3.0, 2) + BigFloat(1.0, 2) == BigFloat(-2.0, 2)

	def test_identity(self):
		for a in FINITE:
			assert a + BigFloat.zero() == a
			assert BigFloat.zero() + a == a

	def test_commutative(self):
		for a in FINITE:
			for b in FINITE:
				left, right = a + b, b + a
				assert left.mantissa == right.mantissa
				assert left == right

	def test_tiny_values_keep_their_scale(self):
		result = BigFloat(1.0, -400) + BigFloat(5.0, -401)
		assert result == BigFloat(1.5, -400)


class TestSpecialValues:
	def test_nan_propagates(self):
		nan = BigFloat(math.nan)
		assert (nan + BigFloat(1.0)).is_nan()
		assert (BigFloat(1.0) * nan).is_nan()
		assert (nan / BigFloat(2.0)).is_nan()

	def test_infinity_arithmetic(self):
		inf = BigFloat(math.inf)
		assert (inf - inf).is_nan()
		assert (inf + -inf).is_nan()
		assert inf + inf == inf
		assert inf + BigFloat(5.0, 10 ** 30) == inf
		assert inf * BigFloat(-2.0) == BigFloat(-math.inf)
		assert (inf * BigFloat.zero()).is_nan()
		assert BigFloat(5.0) / inf == BigFloat.zero()
		assert (inf / inf).is_nan()

	def test_division_by_zero(self):
		zero = BigFloat.zero()
		assert BigFloat(1.0) / zero == BigFloat(math.inf)
		assert BigFloat(-2.0, 300) / zero == BigFloat(-math.inf)
		assert (zero / zero).is_nan()
		assert zero / BigFloat(5.0) == zero


class TestMultiplication:
	def test_basic(self):
		assert BigFloat(2.0, 2) * BigFloat(3.0, 1) == BigFloat(6.0, 3)
		assert BigFloat(5.0, 0) * BigFloat(4.0, 0) == BigFloat(2.0, 1)
		assert BigFloat(1.0, 100) * BigFloat(1.0, 200) == BigFloat(1.0, 300)

	def test_beyond_double_range(self):
		assert BigFloat(1.0, 300) * BigFloat(1.0, 300) == BigFloat(1.0, 600)

	def test_identity_and_annihilator(self):
		for a in FINITE:
			assert a * BigFloat.new(1.0, 0) == a
			assert a * BigFloat.zero() == BigFloat.zero()

	def test_commutative(self):
		for a in FINITE:
			for b in FINITE:
				left, right = a * b, b * a
				assert left.mantissa == right.mantissa
				assert left == right

	def test_exponent_overflow_escalates(self):
		result = BigFloat(2.0, I64_MAX) * BigFloat(3.0, 10)
		assert result.is_escalated
		assert result.mantissa == 6.0


class TestDivision:
	def test_basic(self):
		assert BigFloat(6.0, 3) / BigFloat(2.0, 1) == BigFloat(3.0, 2)
		assert BigFloat(1.0, 0) / BigFloat(4.0, 0) == BigFloat(2.5, -1)

	def test_negative_exponent_results(self):
		assert BigFloat(1.0, 5) / BigFloat(1.0, 500) == BigFloat(1.0, -495)

	def test_escalated_divisor(self):
		result = BigFloat(1.0) / BigFloat(1.0, 10 ** 30)
		assert result.is_escalated
		assert result.exponent == BigFloat(-1.0, 30)


class TestNativeOperands:
	def test_reflected_operators(self):
		assert BigFloat(1.5) + 2 == BigFloat(3.5)
		assert 2 + BigFloat(1.5) == BigFloat(3.5)
		assert 10 - BigFloat(4.0) == BigFloat(6.0)
		assert 1 / BigFloat(4.0) == 0.25
		assert 3 * BigFloat(2.0, 400) == BigFloat(6.0, 400)

	def test_power_operator(self):
		# 1.6 * 1.6 rounds to 2.5600000000000005
		assert (BigFloat(2.0) ** 10).to_f64() == pytest.approx(1024.0, rel=1e-14)
		assert 2 ** BigFloat(3.0) == 8
		assert (BigFloat(4.0) ** 0.5).to_f64() == pytest.approx(2.0, rel=1e-14)

	def test_unsupported_operand(self):
		with pytest.raises(TypeError):
			BigFloat(1.0) + "1"

	def test_augmented_assignment_rebinds(self):
		total = BigFloat(1.0, 2)
		before = total
		total += BigFloat(1.0, 0)
		total *= 2
		assert before == BigFloat(1.0, 2)
		assert total == BigFloat(2.02, 2)


class TestComparison:
	@pytest.mark.parametrize(
		"smaller, larger",
		[
			(BigFloat(2.0, 1), BigFloat(1.0, 2)),
			(BigFloat(1.5, 2), BigFloat(2.5, 2)),
			(BigFloat(-1.0, 2), BigFloat(1.0, 1)),
			(BigFloat(-1.0, 2), BigFloat(-2.0, 1)),
			(BigFloat(-1.0), BigFloat.zero()),
			(BigFloat.zero(), BigFloat(1.0, -400)),
			(BigFloat(9.9, I64_MAX), BigFloat(1.0, 10 ** 20)),
			(BigFloat(1.0, -(10 ** 20)), BigFloat(1.0, -5)),
			(BigFloat(-math.inf), BigFloat(-9.0, 10 ** 20)),
			(BigFloat(9.0, 10 ** 20), BigFloat(math.inf)),
		],
	)
	def test_ordering(self, smaller, larger):
		assert smaller < larger
		assert smaller <= larger
		assert larger > smaller
		assert larger >= smaller
		assert smaller != larger
		assert ops.compare(smaller, larger) == -1
		assert ops.compare(larger, smaller) == 1

	def test_nan_is_unordered(self):
		nan = BigFloat(math.nan)
		assert nan != nan
		assert not nan == nan
		assert not nan < BigFloat(1.0)
		assert not nan >= BigFloat(1.0)
		assert ops.compare(nan, nan) is None

	def test_equality_with_native_numbers(self):
		assert BigFloat(1.5, 2) == 150
		assert BigFloat(2.5, -1) == 0.25
		assert BigFloat(1.0, 400) > 1e308

	def test_sorting(self):
		values = [BigFloat(3.0, 5), BigFloat(-1.0, 9), BigFloat.zero(), BigFloat(1.0, 10 ** 20), BigFloat(2.0, -3)]
		assert sorted(values) == [values[1], values[2], values[4], values[0], values[3]]


class TestFunctionalOps:
	def test_binary_ops_coerce_native_numbers(self):
		assert ops.add(1, 2.5) == BigFloat(3.5)
		assert ops.subtract(BigFloat(1.0, 3), 1) == 999
		assert ops.multiply(4, BigFloat(2.5, 99)) == BigFloat(1.0, 100)
		assert ops.divide(1, 8) == 0.125
		assert ops.negate(5) == BigFloat(-5.0)

	def test_minimum_maximum(self):
		a, b = BigFloat(1.0, 10), BigFloat(2.0, 9)
		assert ops.minimum(a, b) is b
		assert ops.maximum(a, b) is a
		nan = BigFloat(math.nan)
		assert ops.minimum(nan, a) is a
		assert ops.minimum(a, nan).is_nan()
