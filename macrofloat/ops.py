from __future__ import annotations

import operator
from typing import Callable, Optional

from . import core
from .core import BigFloat, Operand, as_bigfloat


def _binary_op(a: Operand, b: Operand, op: Callable[[BigFloat, BigFloat], BigFloat]) -> BigFloat:
	return op(as_bigfloat(a), as_bigfloat(b))


def add(a: Operand, b: Operand) -> BigFloat:
	return _binary_op(a, b, operator.add)


def subtract(a: Operand, b: Operand) -> BigFloat:
	return _binary_op(a, b, operator.sub)


def multiply(a: Operand, b: Operand) -> BigFloat:
	return _binary_op(a, b, operator.mul)


def divide(a: Operand, b: Operand) -> BigFloat:
	return _binary_op(a, b, operator.truediv)


def negate(a: Operand) -> BigFloat:
	return -as_bigfloat(a)


def compare(a: Operand, b: Operand) -> Optional[int]:
	"""-1, 0 or 1 like a three-way compare; None if either operand is NaN."""
	return core.compare(as_bigfloat(a), as_bigfloat(b))


def minimum(a: Operand, b: Operand) -> BigFloat:
	a, b = as_bigfloat(a), as_bigfloat(b)
	return a if a <= b else b


def maximum(a: Operand, b: Operand) -> BigFloat:
	a, b = as_bigfloat(a), as_bigfloat(b)
	return a if a >= b else b
