from __future__ import annotations

from typing import Iterable, List

import numpy as np

from .core import I64_MAX, I64_MIN, BigFloat

FIELDS_DTYPE = np.dtype([
	("mantissa", np.float64),
	("exponent", np.int64),
	("escalated", np.bool_),
])


def from_array(values: np.ndarray | Iterable[float]) -> List[BigFloat]:
	"""Convert a float array-like (any shape, read in C order) to BigFloats."""
	floats = np.asarray(values, dtype=np.float64)
	return [BigFloat.from_f64(v) for v in floats.ravel().tolist()]


def to_array(values: Iterable[BigFloat]) -> np.ndarray:
	"""float64 array of the values; magnitudes past the double range saturate."""
	return np.fromiter((v.to_f64() for v in values), dtype=np.float64)


def view_fields(values: Iterable[BigFloat]) -> np.ndarray:
	"""Return a structured array exposing mantissa/exponent per value.

	Escalated exponents do not fit int64; their rows carry escalated=True and
	an exponent clipped to the int64 bound on the same side.
	"""
	items = list(values)
	out = np.empty(len(items), dtype=FIELDS_DTYPE)
	for i, value in enumerate(items):
		if value.is_escalated:
			exponent = I64_MAX if value.exponent.mantissa > 0 else I64_MIN
		else:
			exponent = value.exponent
		out[i] = (value.mantissa, exponent, value.is_escalated)
	return out
