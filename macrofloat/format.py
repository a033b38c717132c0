from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace
from typing import Dict, Optional

from .core import BigFloat, Exponent

logger = logging.getLogger(__name__)

_SPECIALS = {
	"inf": math.inf,
	"infinity": math.inf,
	"∞": math.inf,
	"nan": math.nan,
}

_NUMBER = re.compile(r"([+-]?)(\d*)(?:\.(\d*))?(?:[eE](.*))?", re.DOTALL)
_INTEGER = re.compile(r"[+-]?\d+")

# Longer integer exponents are parsed through BigFloat instead of int().
_EXACT_EXPONENT_DIGITS = 40


class ParseError(ValueError):
	"""Text that does not spell a number."""

	def __init__(self, text: str, reason: str, kind: str = "syntax"):
		super().__init__(f"{reason}: {text!r}")
		self.text = text
		self.reason = reason
		self.kind = kind


@dataclass(frozen=True)
class NotationFormat:
	"""Text rendering settings for BigFloat.

	- plain_min_exponent / plain_max_exponent: exponents in this inclusive
	  range print as plain decimals (defaults mirror float repr)
	- precision: significant mantissa digits, or None for the shortest text
	  that parses back to the same double
	  (a nested exponent is always written in full)
	- exponent_marker: "e" or "E"
	"""

	plain_min_exponent: int = -4
	plain_max_exponent: int = 15
	precision: Optional[int] = None
	exponent_marker: str = "e"

	def __post_init__(self):
		if self.plain_min_exponent > 0:
			raise ValueError("plain_min_exponent must be <= 0")
		if self.plain_max_exponent < 0:
			raise ValueError("plain_max_exponent must be >= 0")
		if self.precision is not None and not 1 <= self.precision <= 17:
			raise ValueError("precision must be between 1 and 17")
		if self.exponent_marker not in ("e", "E"):
			raise ValueError("exponent_marker must be 'e' or 'E'")

	def info(self) -> Dict[str, int | str | None]:
		return {
			"plain_min_exponent": self.plain_min_exponent,
			"plain_max_exponent": self.plain_max_exponent,
			"precision": self.precision,
			"exponent_marker": self.exponent_marker,
		}


DEFAULT_FORMAT = NotationFormat()


def _reject(source: str, reason: str) -> ParseError:
	logger.debug("rejected %r: %s", source, reason)
	return ParseError(source, reason)


def parse(text: str) -> BigFloat:
	"""Parse decimal, scientific or nested scientific notation.

	"1.23e4.56e78" is 1.23 times ten to the power 4.56e78; the exponent is
	parsed recursively and kept as a BigFloat when it leaves the int64 range.
	The special tokens inf, infinity, ∞ and nan are matched case-insensitively
	with an optional sign. Surrounding whitespace is ignored.
	"""
	token = text.strip()
	body = token[1:] if token[:1] in ("+", "-") else token
	special = _SPECIALS.get(body.lower())
	if special is not None:
		return BigFloat(-special if token.startswith("-") else special)
	return _parse_number(token, text)


def _parse_number(token: str, source: str) -> BigFloat:
	match = _NUMBER.fullmatch(token)
	if match is None:
		raise _reject(source, "malformed number")
	sign, whole, fraction, exponent_text = match.groups()
	fraction = fraction or ""
	if not whole and not fraction:
		raise _reject(source, "no digits")
	exponent = 0 if exponent_text is None else _parse_exponent(exponent_text, source)
	digits = whole + fraction
	significant = digits.lstrip("0")
	if not significant:
		return BigFloat.zero()
	shift = len(whole) - 1 - (len(digits) - len(significant))
	mantissa = float(f"{sign}{significant[0]}.{significant[1:] or '0'}")
	return BigFloat(mantissa, exponent + shift)


def _parse_exponent(text: str, source: str) -> Exponent:
	if not text:
		raise _reject(source, "empty exponent")
	if _INTEGER.fullmatch(text) and len(text) <= _EXACT_EXPONENT_DIGITS:
		return int(text)
	try:
		return _parse_number(text, source)
	except ParseError:
		raise _reject(source, f"malformed exponent {text!r}") from None


def _mantissa_text(mantissa: float, precision: Optional[int]) -> str:
	if precision is not None:
		return f"{mantissa:.{precision - 1}f}"
	text = repr(mantissa)
	if text.endswith(".0"):
		text = text[:-2]
	return text


def _plain(mantissa_text: str, exponent: int) -> str:
	sign = "-" if mantissa_text.startswith("-") else ""
	lead, _, tail = mantissa_text.lstrip("-").partition(".")
	digits = lead + tail
	point = exponent + 1
	if point <= 0:
		return f"{sign}0.{'0' * -point}{digits}"
	if point >= len(digits):
		return sign + digits + "0" * (point - len(digits))
	return f"{sign}{digits[:point]}.{digits[point:]}"


def format_value(value: BigFloat, fmt: NotationFormat = DEFAULT_FORMAT) -> str:
	"""Render value as text that parse() reads back.

	Escalated exponents are rendered with the same rules, which yields the
	nested "1.23e4.56e78" form.
	"""
	if value.is_nan():
		return "nan"
	if value.is_infinite():
		return "inf" if value.mantissa > 0 else "-inf"
	if value.is_zero():
		return "0"
	if fmt.precision is not None:
		# rounding may carry into the next power of ten
		value = BigFloat(round(value.mantissa, fmt.precision - 1), value.exponent)
	mantissa = _mantissa_text(value.mantissa, fmt.precision)
	exponent = value.exponent
	if isinstance(exponent, BigFloat):
		# precision rounds the outer mantissa only
		nested = format_value(exponent, replace(fmt, precision=None))
		return f"{mantissa}{fmt.exponent_marker}{nested}"
	if fmt.plain_min_exponent <= exponent <= fmt.plain_max_exponent:
		return _plain(mantissa, exponent)
	return f"{mantissa}{fmt.exponent_marker}{exponent}"
