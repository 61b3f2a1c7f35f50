"""Odds notation detection.

Classifies one raw price (number or string) into an ``OddsFormat``:

1. ``"<int>/<int>"``           → fractional
2. ``"+150"`` / ``"-125"``     → american
3. anything else is parsed as a number, then:
   - ``n >= 1``                → decimal (see tie-break below)
   - ``0 < n < 1``             → hongkong
   - ``n < 0, |n| >= 100``     → american
   - ``n < 0, 1 < |n| < 100``  → indonesian
   - ``n < 0, |n| <= 1``       → malay
   - ``n == 0``, NaN, inf, garbage → MalformedOdds

Tie-break for unsigned integers
-------------------------------
``150`` may be a decimal long shot or a positive American price that lost its
``+`` sign. American prices are conventionally quoted in multiples of 5, so an
unsigned integral value ``>= policy.american_min`` that is divisible by
``policy.american_divisor`` reads as American; anything else stays decimal.
This keeps false positives on genuine decimal long shots (``101``, ``151``)
low. A string written with a decimal point (``"150.0"``) is explicitly
decimal and never re-read as American. Both thresholds live on
``SurebetPolicy`` so the rule can be tuned without touching this module.
"""

import math
import re
from typing import NamedTuple

from .errors import MalformedOdds
from .models import DEFAULT_POLICY, OddsFormat, SurebetPolicy

_FRACTIONAL_RE = re.compile(r"^(\d+)\s*/\s*(\d+)$")
_SIGNED_AMERICAN_RE = re.compile(r"^[+-]\d+$")
_UNSIGNED_INTEGER_RE = re.compile(r"^\d+$")


class DetectedOdds(NamedTuple):
    """Classified raw price with its numeric payload."""
    format: OddsFormat
    value: float                       # numeric payload (num/den ratio for fractional)
    fraction: tuple[int, int] | None = None


def parse_odds_value(raw: object) -> float:
    """
    Parse a raw price into a finite float.

    Raises MalformedOdds for booleans, unsupported types, non-numeric strings
    and non-finite numbers, so no NaN reaches later arithmetic.
    """
    if isinstance(raw, bool):
        raise MalformedOdds(raw, "boolean is not an odds value")

    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            raise MalformedOdds(raw, "number out of range") from None
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            raise MalformedOdds(raw, "empty value")
        try:
            value = float(text)
        except ValueError:
            raise MalformedOdds(raw) from None
    else:
        raise MalformedOdds(raw, f"unsupported type {type(raw).__name__}")

    if not math.isfinite(value):
        raise MalformedOdds(raw, "not a finite number")
    return value


def is_unsigned_american(
    value: float,
    policy: SurebetPolicy = DEFAULT_POLICY,
    *,
    explicit_decimal: bool = False,
) -> bool:
    """
    Tie-break for unsigned integers that could be decimal or American.

    True only for integral values >= policy.american_min that are divisible
    by policy.american_divisor, and never when the source text carried an
    explicit decimal point.
    """
    if explicit_decimal or value < policy.american_min:
        return False
    if not float(value).is_integer():
        return False
    return int(value) % policy.american_divisor == 0


def read_odds(raw: int | float | str, policy: SurebetPolicy = DEFAULT_POLICY) -> DetectedOdds:
    """Classify a raw price and return its notation with the numeric payload."""
    explicit_decimal = False

    if isinstance(raw, str):
        text = raw.strip()

        match = _FRACTIONAL_RE.match(text)
        if match:
            numerator, denominator = int(match.group(1)), int(match.group(2))
            if denominator == 0:
                raise MalformedOdds(raw, "fractional denominator is zero")
            return DetectedOdds(
                OddsFormat.FRACTIONAL,
                numerator / denominator,
                (numerator, denominator),
            )

        if _SIGNED_AMERICAN_RE.match(text):
            value = float(int(text))
            if value == 0:
                raise MalformedOdds(raw, "american odds cannot be zero")
            return DetectedOdds(OddsFormat.AMERICAN, value)

        explicit_decimal = not _UNSIGNED_INTEGER_RE.match(text)

    n = parse_odds_value(raw)

    if n >= 1:
        if is_unsigned_american(n, policy, explicit_decimal=explicit_decimal):
            return DetectedOdds(OddsFormat.AMERICAN, n)
        return DetectedOdds(OddsFormat.DECIMAL, n)

    if n > 0:
        return DetectedOdds(OddsFormat.HONGKONG, n)

    if n == 0:
        raise MalformedOdds(raw, "zero is not a valid price")

    magnitude = abs(n)
    if magnitude >= policy.american_min:
        return DetectedOdds(OddsFormat.AMERICAN, n)
    if magnitude > 1:
        return DetectedOdds(OddsFormat.INDONESIAN, n)
    return DetectedOdds(OddsFormat.MALAY, n)


def detect_odds_format(raw: int | float | str, policy: SurebetPolicy = DEFAULT_POLICY) -> OddsFormat:
    """Detect the notation used for one odds price."""
    return read_odds(raw, policy).format


def read_declared_odds(raw: int | float | str, odds_format: OddsFormat) -> DetectedOdds:
    """
    Read a raw price whose notation the source already declared.

    No detection or tie-break runs: a feed that promised decimal odds gets
    ``150`` read as decimal 150.0, never as American +150.
    """
    if odds_format is OddsFormat.FRACTIONAL:
        match = _FRACTIONAL_RE.match(raw.strip()) if isinstance(raw, str) else None
        if not match:
            raise MalformedOdds(raw, "not a fractional price")
        numerator, denominator = int(match.group(1)), int(match.group(2))
        if denominator == 0:
            raise MalformedOdds(raw, "fractional denominator is zero")
        return DetectedOdds(odds_format, numerator / denominator, (numerator, denominator))

    return DetectedOdds(odds_format, parse_odds_value(raw))
