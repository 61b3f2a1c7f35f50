"""Raw odds → canonical decimal odds.

Detection picks the notation, the matching converter produces a decimal
price, and the plausibility guardrail rejects anything outside the policy
range. Values are never clamped.
"""

from .detection import DetectedOdds, read_declared_odds, read_odds
from .errors import ImplausibleOdds, MalformedOdds
from .models import DEFAULT_POLICY, NormalizedOdd, OddsFormat, SurebetPolicy
from ..utils.odds import (
    american_to_decimal,
    fractional_to_decimal,
    hongkong_to_decimal,
    indonesian_to_decimal,
    malay_to_decimal,
)


def _convert(detected: DetectedOdds, raw: object) -> float:
    fmt, value = detected.format, detected.value

    try:
        if fmt is OddsFormat.DECIMAL:
            return value
        if fmt is OddsFormat.FRACTIONAL:
            numerator, denominator = detected.fraction
            return fractional_to_decimal(numerator, denominator)
        if fmt is OddsFormat.AMERICAN:
            return american_to_decimal(value)
        if fmt is OddsFormat.HONGKONG:
            return hongkong_to_decimal(value)
        if fmt is OddsFormat.INDONESIAN:
            return indonesian_to_decimal(value)
        if fmt is OddsFormat.MALAY:
            return malay_to_decimal(value)
    except ValueError as e:
        raise MalformedOdds(raw, str(e)) from e

    raise MalformedOdds(raw, f"no converter for {fmt}")


def check_plausible(raw: object, decimal: float, policy: SurebetPolicy = DEFAULT_POLICY) -> float:
    """Return decimal unchanged if within the policy range, else raise ImplausibleOdds."""
    if decimal < policy.decimal_min or decimal > policy.decimal_max:
        raise ImplausibleOdds(raw, decimal, policy.decimal_min, policy.decimal_max)
    return decimal


def normalize_odd(
    raw: int | float | str,
    policy: SurebetPolicy = DEFAULT_POLICY,
    odds_format: OddsFormat | None = None,
) -> NormalizedOdd:
    """
    Normalize one raw price to decimal odds.

    When odds_format is given the price is read in that notation and
    detection is skipped.

    Raises:
        MalformedOdds: value is not a recognised notation
        ImplausibleOdds: derived decimal falls outside the policy range
    """
    if odds_format is None:
        detected = read_odds(raw, policy)
    else:
        detected = read_declared_odds(raw, odds_format)
    decimal = check_plausible(raw, _convert(detected, raw), policy)
    return NormalizedOdd(raw=raw, format=detected.format, decimal=decimal)


def to_decimal(
    raw: int | float | str,
    policy: SurebetPolicy = DEFAULT_POLICY,
    odds_format: OddsFormat | None = None,
) -> float:
    """Convert any supported odds notation to Decimal odds."""
    return normalize_odd(raw, policy, odds_format).decimal
