"""Odds conversion utilities.

Supports Decimal, Fractional, American, Hong Kong, Indonesian and Malay
notations, plus implied probability. Converters assume their input has
already been classified; zero-valued prices raise ValueError.
"""


def fractional_to_decimal(numerator: int, denominator: int) -> float:
    """
    Convert Fractional odds to Decimal odds.

    decimal = 1 + numerator / denominator

    Examples:
        4/5 → 1.80
        11/4 → 3.75
        evens (1/1) → 2.00
    """
    if denominator == 0:
        raise ValueError("Fractional odds denominator cannot be zero")
    return 1 + numerator / denominator


def american_to_decimal(american_odds: int | float) -> float:
    """
    Convert American odds to Decimal odds.

    American → Decimal:
    - Positive odds: decimal = 1 + odds / 100
    - Negative odds: decimal = 1 + 100 / abs(odds)

    Examples:
        +150 → 2.50
        -125 → 1.80
        +200 → 3.00
        -200 → 1.50
    """
    if american_odds == 0:
        raise ValueError("American odds cannot be zero")
    if american_odds > 0:
        return 1 + american_odds / 100
    else:
        return 1 + 100 / abs(american_odds)


def hongkong_to_decimal(hk_odds: float) -> float:
    """
    Convert Hong Kong odds to Decimal odds.

    Hong Kong quotes net winnings per unit, so decimal = hk + 1.

    Examples:
        0.80 → 1.80
        0.25 → 1.25
    """
    return hk_odds + 1


def indonesian_to_decimal(indo_odds: float) -> float:
    """
    Convert Indonesian odds to Decimal odds.

    - Positive odds: decimal = odds + 1
    - Negative odds: decimal = 1 + 1 / abs(odds)

    Examples:
        -1.25 → 1.80
        -2.00 → 1.50
    """
    if indo_odds == 0:
        raise ValueError("Indonesian odds cannot be zero")
    if indo_odds > 0:
        return indo_odds + 1
    return 1 + 1 / abs(indo_odds)


def malay_to_decimal(malay_odds: float) -> float:
    """
    Convert Malay odds to Decimal odds.

    Same shape as Indonesian, but quoted within [-1, 1].

    Examples:
        -0.80 → 2.25
        0.50 → 1.50
    """
    if malay_odds == 0:
        raise ValueError("Malay odds cannot be zero")
    if malay_odds > 0:
        return malay_odds + 1
    return 1 + 1 / abs(malay_odds)


def decimal_to_american(decimal_odds: float) -> int:
    """
    Convert Decimal odds to American odds.

    Decimal → American:
    - If decimal >= 2.0: american = (decimal - 1) * 100
    - If decimal < 2.0: american = -100 / (decimal - 1)

    Examples:
        2.50 → +150
        1.80 → -125
    """
    if decimal_odds >= 2.0:
        return int(round((decimal_odds - 1) * 100))
    else:
        return int(round(-100 / (decimal_odds - 1)))


def decimal_to_probability(decimal_odds: float) -> float:
    """
    Convert Decimal odds to implied probability.

    probability = 1 / decimal_odds

    Examples:
        2.00 → 0.50 (50%)
        1.80 → 0.556 (55.6%)
    """
    return 1 / decimal_odds


def format_american_odds(american_odds: int) -> str:
    """Format American odds with + or - prefix."""
    if american_odds > 0:
        return f"+{american_odds}"
    return str(american_odds)
