"""Core arbitrage test.

All functions are pure and have no side effects.

Key Formulas:
- Implied Probability: P = 1 / decimal_odds
- Arbitrage Condition: sum(P) < 1
- Edge Percentage: sum(P) * 100
- Margin: 1 - sum(P)
"""

from typing import NamedTuple

from ..utils.odds import decimal_to_probability


class ArbitrageResult(NamedTuple):
    """Result of arbitrage detection."""
    is_arbitrage: bool
    implied_prob_sum: float
    edge_percentage: float
    margin: float  # How much below 1 (negative when there is no arb)


def calculate_implied_probability(decimal_odds: float) -> float:
    """
    Calculate implied probability from decimal odds.

    Formula: P = 1 / decimal_odds

    Examples:
        2.00 → 0.50 (50%)
        2.10 → 0.476 (47.6%)
    """
    if decimal_odds < 1.0:
        raise ValueError(f"Decimal odds must be >= 1.0, got {decimal_odds}")
    return decimal_to_probability(decimal_odds)


def implied_probability_sum(decimal_odds: list[float]) -> float:
    """Total implied probability of a market (the bookmaker 'book')."""
    return sum(calculate_implied_probability(odds) for odds in decimal_odds)


def detect_arbitrage(decimal_odds: list[float]) -> ArbitrageResult:
    """
    Detect if arbitrage exists for a set of mutually exclusive outcomes.

    Condition:
        1/O1 + 1/O2 (+ 1/O3) < 1

    Uses unrounded odds; any display rounding happens later.
    """
    if len(decimal_odds) < 2:
        raise ValueError("Need at least 2 outcomes to check arbitrage")

    prob_sum = implied_probability_sum(decimal_odds)

    return ArbitrageResult(
        is_arbitrage=prob_sum < 1.0,
        implied_prob_sum=prob_sum,
        edge_percentage=prob_sum * 100,
        margin=1.0 - prob_sum,
    )
