"""Stake sizing calculations for arbitrage opportunities.

Key Formulas:
    payout  = C / sum(1 / O_i)
    stake_i = payout / O_i

    Every leg returns exactly `payout` if it wins, so
    Guaranteed Profit = payout - C
"""

from typing import NamedTuple

from .math import implied_probability_sum


class StakeSizing(NamedTuple):
    """Result of stake sizing calculation (unrounded)."""
    stakes: list[float]          # Stake for each outcome
    total_stake: float           # Total capital split across legs
    guaranteed_payout: float     # Payout regardless of outcome
    guaranteed_profit: float     # payout - total_stake
    profit_ratio: float          # profit / total_stake


def calculate_stakes(decimal_odds: list[float], total_capital: float) -> StakeSizing:
    """
    Split capital so that every outcome pays out the same amount.

    For N outcomes:
        payout  = C / (1/O1 + ... + 1/ON)
        stake_i = payout / O_i

    Stakes sum to C (before any display rounding) because
    sum(payout / O_i) = payout * sum(1 / O_i) = C.

    Args:
        decimal_odds: Decimal odds for each outcome
        total_capital: Total amount to stake across all outcomes

    Returns:
        StakeSizing with unrounded stakes and profit figures
    """
    if len(decimal_odds) < 2:
        raise ValueError("Need at least 2 outcomes for stake sizing")
    if total_capital <= 0:
        raise ValueError(f"Total capital must be positive, got {total_capital}")

    payout = total_capital / implied_probability_sum(decimal_odds)
    stakes = [payout / odds for odds in decimal_odds]
    profit = payout - total_capital

    return StakeSizing(
        stakes=stakes,
        total_stake=total_capital,
        guaranteed_payout=payout,
        guaranteed_profit=profit,
        profit_ratio=profit / total_capital,
    )
