"""Sure-bet evaluation for a single market.

Normalizes every outcome, runs the arbitrage test and, when one exists,
splits the stake so every leg pays out the same amount.

Data problems (bad odds, wrong market size, no arbitrage) come back as a
rejected SurebetResult. Only caller misuse, a non-positive or non-finite
stake, raises.
"""

import math
from collections.abc import Sequence

from ..core.errors import OddsError
from ..core.math import detect_arbitrage
from ..core.models import (
    DEFAULT_POLICY,
    AllocationLeg,
    Market,
    Outcome,
    RejectionKind,
    SurebetPolicy,
    SurebetResult,
)
from ..core.normalization import to_decimal
from ..core.sizing import calculate_stakes

UNSUPPORTED_MARKET_SIZE_REASON = "unsupported market size"
NO_ARBITRAGE_REASON = "no arbitrage opportunity"
HIGH_MARGIN_ADVISORY = "margin unusually high — verify odds"


def _money(amount: float) -> float:
    return round(amount, 2)


def _rejected(
    kind: RejectionKind,
    reason: str,
    edge_percentage: float = 0.0,
) -> SurebetResult:
    return SurebetResult(
        is_surebet=False,
        payout=0.0,
        profit=0.0,
        edge_percentage=edge_percentage,
        rejection=kind,
        rejection_reason=reason,
    )


def validate_stake(total_stake: float) -> float:
    """Fail fast on a stake that can only come from a programming error."""
    if isinstance(total_stake, bool) or not isinstance(total_stake, (int, float)):
        raise TypeError(f"total_stake must be a number, got {type(total_stake).__name__}")
    if not math.isfinite(total_stake) or total_stake <= 0:
        raise ValueError(f"total_stake must be a positive finite number, got {total_stake}")
    return float(total_stake)


def evaluate_outcomes(
    outcomes: Sequence[Outcome],
    total_stake: float,
    policy: SurebetPolicy = DEFAULT_POLICY,
) -> SurebetResult:
    """
    Evaluate an ordered list of outcomes for arbitrage.

    Args:
        outcomes: Mutually exclusive outcomes, in display order
        total_stake: Capital to split across the legs
        policy: Plausibility range, advisory threshold and market sizes

    Returns:
        SurebetResult; allocation legs keep the input order
    """
    stake = validate_stake(total_stake)

    if len(outcomes) not in policy.supported_market_sizes:
        return _rejected(RejectionKind.UNSUPPORTED_MARKET_SIZE, UNSUPPORTED_MARKET_SIZE_REASON)

    # All legs normalize or the whole market is rejected
    decimal_odds: list[float] = []
    for outcome in outcomes:
        try:
            decimal_odds.append(to_decimal(outcome.raw_odd, policy, outcome.odds_format))
        except OddsError as e:
            return _rejected(e.kind, f"{outcome.label} @ {outcome.bookmaker}: {e}")

    arb = detect_arbitrage(decimal_odds)
    edge_percentage = arb.edge_percentage

    if not arb.is_arbitrage:
        return _rejected(RejectionKind.NO_ARBITRAGE, NO_ARBITRAGE_REASON, edge_percentage)

    sizing = calculate_stakes(decimal_odds, stake)

    allocation = [
        AllocationLeg(
            label=outcome.label,
            bookmaker=outcome.bookmaker,
            decimal_odd=odds,
            stake=_money(leg_stake),
        )
        for outcome, odds, leg_stake in zip(outcomes, decimal_odds, sizing.stakes)
    ]

    advisory = None
    if sizing.profit_ratio > policy.high_margin_threshold:
        advisory = HIGH_MARGIN_ADVISORY

    return SurebetResult(
        is_surebet=True,
        allocation=allocation,
        payout=_money(sizing.guaranteed_payout),
        profit=_money(sizing.guaranteed_profit),
        edge_percentage=edge_percentage,
        advisory=advisory,
    )


def evaluate_market(
    market: Market,
    total_stake: float,
    policy: SurebetPolicy = DEFAULT_POLICY,
) -> SurebetResult:
    """Evaluate one market; descriptive metadata is ignored."""
    return evaluate_outcomes(market.outcomes, total_stake, policy)
