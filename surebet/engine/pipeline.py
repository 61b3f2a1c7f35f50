"""Batch evaluation of many markets.

Applies the evaluator to each market, keeps sure-bets that clear the
minimum profit filter and stops once `max_events` records were accepted.
The running tally lives in a RunCounter passed through the loop, so two
batches never share counts.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..core.models import (
    DEFAULT_POLICY,
    BatchReport,
    Market,
    RejectionKind,
    SurebetPolicy,
    SurebetRecord,
)
from .evaluator import evaluate_market, validate_stake

logger = logging.getLogger(__name__)


@dataclass
class RunCounter:
    """Tally for one batch run."""
    evaluated: int = 0
    accepted: int = 0
    below_min_profit: int = 0
    rejections: dict[RejectionKind, int] = field(default_factory=dict)

    def reject(self, kind: RejectionKind) -> None:
        self.rejections[kind] = self.rejections.get(kind, 0) + 1

    def limit_reached(self, max_events: int) -> bool:
        """True once max_events records were accepted (0 = unlimited)."""
        return max_events > 0 and self.accepted >= max_events


def collect_surebets(
    markets: Iterable[Market],
    total_stake: float,
    *,
    min_profit_percentage: float = 0.0,
    max_events: int = 0,
    policy: SurebetPolicy = DEFAULT_POLICY,
    counter: RunCounter | None = None,
) -> BatchReport:
    """
    Evaluate markets and collect the sure-bets worth exporting.

    Args:
        markets: Markets to evaluate, in order
        total_stake: Capital to split for every market
        min_profit_percentage: Ignore sure-bets below this profit %
        max_events: Stop after this many accepted records (0 = unlimited)
        policy: Guardrails passed to the evaluator
        counter: Tally to continue from; a fresh one is used if omitted

    Returns:
        BatchReport with accepted records and counts
    """
    validate_stake(total_stake)
    if max_events < 0:
        raise ValueError(f"max_events must be >= 0, got {max_events}")

    counter = counter if counter is not None else RunCounter()
    records: list[SurebetRecord] = []

    for market in markets:
        if counter.limit_reached(max_events):
            logger.info("Reached max events (%d), stopping", max_events)
            break

        counter.evaluated += 1
        result = evaluate_market(market, total_stake, policy)

        if not result.is_surebet:
            counter.reject(result.rejection)
            logger.debug(
                "No surebet for %s vs %s: %s",
                market.home, market.away, result.rejection_reason,
            )
            continue

        if result.profit_percentage < min_profit_percentage:
            counter.below_min_profit += 1
            logger.debug(
                "Surebet %s vs %s below min profit (%.2f%% < %.2f%%)",
                market.home, market.away, result.profit_percentage, min_profit_percentage,
            )
            continue

        if result.advisory:
            logger.warning("%s vs %s: %s", market.home, market.away, result.advisory)

        logger.info(
            "Surebet found: %s vs %s, profit %.2f (%.2f%%)",
            market.home, market.away, result.profit, result.profit_percentage,
        )
        records.append(SurebetRecord(market=market, result=result))
        counter.accepted += 1

    return BatchReport(
        records=records,
        evaluated=counter.evaluated,
        accepted=counter.accepted,
        below_min_profit=counter.below_min_profit,
        rejections=dict(counter.rejections),
        limit_reached=counter.limit_reached(max_events),
    )
