"""Feed scanner orchestrator.

Pulls markets from the odds feed and runs batch sure-bet collection on
them, either once or in a continuous loop. Each scan uses a fresh
RunCounter; the scanner only remembers the latest report.
"""

import asyncio
import logging
import time
from datetime import datetime, timezone

from ..core.models import DEFAULT_POLICY, BatchReport, SurebetPolicy
from ..ingestion.odds_feed import OddsFeedClient
from .pipeline import RunCounter, collect_surebets

logger = logging.getLogger(__name__)


class SurebetScanner:
    """
    Orchestrates feed collection and sure-bet detection.

    Owned by whoever creates it (the API app keeps one on app.state);
    there is no module-level instance.
    """

    def __init__(
        self,
        client: OddsFeedClient,
        sports: list[str],
        total_stake: float,
        *,
        min_profit_percentage: float = 0.0,
        max_events: int = 0,
        policy: SurebetPolicy = DEFAULT_POLICY,
    ):
        self.client = client
        self.sports = sports
        self.total_stake = total_stake
        self.min_profit_percentage = min_profit_percentage
        self.max_events = max_events
        self.policy = policy
        self._running = False
        self._last_report: BatchReport | None = None
        self._last_scan: datetime | None = None
        self._scan_duration_ms: float = 0.0

    @property
    def is_running(self) -> bool:
        """Check if scanner loop is running."""
        return self._running

    @property
    def last_report(self) -> BatchReport | None:
        """Report of the most recent scan."""
        return self._last_report

    @property
    def last_scan(self) -> datetime | None:
        """Get timestamp of last scan."""
        return self._last_scan

    @property
    def scan_duration_ms(self) -> float:
        return self._scan_duration_ms

    async def scan_once(self) -> BatchReport:
        """
        Perform a single scan cycle.

        1. Fetch markets from the feed
        2. Evaluate each market
        3. Keep sure-bets above the profit floor, up to max_events
        """
        start = time.perf_counter()

        markets = await self.client.fetch_markets(self.sports)
        report = collect_surebets(
            markets,
            self.total_stake,
            min_profit_percentage=self.min_profit_percentage,
            max_events=self.max_events,
            policy=self.policy,
            counter=RunCounter(),
        )

        self._scan_duration_ms = (time.perf_counter() - start) * 1000
        self._last_report = report
        self._last_scan = datetime.now(timezone.utc)

        logger.info(
            "Scan complete: %d markets, %d surebets, %.0fms",
            report.evaluated, report.accepted, self._scan_duration_ms,
        )
        return report

    async def start(self, interval_seconds: float) -> None:
        """
        Start continuous scanning loop.

        Args:
            interval_seconds: Time between scans
        """
        if self._running:
            return

        self._running = True
        logger.info("Scanner started with %ss interval", interval_seconds)

        while self._running:
            try:
                await self.scan_once()
            except Exception:
                # Keep the loop alive on a bad feed payload
                logger.exception("Scan error")

            await asyncio.sleep(interval_seconds)

    def stop(self) -> None:
        """Stop scanning loop."""
        self._running = False
        logger.info("Scanner stopped")
