"""Odds feed client (read-only, public data only).

Pulls event odds from a The Odds API compatible JSON feed and turns them
into Markets: one per event, market key and line, with the best price for
each outcome across all bookmakers. Raw prices are passed through unchanged
and tagged with the notation the feed was asked for.

IMPORTANT: This is advisory-only. No betting, no accounts.
"""

import asyncio
import logging
from typing import Any

import aiohttp

from ..config import (
    ODDS_API_BASE,
    ODDS_API_FORMAT,
    ODDS_API_KEY,
    ODDS_API_REGIONS,
    ODDS_API_TIMEOUT_SECONDS,
)
from ..core.errors import OddsError
from ..core.models import DEFAULT_POLICY, Market, OddsFormat, Outcome, SurebetPolicy
from ..core.normalization import to_decimal

logger = logging.getLogger(__name__)

MARKET_NAMES: dict[str, str] = {
    "h2h": "Home/Away",
    "totals": "Over/Under",
    "spreads": "Handicap",
}


def _line(market_key: str, name: str, point: float | None, away_team: str) -> float | None:
    """
    Line a priced outcome belongs to, so only complementary outcomes share a Market.

    Totals pair Over/Under on the same point. Spreads pair a home handicap
    with the opposite away handicap, so the line is read from the home side.
    """
    if point is None:
        return None
    if market_key == "spreads" and name == away_team:
        return -point
    return point


def _label(market_key: str, name: str, point: float | None) -> str:
    if point is None:
        return name
    if market_key == "spreads":
        return f"{name} {point:+g}"
    return f"{name} {point:g}"


def parse_event(
    raw: dict,
    policy: SurebetPolicy = DEFAULT_POLICY,
    odds_format: OddsFormat | None = None,
) -> list[Market]:
    """
    Parse one feed event into Markets.

    Each market key and line (totals point, home handicap) becomes its own
    Market, keeping the bookmaker offering the best price on each outcome.
    Prices that do not normalize are skipped for that bookmaker. Lines with
    fewer than two priced outcomes are dropped.

    Args:
        raw: Event in The Odds API shape
        policy: Guardrails used to compare prices
        odds_format: Notation the feed was asked for; None detects per price
    """
    home_team = raw.get("home_team") or ""
    away_team = raw.get("away_team") or ""

    # (market key, line) -> outcome label -> (decimal, Outcome)
    best: dict[tuple[str, float | None], dict[str, tuple[float, Outcome]]] = {}

    for book in raw.get("bookmakers", []):
        bookmaker = book.get("title") or book.get("key") or "unknown"

        for mkt in book.get("markets", []):
            market_key = mkt.get("key", "h2h")

            for outcome in mkt.get("outcomes", []):
                name = outcome.get("name", "")
                point = outcome.get("point")
                label = _label(market_key, name, point)
                price = outcome.get("price")

                try:
                    decimal = to_decimal(price, policy, odds_format)
                except OddsError as e:
                    logger.debug("Skipping %s price from %s: %s", label, bookmaker, e)
                    continue

                by_label = best.setdefault((market_key, _line(market_key, name, point, away_team)), {})
                current = by_label.get(label)
                if current is None or decimal > current[0]:
                    by_label[label] = (decimal, Outcome(
                        label=label,
                        raw_odd=price,
                        bookmaker=bookmaker,
                        odds_format=odds_format,
                    ))

    markets = []
    for (market_key, line), by_label in best.items():
        if len(by_label) < 2:
            continue
        markets.append(Market(
            outcomes=[outcome for _, outcome in by_label.values()],
            market=MARKET_NAMES.get(market_key, market_key),
            sport=raw.get("sport_title") or raw.get("sport_key"),
            date=raw.get("commence_time"),
            home=home_team or None,
            away=away_team or None,
            event_id=raw.get("id"),
            line=line,
        ))

    return markets


class OddsFeedClient:
    """
    Client for fetching bookmaker odds from a public odds feed.

    Uses The Odds API v4 endpoint shape.
    """

    def __init__(
        self,
        api_key: str = ODDS_API_KEY,
        base_url: str = ODDS_API_BASE,
        timeout_seconds: float = ODDS_API_TIMEOUT_SECONDS,
        policy: SurebetPolicy = DEFAULT_POLICY,
        odds_format: OddsFormat = OddsFormat(ODDS_API_FORMAT),
    ):
        if odds_format not in (OddsFormat.DECIMAL, OddsFormat.AMERICAN):
            raise ValueError(f"Odds feed only quotes decimal or american odds, got {odds_format.value}")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.policy = policy
        self.odds_format = odds_format
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def close(self):
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "OddsFeedClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def _request(self, endpoint: str, params: dict | None = None) -> Any:
        """Make async GET request; returns None on any failure."""
        if not self.api_key:
            logger.warning("Odds feed: no API key configured, skipping %s", endpoint)
            return None

        session = await self._get_session()
        url = f"{self.base_url}{endpoint}"
        params = {**(params or {}), "apiKey": self.api_key}

        try:
            async with session.get(url, params=params) as resp:
                if resp.status == 200:
                    return await resp.json()
                elif resp.status == 401:
                    logger.warning("Odds feed: invalid API key")
                elif resp.status == 429:
                    logger.warning("Odds feed: rate limited")
                else:
                    logger.warning("Odds feed error: HTTP %s for %s", resp.status, endpoint)
                return None
        except asyncio.TimeoutError:
            logger.warning("Odds feed timeout for %s", endpoint)
            return None
        except aiohttp.ClientError as e:
            logger.warning("Odds feed request failed for %s: %s", endpoint, e)
            return None

    async def get_odds(
        self,
        sport: str,
        regions: str = ODDS_API_REGIONS,
        markets: str = "h2h",
        odds_format: OddsFormat | None = None,
    ) -> list[dict]:
        """
        Get odds for a sport.

        Args:
            sport: Sport key (e.g., "soccer_epl")
            regions: Region codes (e.g., "uk", "eu")
            markets: Market types (e.g., "h2h", "totals")
            odds_format: Decimal or American; defaults to the client setting
        """
        params = {
            "regions": regions,
            "markets": markets,
            "oddsFormat": (odds_format or self.odds_format).value,
        }
        return await self._request(f"/sports/{sport}/odds", params) or []

    async def fetch_markets(self, sports: list[str]) -> list[Market]:
        """Fetch and parse markets for each sport key, in order."""
        all_markets = []

        for sport in sports:
            raw_events = await self.get_odds(sport)
            for event in raw_events:
                all_markets.extend(parse_event(event, self.policy, self.odds_format))

        logger.info("Odds feed: %d markets from %d sports", len(all_markets), len(sports))
        return all_markets
