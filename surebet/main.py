"""FastAPI application entrypoint.

Sure-bet odds normalization & allocation service

ADVISORY-ONLY: This system does not place bets.
All actions must be executed by humans.
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import router
from .config import (
    DEFAULT_STAKE,
    HOST,
    LOG_LEVEL,
    MAX_EVENTS,
    MIN_PROFIT_PERCENTAGE,
    ODDS_API_KEY,
    ODDS_API_SPORTS,
    PORT,
    SCAN_INTERVAL_SECONDS,
    SCAN_ON_STARTUP,
    build_policy,
)
from .core.models import SurebetPolicy
from .engine import SurebetScanner, generate_disclaimer
from .ingestion import OddsFeedClient

logger = logging.getLogger(__name__)


def _build_scanner(policy: SurebetPolicy) -> SurebetScanner | None:
    if not ODDS_API_KEY:
        return None
    return SurebetScanner(
        OddsFeedClient(api_key=ODDS_API_KEY, policy=policy),
        ODDS_API_SPORTS,
        DEFAULT_STAKE,
        min_profit_percentage=MIN_PROFIT_PERCENTAGE,
        max_events=MAX_EVENTS,
        policy=policy,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Surebet Engine - Starting")
    logger.info(generate_disclaimer())

    scanner: SurebetScanner | None = app.state.scanner
    scanner_task = None
    if scanner is not None and SCAN_ON_STARTUP:
        scanner_task = asyncio.create_task(scanner.start(SCAN_INTERVAL_SECONDS))

    yield

    if scanner is not None:
        scanner.stop()
        await scanner.client.close()
    if scanner_task is not None:
        scanner_task.cancel()
        try:
            await scanner_task
        except asyncio.CancelledError:
            pass
    logger.info("Shutdown complete.")


def create_app(
    policy: SurebetPolicy | None = None,
    scanner: SurebetScanner | None = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Policy defaults to the environment settings; the feed scanner is only
    created when an odds feed key is configured.
    """
    policy = policy if policy is not None else build_policy()

    app = FastAPI(
        title="Surebet Engine",
        description="""
        Odds normalization and sure-bet stake allocation.

        **ADVISORY-ONLY**: This system provides information only.
        No bets are placed automatically.

        Features:
        - Odds notation detection (decimal, fractional, American,
          Hong Kong, Indonesian, Malay)
        - Plausibility guardrails on normalized odds
        - Arbitrage detection for 2- and 3-way markets
        - Stake split with guaranteed payout and profit
        """,
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.policy = policy
    app.state.scanner = scanner if scanner is not None else _build_scanner(policy)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,  # Must be False when using "*"
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Surebet Engine",
            "docs": "/docs",
            "api": "/api",
            "disclaimer": generate_disclaimer(),
        }

    return app


logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "surebet.main:app",
        host=HOST,
        port=PORT,
    )
