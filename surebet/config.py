"""Service configuration read from environment variables.

Only the service layer (API, scanner, feed client) reads these. Core
functions receive a SurebetPolicy from their caller instead.
"""

import os

from .core.models import SurebetPolicy

# Stake split across the legs of every sure-bet
DEFAULT_STAKE = float(os.getenv("SUREBET_DEFAULT_STAKE", "100"))

# Ignore sure-bets below this profit percentage
MIN_PROFIT_PERCENTAGE = float(os.getenv("SUREBET_MIN_PROFIT_PERCENTAGE", "0"))

# Stop a batch after N accepted events (0 = unlimited)
MAX_EVENTS = int(os.getenv("SUREBET_MAX_EVENTS", "0"))

# Plausibility guardrails and advisory threshold
DECIMAL_MIN = float(os.getenv("SUREBET_DECIMAL_MIN", "1.01"))
DECIMAL_MAX = float(os.getenv("SUREBET_DECIMAL_MAX", "1000"))
HIGH_MARGIN_THRESHOLD = float(os.getenv("SUREBET_HIGH_MARGIN_THRESHOLD", "0.20"))
AMERICAN_DIVISOR = int(os.getenv("SUREBET_AMERICAN_DIVISOR", "5"))

# Odds feed (The Odds API compatible)
ODDS_API_BASE = os.getenv("ODDS_API_BASE", "https://api.the-odds-api.com/v4")
ODDS_API_KEY = os.getenv("ODDS_API_KEY", "")
ODDS_API_REGIONS = os.getenv("ODDS_API_REGIONS", "eu,uk")
# Notation requested from the feed: "decimal" or "american"
ODDS_API_FORMAT = os.getenv("ODDS_API_FORMAT", "decimal").lower()
ODDS_API_SPORTS = [
    s.strip()
    for s in os.getenv("ODDS_API_SPORTS", "soccer_epl,tennis_atp_french_open,basketball_nba").split(",")
    if s.strip()
]
ODDS_API_TIMEOUT_SECONDS = float(os.getenv("ODDS_API_TIMEOUT_SECONDS", "15"))

# Background scanning (off unless a feed key is configured)
SCAN_ON_STARTUP = os.getenv("SUREBET_SCAN_ON_STARTUP", "false").lower() in ("1", "true", "yes")
SCAN_INTERVAL_SECONDS = float(os.getenv("SUREBET_SCAN_INTERVAL_SECONDS", "60"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))


def build_policy() -> SurebetPolicy:
    """Policy assembled from the environment settings above."""
    return SurebetPolicy(
        decimal_min=DECIMAL_MIN,
        decimal_max=DECIMAL_MAX,
        high_margin_threshold=HIGH_MARGIN_THRESHOLD,
        american_divisor=AMERICAN_DIVISOR,
    )
