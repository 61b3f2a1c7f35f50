from .models import (
    OddsFormat,
    RejectionKind,
    SurebetPolicy,
    DEFAULT_POLICY,
    Outcome,
    Market,
    NormalizedOdd,
    AllocationLeg,
    SurebetResult,
)
from .errors import OddsError, MalformedOdds, ImplausibleOdds
from .detection import (
    detect_odds_format,
    read_odds,
    read_declared_odds,
    parse_odds_value,
    is_unsigned_american,
)
from .normalization import normalize_odd, to_decimal, check_plausible
from .math import calculate_implied_probability, implied_probability_sum, detect_arbitrage
from .sizing import calculate_stakes

__all__ = [
    "OddsFormat",
    "RejectionKind",
    "SurebetPolicy",
    "DEFAULT_POLICY",
    "Outcome",
    "Market",
    "NormalizedOdd",
    "AllocationLeg",
    "SurebetResult",
    "OddsError",
    "MalformedOdds",
    "ImplausibleOdds",
    "detect_odds_format",
    "read_odds",
    "read_declared_odds",
    "parse_odds_value",
    "is_unsigned_american",
    "normalize_odd",
    "to_decimal",
    "check_plausible",
    "calculate_implied_probability",
    "implied_probability_sum",
    "detect_arbitrage",
    "calculate_stakes",
]
