from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OddsFormat(str, Enum):
    """Notation a bookmaker price is quoted in."""
    DECIMAL = "decimal"
    FRACTIONAL = "fractional"
    AMERICAN = "american"
    HONGKONG = "hongkong"
    INDONESIAN = "indonesian"
    MALAY = "malay"


class RejectionKind(str, Enum):
    """Why a market did not produce a sure-bet."""
    UNSUPPORTED_MARKET_SIZE = "unsupported_market_size"
    MALFORMED_ODDS = "malformed_odds"
    IMPLAUSIBLE_ODDS = "implausible_odds"
    NO_ARBITRAGE = "no_arbitrage"


class SurebetPolicy(BaseModel):
    """
    Tunable guardrails consumed by the detector, normalizer and evaluator.

    Supplied by the caller on every call; nothing here is read from the
    environment.
    """
    model_config = ConfigDict(frozen=True)

    decimal_min: float = Field(1.01, description="Lowest plausible decimal odd")
    decimal_max: float = Field(1000.0, description="Highest plausible decimal odd")
    high_margin_threshold: float = Field(0.20, gt=0, description="Profit/stake ratio that triggers an advisory")
    supported_market_sizes: frozenset[int] = frozenset({2, 3})
    # Unsigned integers >= american_min divisible by american_divisor read as American
    american_min: int = Field(100, ge=1)
    american_divisor: int = Field(5, ge=1)

    @model_validator(mode="after")
    def _check_ranges(self) -> "SurebetPolicy":
        if not 1.0 < self.decimal_min < self.decimal_max:
            raise ValueError("Plausible range must satisfy 1 < decimal_min < decimal_max")
        if not self.supported_market_sizes or min(self.supported_market_sizes) < 2:
            raise ValueError("Supported market sizes must be non-empty and >= 2")
        return self


DEFAULT_POLICY = SurebetPolicy()


class Outcome(BaseModel):
    """One priced side of a market, odds in any supported notation."""
    model_config = ConfigDict(frozen=True)

    label: str
    raw_odd: int | float | str
    bookmaker: str
    odds_format: OddsFormat | None = None  # declared notation; None means detect


class Market(BaseModel):
    """
    Mutually exclusive outcomes for one betting question.

    Descriptive fields are passed through untouched; unknown extra fields
    are kept as well.
    """
    model_config = ConfigDict(extra="allow")

    outcomes: list[Outcome]
    market: str | None = None   # e.g. "Home/Away", "Over/Under"
    sport: str | None = None
    league: str | None = None
    country: str | None = None
    date: str | None = None
    home: str | None = None
    away: str | None = None

    def metadata(self) -> dict:
        """Descriptive fields only, outcomes excluded."""
        return self.model_dump(exclude={"outcomes"}, exclude_none=True)


class NormalizedOdd(BaseModel):
    """Canonical decimal representation of one raw price."""
    model_config = ConfigDict(frozen=True)

    raw: int | float | str
    format: OddsFormat
    decimal: float = Field(ge=1.0)

    @property
    def implied_probability(self) -> float:
        return 1.0 / self.decimal


class AllocationLeg(BaseModel):
    """Stake assigned to one outcome of a sure-bet."""
    label: str
    bookmaker: str
    decimal_odd: float
    stake: float


class SurebetResult(BaseModel):
    """Outcome of evaluating one market."""
    is_surebet: bool
    allocation: list[AllocationLeg] | None = None
    payout: float = 0.0
    profit: float = 0.0
    edge_percentage: float = 0.0  # implied probability sum x 100, unrounded; 0-100+
    rejection: RejectionKind | None = None
    rejection_reason: str | None = None
    advisory: str | None = None

    @property
    def profit_percentage(self) -> float:
        """Profit relative to the total staked, in percent."""
        if not self.allocation:
            return 0.0
        staked = self.payout - self.profit
        return self.profit / staked * 100 if staked > 0 else 0.0


class SurebetRecord(BaseModel):
    """Evaluated market ready to hand to an export layer."""
    market: Market
    result: SurebetResult

    def to_export(self) -> dict:
        """Flat dict: market metadata, raw outcomes and the allocation result."""
        return {
            **self.market.metadata(),
            "outcomes": [o.model_dump(mode="json", exclude_none=True) for o in self.market.outcomes],
            "allocation": self.result.model_dump(mode="json"),
        }


class BatchReport(BaseModel):
    """Result of evaluating a batch of markets."""
    records: list[SurebetRecord]
    evaluated: int
    accepted: int
    below_min_profit: int = 0
    rejections: dict[RejectionKind, int] = Field(default_factory=dict)
    limit_reached: bool = False
