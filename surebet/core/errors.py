"""Typed failures raised while reading raw odds.

The evaluator turns these into rejection data; they never escape it.
"""

from .models import RejectionKind


class OddsError(ValueError):
    """Base class for odds that cannot be used."""
    kind: RejectionKind

    def __init__(self, message: str, raw: object):
        super().__init__(message)
        self.raw = raw


class MalformedOdds(OddsError):
    """Raw value is not any recognised notation."""
    kind = RejectionKind.MALFORMED_ODDS

    def __init__(self, raw: object, detail: str = "unparseable value"):
        super().__init__(f"Malformed odds {raw!r}: {detail}", raw)


class ImplausibleOdds(OddsError):
    """Parsed fine, but the derived decimal is outside the plausible range."""
    kind = RejectionKind.IMPLAUSIBLE_ODDS

    def __init__(self, raw: object, derived: float, minimum: float, maximum: float):
        super().__init__(
            f"Implausible decimal odd {derived:g} derived from {raw!r} "
            f"(allowed {minimum:g}-{maximum:g})",
            raw,
        )
        self.derived = derived
        self.minimum = minimum
        self.maximum = maximum
