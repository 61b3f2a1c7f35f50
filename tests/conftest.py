import pytest

from surebet.core.models import Market, Outcome


def make_market(*odds, labels=None, bookmakers=None, **metadata) -> Market:
    """Market with one outcome per odd; labels and bookmakers default to O1.. / B1.."""
    labels = labels or [f"O{i + 1}" for i in range(len(odds))]
    bookmakers = bookmakers or [f"B{i + 1}" for i in range(len(odds))]
    return Market(
        outcomes=[
            Outcome(label=label, raw_odd=odd, bookmaker=book)
            for label, odd, book in zip(labels, odds, bookmakers)
        ],
        **metadata,
    )


@pytest.fixture
def home_away_market() -> Market:
    """Two-way tennis market with a small arbitrage (2.10 / 2.05)."""
    return make_market(
        2.10, 2.05,
        labels=["Home", "Away"],
        bookmakers=["A", "B"],
        market="Home/Away",
        sport="Tennis",
        league="ATP",
        home="Sinner",
        away="Alcaraz",
    )
