from .odds_feed import OddsFeedClient, parse_event

__all__ = [
    "OddsFeedClient",
    "parse_event",
]
