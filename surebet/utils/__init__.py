from .odds import (
    fractional_to_decimal,
    american_to_decimal,
    hongkong_to_decimal,
    indonesian_to_decimal,
    malay_to_decimal,
    decimal_to_american,
    decimal_to_probability,
    format_american_odds,
)

__all__ = [
    "fractional_to_decimal",
    "american_to_decimal",
    "hongkong_to_decimal",
    "indonesian_to_decimal",
    "malay_to_decimal",
    "decimal_to_american",
    "decimal_to_probability",
    "format_american_odds",
]
