"""
Tests for odds normalization to decimal
Run with: pytest tests/test_normalization.py -v
"""

import math

import pytest

from surebet.core.errors import ImplausibleOdds, MalformedOdds
from surebet.core.models import DEFAULT_POLICY, OddsFormat, SurebetPolicy
from surebet.core.normalization import check_plausible, normalize_odd, to_decimal
from surebet.utils.odds import (
    decimal_to_american,
    decimal_to_probability,
    format_american_odds,
)


class TestConversions:
    """Each notation converts with its own formula."""

    def test_american_strings(self):
        assert to_decimal("-125") == pytest.approx(1.80)
        assert to_decimal("+150") == pytest.approx(2.50)
        assert to_decimal("-110") == pytest.approx(1.909, abs=0.001)

    def test_american_numbers(self):
        assert to_decimal(150) == pytest.approx(2.50)
        assert to_decimal(-200) == pytest.approx(1.50)

    def test_fractional(self):
        assert to_decimal("4/5") == pytest.approx(1.80)
        assert to_decimal("11/4") == pytest.approx(3.75)
        assert to_decimal("1/1") == pytest.approx(2.00)

    def test_hongkong(self):
        assert to_decimal(0.8) == pytest.approx(1.80)

    def test_indonesian(self):
        assert to_decimal(-1.25) == pytest.approx(1.80)
        assert to_decimal(-2.0) == pytest.approx(1.50)

    def test_malay(self):
        assert to_decimal(-0.8) == pytest.approx(2.25)
        assert to_decimal(-1) == pytest.approx(2.00)

    def test_decimal_long_shot(self):
        assert to_decimal(151) == 151.0

    def test_normalized_odd_reports_format(self):
        odd = normalize_odd("4/5")
        assert odd.format == OddsFormat.FRACTIONAL
        assert odd.raw == "4/5"
        assert odd.implied_probability == pytest.approx(1 / 1.8)


class TestIdempotenceAndRoundTrip:

    @pytest.mark.parametrize("value", [1.01, 1.8, 2.5, 34.0, 999.99])
    def test_decimal_is_unchanged(self, value):
        assert to_decimal(value) == value

    @pytest.mark.parametrize("num,den", [(4, 5), (11, 4), (1, 1), (100, 30), (1, 10)])
    def test_fractional_implied_probability(self, num, den):
        decimal = to_decimal(f"{num}/{den}")
        assert decimal_to_probability(decimal) == pytest.approx(den / (num + den))

    def test_american_display_round_trip(self):
        assert format_american_odds(decimal_to_american(to_decimal("+150"))) == "+150"
        assert format_american_odds(decimal_to_american(to_decimal("-125"))) == "-125"


class TestDeclaredNotation:
    """A source that states its notation bypasses detection."""

    def test_decimal_long_shot_stays_decimal(self):
        odd = normalize_odd(150, odds_format=OddsFormat.DECIMAL)

        assert odd.format is OddsFormat.DECIMAL
        assert odd.decimal == 150.0
        assert to_decimal(150) == pytest.approx(2.50)

    def test_declared_american(self):
        assert to_decimal(-125, odds_format=OddsFormat.AMERICAN) == pytest.approx(1.80)
        assert to_decimal(110, odds_format=OddsFormat.AMERICAN) == pytest.approx(2.10)

    def test_declared_fractional(self):
        assert to_decimal("11/4", odds_format=OddsFormat.FRACTIONAL) == pytest.approx(3.75)
        with pytest.raises(MalformedOdds):
            to_decimal(2.75, odds_format=OddsFormat.FRACTIONAL)

    def test_guardrail_still_applies(self):
        with pytest.raises(ImplausibleOdds):
            to_decimal(0.5, odds_format=OddsFormat.DECIMAL)
        with pytest.raises(MalformedOdds):
            to_decimal(0, odds_format=OddsFormat.AMERICAN)


class TestGuardrails:
    """Plausibility range is a circuit breaker: reject, never clamp."""

    def test_minimum_is_accepted(self):
        assert to_decimal(DEFAULT_POLICY.decimal_min) == DEFAULT_POLICY.decimal_min

    def test_just_below_minimum_is_rejected(self):
        below = math.nextafter(DEFAULT_POLICY.decimal_min, 0)
        with pytest.raises(ImplausibleOdds):
            to_decimal(below)

    def test_maximum_is_accepted(self):
        # written with a decimal point so the integer tie-break does not apply
        assert to_decimal("1000.0") == 1000.0

    def test_above_maximum_is_rejected(self):
        with pytest.raises(ImplausibleOdds) as exc_info:
            to_decimal("1000/1")
        assert exc_info.value.raw == "1000/1"
        assert exc_info.value.derived == pytest.approx(1001.0)

    def test_tiny_fraction_is_rejected(self):
        with pytest.raises(ImplausibleOdds):
            to_decimal("1/200")

    def test_tiny_hongkong_is_rejected(self):
        with pytest.raises(ImplausibleOdds):
            to_decimal(0.005)

    def test_custom_range(self):
        policy = SurebetPolicy(decimal_min=1.05, decimal_max=20)
        with pytest.raises(ImplausibleOdds):
            to_decimal(1.02, policy)
        with pytest.raises(ImplausibleOdds):
            to_decimal(21.0, policy)
        assert to_decimal(19.5, policy) == 19.5

    def test_check_plausible_returns_value(self):
        assert check_plausible("2.5", 2.5) == 2.5

    def test_malformed_is_not_implausible(self):
        with pytest.raises(MalformedOdds):
            to_decimal("evens")


class TestPolicyValidation:

    def test_min_must_exceed_one(self):
        with pytest.raises(ValueError):
            SurebetPolicy(decimal_min=1.0)

    def test_min_below_max(self):
        with pytest.raises(ValueError):
            SurebetPolicy(decimal_min=50, decimal_max=20)

    def test_market_sizes(self):
        with pytest.raises(ValueError):
            SurebetPolicy(supported_market_sizes=frozenset({1, 2}))

    def test_policy_is_frozen(self):
        with pytest.raises(ValueError):
            DEFAULT_POLICY.decimal_min = 1.5
