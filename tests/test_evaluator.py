"""
Tests for sure-bet evaluation and stake allocation
Run with: pytest tests/test_evaluator.py -v
"""

import math

import pytest

from surebet.core.models import RejectionKind, SurebetPolicy
from surebet.core.sizing import calculate_stakes
from surebet.engine.evaluator import (
    HIGH_MARGIN_ADVISORY,
    NO_ARBITRAGE_REASON,
    UNSUPPORTED_MARKET_SIZE_REASON,
    evaluate_market,
    evaluate_outcomes,
)

from conftest import make_market


class TestConcreteScenarios:

    def test_small_two_way_arbitrage(self, home_away_market):
        result = evaluate_market(home_away_market, 100)

        assert result.is_surebet
        assert result.edge_percentage == pytest.approx(96.40, abs=0.01)
        assert result.payout == pytest.approx(103.73, abs=0.01)
        assert result.profit == pytest.approx(3.73, abs=0.01)
        assert [leg.stake for leg in result.allocation] == pytest.approx([49.40, 50.60], abs=0.01)
        assert result.advisory is None
        assert result.rejection is None

    def test_long_shot_arbitrage(self):
        result = evaluate_market(make_market(2.00, 34.00), 100)

        assert result.is_surebet
        assert result.edge_percentage == pytest.approx(52.94, abs=0.01)
        assert result.payout == pytest.approx(188.89, abs=0.01)
        assert result.profit == pytest.approx(88.89, abs=0.01)
        assert result.allocation[0].stake == pytest.approx(94.44, abs=0.01)
        assert result.allocation[1].stake == pytest.approx(5.56, abs=0.01)

    def test_no_arbitrage(self):
        result = evaluate_market(make_market(1.80, 1.90), 100)

        assert not result.is_surebet
        assert result.edge_percentage >= 100
        assert result.edge_percentage == pytest.approx(108.19, abs=0.01)
        assert result.payout == 0
        assert result.profit == 0
        assert result.allocation is None
        assert result.rejection == RejectionKind.NO_ARBITRAGE
        assert result.rejection_reason == NO_ARBITRAGE_REASON

    def test_mixed_notations(self):
        # 11/10 = 2.10 and +105 = 2.05, same market as the decimal scenario
        result = evaluate_market(make_market("11/10", "+105"), 100)

        assert result.is_surebet
        assert [leg.decimal_odd for leg in result.allocation] == pytest.approx([2.10, 2.05])
        assert result.profit == pytest.approx(3.73, abs=0.01)


class TestAllocationProperties:
    """Every leg pays out the same amount; stakes add up to the bankroll."""

    @pytest.mark.parametrize("o1,o2", [
        (2.10, 2.05),
        (2.00, 34.00),
        (1.50, 3.20),
        (1.05, 25.0),
        (3.3, 1.45),
    ])
    def test_two_way_equal_payout(self, o1, o2):
        assert 1 / o1 + 1 / o2 < 1
        result = evaluate_market(make_market(o1, o2), 100)
        s1, s2 = (leg.stake for leg in result.allocation)

        # each stake is rounded to the cent, so payouts differ by at most half a cent times the odd
        assert s1 * o1 == pytest.approx(s2 * o2, abs=0.005 * (o1 + o2))
        assert abs((s1 + s2) - 100) <= 0.02

    def test_three_way(self):
        odds = [3.40, 3.60, 3.50]
        result = evaluate_market(make_market(*odds), 250)

        assert result.is_surebet
        stakes = [leg.stake for leg in result.allocation]
        for stake, odd in zip(stakes, odds):
            assert stake * odd == pytest.approx(result.payout, abs=0.005 * odd + 0.01)
        assert abs(sum(stakes) - 250) <= 0.02

    def test_unrounded_sizing_is_exact(self):
        sizing = calculate_stakes([2.10, 2.05], 100)

        assert sum(sizing.stakes) == pytest.approx(100)
        for stake, odd in zip(sizing.stakes, [2.10, 2.05]):
            assert stake * odd - sum(sizing.stakes) == pytest.approx(sizing.guaranteed_profit)

    def test_order_preserved(self):
        market = make_market(34.0, 2.0, labels=["Away", "Home"], bookmakers=["X", "Y"])
        result = evaluate_market(market, 100)

        assert [leg.label for leg in result.allocation] == ["Away", "Home"]
        assert [leg.bookmaker for leg in result.allocation] == ["X", "Y"]
        assert [leg.decimal_odd for leg in result.allocation] == [34.0, 2.0]

    def test_rounding_does_not_feed_back(self):
        # implied sum 0.999995: a real (tiny) arbitrage whose profit rounds to zero
        result = evaluate_market(make_market(2.0, 2.00002), 100)

        assert result.is_surebet
        assert result.profit == 0.0

    def test_edge_keeps_full_precision(self):
        # implied sum 0.9999996: the edge must stay below 100 on a sure-bet
        result = evaluate_market(make_market(2.0, 2.0000016), 100)

        assert result.is_surebet
        assert result.edge_percentage < 100
        assert result.edge_percentage == pytest.approx(99.99996, abs=1e-6)

    def test_break_even_is_not_arbitrage(self):
        result = evaluate_market(make_market(2.0, 2.0), 100)

        assert not result.is_surebet
        assert result.edge_percentage == pytest.approx(100.0)


class TestHighMarginAdvisory:

    def test_advisory_does_not_reject(self):
        result = evaluate_market(make_market(2.00, 34.00), 100)

        assert result.is_surebet
        assert result.advisory == HIGH_MARGIN_ADVISORY

    def test_threshold_is_tunable(self):
        policy = SurebetPolicy(high_margin_threshold=0.01)
        result = evaluate_market(make_market(2.10, 2.05), 100, policy)

        assert result.is_surebet
        assert result.advisory == HIGH_MARGIN_ADVISORY


class TestRejections:
    """Bad data comes back as a rejected result, never an exception."""

    @pytest.mark.parametrize("odds", [(2.0,), (2.0, 3.0, 4.0, 5.0), ()])
    def test_unsupported_market_size(self, odds):
        result = evaluate_market(make_market(*odds), 100)

        assert not result.is_surebet
        assert result.rejection == RejectionKind.UNSUPPORTED_MARKET_SIZE
        assert result.rejection_reason == UNSUPPORTED_MARKET_SIZE_REASON
        assert result.payout == 0
        assert result.profit == 0

    def test_size_checked_before_odds(self):
        result = evaluate_market(make_market("junk", 2.0, 3.0, 4.0), 100)
        assert result.rejection == RejectionKind.UNSUPPORTED_MARKET_SIZE

    def test_policy_market_sizes(self):
        policy = SurebetPolicy(supported_market_sizes=frozenset({2}))
        result = evaluate_market(make_market(3.4, 3.6, 3.5), 100, policy)
        assert result.rejection == RejectionKind.UNSUPPORTED_MARKET_SIZE

    def test_malformed_odds_reject_whole_market(self):
        market = make_market(2.10, "n/a", labels=["Home", "Away"], bookmakers=["A", "B"])
        result = evaluate_market(market, 100)

        assert not result.is_surebet
        assert result.allocation is None
        assert result.rejection == RejectionKind.MALFORMED_ODDS
        assert "Away" in result.rejection_reason
        assert "n/a" in result.rejection_reason

    def test_implausible_odds(self):
        result = evaluate_market(make_market(1.001, 50.0), 100)

        assert not result.is_surebet
        assert result.rejection == RejectionKind.IMPLAUSIBLE_ODDS
        assert "Implausible" in result.rejection_reason

    def test_zero_odds(self):
        result = evaluate_market(make_market(0, 2.0), 100)
        assert result.rejection == RejectionKind.MALFORMED_ODDS


class TestStakeValidation:
    """Invalid stakes are caller errors and fail loudly."""

    @pytest.mark.parametrize("stake", [0, -100, math.nan, math.inf])
    def test_invalid_stake_raises(self, stake, home_away_market):
        with pytest.raises(ValueError):
            evaluate_market(home_away_market, stake)

    def test_non_numeric_stake_raises(self, home_away_market):
        with pytest.raises(TypeError):
            evaluate_market(home_away_market, "100")

    def test_stake_checked_before_market_size(self):
        with pytest.raises(ValueError):
            evaluate_market(make_market(2.0), 0)


class TestMetadata:

    def test_metadata_is_ignored_and_kept(self, home_away_market):
        plain = evaluate_outcomes(home_away_market.outcomes, 100)
        with_meta = evaluate_market(home_away_market, 100)

        assert plain == with_meta
        assert home_away_market.metadata()["sport"] == "Tennis"

    def test_extra_fields_pass_through(self):
        market = make_market(2.10, 2.05, event_id="evt-1", country="Spain")
        result = evaluate_market(market, 100)

        assert result.is_surebet
        assert market.metadata() == {"event_id": "evt-1", "country": "Spain"}

    def test_input_stake_is_not_mutated(self, home_away_market):
        stake = 100.0
        evaluate_market(home_away_market, stake)
        assert stake == 100.0
