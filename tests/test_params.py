"""Tests for SimulationConfig and input enumerations."""

import pytest
from portfolio_projection import CashFlowEvent, InvestorType, SimulationConfig, TaperingPolicy
from portfolio_projection.params import current_year


class TestInvestorTypeParse:
    def test_case_insensitive(self):
        assert InvestorType.parse("Private") is InvestorType.PRIVATE
        assert InvestorType.parse(" CORPORATE ") is InvestorType.CORPORATE

    def test_passthrough(self):
        assert InvestorType.parse(InvestorType.CORPORATE) is InvestorType.CORPORATE

    def test_unknown(self):
        with pytest.raises(ValueError):
            InvestorType.parse("trust")


class TestTaperingPolicyParse:
    @pytest.mark.parametrize("value, expected", [
        ("none", TaperingPolicy.NONE),
        (None, TaperingPolicy.NONE),
        ("0", TaperingPolicy.NONE),
        ("5%", TaperingPolicy.FIVE),
        ("10", TaperingPolicy.TEN),
        (15, TaperingPolicy.FIFTEEN),
        (" 15 % ", TaperingPolicy.FIFTEEN),
    ])
    def test_accepted_forms(self, value, expected):
        assert TaperingPolicy.parse(value) is expected

    def test_rate(self):
        assert TaperingPolicy.TEN.rate_pct == 10
        assert TaperingPolicy.NONE.rate_pct == 0

    @pytest.mark.parametrize("value", ["7%", "abc", 20])
    def test_unsupported(self, value):
        with pytest.raises(ValueError):
            TaperingPolicy.parse(value)


class TestCashFlowEvent:
    def test_inclusive_range(self):
        event = CashFlowEvent("e", "Rent", 10_000, 2030, 2032)
        assert not event.is_active(2029)
        assert event.is_active(2030)
        assert event.is_active(2032)
        assert not event.is_active(2033)


class TestSimulationConfig:
    def test_defaults(self):
        c = SimulationConfig()
        assert c.initial_portfolio_value == 5_000_000
        assert c.invested_capital == 5_000_000
        assert c.total_years == 20
        assert c.initial_stock_allocation_pct == 65
        assert c.tapering_policy is TaperingPolicy.NONE
        assert c.investor_type is InvestorType.PRIVATE
        assert c.tax_calculation_enabled
        assert not c.deferred_bond_tax_enabled
        assert c.start_year == current_year()

    def test_desired_net_payout(self):
        assert SimulationConfig().desired_net_payout == 1_000_000

    def test_starting_value(self):
        c = SimulationConfig(
            initial_portfolio_value=1, pension_portfolio_value=2, additional_liquidity_value=3,
        )
        assert c.starting_portfolio_value == 6

    def test_payout_years_follow_investment_years(self):
        c = SimulationConfig(investment_years=2, payout_years=2)
        assert [c.is_payout_year(i) for i in range(4)] == [False, False, True, True]

    def test_calendar_year(self):
        c = SimulationConfig(start_year=2025)
        assert c.calendar_year(0) == 2025
        assert c.calendar_year(9) == 2034
