"""Tests for find_minimum_annual_savings()."""

import pytest
from portfolio_projection import SimulationConfig, find_minimum_annual_savings
from portfolio_projection.goal_seek import SAVINGS_STEP, terminal_value


def _flat_plan(**overrides) -> SimulationConfig:
    """No returns, no tax: final value = start + 5 × savings − 10 × payout."""
    base = dict(
        initial_portfolio_value=1_000_000,
        invested_capital=0,
        investment_years=5,
        payout_years=10,
        stock_return_rate=0,
        bond_return_rate=0,
        desired_annual_consumption_payout=300_000,
        desired_annual_wealth_tax_payout=0,
        tax_calculation_enabled=False,
        start_year=2025,
    )
    base.update(overrides)
    return SimulationConfig(**base)


class TestGoalSeek:
    def test_analytic_minimum(self):
        result = find_minimum_annual_savings(_flat_plan())
        assert result.feasible
        assert result.annual_savings == 400_000
        assert result.terminal_value == pytest.approx(0)

    def test_minimal_step(self):
        config = SimulationConfig(start_year=2025, initial_portfolio_value=2_000_000, invested_capital=2_000_000)
        result = find_minimum_annual_savings(config)
        assert result.feasible
        assert result.annual_savings % SAVINGS_STEP == 0
        assert terminal_value(config, result.annual_savings) >= 0
        assert terminal_value(config, result.annual_savings - SAVINGS_STEP) < 0

    def test_already_solvent(self):
        result = find_minimum_annual_savings(_flat_plan(desired_annual_consumption_payout=0))
        assert result.feasible
        assert result.annual_savings == 0
        assert result.iterations == 0

    def test_infeasible_without_investment_years(self):
        result = find_minimum_annual_savings(_flat_plan(investment_years=0))
        assert not result.feasible
        assert result.annual_savings is None

    def test_infeasible_below_ceiling(self):
        result = find_minimum_annual_savings(_flat_plan(), ceiling=100_000)
        assert not result.feasible

    def test_ceiling_below_step(self):
        result = find_minimum_annual_savings(_flat_plan(), ceiling=5_000)
        assert not result.feasible

    def test_custom_target(self):
        result = find_minimum_annual_savings(_flat_plan(), target=500_000)
        assert result.annual_savings == 500_000

    def test_config_savings_ignored(self):
        result = find_minimum_annual_savings(_flat_plan(annual_savings=9_000_000))
        assert result.annual_savings == 400_000
