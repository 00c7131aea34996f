"""Tests for run_scenarios()."""

from portfolio_projection import SCENARIOS, SimulationConfig, run_scenarios


class TestRunScenarios:
    def setup_method(self):
        self.config = SimulationConfig(start_year=2025)
        self.results = run_scenarios(self.config)

    def test_returns_3_scenarios(self):
        assert set(self.results) == {"low", "standard", "high"}

    def test_ordering(self):
        assert self.results["high"].final_value > self.results["standard"].final_value
        assert self.results["standard"].final_value > self.results["low"].final_value

    def test_overrides_applied(self):
        gross = self.results["low"].series["gross_return"][1]
        stock = 5_000_000 * 0.65 * SCENARIOS["low"]["stock_return_rate"] / 100
        bond = 5_000_000 * 0.35 * SCENARIOS["low"]["bond_return_rate"] / 100
        assert gross == round(stock + bond)

    def test_base_config_unchanged(self):
        assert self.config.stock_return_rate == 8.0
        assert self.config.cpi_rate == 0.0

    def test_custom_scenarios(self):
        results = run_scenarios(self.config, {"flat": {"stock_return_rate": 0, "bond_return_rate": 0}})
        assert list(results) == ["flat"]
        assert results["flat"].series["gross_return"][1] == 0
