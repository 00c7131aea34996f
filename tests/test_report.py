"""Tests for the plain-text report."""

import pytest
from portfolio_projection import CashFlowEvent, SimulationConfig, simulate_projection
from portfolio_projection.report import fmt_amount, fmt_pct, render_report, summarize


class TestFormat:
    def test_amount(self):
        assert fmt_amount(1_234_567) == "1,234,567"
        assert fmt_amount(-900_000.4) == "-900,000"

    def test_pct(self):
        assert fmt_pct(37.8) == "37.8%"


class TestSummarize:
    def setup_method(self):
        self.config = SimulationConfig(start_year=2025, investment_years=2, payout_years=3)
        self.result = simulate_projection(self.config)
        self.summary = summarize(self.result)

    def test_totals_match_series(self):
        assert self.summary["net_withdrawal"] == sum(self.result.series["net_withdrawal"])
        assert self.summary["gross_return"] == sum(self.result.series["gross_return"])

    def test_total_tax(self):
        s = self.summary
        assert s["total_tax"] == (
            s["withdrawal_tax"] + s["event_tax"] + s["bond_tax"] + s["realized_bond_tax"]
        )

    def test_end_of_run(self):
        assert self.summary["start_value"] == 5_000_000
        assert self.summary["final_value"] == pytest.approx(self.result.final_value)
        assert self.summary["sustainable"]


class TestRenderReport:
    def test_sections(self):
        config = SimulationConfig(
            start_year=2025, investment_years=1, payout_years=1,
            events=(CashFlowEvent("e", "Boat", -100_000, 2025, 2025),),
        )
        text = render_report(config, simulate_projection(config))
        assert "Portfolio projection 2025-2026" in text
        assert "Event: Boat -100,000 (2025)" in text
        assert "Totals" in text
        assert "Yearly projection" in text
        assert "2026" in text.splitlines()[-2]

    def test_summary_only(self):
        config = SimulationConfig(start_year=2025)
        text = render_report(config, simulate_projection(config), yearly=False)
        assert "Yearly projection" not in text

    def test_exhausted_warning(self):
        config = SimulationConfig(
            start_year=2025, initial_portfolio_value=100_000, invested_capital=0,
            investment_years=0, payout_years=2,
        )
        text = render_report(config, simulate_projection(config))
        assert "WARNING: the portfolio is exhausted in 2025" in text

    def test_mid_run_exhaustion_flagged_after_recovery(self):
        config = SimulationConfig(
            start_year=2025, initial_portfolio_value=100_000, invested_capital=0,
            investment_years=0, payout_years=2,
            stock_return_rate=0, bond_return_rate=0, tax_calculation_enabled=False,
            desired_annual_consumption_payout=200_000, desired_annual_wealth_tax_payout=0,
            events=(CashFlowEvent("i", "Inheritance", 1_000_000, 2026, 2026),),
        )
        result = simulate_projection(config)
        summary = summarize(result)
        assert result.final_value == pytest.approx(700_000)
        assert not summary["sustainable"]
        assert summary["first_exhausted_year"] == "2025"
        assert "exhausted in 2025" in render_report(config, result)

    def test_tax_disabled_header(self):
        config = SimulationConfig(start_year=2025, tax_calculation_enabled=False)
        assert "Tax: disabled" in render_report(config, simulate_projection(config))
