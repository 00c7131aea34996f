"""Portfolio Projection Package."""

from portfolio_projection.params import (
    SimulationConfig,
    CashFlowEvent,
    InvestorType,
    TaperingPolicy,
)
from portfolio_projection.allocation import compute_allocation_path
from portfolio_projection.cashflow import YearCashFlow, resolve_year
from portfolio_projection.apportion import apportion
from portfolio_projection.tax import TaxPolicy, WithdrawalTax
from portfolio_projection.series import OutputSeries, SERIES_KEYS, TAX_KEYS, START_LABEL
from portfolio_projection.simulation import (
    DeferredTaxLedger,
    ProjectionResult,
    TaxAmounts,
    simulate_projection,
)
from portfolio_projection.goal_seek import GoalSeekResult, find_minimum_annual_savings
from portfolio_projection.scenarios import SCENARIOS, run_scenarios

__all__ = [
    "SimulationConfig",
    "CashFlowEvent",
    "InvestorType",
    "TaperingPolicy",
    "compute_allocation_path",
    "YearCashFlow",
    "resolve_year",
    "apportion",
    "TaxPolicy",
    "WithdrawalTax",
    "OutputSeries",
    "SERIES_KEYS",
    "TAX_KEYS",
    "START_LABEL",
    "DeferredTaxLedger",
    "ProjectionResult",
    "TaxAmounts",
    "simulate_projection",
    "GoalSeekResult",
    "find_minimum_annual_savings",
    "SCENARIOS",
    "run_scenarios",
]
