"""Scenario definitions and multi-scenario execution."""

import dataclasses

from portfolio_projection.params import SimulationConfig
from portfolio_projection.simulation import ProjectionResult, simulate_projection

SCENARIOS = {
    "low": {
        "stock_return_rate": 5.0,
        "bond_return_rate": 3.0,
        "cpi_rate": 2.5,
    },
    "standard": {
        "stock_return_rate": 8.0,
        "bond_return_rate": 5.0,
        "cpi_rate": 2.0,
    },
    "high": {
        "stock_return_rate": 10.0,
        "bond_return_rate": 6.5,
        "cpi_rate": 1.5,
    },
}


def run_scenarios(
    config: SimulationConfig,
    scenarios: dict[str, dict] | None = None,
) -> dict[str, ProjectionResult]:
    """Run the projection once per scenario, overriding the scenario's rates.

    Every run is independent, so the sweep order does not affect results.
    """
    if scenarios is None:
        scenarios = SCENARIOS
    return {
        name: simulate_projection(dataclasses.replace(config, **overrides))
        for name, overrides in scenarios.items()
    }
