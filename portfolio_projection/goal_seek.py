"""Goal-seek: minimal annual savings that keeps the plan solvent."""

import dataclasses
import math
from dataclasses import dataclass

from portfolio_projection.params import SimulationConfig
from portfolio_projection.simulation import simulate_projection

SAVINGS_STEP = 10_000
SAVINGS_CEILING = 10_000_000
MAX_ITERATIONS = 50


@dataclass(frozen=True)
class GoalSeekResult:
    annual_savings: float | None
    terminal_value: float | None
    iterations: int
    feasible: bool


def terminal_value(config: SimulationConfig, annual_savings: float) -> float:
    """End-of-run portfolio value with annual_savings substituted."""
    trial = dataclasses.replace(config, annual_savings=annual_savings)
    return simulate_projection(trial).final_value


def find_minimum_annual_savings(
    config: SimulationConfig,
    *,
    target: float = 0.0,
    step: int = SAVINGS_STEP,
    ceiling: float = SAVINGS_CEILING,
    max_iterations: int = MAX_ITERATIONS,
) -> GoalSeekResult:
    """Binary search over multiples of step for the smallest annual savings
    whose terminal value reaches target.

    The returned savings amount has always been verified by a full engine run.
    Returns feasible=False with annual_savings=None when even the ceiling
    (rounded down to a step multiple) falls short.
    """
    value_at_zero = terminal_value(config, 0)
    if value_at_zero >= target:
        return GoalSeekResult(0, value_at_zero, 0, True)

    hi = math.floor(ceiling / step)
    if hi <= 0:
        return GoalSeekResult(None, None, 0, False)
    value_hi = terminal_value(config, hi * step)
    if value_hi < target:
        return GoalSeekResult(None, None, 0, False)

    lo = 0  # known to fall short
    iterations = 0
    while hi - lo > 1 and iterations < max_iterations:
        iterations += 1
        mid = (lo + hi) // 2
        value = terminal_value(config, mid * step)
        if value >= target:
            hi = mid
            value_hi = value
        else:
            lo = mid

    return GoalSeekResult(hi * step, value_hi, iterations, True)
