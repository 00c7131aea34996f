"""Per-year stock/bond allocation schedule."""

from portfolio_projection.params import SimulationConfig, TaperingPolicy


def compute_allocation_path(config: SimulationConfig) -> list[tuple[float, float]]:
    """Return [(stock_pct, bond_pct), ...], one entry per simulated year.

    Allocation is constant through the investment phase. During the payout phase
    a tapering policy lowers the stock share by its rate for every payout year
    after the first, floored at 0.
    """
    taper = config.tapering_policy.rate_pct
    path: list[tuple[float, float]] = []
    for index in range(config.total_years):
        if index < config.investment_years or config.tapering_policy is TaperingPolicy.NONE:
            stock_pct = config.initial_stock_allocation_pct
        else:
            if config.investment_years > 0:
                base_pct = path[config.investment_years - 1][0]
            else:
                base_pct = config.initial_stock_allocation_pct
            payout_year_index = index - config.investment_years
            stock_pct = max(0.0, base_pct - payout_year_index * taper)
        path.append((stock_pct, 100 - stock_pct))
    return path
