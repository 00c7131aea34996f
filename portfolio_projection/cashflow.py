"""Resolution of scheduled cash-flow events into a single year's flows."""

from dataclasses import dataclass
from typing import Iterable

from portfolio_projection.params import CashFlowEvent


@dataclass(frozen=True)
class YearCashFlow:
    """Event flows active in one calendar year."""

    net_amount: float = 0.0
    inflow: float = 0.0
    outflow_magnitude: float = 0.0
    invested_capital_eligible_inflow: float = 0.0


def resolve_year(events: Iterable[CashFlowEvent], year: int) -> YearCashFlow:
    """Sum the events whose inclusive [start_year, end_year] range contains year."""
    net_amount = 0.0
    inflow = 0.0
    outflow = 0.0
    eligible = 0.0
    for event in events:
        if not event.is_active(year):
            continue
        net_amount += event.amount
        if event.amount > 0:
            inflow += event.amount
            if event.affects_invested_capital:
                eligible += event.amount
        elif event.amount < 0:
            outflow += -event.amount
    return YearCashFlow(
        net_amount=net_amount,
        inflow=inflow,
        outflow_magnitude=outflow,
        invested_capital_eligible_inflow=eligible,
    )
