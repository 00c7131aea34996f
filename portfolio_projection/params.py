"""Simulation configuration and input enumerations."""

import datetime
from dataclasses import dataclass, field
from enum import Enum


class InvestorType(Enum):
    PRIVATE = "private"
    CORPORATE = "corporate"

    @classmethod
    def parse(cls, value: "str | InvestorType") -> "InvestorType":
        """Parse a free-form investor type ("Private", "corporate", ...)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown investor type: {value!r} (expected private or corporate)")


class TaperingPolicy(Enum):
    """Stock allocation reduction per payout year, in percentage points."""

    NONE = 0
    FIVE = 5
    TEN = 10
    FIFTEEN = 15

    @property
    def rate_pct(self) -> int:
        return self.value

    @classmethod
    def parse(cls, value: "str | int | TaperingPolicy | None") -> "TaperingPolicy":
        """Parse "none", "5%", "10", 15 ... into a policy."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.NONE
        key = str(value).strip().lower().rstrip("%").strip()
        if key in ("", "none", "0"):
            return cls.NONE
        try:
            pct = int(float(key))
        except ValueError:
            pct = None
        for member in cls:
            if member.value == pct:
                return member
        raise ValueError(f"Unknown tapering policy: {value!r} (expected none, 5%, 10% or 15%)")


@dataclass(frozen=True)
class CashFlowEvent:
    """One-off or recurring cash flow over an inclusive range of calendar years."""

    id: str
    label: str
    amount: float
    start_year: int
    end_year: int
    affects_invested_capital: bool = True

    def is_active(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year


def current_year() -> int:
    return datetime.date.today().year


@dataclass(frozen=True)
class SimulationConfig:

    # Starting portfolio (summed into the starting value)
    initial_portfolio_value: float = 5_000_000
    pension_portfolio_value: float = 0.0
    additional_liquidity_value: float = 0.0
    invested_capital: float = 5_000_000  # tax-free basis

    # Horizon
    investment_years: int = 10
    payout_years: int = 10
    start_year: int = field(default_factory=current_year)

    # Allocation
    initial_stock_allocation_pct: float = 65.0
    tapering_policy: TaperingPolicy = TaperingPolicy.NONE

    # Rates (percent per year)
    stock_return_rate: float = 8.0
    bond_return_rate: float = 5.0
    shielding_rate: float = 3.9
    stock_tax_rate: float = 37.8
    bond_tax_rate: float = 22.0
    cpi_rate: float = 0.0
    advisory_fee_rate: float = 0.0

    # Cash flows
    annual_savings: float = 0.0
    desired_annual_consumption_payout: float = 800_000
    desired_annual_wealth_tax_payout: float = 200_000
    events: tuple[CashFlowEvent, ...] = ()

    # Tax rules
    investor_type: InvestorType = InvestorType.PRIVATE
    tax_calculation_enabled: bool = True
    deferred_bond_tax_enabled: bool = False

    @property
    def starting_portfolio_value(self) -> float:
        return (
            self.initial_portfolio_value
            + self.pension_portfolio_value
            + self.additional_liquidity_value
        )

    @property
    def total_years(self) -> int:
        return self.investment_years + self.payout_years

    @property
    def desired_net_payout(self) -> float:
        return self.desired_annual_consumption_payout + self.desired_annual_wealth_tax_payout

    def is_payout_year(self, index: int) -> bool:
        return index >= self.investment_years

    def calendar_year(self, index: int) -> int:
        """Calendar year of simulated year index (0 = start_year)."""
        return self.start_year + index
