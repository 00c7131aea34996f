"""Core projection engine."""

from dataclasses import dataclass, field

from portfolio_projection.allocation import compute_allocation_path
from portfolio_projection.cashflow import resolve_year
from portfolio_projection.params import SimulationConfig
from portfolio_projection.series import START_LABEL, OutputSeries, round_half_up
from portfolio_projection.tax import TaxPolicy, WithdrawalTax


@dataclass
class TaxAmounts:
    """Deferred liabilities: event/dividend tax and bond tax."""

    event_tax: float = 0.0
    bond_tax: float = 0.0

    @property
    def total(self) -> float:
        return self.event_tax + self.bond_tax


@dataclass
class DeferredTaxLedger:
    """Two-slot ledger: tax accrued in year Y becomes due at the start of Y+1."""

    due: TaxAmounts = field(default_factory=TaxAmounts)
    accruing: TaxAmounts = field(default_factory=TaxAmounts)

    def accrue(self, event_tax: float = 0.0, bond_tax: float = 0.0) -> None:
        self.accruing.event_tax += event_tax
        self.accruing.bond_tax += bond_tax

    def settle(self) -> TaxAmounts:
        """Swap last year's accruals into the due slot and pay them out."""
        self.due, self.accruing = self.accruing, TaxAmounts()
        paid, self.due = self.due, TaxAmounts()
        return paid

    @property
    def outstanding(self) -> TaxAmounts:
        return TaxAmounts(self.accruing.event_tax, self.accruing.bond_tax)


@dataclass
class ProjectionResult:
    """Rounded output series plus the unrounded end-of-run state."""

    series: OutputSeries
    final_value: float
    final_tax_free_capital: float
    untaxed_bond_return_pool: float
    outstanding_event_tax: float
    outstanding_bond_tax: float


def _calc_growth(
    portfolio_value: float,
    stock_pct: float,
    stock_return: float,
    bond_return: float,
    cost_rate: float,
) -> tuple[float, float, float]:
    """Returns (gross_stock_return, gross_bond_return, cost_drag) for one year.

    Nothing accrues on a non-positive portfolio.
    """
    if portfolio_value <= 0:
        return 0.0, 0.0, 0.0
    stock_value = portfolio_value * stock_pct / 100
    bond_value = portfolio_value - stock_value
    cost_drag = stock_value * cost_rate + bond_value * cost_rate
    return stock_value * stock_return, bond_value * bond_return, cost_drag


def _emitted_split(stock_pct: float) -> tuple[int, int]:
    """Rounded (stock, bond) pair that still sums to 100."""
    stock = round_half_up(stock_pct)
    return stock, 100 - stock


def simulate_projection(config: SimulationConfig) -> ProjectionResult:
    """Project the portfolio year by year.

    Pure function of config: no validation, no I/O, no shared state. Portfolio
    value and tax-free capital may turn negative, which marks an unsustainable
    plan rather than an error.
    """
    allocation_path = compute_allocation_path(config)
    policy = TaxPolicy.from_config(config)

    stock_return = config.stock_return_rate / 100
    bond_return = config.bond_return_rate / 100
    shielding_rate = config.shielding_rate / 100
    cost_rate = (config.cpi_rate + config.advisory_fee_rate) / 100
    desired_net = config.desired_net_payout

    portfolio_value = config.starting_portfolio_value
    tax_free_capital = config.invested_capital
    untaxed_pool = 0.0
    ledger = DeferredTaxLedger()

    series = OutputSeries()
    start_stock, start_bond = _emitted_split(config.initial_stock_allocation_pct)
    series.append_row(
        START_LABEL,
        principal=portfolio_value,
        stock_pct=start_stock,
        bond_pct=start_bond,
        invested_capital_balance=tax_free_capital,
        end_value=portfolio_value,
    )

    for index, (stock_pct, _) in enumerate(allocation_path):
        year = config.calendar_year(index)
        start_of_year_value = portfolio_value

        # 1. Tax deferred from last year's withdrawals
        paid = ledger.settle()
        portfolio_value -= paid.total

        # 2. Shielding growth of the tax-free basis
        tax_free_capital *= 1 + shielding_rate

        # 3. Inflows
        flows = resolve_year(config.events, year)
        savings = config.annual_savings if index < config.investment_years else 0.0
        portfolio_value += savings + flows.inflow
        tax_free_capital += savings + flows.invested_capital_eligible_inflow

        # 4. Growth and running bond tax
        gross_stock, gross_bond, cost_drag = _calc_growth(
            portfolio_value, stock_pct, stock_return, bond_return, cost_rate,
        )
        bond_tax_now, to_pool = policy.running_bond_tax(gross_bond)
        untaxed_pool += to_pool
        portfolio_value += gross_stock + gross_bond - cost_drag - bond_tax_now

        # 5-6. Ordinary payout, then event withdrawal
        payout = WithdrawalTax()
        if config.is_payout_year(index) and desired_net > 0:
            payout = policy.ordinary_payout(
                desired_net, stock_pct, tax_free_capital, untaxed_pool, portfolio_value,
            )
            portfolio_value -= payout.cash_withdrawal
            tax_free_capital -= payout.from_tax_free
            untaxed_pool -= payout.realized_pool
            ledger.accrue(event_tax=payout.dividend_tax, bond_tax=payout.bond_tax)

        event = WithdrawalTax()
        if flows.outflow_magnitude > 0:
            event = policy.event_withdrawal(
                flows.outflow_magnitude, stock_pct, tax_free_capital, untaxed_pool, portfolio_value,
            )
            portfolio_value -= event.cash_withdrawal
            tax_free_capital -= event.from_tax_free
            untaxed_pool -= event.realized_pool
            ledger.accrue(event_tax=event.dividend_tax, bond_tax=event.bond_tax)

        # 7. Emit
        row_stock, row_bond = _emitted_split(stock_pct)
        series.append_row(
            str(year),
            principal=start_of_year_value,
            gross_return=gross_stock + gross_bond,
            cost_drag=cost_drag,
            savings_contribution=savings,
            net_event_amount=flows.net_amount,
            net_withdrawal=payout.cash_withdrawal,
            withdrawal_tax=payout.dividend_tax,
            event_tax=event.dividend_tax,
            bond_tax=bond_tax_now,
            realized_bond_tax=payout.bond_tax + event.bond_tax,
            event_tax_paid=paid.event_tax,
            bond_tax_paid=paid.bond_tax,
            stock_pct=row_stock,
            bond_pct=row_bond,
            invested_capital_balance=tax_free_capital,
            untaxed_bond_return_pool=untaxed_pool,
            end_value=portfolio_value,
        )

    outstanding = ledger.outstanding
    return ProjectionResult(
        series=series,
        final_value=portfolio_value,
        final_tax_free_capital=tax_free_capital,
        untaxed_bond_return_pool=untaxed_pool,
        outstanding_event_tax=outstanding.event_tax,
        outstanding_bond_tax=outstanding.bond_tax,
    )
