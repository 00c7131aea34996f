"""Withdrawal and bond-return taxation rules."""

from dataclasses import dataclass

from portfolio_projection.apportion import take_up_to
from portfolio_projection.params import InvestorType, SimulationConfig


@dataclass(frozen=True)
class WithdrawalTax:
    """Outcome of one withdrawal.

    cash_withdrawal leaves the portfolio in the withdrawal year. dividend_tax and
    bond_tax are liabilities settled at the start of the following year. For an
    annual payout gross_withdrawal is the cash plus its grossed-up dividend tax;
    for an event it is the event amount itself.
    """

    gross_withdrawal: float = 0.0
    cash_withdrawal: float = 0.0
    from_tax_free: float = 0.0
    dividend_tax: float = 0.0
    bond_tax: float = 0.0
    realized_pool: float = 0.0


@dataclass(frozen=True)
class TaxPolicy:
    """Tax rules for one investor type. Rates are fractions (0.378 = 37.8%)."""

    investor_type: InvestorType = InvestorType.PRIVATE
    stock_tax_rate: float = 0.378
    bond_tax_rate: float = 0.22
    deferred_bond_tax: bool = False
    enabled: bool = True

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "TaxPolicy":
        return cls(
            investor_type=config.investor_type,
            stock_tax_rate=config.stock_tax_rate / 100,
            bond_tax_rate=config.bond_tax_rate / 100,
            deferred_bond_tax=config.deferred_bond_tax_enabled,
            enabled=config.tax_calculation_enabled,
        )

    def running_bond_tax(self, gross_bond_return: float) -> tuple[float, float]:
        """Tax on this year's bond return. Returns (tax_now, untaxed_to_pool)."""
        if not self.enabled:
            return 0.0, 0.0
        if self.deferred_bond_tax:
            return 0.0, gross_bond_return
        return gross_bond_return * self.bond_tax_rate, 0.0

    def realize_bond_pool(
        self, pool: float, bond_gross_amount: float, bond_value_before: float,
    ) -> tuple[float, float]:
        """Realize the share of the untaxed pool that a bond withdrawal carries out.

        Returns (realized_untaxed_return, bond_tax).
        """
        if not self.enabled or pool <= 0 or bond_gross_amount <= 0:
            return 0.0, 0.0
        fraction = bond_gross_amount / bond_value_before if bond_value_before > 0 else 0.0
        realized = take_up_to(pool * fraction, pool)
        return realized, realized * self.bond_tax_rate

    def basis_eligible(self, amount: float, stock_share: float) -> float:
        """Part of a withdrawal that may draw on the tax-free capital basis."""
        if self.investor_type is InvestorType.CORPORATE:
            return amount
        return amount * stock_share

    def _gross_up_tax(self, taxable_net: float) -> float:
        """Dividend tax on the gross amount that nets taxable_net after tax."""
        if taxable_net <= 0:
            return 0.0
        keep = 1 - self.stock_tax_rate
        if keep <= 0:
            return 0.0
        return taxable_net / keep - taxable_net

    def ordinary_payout(
        self,
        desired_net: float,
        stock_pct: float,
        tax_free_capital: float,
        pool: float,
        portfolio_value: float,
    ) -> WithdrawalTax:
        """Annual payout grossed up so the investor nets desired_net."""
        stock_share = stock_pct / 100
        bond_share = 1 - stock_share
        eligible = self.basis_eligible(desired_net, stock_share)
        from_tax_free = take_up_to(eligible, tax_free_capital)
        if not self.enabled:
            return WithdrawalTax(
                gross_withdrawal=desired_net,
                cash_withdrawal=desired_net,
                from_tax_free=from_tax_free,
            )

        dividend_tax = self._gross_up_tax(eligible - from_tax_free)
        realized, bond_tax = self.realize_bond_pool(
            pool, desired_net * bond_share, portfolio_value * bond_share,
        )
        return WithdrawalTax(
            gross_withdrawal=desired_net + dividend_tax,
            cash_withdrawal=desired_net,
            from_tax_free=from_tax_free,
            dividend_tax=dividend_tax,
            bond_tax=bond_tax,
            realized_pool=realized,
        )

    def event_withdrawal(
        self,
        amount: float,
        stock_pct: float,
        tax_free_capital: float,
        pool: float,
        portfolio_value_before: float,
    ) -> WithdrawalTax:
        """Event outflow of a fixed gross amount; tax is not grossed up."""
        stock_share = stock_pct / 100
        bond_share = 1 - stock_share
        eligible = self.basis_eligible(amount, stock_share)
        from_tax_free = take_up_to(eligible, tax_free_capital)
        if not self.enabled:
            return WithdrawalTax(
                gross_withdrawal=amount,
                cash_withdrawal=amount,
                from_tax_free=from_tax_free,
            )

        dividend_tax = (eligible - from_tax_free) * self.stock_tax_rate
        realized, bond_tax = self.realize_bond_pool(
            pool, amount * bond_share, portfolio_value_before * bond_share,
        )
        return WithdrawalTax(
            gross_withdrawal=amount,
            cash_withdrawal=amount,
            from_tax_free=from_tax_free,
            dividend_tax=dividend_tax,
            bond_tax=bond_tax,
            realized_pool=realized,
        )
