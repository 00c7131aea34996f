"""Plain-text projection report.

Sums and labels the output series for terminal display or clipboard export.
"""

from portfolio_projection.params import SimulationConfig
from portfolio_projection.simulation import ProjectionResult

# ---------------------------------------------------------------------------
# Format helpers
# ---------------------------------------------------------------------------

def fmt_amount(v: float) -> str:
    """1234567 → "1,234,567" """
    return f"{v:,.0f}"


def fmt_pct(v: float) -> str:
    """37.8 → "37.8%" (input already in percent)"""
    return f"{v:.1f}%"


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

_TOTAL_KEYS = (
    "gross_return",
    "cost_drag",
    "savings_contribution",
    "net_event_amount",
    "net_withdrawal",
    "withdrawal_tax",
    "event_tax",
    "bond_tax",
    "realized_bond_tax",
)


def summarize(result: ProjectionResult) -> dict:
    """Totals over all simulated years plus end-of-run figures."""
    series = result.series
    totals = {key: sum(series[key][1:]) for key in _TOTAL_KEYS}
    totals["total_tax"] = (
        totals["withdrawal_tax"] + totals["event_tax"]
        + totals["bond_tax"] + totals["realized_bond_tax"]
    )
    totals["start_value"] = series["principal"][0]
    totals["final_value"] = result.final_value
    totals["final_tax_free_capital"] = result.final_tax_free_capital
    totals["outstanding_tax"] = result.outstanding_event_tax + result.outstanding_bond_tax
    totals["untaxed_bond_return_pool"] = result.untaxed_bond_return_pool
    exhausted = [
        label for label, value in zip(series.labels[1:], series["end_value"][1:]) if value < 0
    ]
    totals["first_exhausted_year"] = exhausted[0] if exhausted else None
    totals["sustainable"] = not exhausted
    return totals


def _header_lines(config: SimulationConfig) -> list[str]:
    last_year = config.calendar_year(config.total_years - 1) if config.total_years else config.start_year
    lines = [
        "=" * 78,
        f"Portfolio projection {config.start_year}-{last_year}"
        f" ({config.investment_years} investment + {config.payout_years} payout years)",
        f"  Start value: {fmt_amount(config.starting_portfolio_value)}"
        f" / invested capital: {fmt_amount(config.invested_capital)}",
        f"  Allocation: {config.initial_stock_allocation_pct:g}% stocks"
        f" (tapering: {config.tapering_policy.name.lower()})",
        f"  Returns: stocks {fmt_pct(config.stock_return_rate)}, bonds {fmt_pct(config.bond_return_rate)},"
        f" shielding {fmt_pct(config.shielding_rate)}",
    ]
    if config.cpi_rate or config.advisory_fee_rate:
        lines.append(
            f"  Deductions: CPI {fmt_pct(config.cpi_rate)}, advisory fee {fmt_pct(config.advisory_fee_rate)}"
        )
    if config.tax_calculation_enabled:
        deferral = "deferred" if config.deferred_bond_tax_enabled else "annual"
        lines.append(
            f"  Tax: {config.investor_type.value}, stocks {fmt_pct(config.stock_tax_rate)},"
            f" bonds {fmt_pct(config.bond_tax_rate)} ({deferral})"
        )
    else:
        lines.append("  Tax: disabled")
    if config.annual_savings:
        lines.append(f"  Annual savings: {fmt_amount(config.annual_savings)}")
    if config.desired_net_payout:
        lines.append(
            f"  Desired net payout: {fmt_amount(config.desired_net_payout)}"
            f" (consumption {fmt_amount(config.desired_annual_consumption_payout)}"
            f" + wealth tax {fmt_amount(config.desired_annual_wealth_tax_payout)})"
        )
    for event in config.events:
        years = (
            str(event.start_year) if event.start_year == event.end_year
            else f"{event.start_year}-{event.end_year}"
        )
        lines.append(f"  Event: {event.label or event.id} {fmt_amount(event.amount)} ({years})")
    lines.append("=" * 78)
    return lines


def _summary_lines(summary: dict) -> list[str]:
    rows = [
        ("Savings", summary["savings_contribution"]),
        ("Returns (gross)", summary["gross_return"]),
        ("CPI and fees", -summary["cost_drag"]),
        ("Events (net)", summary["net_event_amount"]),
        ("Net payouts", -summary["net_withdrawal"]),
        ("Payout tax", -summary["withdrawal_tax"]),
        ("Event tax", -summary["event_tax"]),
        ("Running bond tax", -summary["bond_tax"]),
        ("Realized bond tax", -summary["realized_bond_tax"]),
    ]
    lines = ["", "Totals", "-" * 40]
    lines += [f"{label:<20}{fmt_amount(value):>20}" for label, value in rows]
    lines.append("-" * 40)
    lines.append(f"{'Final value':<20}{fmt_amount(summary['final_value']):>20}")
    lines.append(f"{'Invested capital':<20}{fmt_amount(summary['final_tax_free_capital']):>20}")
    if summary["outstanding_tax"]:
        lines.append(f"{'Tax due next year':<20}{fmt_amount(summary['outstanding_tax']):>20}")
    if summary["untaxed_bond_return_pool"]:
        lines.append(f"{'Untaxed bond return':<20}{fmt_amount(summary['untaxed_bond_return_pool']):>20}")
    if not summary["sustainable"]:
        lines.append("")
        lines.append(
            f"WARNING: the portfolio is exhausted in {summary['first_exhausted_year']}"
            " before the end of the horizon"
        )
    return lines


def _yearly_lines(result: ProjectionResult) -> list[str]:
    header = (
        f"{'Year':<6}{'Principal':>14}{'Return':>12}{'Savings':>12}{'Events':>12}"
        f"{'Payout':>12}{'Tax':>11}{'Stocks':>8}{'Inv.cap.':>14}"
    )
    lines = ["", "Yearly projection", "-" * len(header), header, "-" * len(header)]
    for row in result.series.year_rows():
        tax = (
            row["withdrawal_tax"] + row["event_tax"] + row["bond_tax"] + row["realized_bond_tax"]
        )
        lines.append(
            f"{row['label']:<6}"
            f"{fmt_amount(row['principal']):>14}"
            f"{fmt_amount(row['gross_return']):>12}"
            f"{fmt_amount(row['savings_contribution']):>12}"
            f"{fmt_amount(row['net_event_amount']):>12}"
            f"{fmt_amount(row['net_withdrawal']):>12}"
            f"{fmt_amount(tax):>11}"
            f"{row['stock_pct']:>7}%"
            f"{fmt_amount(row['invested_capital_balance']):>14}"
        )
    lines.append("-" * len(header))
    return lines


def render_report(
    config: SimulationConfig, result: ProjectionResult, *, yearly: bool = True,
) -> str:
    """Render header, totals and (optionally) the yearly table as text."""
    lines = _header_lines(config) + _summary_lines(summarize(result))
    if yearly:
        lines += _yearly_lines(result)
    return "\n".join(lines) + "\n"
