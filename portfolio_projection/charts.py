"""Chart generation for projection results."""

from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from portfolio_projection.simulation import ProjectionResult

CHART_COLORS = {
    "principal": "#4A6D8C",
    "gross_return": "#88CCEE",
    "savings_contribution": "#3388CC",
    "net_event_amount": "#CC0000",
    "net_withdrawal": "#005599",
    "withdrawal_tax": "#CC0000",
    "event_tax": "#FFD700",
    "bond_tax": "#CC0000",
    "realized_bond_tax": "#E07B39",
    "stock_pct": "#66CCDD",
    "bond_pct": "#A9BCCD",
    "invested_capital_balance": "#3388CC",
}

# (series key, legend label, sign applied when stacking)
PROJECTION_DATASETS: tuple[tuple[str, str, int], ...] = (
    ("gross_return", "Return", 1),
    ("savings_contribution", "Annual savings", 1),
    ("principal", "Principal", 1),
    ("net_event_amount", "Events", 1),
    ("net_withdrawal", "Net payout", -1),
    ("withdrawal_tax", "Payout tax", -1),
    ("event_tax", "Event tax", -1),
    ("bond_tax", "Running bond tax", -1),
    ("realized_bond_tax", "Realized bond tax", -1),
)


def _format_millions_axis(ax: plt.Axes):
    """Y axis ticks in millions."""
    ax.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"{x / 1_000_000:,.1f}M" if x != 0 else "0")
    )


def _save(fig, output_path: Path, stem: str, name: str) -> Path:
    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{stem}{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


def plot_projection(result: ProjectionResult, output_path: Path, name: str = "") -> Path:
    """Stacked bar chart of principal, returns and flows per year.

    Inflows stack above zero; payouts and taxes stack below. Positive and
    negative values of the signed event series go to the matching side.

    Returns:
        Path to the generated PNG file.
    """
    series = result.series
    labels = series.labels[1:]
    x = list(range(len(labels)))

    fig, ax = plt.subplots(figsize=(14, 8))
    pos_bottom = [0.0] * len(labels)
    neg_bottom = [0.0] * len(labels)
    for key, label, sign in PROJECTION_DATASETS:
        values = [sign * v for v in series[key][1:]]
        if not any(values):
            continue
        bottoms = [pos_bottom[i] if v >= 0 else neg_bottom[i] for i, v in enumerate(values)]
        ax.bar(x, values, bottom=bottoms, label=label, color=CHART_COLORS[key], width=0.8)
        for i, v in enumerate(values):
            if v >= 0:
                pos_bottom[i] += v
            else:
                neg_bottom[i] += v

    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_xlabel("Year")
    ax.set_ylabel("Amount")
    ax.set_title("Portfolio projection")
    ax.axhline(0, color="black", linewidth=1.0)
    ax.grid(True, axis="y", alpha=0.3)
    ax.legend(loc="upper left", fontsize=9)
    _format_millions_axis(ax)
    return _save(fig, output_path, "projection", name)


def plot_allocation(result: ProjectionResult, output_path: Path, name: str = "") -> Path:
    """Stacked area chart of the yearly stock/bond split."""
    series = result.series
    labels = series.labels[1:]
    x = list(range(len(labels)))

    fig, ax = plt.subplots(figsize=(14, 6))
    ax.stackplot(
        x,
        series["stock_pct"][1:],
        series["bond_pct"][1:],
        labels=["Stocks", "Bonds"],
        colors=[CHART_COLORS["stock_pct"], CHART_COLORS["bond_pct"]],
        alpha=0.85,
    )
    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_ylim(0, 100)
    ax.yaxis.set_major_formatter(ticker.FuncFormatter(lambda v, _: f"{v:.0f}%"))
    ax.set_xlabel("Year")
    ax.set_title("Allocation")
    ax.legend(loc="upper right")
    ax.grid(True, alpha=0.3)
    return _save(fig, output_path, "allocation", name)


def plot_invested_capital(result: ProjectionResult, output_path: Path, name: str = "") -> Path:
    """Bar chart of the remaining tax-free invested capital."""
    series = result.series
    labels = series.labels
    x = list(range(len(labels)))

    fig, ax = plt.subplots(figsize=(14, 6))
    ax.bar(
        x, series["invested_capital_balance"],
        color=CHART_COLORS["invested_capital_balance"], label="Invested capital",
    )
    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_xlabel("Year")
    ax.set_title("Invested capital (tax-free)")
    ax.axhline(0, color="black", linewidth=1.0)
    ax.grid(True, axis="y", alpha=0.3)
    ax.legend(loc="upper left")
    _format_millions_axis(ax)
    return _save(fig, output_path, "invested_capital", name)
