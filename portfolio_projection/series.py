"""Year-indexed output series of a projection run."""

import math
from dataclasses import dataclass, field

START_LABEL = "start"

SERIES_KEYS: tuple[str, ...] = (
    "principal",
    "gross_return",
    "cost_drag",
    "savings_contribution",
    "net_event_amount",
    "net_withdrawal",
    "withdrawal_tax",
    "event_tax",
    "bond_tax",
    "realized_bond_tax",
    "event_tax_paid",
    "bond_tax_paid",
    "stock_pct",
    "bond_pct",
    "invested_capital_balance",
    "untaxed_bond_return_pool",
    "end_value",
)

# Series holding tax amounts (accrued or settled)
TAX_KEYS: tuple[str, ...] = (
    "withdrawal_tax",
    "event_tax",
    "bond_tax",
    "realized_bond_tax",
    "event_tax_paid",
    "bond_tax_paid",
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer; halves round up (-2.5 -> -2, 2.5 -> 3)."""
    return math.floor(value + 0.5)


@dataclass
class OutputSeries:
    """Parallel lists, one element per label ("start", then one per year)."""

    labels: list[str] = field(default_factory=list)
    values: dict[str, list[int]] = field(
        default_factory=lambda: {key: [] for key in SERIES_KEYS}
    )

    def append_row(self, label: str, **row: float) -> None:
        """Append one rounded row. Keys not given are emitted as 0."""
        unknown = set(row) - set(SERIES_KEYS)
        if unknown:
            raise KeyError(f"Unknown series: {', '.join(sorted(unknown))}")
        self.labels.append(label)
        for key in SERIES_KEYS:
            self.values[key].append(round_half_up(row.get(key, 0.0)))

    def __getitem__(self, key: str) -> list[int]:
        return self.values[key]

    def __len__(self) -> int:
        return len(self.labels)

    def year_rows(self) -> list[dict]:
        """Rows after the "start" row, as {"label": ..., <series>: ...} dicts."""
        return [
            {"label": label, **{key: self.values[key][i] for key in SERIES_KEYS}}
            for i, label in enumerate(self.labels)
            if i > 0
        ]

    def as_dict(self) -> dict[str, list]:
        return {"labels": list(self.labels), **{k: list(v) for k, v in self.values.items()}}
