"""TOML config loader with CLI > config > default resolution."""

import argparse
import sys
import tomllib
from pathlib import Path
from typing import Callable

from portfolio_projection.params import (
    CashFlowEvent,
    InvestorType,
    SimulationConfig,
    TaperingPolicy,
    current_year,
)

DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "initial_portfolio_value": 5_000_000.0,
    "pension_portfolio_value": 0.0,
    "additional_liquidity_value": 0.0,
    "invested_capital": 5_000_000.0,
    "investment_years": 10,
    "payout_years": 10,
    "start_year": None,  # None → current year
    "initial_stock_allocation_pct": 65.0,
    "tapering_policy": "none",
    "stock_return_rate": 8.0,
    "bond_return_rate": 5.0,
    "shielding_rate": 3.9,
    "stock_tax_rate": 37.8,
    "bond_tax_rate": 22.0,
    "cpi_rate": 0.0,
    "advisory_fee_rate": 0.0,
    "annual_savings": 0.0,
    "desired_annual_consumption_payout": 800_000.0,
    "desired_annual_wealth_tax_payout": 200_000.0,
    "investor_type": "private",
    "tax_calculation_enabled": True,
    "deferred_bond_tax_enabled": False,
    "events": "",
}

# Short TOML keys accepted alongside the canonical names
_ALIASES = {
    "portfolio": "initial_portfolio_value",
    "pension": "pension_portfolio_value",
    "liquidity": "additional_liquidity_value",
    "stock_allocation": "initial_stock_allocation_pct",
    "tapering": "tapering_policy",
    "savings": "annual_savings",
    "consumption_payout": "desired_annual_consumption_payout",
    "wealth_tax_payout": "desired_annual_wealth_tax_payout",
    "tax": "tax_calculation_enabled",
    "deferred_bond_tax": "deferred_bond_tax_enabled",
}


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"Failed to read config file: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    for alias, key in _ALIASES.items():
        if alias in raw:
            v = raw.pop(alias)
            raw.setdefault(key, v)
    # Normalize tapering: TOML int/bool → policy string
    if "tapering_policy" in raw:
        v = raw["tapering_policy"]
        if v is False:
            raw["tapering_policy"] = "none"
        elif v is True:
            raise ValueError("tapering = true is ambiguous (expected false, none, 5%, 10% or 15%)")
        elif isinstance(v, (int, float)):
            raw["tapering_policy"] = f"{v:g}%"
    # Normalize events: [[events]] tables → CashFlowEvent list
    if "events" in raw and isinstance(raw["events"], list):
        raw["events"] = [parse_event_table(t, i) for i, t in enumerate(raw["events"], start=1)]
    return raw


def parse_event_table(table: dict, index: int = 1) -> CashFlowEvent:
    """Build a CashFlowEvent from a TOML [[events]] table."""
    try:
        start = int(table["start_year"])
        amount = float(table["amount"])
    except KeyError as e:
        raise ValueError(f"Event #{index} is missing {e.args[0]!r}") from None
    return CashFlowEvent(
        id=str(table.get("id", f"event-{index}")),
        label=str(table.get("label", "")),
        amount=amount,
        start_year=start,
        end_year=int(table.get("end_year", start)),
        affects_invested_capital=bool(table.get("affects_invested_capital", True)),
    )


def parse_events(s: str) -> list[CashFlowEvent]:
    """Parse "label:amount:start[-end][:noic],..." into events.

    "noic" marks an inflow that does not add to the invested capital.
    Example: "Inheritance:2000000:2030,Cabin:-1500000:2034-2035".
    """
    if not s or not s.strip():
        return []
    events: list[CashFlowEvent] = []
    for index, item in enumerate(s.split(","), start=1):
        item = item.strip()
        if not item:
            continue
        parts = item.split(":")
        if len(parts) < 3:
            raise ValueError(f"Invalid event {item!r} (expected label:amount:start[-end])")
        label, amount, years = parts[0].strip(), float(parts[1]), parts[2].strip()
        if "-" in years:
            start_str, end_str = years.split("-", 1)
            start, end = int(start_str), int(end_str)
        else:
            start = end = int(years)
        flag = parts[3].strip().lower() if len(parts) >= 4 else ""
        events.append(
            CashFlowEvent(
                id=f"event-{index}",
                label=label,
                amount=amount,
                start_year=start,
                end_year=end,
                affects_invested_capital=flag != "noic",
            )
        )
    return events


def _parse_bool(v) -> bool:
    if isinstance(v, bool):
        return v
    s = str(v).strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean: {v!r}")


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared simulation flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="Config file path (default: config.toml)")
    parser.add_argument("--initial-portfolio-value", type=float, default=None, help=f"Starting portfolio (default: {d['initial_portfolio_value']:,.0f})")
    parser.add_argument("--pension-portfolio-value", type=float, default=None, help="Pension portfolio added to the start value (default: 0)")
    parser.add_argument("--additional-liquidity-value", type=float, default=None, help="Extra liquidity added to the start value (default: 0)")
    parser.add_argument("--invested-capital", type=float, default=None, help=f"Tax-free invested capital (default: {d['invested_capital']:,.0f})")
    parser.add_argument("--investment-years", type=int, default=None, help=f"Years of saving (default: {d['investment_years']})")
    parser.add_argument("--payout-years", type=int, default=None, help=f"Years of payouts (default: {d['payout_years']})")
    parser.add_argument("--start-year", type=int, default=None, help="Calendar year of the first simulated year (default: current year)")
    parser.add_argument("--initial-stock-allocation-pct", type=float, default=None, help=f"Stock share in percent (default: {d['initial_stock_allocation_pct']:g})")
    parser.add_argument("--tapering-policy", type=str, default=None, help="Stock reduction per payout year: none, 5%%, 10%%, 15%% (default: none)")
    parser.add_argument("--stock-return-rate", type=float, default=None, help=f"Expected stock return %% (default: {d['stock_return_rate']})")
    parser.add_argument("--bond-return-rate", type=float, default=None, help=f"Expected bond return %% (default: {d['bond_return_rate']})")
    parser.add_argument("--shielding-rate", type=float, default=None, help=f"Shielding rate %% (default: {d['shielding_rate']})")
    parser.add_argument("--stock-tax-rate", type=float, default=None, help=f"Stock/dividend tax %% (default: {d['stock_tax_rate']})")
    parser.add_argument("--bond-tax-rate", type=float, default=None, help=f"Bond return tax %% (default: {d['bond_tax_rate']})")
    parser.add_argument("--cpi-rate", type=float, default=None, help="CPI deducted from returns %% (default: 0)")
    parser.add_argument("--advisory-fee-rate", type=float, default=None, help="Advisory fee deducted from returns %% (default: 0)")
    parser.add_argument("--annual-savings", type=float, default=None, help="Savings per investment year (default: 0)")
    parser.add_argument("--desired-annual-consumption-payout", type=float, default=None, help=f"Net consumption payout per payout year (default: {d['desired_annual_consumption_payout']:,.0f})")
    parser.add_argument("--desired-annual-wealth-tax-payout", type=float, default=None, help=f"Net wealth tax payout per payout year (default: {d['desired_annual_wealth_tax_payout']:,.0f})")
    parser.add_argument("--investor-type", type=str, default=None, help="private or corporate (default: private)")
    parser.add_argument("--no-tax", dest="tax_calculation_enabled", action="store_false", default=None, help="Disable all tax calculation")
    parser.add_argument("--deferred-bond-tax", dest="deferred_bond_tax_enabled", action="store_true", default=None, help="Defer bond return tax until withdrawal")
    parser.add_argument("--events", type=str, default=None, help="Cash-flow events: label:amount:start[-end][:noic], comma separated")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def build_config(r: dict) -> SimulationConfig:
    """Build SimulationConfig from resolved config dict. Enums are parsed here."""
    events = r["events"]
    if isinstance(events, str):
        events = parse_events(events)
    start_year = r["start_year"]
    return SimulationConfig(
        initial_portfolio_value=float(r["initial_portfolio_value"]),
        pension_portfolio_value=float(r["pension_portfolio_value"]),
        additional_liquidity_value=float(r["additional_liquidity_value"]),
        invested_capital=float(r["invested_capital"]),
        investment_years=int(r["investment_years"]),
        payout_years=int(r["payout_years"]),
        start_year=int(start_year) if start_year is not None else current_year(),
        initial_stock_allocation_pct=float(r["initial_stock_allocation_pct"]),
        tapering_policy=TaperingPolicy.parse(r["tapering_policy"]),
        stock_return_rate=float(r["stock_return_rate"]),
        bond_return_rate=float(r["bond_return_rate"]),
        shielding_rate=float(r["shielding_rate"]),
        stock_tax_rate=float(r["stock_tax_rate"]),
        bond_tax_rate=float(r["bond_tax_rate"]),
        cpi_rate=float(r["cpi_rate"]),
        advisory_fee_rate=float(r["advisory_fee_rate"]),
        annual_savings=float(r["annual_savings"]),
        desired_annual_consumption_payout=float(r["desired_annual_consumption_payout"]),
        desired_annual_wealth_tax_payout=float(r["desired_annual_wealth_tax_payout"]),
        investor_type=InvestorType.parse(r["investor_type"]),
        tax_calculation_enabled=_parse_bool(r["tax_calculation_enabled"]),
        deferred_bond_tax_enabled=_parse_bool(r["deferred_bond_tax_enabled"]),
        events=tuple(events),
    )


def validate_config(config: SimulationConfig) -> list[str]:
    """Validate a configuration before projecting. Returns list of error messages."""
    errors = []
    if config.investment_years < 0 or config.payout_years < 0:
        errors.append(
            f"Year counts must be non-negative (investment {config.investment_years},"
            f" payout {config.payout_years})"
        )
    if not 0 <= config.initial_stock_allocation_pct <= 100:
        errors.append(
            f"Stock allocation {config.initial_stock_allocation_pct:g}% is outside 0-100%"
        )
    for name in ("initial_portfolio_value", "pension_portfolio_value",
                 "additional_liquidity_value", "invested_capital"):
        if getattr(config, name) < 0:
            errors.append(f"{name} must be non-negative")
    if config.invested_capital > config.starting_portfolio_value:
        errors.append(
            f"Invested capital {config.invested_capital:,.0f} exceeds the starting"
            f" portfolio {config.starting_portfolio_value:,.0f}"
        )
    for event in config.events:
        if event.start_year > event.end_year:
            errors.append(
                f"Event {event.label or event.id}: start year {event.start_year}"
                f" is after end year {event.end_year}"
            )
    return errors


def parse_args(
    description: str,
    add_args_fn: "Callable[[argparse.ArgumentParser], None] | None" = None,
) -> tuple[SimulationConfig, argparse.Namespace]:
    """Parse CLI args, load config, resolve values and build the configuration.

    Returns (config, namespace). Invalid input ends the program via parser.error.
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args()
    try:
        file_config = load_config(args.config)
        config = build_config(resolve(args, file_config))
    except ValueError as e:
        parser.error(str(e))
    errors = validate_config(config)
    if errors:
        parser.error("\n  ".join(["invalid configuration:"] + errors))
    return config, args
