"""CLI entry point for a single projection with text report."""

import sys
from pathlib import Path

from portfolio_projection.config import parse_args
from portfolio_projection.goal_seek import find_minimum_annual_savings
from portfolio_projection.report import fmt_amount, render_report
from portfolio_projection.scenarios import run_scenarios
from portfolio_projection.simulation import simulate_projection


def _add_args(parser):
    parser.add_argument(
        "--output", type=Path, default=None,
        help="Write the report to this file instead of stdout",
    )
    parser.add_argument(
        "--summary-only", action="store_true",
        help="Omit the yearly table",
    )
    parser.add_argument(
        "--goal-seek", action="store_true",
        help="Find the minimal annual savings that keeps the final value non-negative",
    )
    parser.add_argument(
        "--scenarios", action="store_true",
        help="Also compare low / standard / high return scenarios",
    )


def _print_goal_seek(config):
    print("Searching minimal annual savings...", file=sys.stderr)
    gs = find_minimum_annual_savings(config)
    print()
    print("Goal-seek")
    print("-" * 40)
    if not gs.feasible:
        print("  No savings amount within the search ceiling keeps the plan solvent")
    elif gs.annual_savings == 0:
        print("  The plan is solvent without savings")
    else:
        print(f"  Minimal annual savings: {fmt_amount(gs.annual_savings)}")
        print(f"  Final value at that level: {fmt_amount(gs.terminal_value)}")


def _print_scenarios(config):
    results = run_scenarios(config)
    print()
    print("Scenarios")
    print("-" * 40)
    for name, result in results.items():
        print(f"  {name:<12}{fmt_amount(result.final_value):>20}")


def main():
    """Run one projection and print the text report."""
    config, args = parse_args("Portfolio projection", _add_args)

    result = simulate_projection(config)
    text = render_report(config, result, yearly=not args.summary_only)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text, encoding="utf-8")
        print(f"  → {args.output}", file=sys.stderr)
    else:
        print(text, end="")

    if args.goal_seek:
        _print_goal_seek(config)
    if args.scenarios:
        _print_scenarios(config)


if __name__ == "__main__":
    main()
