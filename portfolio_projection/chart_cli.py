"""CLI entry point for chart generation."""

import sys
from pathlib import Path

from portfolio_projection.charts import plot_allocation, plot_invested_capital, plot_projection
from portfolio_projection.config import parse_args
from portfolio_projection.params import TaperingPolicy
from portfolio_projection.simulation import simulate_projection


def _add_args(parser):
    parser.add_argument(
        "--output", type=Path, default=Path("reports/charts"),
        help="Output directory (default: reports/charts)",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="Output file name suffix (e.g. base → projection-base.png)",
    )
    parser.add_argument(
        "--allocation", action="store_true",
        help="Always draw the allocation chart (drawn by default only when tapering)",
    )


def main():
    config, args = parse_args("Portfolio projection charts", _add_args)

    print(f"Projecting {config.total_years} years...", file=sys.stderr)
    result = simulate_projection(config)

    path = plot_projection(result, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)

    if args.allocation or config.tapering_policy is not TaperingPolicy.NONE:
        path = plot_allocation(result, args.output, name=args.name)
        print(f"  → {path}", file=sys.stderr)

    path = plot_invested_capital(result, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)

    print("Done", file=sys.stderr)


if __name__ == "__main__":
    main()
