"""Command-line interface for the Solana portfolio breakdown."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace

from .config import AppConfig, load_config, validate_request
from .errors import FetchError, ValidationError
from .logging_setup import configure_logging
from .render import PlotlyPieChart, TextBreakdown
from .services import PortfolioService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FETCH_FAILED = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="sol-portfolio",
        description="Aggregate Solana holdings across addresses and chart them",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    submission = argparse.ArgumentParser(add_help=False)
    submission.add_argument(
        "--address",
        dest="addresses",
        action="append",
        default=None,
        help="Wallet address (repeatable, replaces configured addresses)",
    )
    submission.add_argument(
        "--include-unstaked",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Include the unstaked SOL balance (overrides config)",
    )
    submission.add_argument(
        "--include-staked",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Include delegated stake (overrides config)",
    )

    sub = parser.add_subparsers(dest="command")

    chart_parser = sub.add_parser(
        "chart", parents=[submission], help="Write the portfolio pie chart (HTML)"
    )
    chart_parser.add_argument(
        "--output", default=None, help="Output HTML path (overrides config)"
    )
    sub.add_parser(
        "summary", parents=[submission], help="Print the portfolio breakdown"
    )

    return parser


def apply_overrides(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Layer CLI flags on top of the loaded config."""
    portfolio = cfg.portfolio
    if args.addresses:
        addresses = tuple(a.strip() for a in args.addresses if a.strip())
        portfolio = replace(portfolio, addresses=addresses)
    if args.include_unstaked is not None:
        portfolio = replace(portfolio, include_unstaked=args.include_unstaked)
    if args.include_staked is not None:
        portfolio = replace(portfolio, include_staked=args.include_staked)

    chart = cfg.chart
    output = getattr(args, "output", None)
    if output:
        chart = replace(chart, output_path=output)

    return replace(cfg, portfolio=portfolio, chart=chart)


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command and return the exit code."""
    configure_logging(args.log_level)

    try:
        cfg = apply_overrides(load_config(args.config), args)
        validate_request(cfg)
    except FileNotFoundError as e:
        print(e, file=sys.stderr)
        return EXIT_INVALID
    except ValidationError as e:
        print("Cannot build portfolio:", file=sys.stderr)
        for error in e.errors:
            print(f"  - {error}", file=sys.stderr)
        return EXIT_INVALID

    sink = TextBreakdown() if args.command == "summary" else PlotlyPieChart(cfg.chart)
    service = PortfolioService(cfg, sink)

    try:
        result = await service.run()
    except FetchError as e:
        logger.error("Portfolio fetch failed: %s", e)
        return EXIT_FETCH_FAILED

    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    if args.command == "summary":
        print(result.rendered)
    else:
        print(f"Chart written to {result.rendered}")
    return EXIT_OK


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
