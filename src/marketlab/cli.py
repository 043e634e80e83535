#!/usr/bin/env python3
"""Command-line interface for the synthetic market dashboard engine."""

from __future__ import annotations

import argparse
import logging
import sys

from marketlab.exceptions import MarketLabError
from marketlab.types import CatalogConfig


def _load_config(args: argparse.Namespace) -> CatalogConfig:
    """Load the catalog from ``--config`` or fall back to the built-in one."""
    from marketlab.commands.load_catalog import load_catalog_config
    from marketlab.data.catalog import default_catalog_config

    if args.config:
        config = load_catalog_config(args.config)
    else:
        config = default_catalog_config()
    if args.seed is not None:
        config = config.model_copy(update={"random_seed": args.seed})
    return config


def _configure_logging(args: argparse.Namespace, config: CatalogConfig) -> None:
    level = args.log_level or config.log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_repository(args: argparse.Namespace):
    from marketlab.data.catalog import MarketRepository

    config = _load_config(args)
    _configure_logging(args, config)
    return MarketRepository.build(config)


def cmd_indices(args: argparse.Namespace) -> int:
    """Print the latest quote for every index."""
    repo = _build_repository(args)

    print(f"{'Index':<16} {'Value':>12} {'Change':>10} {'Change %':>9}")
    print("-" * 50)
    for name in repo.index_names():
        quote = repo.get_index_quote(name)
        print(
            f"{quote.name:<16} {quote.value:>12,.2f} "
            f"{quote.change:>+10.2f} {quote.change_percent:>+8.2f}%"
        )
    return 0


def cmd_chart(args: argparse.Namespace) -> int:
    """Summarise one index or stock over a trailing window."""
    from marketlab.analytics.indicators import (
        INDICATOR_METHODS,
        clamp_period,
        compute_indicator,
    )
    from marketlab.analytics.ranges import compute_change, filter_by_range
    from marketlab.types import IndicatorKind

    if args.name is None and args.stock is None:
        print("Error: Give an index name or --stock SYMBOL")
        return 1

    repo = _build_repository(args)
    if args.stock is not None:
        instrument = repo.get_instrument(args.stock)
        title = f"{instrument.symbol} - {instrument.name}"
        all_points = repo.get_stock_price_points(instrument.symbol)
    else:
        title = args.name
        all_points = repo.get_price_points(args.name)
    points = filter_by_range(all_points, args.range)
    change = compute_change(points)

    print("=" * 60)
    print(f"{title} ({args.range})")
    print("=" * 60)
    print(f"Points:    {len(points)}")
    if points:
        print(f"From:      {points[0].date} @ {points[0].price:,.2f}")
        print(f"To:        {points[-1].date} @ {points[-1].price:,.2f}")
    print(f"Change:    {change.absolute:+,.2f} ({change.percent_display}%)")

    for kind, requested in ((IndicatorKind.SMA, args.sma), (IndicatorKind.EMA, args.ema)):
        if requested is None:
            continue
        method = INDICATOR_METHODS[kind]
        period = clamp_period(method, requested)
        values = compute_indicator(kind, points, period)
        latest = values[-1] if values else None
        shown = f"{latest:,.2f}" if latest is not None else "N/A"
        print(f"{method.name} ({period}): {shown}")

    return 0


def cmd_rank(args: argparse.Namespace) -> int:
    """Rank the instrument universe under a heuristic."""
    from marketlab.analytics.ranking import (
        TECHNICAL_INDICATORS,
        parse_ranking_kind,
        top_instruments,
    )

    repo = _build_repository(args)
    universe = repo.instruments(args.sector)
    if not universe:
        print(f"Error: No instruments in sector '{args.sector}'")
        return 1

    ranked = top_instruments(universe, args.indicator, args.limit)
    kind = parse_ranking_kind(args.indicator)
    label = TECHNICAL_INDICATORS[kind].name if kind is not None else "market cap"
    print(f"Ranking by {label} ({len(ranked)} of {len(universe)})")
    print(f"{'#':>3} {'Symbol':<8} {'Price':>12} {'Change %':>9} {'Volume':>8} {'Mkt Cap':>8}")
    print("-" * 54)
    for i, inst in enumerate(ranked, start=1):
        print(
            f"{i:>3} {inst.symbol:<8} {inst.price:>12,.2f} {inst.change_percent:>+8.2f}% "
            f"{inst.volume:>8.1f} {inst.market_cap:>8,.0f}"
        )
    return 0


def cmd_sectors(args: argparse.Namespace) -> int:
    """Print sector performance and market breadth."""
    repo = _build_repository(args)

    print(f"{'Sector':<24} {'Change %':>9}")
    print("-" * 34)
    for perf in repo.sector_performance():
        print(f"{perf.sector:<24} {perf.change:>+8.2f}%")

    summary = repo.market_summary()
    print(
        f"\nAdvancers: {summary.advancers}  Decliners: {summary.decliners}  "
        f"Unchanged: {summary.unchanged}  Trend: {summary.trend}"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marketlab",
        description="Synthetic market data and technical analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-c", "--config", help="Path to YAML catalog configuration")
    parser.add_argument("--seed", type=int, help="Random seed (overrides config)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from config, else WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("indices", help="Show latest index quotes")

    chart_parser = subparsers.add_parser(
        "chart", help="Summarise an index or stock over a window"
    )
    target = chart_parser.add_mutually_exclusive_group()
    target.add_argument("name", nargs="?", help="Index name (e.g., 'S&P 500')")
    target.add_argument("-s", "--stock", help="Stock symbol or company name (e.g., AAPL)")
    chart_parser.add_argument(
        "-r",
        "--range",
        default="3m",
        choices=["1m", "3m", "6m", "1y", "5y"],
        help="Trailing window (default: 3m)",
    )
    chart_parser.add_argument("--sma", type=int, help="SMA period")
    chart_parser.add_argument("--ema", type=int, help="EMA period")

    rank_parser = subparsers.add_parser("rank", help="Rank instruments by a heuristic")
    rank_parser.add_argument(
        "-i",
        "--indicator",
        help="Ranking heuristic: rsi, macd, sma, bb, obv (default: market cap)",
    )
    rank_parser.add_argument("--sector", help="Restrict to one sector")
    rank_parser.add_argument(
        "-n", "--limit", type=int, default=8, help="Number of instruments to show"
    )

    subparsers.add_parser("sectors", help="Show sector performance and breadth")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "indices": cmd_indices,
        "chart": cmd_chart,
        "rank": cmd_rank,
        "sectors": cmd_sectors,
    }

    try:
        return commands[args.command](args)
    except MarketLabError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
