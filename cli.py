"""
Turtlestack CLI - technical indicators from the command line.

Usage:
    python cli.py analyze AAPL [MSFT ...] [--indicators RSI,MACD] [--interval 1d]
                              [--start DATE] [--end DATE] [--format FORMAT]
                              [-o FILE] [-p rsi_period=21 ...]
    python cli.py indicators
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from adapters import YahooCandleSource
from config import ConfigError, get_config
from domain import Indicator, IndicatorError, required_bars
from orchestration.technical_analysis import TechnicalAnalysisService, TechnicalReport
from ports import SourceError
from presentation.json_api import to_api_response, to_json


def _parse_overrides(pairs: list[str] | None) -> dict[str, Any]:
    """Turn ["rsi_period=21", "bollinger_std_dev=2.5"] into typed overrides."""
    overrides: dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, raw = pair.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"expected key=value, got '{pair}'")
        value: Any = raw.strip()
        for cast in (int, float):
            try:
                value = cast(value)
                break
            except ValueError:
                continue
        overrides[key.strip()] = value
    return overrides


def _parse_date(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected ISO format") from e


def format_summary(report: TechnicalReport) -> str:
    """Latest value of every series, one indicator per line."""
    last = report.candles[-1]
    lines = [
        f"{report.symbol} ({report.interval}, {len(report.candles)} candles, source={report.source})",
        f"  Last close: {last.close:.2f}" + (f" at {last.timestamp:%Y-%m-%d %H:%M}" if last.timestamp else ""),
    ]

    for item in to_api_response(report).indicators:
        if item.status == "insufficient_data":
            lines.append(f"  {item.indicator}: insufficient data ({item.available_bars}/{item.required_bars} bars)")
        elif item.levels is not None:
            levels = ", ".join(f"{name.removeprefix('level_')}={value:.2f}" for name, value in item.levels.items())
            lines.append(f"  {item.indicator}: {levels}")
        elif item.support is not None:
            support = ", ".join(f"{lvl.level:.2f}" for lvl in item.support[-3:]) or "-"
            resistance = ", ".join(f"{lvl.level:.2f}" for lvl in item.resistance[-3:]) or "-"
            lines.append(f"  {item.indicator}: support [{support}] resistance [{resistance}]")
        else:
            latest = ", ".join(f"{s.name}={s.values[-1]:.2f}" for s in item.series if s.values)
            lines.append(f"  {item.indicator}: {latest}")

    return "\n".join(lines)


def cmd_analyze(args: argparse.Namespace) -> int:
    """Fetch candles and compute indicators."""
    service = TechnicalAnalysisService(YahooCandleSource(), get_config())
    overrides = _parse_overrides(args.param)
    indicators = args.indicators.split(",") if args.indicators else None

    try:
        results = service.analyze_many(
            args.symbols,
            interval=args.interval,
            start=args.start,
            end=args.end,
            indicators=indicators,
            **overrides,
        )
    except IndicatorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    failed = {symbol: r for symbol, r in results.items() if isinstance(r, SourceError)}
    reports = {symbol: r for symbol, r in results.items() if isinstance(r, TechnicalReport)}

    for symbol, error in failed.items():
        print(f"Error fetching {symbol}: {error}", file=sys.stderr)

    if args.format == "json":
        payload = {
            symbol: to_json(r) if isinstance(r, TechnicalReport) else {"error": r.to_dict()}
            for symbol, r in results.items()
        }
        output = json.dumps(payload, indent=2, default=str)
    else:
        output = "\n\n".join(format_summary(report) for report in reports.values())

    if args.output:
        Path(args.output).write_text(output)
        print(f"Written to {args.output}", file=sys.stderr)
    elif output:
        print(output)

    return 1 if failed else 0


def cmd_indicators(args: argparse.Namespace) -> int:
    """List indicators with the history each needs at the configured parameters."""
    parameters = get_config().indicators.to_parameters()

    for indicator in Indicator:
        print(f"  {indicator.name:<20} min bars: {required_bars(indicator, parameters)}")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="turtlestack",
        description="Technical indicator engine",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Compute indicators for symbols")
    analyze_parser.add_argument("symbols", nargs="+", help="Symbols to analyze")
    analyze_parser.add_argument("-i", "--indicators", help="Comma-separated indicator names")
    analyze_parser.add_argument("--interval", help="Candle interval (default from config)")
    analyze_parser.add_argument("--start", type=_parse_date, help="Window start (ISO date)")
    analyze_parser.add_argument("--end", type=_parse_date, help="Window end (ISO date)")
    analyze_parser.add_argument(
        "-f", "--format",
        choices=["summary", "json"],
        default="summary",
        help="Output format",
    )
    analyze_parser.add_argument("-o", "--output", help="Output file path")
    analyze_parser.add_argument(
        "-p", "--param",
        action="append",
        metavar="KEY=VALUE",
        help="Indicator parameter override, repeatable",
    )
    analyze_parser.set_defaults(func=cmd_analyze)

    # Indicators command
    indicators_parser = subparsers.add_parser("indicators", help="List available indicators")
    indicators_parser.set_defaults(func=cmd_indicators)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        return args.func(args)
    except (ConfigError, argparse.ArgumentTypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
