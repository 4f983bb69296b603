"""Command-line entry point for the lending yield tracker."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from config.settings import get_settings
from src.core.models import ComparisonReport, EvaluationReport
from src.data.pipeline import YieldPipeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="lending-yield-tracker",
        description="Morpho Blue yield accrual with cross-protocol comparison",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: LOG_LEVEL setting)",
    )

    sub = parser.add_subparsers(dest="command")

    markets_parser = sub.add_parser("markets", help="Accrue Morpho Blue markets to the latest block")
    markets_parser.add_argument(
        "market_ids",
        nargs="*",
        help="Market unique keys (default: MARKET_IDS setting, then API discovery)",
    )
    markets_parser.add_argument("--quote-asset", default=None, help="Loan token address to keep")

    compare_parser = sub.add_parser("compare", help="Compare rates on Kamino, Aave and Compound")
    compare_parser.add_argument("--symbol", default=None, help="Asset symbol (default: QUOTE_ASSET_SYMBOL)")

    return parser


def _format_rate(pct: Optional[float], rate_type: str) -> Text:
    """Format a percentage with color."""
    if pct is None:
        return Text("--", style="dim")

    text = f"{pct:.2f}%"
    if rate_type == "positive":
        style = "green" if pct > 5 else "yellow" if pct > 2 else "dim"
    else:
        style = "red" if pct > 10 else "yellow" if pct > 5 else "dim"
    return Text(text, style=style)


def render_markets(report: EvaluationReport) -> Table:
    """Render an evaluation report as a table, in input order."""
    table = Table(title="Morpho Blue markets")
    table.add_column("Market", no_wrap=True)
    table.add_column("Supply APY", justify="right")
    table.add_column("Borrow APY", justify="right")

    for result in report.results:
        table.add_row(
            Text(result.market_id, style="bold"),
            _format_rate(result.supply_apy, "positive"),
            _format_rate(result.borrow_apy, "negative"),
        )
    for failure in report.failures:
        table.add_row(
            Text(failure.market_id, style="bold"),
            Text(type(failure.error).__name__, style="red"),
            Text(str(failure.error), style="red"),
        )
    return table


def render_comparison(report: ComparisonReport, symbol: str) -> Table:
    """Render comparison rates side by side."""
    table = Table(title=f"{symbol} on other protocols")
    table.add_column("Protocol")
    table.add_column("Supply APY", justify="right")
    table.add_column("Borrow APY", justify="right")

    for name, rates in report.rates.items():
        if rates is None:
            table.add_row(name, Text("no reserve", style="dim"), Text("--", style="dim"))
        else:
            table.add_row(
                name,
                _format_rate(rates.supply_apy, "positive"),
                _format_rate(rates.borrow_apy, "negative"),
            )
    for name, error in report.failures.items():
        table.add_row(name, Text(type(error).__name__, style="red"), Text(str(error), style="red"))
    return table


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command and return the exit code."""
    settings = get_settings()
    console = Console()
    pipeline = YieldPipeline(settings)
    try:
        if args.command == "markets":
            market_ids: Optional[List[str]] = args.market_ids or None
            report = await pipeline.evaluate_markets(market_ids, quote_asset=args.quote_asset)
            console.print(render_markets(report))
            if report.skipped:
                console.print(f"[dim]Skipped {len(report.skipped)} markets lending another asset[/dim]")
            return 1 if report.failures and not report.results else 0

        symbol = args.symbol or settings.quote_asset_symbol
        comparison = await pipeline.compare(symbol)
        console.print(render_comparison(comparison, symbol))
        return 0
    finally:
        await pipeline.close()


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=args.log_level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
