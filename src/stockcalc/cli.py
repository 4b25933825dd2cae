"""CLI entry point for stockcalc."""

import argparse
import asyncio
import sys

import orjson
import uvicorn

from stockcalc.config import Settings, get_settings
from stockcalc.core.exceptions import StockCalcError
from stockcalc.core.logging import setup_logging
from stockcalc.providers.factory import create_quote_client
from stockcalc.providers.yh_finance.models import ChartRange
from stockcalc.services.lookup import StockLookupService
from stockcalc.services.session import CalculatorSession


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stock price calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve.add_argument("--host", default="0.0.0.0", help="Bind host")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")

    lookup = sub.add_parser("lookup", help="Show quote, range and projected price")
    lookup.add_argument("symbol", nargs="?", default=settings.default_symbol)
    lookup.add_argument(
        "--range",
        dest="chart_range",
        choices=[r.value for r in ChartRange],
        default=settings.default_range.value,
        help="History window for the low/high close",
    )
    move = lookup.add_mutually_exclusive_group()
    move.add_argument("--percent", type=float, default=0.0, help="Hypothetical percent move")
    move.add_argument("--target", type=float, help="Target price (computes the percent move)")
    lookup.add_argument("--json", action="store_true", help="Print JSON instead of text")
    return parser


def _pct_suffix(pct: float | None) -> str:
    return f" ({pct:.1f}%)" if pct is not None else ""


def _format_text(session: CalculatorSession) -> str:
    snapshot = session.snapshot
    if snapshot is None:
        return "No data"

    lines = [f"{snapshot.symbol} ({snapshot.range.value})"]
    quote = snapshot.quote
    if quote is not None:
        lines.append(f"  Current price: {quote.price:.2f}")
        lines.append(f"  As of:         {quote.as_of:%Y-%m-%d %H:%M %Z}")
        if quote.earnings_date is not None:
            lines.append(f"  Earnings:      {quote.earnings_date:%Y-%m-%d}")

    projection = session.projection
    summary = snapshot.range_summary
    if summary is not None:
        min_pct = _pct_suffix(projection.min_change_pct if projection else None)
        max_pct = _pct_suffix(projection.max_change_pct if projection else None)
        lines.append(f"  Min: {summary.min.close:.2f} on {summary.min.timestamp:%Y-%m-%d}{min_pct}")
        lines.append(f"  Max: {summary.max.close:.2f} on {summary.max.timestamp:%Y-%m-%d}{max_pct}")

    if projection is not None:
        lines.append(f"  Change:    {projection.percent_change:+.1f}%")
        lines.append(f"  New price: {projection.new_price:.2f}")

    lines.extend(f"  ! {alert}" for alert in session.alerts)
    return "\n".join(lines)


async def run_lookup(args: argparse.Namespace, settings: Settings) -> int:
    """Fetch once and print the calculator view. Returns the exit code."""
    client = create_quote_client(settings)
    session = CalculatorSession(
        StockLookupService(client),
        symbol=args.symbol,
        chart_range=ChartRange(args.chart_range),
        percent_limit=settings.percent_change_limit,
    )
    try:
        snapshot = await session.refresh()
        # A zero price has no percent move to a target; show the snapshot as is
        if args.target is not None and snapshot and snapshot.quote and snapshot.quote.price:
            session.set_target_price(args.target)
        else:
            session.set_percent(args.percent)

        if args.json:
            projection = session.projection
            payload = {
                **(session.snapshot.model_dump(mode="json") if session.snapshot else {}),
                "projection": projection.model_dump(mode="json") if projection else None,
                "alerts": session.alerts,
            }
            print(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())
        else:
            print(_format_text(session))
    finally:
        await session.aclose()
        await client.close()

    snapshot = session.snapshot
    return 0 if snapshot is not None and snapshot.quote is not None else 1


def main() -> None:
    settings = get_settings()
    args = build_parser(settings).parse_args()

    if args.command == "serve":
        uvicorn.run(
            "stockcalc.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
        )
        return

    # Keep stdout for the lookup output
    setup_logging(settings, stream=sys.stderr)
    try:
        code = asyncio.run(run_lookup(args, settings))
    except StockCalcError as e:
        print(f"error: {e.message}", file=sys.stderr)
        code = 2
    sys.exit(code)
