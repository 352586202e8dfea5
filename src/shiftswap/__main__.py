"""Command-line entry point.

Usage:
    python -m shiftswap rate BTC LTC
    python -m shiftswap quote BTC LTC 150000 [--quote-for to]

``quote`` runs the full pipeline against dry-run wallets: it creates a real
order on the exchange but never signs or broadcasts anything.
"""

import argparse
import asyncio
import json
import logging
import sys

from shiftswap.config import get_settings
from shiftswap.errors import SwapError
from shiftswap.swap.base import QuoteDirection, SwapRequest
from shiftswap.swap.factory import create_orchestrator
from shiftswap.wallet.dry_run import DryRunWallet

logger = logging.getLogger("shiftswap")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shiftswap", description="SideShift.ai swap quotes")
    sub = parser.add_subparsers(dest="command", required=True)

    rate = sub.add_parser("rate", help="Show the current rate and deposit limits for a pair")
    rate.add_argument("from_asset")
    rate.add_argument("to_asset")

    quote = sub.add_parser("quote", help="Fetch a fixed quote and build a dry-run deposit")
    quote.add_argument("from_asset")
    quote.add_argument("to_asset")
    quote.add_argument("native_amount", type=int, help="Amount in smallest units")
    quote.add_argument(
        "--quote-for",
        choices=[d.value for d in QuoteDirection],
        default=QuoteDirection.FROM.value,
        help="Whether the amount is what you send (from) or receive (to)",
    )
    return parser


async def show_rate(from_asset: str, to_asset: str) -> int:
    orchestrator = create_orchestrator()

    reply = await orchestrator.client.get_rate(
        orchestrator.mapper.map_code(from_asset),
        orchestrator.mapper.map_code(to_asset),
    )
    if not reply.ok:
        print(f"{from_asset} -> {to_asset} is not supported: {reply.message}")
        return 1

    rate = reply.value
    print(f"{from_asset} -> {to_asset}: rate {rate.rate} (deposit {rate.min} - {rate.max} {from_asset})")
    return 0


async def run_quote(args: argparse.Namespace) -> int:
    orchestrator = create_orchestrator()
    request = SwapRequest(
        from_asset=args.from_asset.upper(),
        to_asset=args.to_asset.upper(),
        from_wallet=DryRunWallet("cli-source"),
        to_wallet=DryRunWallet("cli-destination"),
        native_amount=args.native_amount,
        quote_for=QuoteDirection(args.quote_for),
    )

    try:
        result = await orchestrator.fetch_swap_quote(request)
    except SwapError as e:
        print(f"Quote failed: {e}")
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


async def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.debug(f"Settings: {settings.get_safe_dict()}")

    if args.command == "rate":
        return await show_rate(args.from_asset.upper(), args.to_asset.upper())
    return await run_quote(args)


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
