"""Smoke test for the signal pipeline without Telegram."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from crypto_signals.app import build_services, configure_logging
from crypto_signals.config import Settings


def parse_args(settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Smoke test the signal pipeline.")
    parser.add_argument(
        "--symbols",
        default=",".join(settings.monitored_pairs),
        help="Comma-separated pairs, e.g. BTC/USDT,ETH/USDT",
    )
    parser.add_argument(
        "--prompt-only",
        action="store_true",
        help="Fetch market data and print the prompt without calling the LLM.",
    )
    return parser.parse_args()


async def run(settings: Settings, symbols: list[str], prompt_only: bool) -> None:
    services = build_services(settings)
    try:
        if prompt_only:
            for symbol in symbols:
                snapshot = await services.gateway.fetch_snapshot(symbol)
                print(f"===== {symbol}")
                print(services.engine.prompt_builder.build(snapshot))
            return

        async for outcome in services.engine.iter_signals(symbols):
            status = "OK" if outcome.ok else f"FAILED ({outcome.category})"
            print(f"===== {outcome.symbol}: {status}")
            print(outcome.text)
    finally:
        await services.aclose()


def main() -> None:
    settings = Settings.from_env()
    args = parse_args(settings)
    configure_logging(settings.log_level)
    symbols = [s.strip() for s in args.symbols.split(",") if s.strip()]
    asyncio.run(run(settings, symbols, args.prompt_only))


if __name__ == "__main__":
    main()
