"""Process bootstrap for the crypto signals bot."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, replace
import logging
import sys
from typing import List, Optional

from telegram import Update
from telegram.ext import Application

from crypto_signals.bot.telegram_app import build_application
from crypto_signals.config import SIGNAL_MODES, Settings
from crypto_signals.data.exchange import create_exchange_client
from crypto_signals.data.gateway import MarketDataGateway
from crypto_signals.decision.advisory import AdvisoryGenerator
from crypto_signals.decision.engine import SignalEngine
from crypto_signals.decision.llm_client import LLMClient
from crypto_signals.decision.prompt_builder import PromptBuilder
from crypto_signals.errors import ConfigurationError
from crypto_signals.health import start_health_server


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class Services:
    gateway: MarketDataGateway
    llm_client: LLMClient
    engine: SignalEngine

    async def aclose(self) -> None:
        await self.gateway.aclose()
        await self.llm_client.aclose()


def build_services(settings: Settings) -> Services:
    gateway = MarketDataGateway(
        create_exchange_client(settings),
        settings.monitored_pairs,
        timeframe=settings.candle_timeframe,
        candle_limit=settings.candle_limit,
    )
    llm_client = LLMClient(settings)
    engine = SignalEngine(
        gateway,
        AdvisoryGenerator(llm_client),
        prompt_builder=PromptBuilder(),
    )
    return Services(gateway=gateway, llm_client=llm_client, engine=engine)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    # Telegram request URLs carry the bot token.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the crypto trading signals bot.")
    parser.add_argument(
        "--mode",
        choices=SIGNAL_MODES,
        default=None,
        help="menu: pick a pair per request; bulk: analyze every monitored pair.",
    )
    parser.add_argument(
        "--no-health",
        action="store_true",
        help="Do not start the liveness HTTP server.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level, e.g. INFO or DEBUG.",
    )
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    overrides = {}
    if args.mode:
        overrides["signal_mode"] = args.mode
    if args.no_health:
        overrides["health_enabled"] = False
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    return replace(settings, **overrides) if overrides else settings


def run(settings: Settings) -> None:
    services = build_services(settings)

    async def post_init(application: Application) -> None:
        me = await application.bot.get_me()
        logger.info("Bot connected as @%s", me.username)
        logger.info("Monitoring pairs: %s", ", ".join(settings.monitored_pairs))

    async def post_shutdown(application: Application) -> None:
        await services.aclose()
        logger.info("Service clients closed.")

    application = build_application(
        settings, services.engine, post_init=post_init, post_shutdown=post_shutdown
    )
    if settings.health_enabled:
        start_health_server(settings.health_host, settings.health_port)

    logger.info("Crypto trading signals bot is starting (mode=%s)", settings.signal_mode)
    application.run_polling(allowed_updates=Update.ALL_TYPES)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    settings = load_settings(args)
    configure_logging(settings.log_level)
    try:
        settings.validate()
    except ConfigurationError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    logger.info("Environment variables loaded")
    run(settings)


if __name__ == "__main__":
    main()
