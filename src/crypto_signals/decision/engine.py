"""Signal engine: market data -> prompt -> advisory -> delivery message."""

from __future__ import annotations

import logging
from typing import AsyncIterator, Iterable, List, Optional

from crypto_signals.data.gateway import MarketDataGateway
from crypto_signals.decision.advisory import AdvisoryGenerator
from crypto_signals.decision.models import Advisory, SignalOutcome
from crypto_signals.decision.prompt_builder import PromptBuilder
from crypto_signals.errors import GenerationFailure, ProviderError, SignalError


logger = logging.getLogger(__name__)

SIGNAL_HEADER = "🚨 CRYPTO TRADING SIGNAL 🚨"
DISCLAIMER = (
    "⚠️ Risk Disclaimer: This is AI-generated analysis. "
    "Always do your own research and trade responsibly."
)


def format_signal_message(advisory: Advisory) -> str:
    return (
        f"{SIGNAL_HEADER}\n\n"
        f"{advisory.symbol} Analysis:\n"
        f"{advisory.text}\n\n"
        f"{DISCLAIMER}"
    )


class SignalEngine:
    """Orchestrate gateway -> prompt builder -> advisory generator per instrument.

    Every stage failure ends that instrument's request with a failure outcome;
    nothing is retried here. Bulk runs are sequential.
    """

    def __init__(
        self,
        gateway: MarketDataGateway,
        generator: AdvisoryGenerator,
        prompt_builder: Optional[PromptBuilder] = None,
    ) -> None:
        self.gateway = gateway
        self.generator = generator
        self.prompt_builder = prompt_builder or PromptBuilder()

    async def produce_signal(self, symbol: str) -> SignalOutcome:
        try:
            snapshot = await self.gateway.fetch_snapshot(symbol)
            prompt = self.prompt_builder.build(snapshot)
        except SignalError as exc:
            return self._failed(symbol, exc)
        except Exception as exc:
            logger.exception("Unexpected market data failure for %s", symbol)
            return self._failed(symbol, ProviderError(str(exc), symbol=symbol))

        try:
            advisory = await self.generator.generate(prompt, symbol=symbol)
        except SignalError as exc:
            return self._failed(symbol, exc)
        except Exception as exc:
            logger.exception("Unexpected advisory failure for %s", symbol)
            return self._failed(symbol, GenerationFailure(str(exc), symbol=symbol))

        logger.info("Signal ready for %s (%d chars)", symbol, len(advisory.text))
        return SignalOutcome(symbol=symbol, message=format_signal_message(advisory))

    async def iter_signals(self, symbols: Iterable[str]) -> AsyncIterator[SignalOutcome]:
        for symbol in symbols:
            yield await self.produce_signal(symbol)

    async def produce_signals(self, symbols: Iterable[str]) -> List[SignalOutcome]:
        return [outcome async for outcome in self.iter_signals(symbols)]

    def _failed(self, symbol: str, error: SignalError) -> SignalOutcome:
        if error.symbol is None:
            error.symbol = symbol
        logger.warning("Signal for %s failed: %s: %s", symbol, error.category, error)
        return SignalOutcome(symbol=symbol, error=error)
