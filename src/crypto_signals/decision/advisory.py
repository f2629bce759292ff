"""Advisory generator backed by a chat completion service."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from crypto_signals.decision.models import Advisory
from crypto_signals.errors import GenerationFailure


logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    model: str

    async def complete(self, prompt: str) -> str:
        ...


class AdvisoryGenerator:
    """Single-shot prompt -> advisory text, no retries and no streaming."""

    def __init__(self, client: CompletionClient) -> None:
        self.client = client

    async def generate(self, prompt: str, symbol: str = "") -> Advisory:
        try:
            text = await self.client.complete(prompt)
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("Completion service returned %s for %s", status, symbol or "prompt")
            raise GenerationFailure(f"completion service returned HTTP {status}", symbol=symbol) from exc
        except httpx.HTTPError as exc:
            logger.warning("Completion request failed for %s: %s", symbol or "prompt", exc)
            raise GenerationFailure(f"completion request failed: {exc}", symbol=symbol) from exc
        except ValueError as exc:
            logger.warning("Malformed completion for %s: %s", symbol or "prompt", exc)
            raise GenerationFailure(f"malformed completion: {exc}", symbol=symbol) from exc

        if not text:
            raise GenerationFailure("completion service returned empty text", symbol=symbol)
        return Advisory(symbol=symbol, text=text, model=getattr(self.client, "model", ""))
