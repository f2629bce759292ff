"""Shared fixtures for the signal pipeline tests."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import pytest

from crypto_signals.config import Settings
from crypto_signals.data.models import Candle, MarketSnapshot


HOUR_MS = 60 * 60 * 1000
# 2024-07-01T00:00:00Z
BASE_TS = 1_719_792_000_000

ENV_KEYS = (
    "TELEGRAM_BOT_TOKEN",
    "MONITORED_PAIRS",
    "SIGNAL_MODE",
    "EXCHANGE_ID",
    "EXCHANGE_API_KEY",
    "EXCHANGE_API_SECRET",
    "EXCHANGE_PASSWORD",
    "EXCHANGE_DEFAULT_MARKET",
    "EXCHANGE_TIMEOUT_MS",
    "CANDLE_TIMEFRAME",
    "CANDLE_LIMIT",
    "PROMPT_CANDLES",
    "LLM_PROVIDER",
    "LLM_API_BASE",
    "LLM_API_KEY",
    "LLM_MODEL",
    "GEMINI_API_KEY",
    "GEMINI_API_BASE",
    "GEMINI_MODEL",
    "OPENAI_API_KEY",
    "OPENAI_API_BASE",
    "OPENAI_MODEL",
    "DEEPSEEK_API_KEY",
    "DEEPSEEK_API_BASE",
    "DEEPSEEK_MODEL",
    "GROK_API_KEY",
    "GROK_API_BASE",
    "GROK_MODEL",
    "OLLAMA_API_BASE",
    "OLLAMA_MODEL",
    "VLLM_API_BASE",
    "VLLM_MODEL",
    "LLM_TIMEOUT_S",
    "LLM_TEMPERATURE",
    "LLM_MAX_TOKENS",
    "HEALTH_ENABLED",
    "HEALTH_HOST",
    "PORT",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("crypto_signals.config.load_dotenv", lambda *args, **kwargs: False)
    return monkeypatch


@pytest.fixture
def settings(clean_env: pytest.MonkeyPatch) -> Settings:
    clean_env.setenv("TELEGRAM_BOT_TOKEN", "123456:test-token")
    clean_env.setenv("GEMINI_API_KEY", "gemini-test-key")
    return Settings.from_env()


def make_candles(count: int, start: int = BASE_TS, price: float = 65000.0) -> List[Candle]:
    candles = []
    for index in range(count):
        open_price = price + index * 10
        candles.append(
            Candle(
                timestamp=start + index * HOUR_MS,
                open=open_price,
                high=open_price + 50,
                low=open_price - 50,
                close=open_price + 5,
                volume=100.0 + index,
            )
        )
    return candles


def make_snapshot(
    symbol: str = "BTC/USDT",
    candle_count: int = 24,
    last_price: float = 65000.0,
    change: Optional[float] = 2.3,
    volume: Optional[float] = 12345.5,
) -> MarketSnapshot:
    return MarketSnapshot(
        symbol=symbol,
        last_price=last_price,
        change_24h_pct=change,
        volume_24h=volume,
        candles=tuple(make_candles(candle_count)),
    )


def candle_rows(candles: Sequence[Candle]) -> List[List[Any]]:
    return [[c.timestamp, c.open, c.high, c.low, c.close, c.volume] for c in candles]


class FakeExchange:
    """Stand-in for an async ccxt exchange recording every call."""

    def __init__(
        self,
        ticker: Optional[dict] = None,
        rows: Optional[List[List[Any]]] = None,
        error: Optional[Exception] = None,
        rate_limited: bool = True,
    ) -> None:
        self.enableRateLimit = rate_limited
        self.ticker = ticker if ticker is not None else {
            "last": 65000.0,
            "percentage": 2.3,
            "baseVolume": 12345.5,
        }
        self.rows = rows if rows is not None else candle_rows(make_candles(24))
        self.error = error
        self.calls: List[tuple] = []
        self.closed = False

    async def fetch_ticker(self, symbol: str) -> dict:
        self.calls.append(("fetch_ticker", symbol))
        if self.error is not None:
            raise self.error
        return self.ticker

    async def fetch_ohlcv(self, symbol: str, timeframe: str, limit: int = 0) -> list:
        self.calls.append(("fetch_ohlcv", symbol, timeframe, limit))
        return self.rows

    async def close(self) -> None:
        self.closed = True
