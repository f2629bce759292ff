"""Market data gateway over an async ccxt exchange."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import math
from typing import Any, Iterable, List, Sequence

import ccxt
import ccxt.async_support as ccxt_async

from crypto_signals.data.models import Candle, MarketSnapshot
from crypto_signals.errors import NetworkFailure, ProviderError, UnknownInstrument


logger = logging.getLogger(__name__)


def _to_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _check_timestamp(timestamp: int) -> None:
    try:
        datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"candle timestamp out of range: {timestamp}") from exc


def normalize_candles(rows: Iterable[Sequence[Any]], limit: int) -> tuple[Candle, ...]:
    """Convert raw OHLCV rows into ordered candles with unique timestamps.

    Rows are sorted by timestamp, a repeated timestamp keeps the last row seen,
    and only the newest ``limit`` candles are returned. Raises ``ValueError``
    on rows that are not six finite numbers or whose timestamp cannot be
    rendered as a UTC date.
    """
    by_timestamp: dict[int, Candle] = {}
    for row in rows:
        if row is None or len(row) < 6:
            raise ValueError(f"malformed candle row: {row!r}")
        values = [_to_float(item) for item in row[:6]]
        if any(value is None for value in values):
            raise ValueError(f"non-numeric candle row: {row!r}")
        if not all(math.isfinite(value) for value in values):
            raise ValueError(f"non-finite candle row: {row!r}")
        timestamp = int(values[0])
        _check_timestamp(timestamp)
        by_timestamp[timestamp] = Candle(
            timestamp=timestamp,
            open=values[1],
            high=values[2],
            low=values[3],
            close=values[4],
            volume=values[5],
        )
    ordered: List[Candle] = [by_timestamp[ts] for ts in sorted(by_timestamp)]
    if limit > 0:
        ordered = ordered[-limit:]
    return tuple(ordered)


class MarketDataGateway:
    """Fetch ticker stats and recent candles for one monitored instrument."""

    def __init__(
        self,
        exchange: ccxt_async.Exchange,
        catalog: Iterable[str],
        timeframe: str = "1h",
        candle_limit: int = 24,
    ) -> None:
        if not getattr(exchange, "enableRateLimit", False):
            raise ValueError("exchange client must keep enableRateLimit on")
        self.exchange = exchange
        self.catalog = tuple(catalog)
        self.timeframe = timeframe
        self.candle_limit = candle_limit

    async def fetch_snapshot(self, symbol: str) -> MarketSnapshot:
        if symbol not in self.catalog:
            raise UnknownInstrument(f"{symbol} is not a monitored pair", symbol=symbol)

        try:
            ticker = await self.exchange.fetch_ticker(symbol)
            rows = await self.exchange.fetch_ohlcv(
                symbol, self.timeframe, limit=self.candle_limit
            )
        except ccxt.NetworkError as exc:
            logger.warning("Network error fetching %s: %s", symbol, exc)
            raise NetworkFailure(str(exc), symbol=symbol) from exc
        except ccxt.BaseError as exc:
            logger.warning("Exchange rejected %s: %s", symbol, exc)
            raise ProviderError(str(exc), symbol=symbol) from exc

        return self._build_snapshot(symbol, ticker, rows)

    def _build_snapshot(self, symbol: str, ticker: Any, rows: Any) -> MarketSnapshot:
        if not isinstance(ticker, dict):
            raise ProviderError(f"malformed ticker for {symbol}", symbol=symbol)
        last_price = _to_float(ticker.get("last"))
        if last_price is None:
            raise ProviderError(f"ticker for {symbol} has no last price", symbol=symbol)
        try:
            candles = normalize_candles(rows or [], self.candle_limit)
        except (TypeError, ValueError, OverflowError) as exc:
            raise ProviderError(f"malformed candles for {symbol}: {exc}", symbol=symbol) from exc

        logger.debug("Fetched %s: last=%s candles=%d", symbol, last_price, len(candles))
        return MarketSnapshot(
            symbol=symbol,
            last_price=last_price,
            change_24h_pct=_to_float(ticker.get("percentage")),
            volume_24h=_to_float(ticker.get("baseVolume")),
            candles=candles,
            timeframe=self.timeframe,
        )

    async def aclose(self) -> None:
        await self.exchange.close()
