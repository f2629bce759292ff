"""Data layer models for normalized market snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple


@dataclass(frozen=True)
class Candle:
    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float

    @property
    def iso_time(self) -> str:
        moment = datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)
        return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class MarketSnapshot:
    symbol: str
    last_price: float
    change_24h_pct: Optional[float]
    volume_24h: Optional[float]
    candles: Tuple[Candle, ...]
    timeframe: str = "1h"

    def tail(self, count: int) -> Tuple[Candle, ...]:
        if count <= 0:
            return ()
        return self.candles[-count:]
