"""Prompt builder for LLM trading-signal analysis."""

from __future__ import annotations

from typing import List, Optional

from crypto_signals.data.models import Candle, MarketSnapshot


SIGNAL_ITEMS = (
    "Position (LONG/SHORT), and when to open the position",
    "Entry price",
    "Stop loss",
    "Take profit targets",
    "Risk level (Low/Medium/High)",
    "Brief reasoning",
)


def format_number(value: Optional[float]) -> str:
    if value is None:
        return "n/a"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


class PromptBuilder:
    """Build the analysis request for one market snapshot."""

    def __init__(self, candle_count: int = 5) -> None:
        self.candle_count = candle_count

    def build(self, snapshot: MarketSnapshot) -> str:
        recent = snapshot.tail(self.candle_count)
        candle_block = "\n".join(self._render_candle(candle) for candle in recent)
        if not candle_block:
            candle_block = "No recent candles available."

        change = format_number(snapshot.change_24h_pct)
        if snapshot.change_24h_pct is not None:
            change += "%"

        lines = [
            "You are an expert futures trader who provides trading signals for crypto futures.",
            "Analyze the market data below and provide a trading signal for futures trading.",
            "",
            f"Symbol: {snapshot.symbol}",
            f"Current Price: {format_number(snapshot.last_price)}",
            f"24h Change: {change}",
            f"24h Volume: {format_number(snapshot.volume_24h)}",
            "",
            f"Recent price action ({snapshot.timeframe} candles, last {len(recent)}):",
            candle_block,
            "",
            f"Provide a concise trading signal with exactly these {len(SIGNAL_ITEMS)} labeled items:",
        ]
        lines.extend(f"{index}. {item}" for index, item in enumerate(SIGNAL_ITEMS, start=1))
        return "\n".join(lines)

    def _render_candle(self, candle: Candle) -> str:
        fields: List[str] = [
            f"Time: {candle.iso_time}",
            f"  Open: {format_number(candle.open)}",
            f"  High: {format_number(candle.high)}",
            f"  Low: {format_number(candle.low)}",
            f"  Close: {format_number(candle.close)}",
            f"  Volume: {format_number(candle.volume)}",
        ]
        return "\n".join(fields)
