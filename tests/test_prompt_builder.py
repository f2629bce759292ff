"""Tests for the analysis prompt builder."""

from __future__ import annotations

from dataclasses import replace

import pytest

from conftest import make_snapshot
from crypto_signals.data.models import Candle
from crypto_signals.decision.prompt_builder import SIGNAL_ITEMS, PromptBuilder, format_number


def _candle_blocks(prompt: str) -> list[str]:
    return [line for line in prompt.splitlines() if line.startswith("Time: ")]


def test_same_snapshot_yields_identical_prompt() -> None:
    builder = PromptBuilder()
    snapshot = make_snapshot()

    assert builder.build(snapshot) == builder.build(make_snapshot())
    assert builder.build(snapshot) == PromptBuilder().build(snapshot)


def test_renders_only_last_five_candles_in_order() -> None:
    snapshot = make_snapshot(candle_count=24)
    prompt = PromptBuilder().build(snapshot)

    blocks = _candle_blocks(prompt)
    expected = [f"Time: {candle.iso_time}" for candle in snapshot.candles[-5:]]
    assert blocks == expected
    assert f"Time: {snapshot.candles[-6].iso_time}" not in prompt


@pytest.mark.parametrize("count", [0, 1, 3, 4])
def test_fewer_than_five_candles_render_without_padding(count: int) -> None:
    snapshot = make_snapshot(candle_count=count)
    prompt = PromptBuilder().build(snapshot)

    assert len(_candle_blocks(prompt)) == count


def test_includes_market_fields_and_ohlcv_values() -> None:
    snapshot = make_snapshot(candle_count=5, last_price=65000.0, change=2.3, volume=12345.5)
    prompt = PromptBuilder().build(snapshot)

    assert "Symbol: BTC/USDT" in prompt
    assert "Current Price: 65000" in prompt
    assert "24h Change: 2.3%" in prompt
    assert "24h Volume: 12345.5" in prompt
    last = snapshot.candles[-1]
    assert "Time: 2024-07-01T04:00:00.000Z" in prompt
    assert f"Open: {format_number(last.open)}" in prompt
    assert f"Volume: {format_number(last.volume)}" in prompt


def test_requests_exactly_six_labeled_items() -> None:
    prompt = PromptBuilder().build(make_snapshot())

    assert len(SIGNAL_ITEMS) == 6
    for index, item in enumerate(SIGNAL_ITEMS, start=1):
        assert f"{index}. {item}" in prompt
    assert "7. " not in prompt
    assert "Low/Medium/High" in prompt


def test_missing_ticker_stats_render_as_not_available() -> None:
    snapshot = replace(make_snapshot(), change_24h_pct=None, volume_24h=None)
    prompt = PromptBuilder().build(snapshot)

    assert "24h Change: n/a" in prompt
    assert "24h Volume: n/a" in prompt


def test_custom_window_size() -> None:
    prompt = PromptBuilder(candle_count=3).build(make_snapshot(candle_count=10))
    assert len(_candle_blocks(prompt)) == 3


def test_iso_time_is_utc_millisecond_precision() -> None:
    candle = Candle(timestamp=1_719_792_000_123, open=1, high=1, low=1, close=1, volume=1)
    assert candle.iso_time == "2024-07-01T00:00:00.123Z"
