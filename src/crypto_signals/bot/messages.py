"""User-facing message texts."""

from __future__ import annotations

from typing import Iterable, List

TELEGRAM_MESSAGE_LIMIT = 4096

MENU_TITLE = "📊 Select a trading pair to analyze:"


def welcome_text(mode: str = "menu") -> str:
    signal_line = (
        "/signal - Get trading signals for all monitored pairs"
        if mode == "bulk"
        else "/signal - Get trading signals (select a pair)"
    )
    return (
        "Welcome to the Crypto Trading Signals Bot! 🤖\n\n"
        "Available commands:\n"
        f"{signal_line}\n"
        "/pairs - List monitored trading pairs\n"
        "/help - Show this help message\n\n"
        "Note: This bot provides AI-generated trading signals. "
        "Always verify signals and trade at your own risk."
    )


def pairs_text(pairs: Iterable[str]) -> str:
    return "Monitored Trading Pairs:\n" + "\n".join(pairs)


def generating_text(symbol: str) -> str:
    return f"🔄 Generating trading signal for {symbol}..."


def bulk_start_text(count: int) -> str:
    return f"🔄 Generating trading signals for {count} pairs..."


def split_message(text: str, limit: int = TELEGRAM_MESSAGE_LIMIT) -> List[str]:
    """Split ``text`` into chunks no longer than ``limit``, preferring line breaks."""
    if len(text) <= limit:
        return [text]
    chunks: List[str] = []
    remaining = text
    while len(remaining) > limit:
        cut = remaining.rfind("\n", 0, limit)
        if cut <= 0:
            cut = limit
        chunks.append(remaining[:cut])
        remaining = remaining[cut:].lstrip("\n")
    if remaining:
        chunks.append(remaining)
    return chunks
