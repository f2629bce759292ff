"""Decision-layer result types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from crypto_signals.errors import SignalError


@dataclass(frozen=True)
class Advisory:
    symbol: str
    text: str
    model: str


@dataclass(frozen=True)
class SignalOutcome:
    """Result of one instrument's pass through the pipeline.

    Exactly one of ``message`` and ``error`` is set.
    """

    symbol: str
    message: Optional[str] = None
    error: Optional[SignalError] = None

    def __post_init__(self) -> None:
        if (self.message is None) == (self.error is None):
            raise ValueError("SignalOutcome needs exactly one of message or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def category(self) -> Optional[str]:
        return self.error.category if self.error is not None else None

    @property
    def text(self) -> str:
        if self.message is not None:
            return self.message
        return f"❌ Could not generate a signal for {self.symbol} ({self.category})"
