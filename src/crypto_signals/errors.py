"""Failure taxonomy for the signal pipeline."""

from __future__ import annotations

from typing import Optional


class SignalError(Exception):
    """Base class for instrument-scoped pipeline failures."""

    def __init__(self, message: str, symbol: Optional[str] = None) -> None:
        super().__init__(message)
        self.symbol = symbol

    @property
    def category(self) -> str:
        return type(self).__name__


class UnknownInstrument(SignalError):
    """Requested instrument is not in the monitored catalog."""


class MarketDataError(SignalError):
    """Market-data stage failure."""


class NetworkFailure(MarketDataError):
    """Transient transport failure talking to the exchange."""


class ProviderError(MarketDataError):
    """Exchange rejected the request or returned malformed data."""


class GenerationFailure(SignalError):
    """Advisory stage failure (transport, quota or service-side)."""


class DeliveryFailure(SignalError):
    """A message could not be sent to the chat platform."""


class ConfigurationError(ValueError):
    """Required configuration is missing at startup."""
