"""Market data layer exports."""

from crypto_signals.data.gateway import MarketDataGateway
from crypto_signals.data.models import Candle, MarketSnapshot

__all__ = ["Candle", "MarketDataGateway", "MarketSnapshot"]
