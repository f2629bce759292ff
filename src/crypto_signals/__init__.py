"""On-demand crypto trading-signal advisories delivered over Telegram."""

__version__ = "0.1.0"
