"""Exchange client construction."""

from __future__ import annotations

import os

import ccxt.async_support as ccxt_async

from crypto_signals.config import Settings


def _load_proxies() -> dict[str, str] | None:
    http_proxy = (
        os.getenv("EXCHANGE_HTTP_PROXY")
        or os.getenv("HTTP_PROXY")
        or os.getenv("http_proxy")
    )
    https_proxy = (
        os.getenv("EXCHANGE_HTTPS_PROXY")
        or os.getenv("HTTPS_PROXY")
        or os.getenv("https_proxy")
    )
    all_proxy = (
        os.getenv("EXCHANGE_ALL_PROXY")
        or os.getenv("ALL_PROXY")
        or os.getenv("all_proxy")
    )

    proxies: dict[str, str] = {}
    if http_proxy:
        proxies["http"] = http_proxy
    if https_proxy:
        proxies["https"] = https_proxy
    if not proxies and all_proxy:
        proxies["http"] = all_proxy
        proxies["https"] = all_proxy
    return proxies or None


def create_exchange_client(settings: Settings) -> ccxt_async.Exchange:
    """Build an async ccxt client for the configured exchange."""
    exchange_cls = getattr(ccxt_async, settings.exchange_id, None)
    if exchange_cls is None:
        raise ValueError(f"Unsupported exchange: {settings.exchange_id}")

    config = {
        "enableRateLimit": True,
        "timeout": settings.exchange_timeout_ms,
        "options": {"defaultType": settings.exchange_default_market},
    }
    # Public market data needs no credentials.
    if settings.exchange_api_key:
        config["apiKey"] = settings.exchange_api_key
        config["secret"] = settings.exchange_api_secret
    if settings.exchange_password:
        config["password"] = settings.exchange_password

    exchange = exchange_cls(config)
    proxies = _load_proxies()
    if proxies:
        # ccxt rejects more than one proxy setting at a time.
        if "https" in proxies:
            exchange.https_proxy = proxies["https"]
        else:
            exchange.http_proxy = proxies["http"]
    return exchange
