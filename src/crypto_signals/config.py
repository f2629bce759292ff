"""Configuration loader for the crypto signals bot."""

from dataclasses import dataclass
import os
from typing import Tuple

from dotenv import load_dotenv

from crypto_signals.errors import ConfigurationError


DEFAULT_PAIRS = ("BTC/USDT", "ETH/USDT", "SOL/USDT", "XRP/USDT")
SIGNAL_MODES = ("menu", "bulk")
# Local OpenAI-compatible servers accept requests without a key.
KEYLESS_PROVIDERS = {"ollama", "vllm"}
LLM_PROVIDERS = ("gemini", "openai", "deepseek", "grok", "ollama", "vllm")


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_csv(value: str | None, default: Tuple[str, ...]) -> Tuple[str, ...]:
    if not value:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _get_float(value: str | None, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_int(value: str | None, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_mode(value: str | None) -> str:
    mode = (value or "menu").strip().lower()
    return mode if mode in SIGNAL_MODES else "menu"


@dataclass(frozen=True)
class Settings:
    telegram_bot_token: str
    monitored_pairs: Tuple[str, ...]
    signal_mode: str
    exchange_id: str
    exchange_api_key: str
    exchange_api_secret: str
    exchange_password: str
    exchange_default_market: str
    exchange_timeout_ms: int
    candle_timeframe: str
    candle_limit: int
    llm_provider: str
    llm_api_base: str
    llm_api_key: str
    llm_model: str
    gemini_api_key: str
    gemini_api_base: str
    gemini_model: str
    openai_api_key: str
    openai_api_base: str
    openai_model: str
    deepseek_api_key: str
    deepseek_api_base: str
    deepseek_model: str
    grok_api_key: str
    grok_api_base: str
    grok_model: str
    ollama_api_base: str
    ollama_model: str
    vllm_api_base: str
    vllm_model: str
    llm_timeout_s: float
    llm_temperature: float
    llm_max_tokens: int
    health_enabled: bool
    health_host: str
    health_port: int
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
            monitored_pairs=_get_csv(os.getenv("MONITORED_PAIRS"), DEFAULT_PAIRS),
            signal_mode=_get_mode(os.getenv("SIGNAL_MODE")),
            exchange_id=os.getenv("EXCHANGE_ID", "bitget").strip().lower(),
            exchange_api_key=os.getenv("EXCHANGE_API_KEY", ""),
            exchange_api_secret=os.getenv("EXCHANGE_API_SECRET", ""),
            exchange_password=os.getenv("EXCHANGE_PASSWORD", ""),
            exchange_default_market=os.getenv("EXCHANGE_DEFAULT_MARKET", "spot"),
            exchange_timeout_ms=_get_int(os.getenv("EXCHANGE_TIMEOUT_MS"), 30000),
            candle_timeframe=os.getenv("CANDLE_TIMEFRAME", "1h"),
            candle_limit=_get_int(os.getenv("CANDLE_LIMIT"), 24),
            llm_provider=os.getenv("LLM_PROVIDER", "gemini").strip().lower(),
            llm_api_base=os.getenv("LLM_API_BASE", ""),
            llm_api_key=os.getenv("LLM_API_KEY", ""),
            llm_model=os.getenv("LLM_MODEL", ""),
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            gemini_api_base=os.getenv(
                "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta/openai"
            ),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-1.5-pro"),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_api_base=os.getenv("OPENAI_API_BASE", "https://api.openai.com/v1"),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            deepseek_api_key=os.getenv("DEEPSEEK_API_KEY", ""),
            deepseek_api_base=os.getenv(
                "DEEPSEEK_API_BASE", "https://api.deepseek.com/v1"
            ),
            deepseek_model=os.getenv("DEEPSEEK_MODEL", "deepseek-chat"),
            grok_api_key=os.getenv("GROK_API_KEY", ""),
            grok_api_base=os.getenv("GROK_API_BASE", "https://api.x.ai/v1"),
            grok_model=os.getenv("GROK_MODEL", "grok-2-mini"),
            ollama_api_base=os.getenv("OLLAMA_API_BASE", "http://localhost:11434/v1"),
            ollama_model=os.getenv("OLLAMA_MODEL", ""),
            vllm_api_base=os.getenv("VLLM_API_BASE", "http://localhost:8000/v1"),
            vllm_model=os.getenv("VLLM_MODEL", ""),
            llm_timeout_s=_get_float(os.getenv("LLM_TIMEOUT_S"), 60.0),
            llm_temperature=_get_float(os.getenv("LLM_TEMPERATURE"), 0.2),
            llm_max_tokens=_get_int(os.getenv("LLM_MAX_TOKENS"), 1024),
            health_enabled=_get_bool(os.getenv("HEALTH_ENABLED"), default=True),
            health_host=os.getenv("HEALTH_HOST", "0.0.0.0"),
            health_port=_get_int(os.getenv("PORT"), 3000),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        )

    def resolved_llm_api_key(self) -> str:
        if self.llm_api_key:
            return self.llm_api_key
        return getattr(self, f"{self.llm_provider}_api_key", "")

    def missing_credentials(self) -> list[str]:
        missing: list[str] = []
        if not self.telegram_bot_token:
            missing.append("TELEGRAM_BOT_TOKEN")
        if self.llm_provider not in KEYLESS_PROVIDERS and not self.resolved_llm_api_key():
            missing.append(f"{self.llm_provider.upper()}_API_KEY (or LLM_API_KEY)")
        if not self.monitored_pairs:
            missing.append("MONITORED_PAIRS")
        return missing

    def validate(self) -> None:
        """Refuse to start partially configured."""
        if self.llm_provider not in LLM_PROVIDERS:
            raise ConfigurationError(
                f"Unsupported LLM_PROVIDER: {self.llm_provider!r} "
                f"(expected one of: {', '.join(LLM_PROVIDERS)})"
            )
        missing = self.missing_credentials()
        if missing:
            raise ConfigurationError(
                "Missing required configuration: " + ", ".join(missing)
            )
