"""Async LLM client for OpenAI-compatible chat completion APIs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from crypto_signals.config import LLM_PROVIDERS, Settings


@dataclass(frozen=True)
class ProviderConfig:
    name: str
    api_key: str
    api_base: str
    model: str
    add_google_key_header: bool = False


class LLMClient:
    """LLM client that supports Gemini/OpenAI/DeepSeek/Grok/local providers.

    One shared ``httpx.AsyncClient`` is kept for the lifetime of the client;
    requests carry no per-session state so concurrent callers are safe.
    """

    def __init__(
        self,
        settings: Settings,
        provider: Optional[str] = None,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.provider = (provider or settings.llm_provider or "gemini").lower()
        if self.provider not in LLM_PROVIDERS:
            raise ValueError(f"Unsupported LLM provider: {self.provider}")
        self.config = self._resolve_config(api_key=api_key, api_base=api_base, model=model)
        if not self.config.api_base:
            raise ValueError(f"LLM API base missing for provider: {self.provider}")
        if not self.config.model:
            raise ValueError(f"LLM model missing for provider: {self.provider}")
        self._client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.llm_timeout_s,
            transport=transport,
        )

    @property
    def model(self) -> str:
        return self.config.model

    async def complete(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """Send ``prompt`` as the only message and return the completion text.

        Raises ``httpx.HTTPError`` on transport or status errors and
        ``ValueError`` when the response body is not a completion payload.
        """
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
            if self.config.add_google_key_header:
                headers["x-goog-api-key"] = self.config.api_key

        payload = {
            "model": self.config.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": (
                temperature if temperature is not None else self.settings.llm_temperature
            ),
            "max_tokens": max_tokens or self.settings.llm_max_tokens,
        }

        url = self.config.api_base.rstrip("/") + "/chat/completions"
        response = await self._client.post(url, headers=headers, json=payload)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("completion response is not a JSON object")
        choice = (data.get("choices") or [{}])[0]
        message = choice.get("message") or {}
        content = message.get("content") or choice.get("text") or ""
        return content.strip()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _resolve_config(
        self, api_key: Optional[str], api_base: Optional[str], model: Optional[str]
    ) -> ProviderConfig:
        settings = self.settings
        if settings.llm_api_base or settings.llm_model:
            return ProviderConfig(
                name=self.provider,
                api_key=api_key or settings.resolved_llm_api_key(),
                api_base=api_base or settings.llm_api_base or self._default_base(),
                model=model or settings.llm_model or self._default_model(),
                add_google_key_header=self.provider == "gemini",
            )

        if self.provider == "openai":
            return ProviderConfig(
                name="openai",
                api_key=api_key or settings.llm_api_key or settings.openai_api_key,
                api_base=api_base or settings.openai_api_base,
                model=model or settings.openai_model,
            )
        if self.provider == "deepseek":
            return ProviderConfig(
                name="deepseek",
                api_key=api_key or settings.llm_api_key or settings.deepseek_api_key,
                api_base=api_base or settings.deepseek_api_base,
                model=model or settings.deepseek_model,
            )
        if self.provider == "grok":
            return ProviderConfig(
                name="grok",
                api_key=api_key or settings.llm_api_key or settings.grok_api_key,
                api_base=api_base or settings.grok_api_base,
                model=model or settings.grok_model,
            )
        if self.provider == "ollama":
            return ProviderConfig(
                name="ollama",
                api_key=api_key or "",
                api_base=api_base or settings.ollama_api_base,
                model=model or settings.ollama_model,
            )
        if self.provider == "vllm":
            return ProviderConfig(
                name="vllm",
                api_key=api_key or "",
                api_base=api_base or settings.vllm_api_base,
                model=model or settings.vllm_model,
            )
        return ProviderConfig(
            name="gemini",
            api_key=api_key or settings.llm_api_key or settings.gemini_api_key,
            api_base=api_base or settings.gemini_api_base,
            model=model or settings.gemini_model,
            add_google_key_header=True,
        )

    def _default_base(self) -> str:
        return getattr(self.settings, f"{self.provider}_api_base", "")

    def _default_model(self) -> str:
        return getattr(self.settings, f"{self.provider}_model", "")
