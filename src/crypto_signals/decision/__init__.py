"""Decision layer exports."""

from crypto_signals.decision.advisory import AdvisoryGenerator
from crypto_signals.decision.engine import SignalEngine
from crypto_signals.decision.llm_client import LLMClient
from crypto_signals.decision.models import Advisory, SignalOutcome
from crypto_signals.decision.prompt_builder import PromptBuilder

__all__ = [
    "Advisory",
    "AdvisoryGenerator",
    "LLMClient",
    "PromptBuilder",
    "SignalEngine",
    "SignalOutcome",
]
