"""Remote scorer adapters."""

from phishing_detector.providers.openrouter import OpenRouterClient, ProviderConfig, RemoteScorer
from phishing_detector.providers.prompts import build_prompt

__all__ = ["OpenRouterClient", "ProviderConfig", "RemoteScorer", "build_prompt"]
