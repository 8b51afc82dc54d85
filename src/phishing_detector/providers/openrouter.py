"""OpenRouter-compatible chat completion transport."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import requests

from phishing_detector.errors import TransportError
from phishing_detector.providers.prompts import SYSTEM_PROMPT

DEFAULT_ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "meta-llama/llama-3.2-3b-instruct:free"
APP_TITLE = "Phishing Detector Extension"


class RemoteScorer(Protocol):
    def complete(self, prompt: str) -> str: ...


@dataclass(frozen=True)
class ProviderConfig:
    api_key: str
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    temperature: float = 0.3
    max_tokens: int = 800
    timeout_s: float = 30.0
    referer: str | None = None


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = {}
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return f"API request failed: {response.status_code}"


def _first_message_content(data: Any) -> str:
    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""


class OpenRouterClient:
    """Sends one prompt and returns the raw completion text."""

    def __init__(self, config: ProviderConfig, session: requests.Session | None = None) -> None:
        if not config.api_key:
            raise TransportError("API key not configured. Please set it in the extension popup.")
        self.config = config
        self.session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
            "X-Title": APP_TITLE,
        }
        if self.config.referer:
            headers["HTTP-Referer"] = self.config.referer
        return headers

    def build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }

    def complete(self, prompt: str) -> str:
        try:
            response = self.session.post(
                self.config.endpoint,
                json=self.build_payload(prompt),
                headers=self._headers(),
                timeout=self.config.timeout_s,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Request to {self.config.endpoint} failed: {exc}") from exc

        if not response.ok:
            raise TransportError(_error_message(response), status_code=response.status_code)
        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError("API response was not valid JSON.") from exc

        content = _first_message_content(data)
        if not content:
            raise TransportError("No response from API")
        return content
