from __future__ import annotations

import json
import os

import pytest

from phishing_detector.config.settings import ENV_PREFIX, Settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)


class FakeScorer:
    def __init__(self, reply: str | None = None, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply or ""


@pytest.fixture
def model_reply():
    def _reply(**overrides: object) -> str:
        payload: dict[str, object] = {
            "isPhishing": False,
            "confidence": 10,
            "indicators": [],
            "recommendation": "No action needed.",
        }
        payload.update(overrides)
        return json.dumps(payload)

    return _reply


@pytest.fixture
def fake_scorer():
    def _build(reply: str | None = None, error: Exception | None = None) -> FakeScorer:
        return FakeScorer(reply=reply, error=error)

    return _build


@pytest.fixture
def remote_settings() -> Settings:
    return Settings(api_key="sk-test", model="test/model", threshold=70)
