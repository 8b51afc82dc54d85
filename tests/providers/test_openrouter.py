import pytest
import requests

from phishing_detector.domain.email.models import EmailData
from phishing_detector.errors import TransportError
from phishing_detector.providers.openrouter import APP_TITLE, OpenRouterClient, ProviderConfig
from phishing_detector.providers.prompts import SYSTEM_PROMPT, build_prompt


class _FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class _FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def _client(session, **overrides):
    config = ProviderConfig(api_key="sk-test", model="test/model", **overrides)
    return OpenRouterClient(config, session=session)


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_build_prompt_truncates_body_and_links():
    email = EmailData(
        sender="a@b.com",
        subject="Hello",
        body="x" * 2500,
        links=tuple(f"https://site{i}.com" for i in range(12)),
    )
    prompt = build_prompt(email)
    assert "From: a@b.com" in prompt
    assert "Subject: Hello" in prompt
    assert "x" * 2000 in prompt
    assert "x" * 2001 not in prompt
    assert "https://site9.com" in prompt
    assert "https://site10.com" not in prompt
    assert '"isPhishing": true or false' in prompt


def test_complete_posts_chat_payload():
    session = _FakeSession(_FakeResponse(payload=_completion('{"isPhishing": false}')))
    content = _client(session).complete("analyze this")
    assert content == '{"isPhishing": false}'
    url, kwargs = session.calls[0]
    assert url == "https://openrouter.ai/api/v1/chat/completions"
    assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
    assert kwargs["headers"]["X-Title"] == APP_TITLE
    assert kwargs["json"]["model"] == "test/model"
    assert kwargs["json"]["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert kwargs["json"]["messages"][1] == {"role": "user", "content": "analyze this"}
    assert kwargs["json"]["temperature"] == 0.3
    assert kwargs["json"]["max_tokens"] == 800
    assert kwargs["timeout"] == 30.0


def test_referer_header_is_optional():
    session = _FakeSession(_FakeResponse(payload=_completion("{}")))
    _client(session, referer="chrome-extension://abc/").complete("x")
    assert session.calls[0][1]["headers"]["HTTP-Referer"] == "chrome-extension://abc/"


def test_error_message_from_body():
    session = _FakeSession(_FakeResponse(429, payload={"error": {"message": "Rate limit exceeded"}}))
    with pytest.raises(TransportError) as excinfo:
        _client(session).complete("x")
    assert str(excinfo.value) == "Rate limit exceeded"
    assert excinfo.value.status_code == 429


def test_error_status_without_json():
    session = _FakeSession(_FakeResponse(404))
    with pytest.raises(TransportError, match="API request failed: 404"):
        _client(session).complete("x")


def test_network_error_is_transport_error():
    session = _FakeSession(error=requests.ConnectionError("refused"))
    with pytest.raises(TransportError):
        _client(session).complete("x")


def test_timeout_is_transport_error():
    session = _FakeSession(error=requests.Timeout("slow"))
    with pytest.raises(TransportError):
        _client(session).complete("x")


@pytest.mark.parametrize("payload", [{"choices": []}, _completion(""), _completion(None), {"unexpected": 1}])
def test_empty_completion_is_transport_error(payload):
    session = _FakeSession(_FakeResponse(payload=payload))
    with pytest.raises(TransportError, match="No response from API"):
        _client(session).complete("x")


def test_missing_api_key_is_rejected():
    with pytest.raises(TransportError):
        OpenRouterClient(ProviderConfig(api_key=""))
