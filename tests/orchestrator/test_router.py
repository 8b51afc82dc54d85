import logging

from phishing_detector.config.settings import Settings
from phishing_detector.domain.email.models import EmailData
from phishing_detector.errors import TelemetryError, TransportError
from phishing_detector.infra.store import InMemoryAnalysisStore
from phishing_detector.orchestrator.router import AnalysisRouter
from phishing_detector.scanner.local import FALLBACK_PREFIX
from phishing_detector.telemetry.events import InMemoryTelemetrySink

EMAIL = EmailData.model_validate(
    {
        "from": "boss@company.com",
        "subject": "Urgent: verify account",
        "body": "click here to update your password",
        "links": ["http://company-secure.ru/login"],
        "emailId": "abc123",
    }
)


class _ExplodingSink:
    def send(self, event):
        raise TelemetryError("dashboard down")


class _ExplodingStore(InMemoryAnalysisStore):
    def put(self, key, record):
        raise OSError("disk full")


def _router(scorer=None, **kwargs):
    def _factory(settings):
        if scorer is None:
            raise AssertionError("remote scorer must not be used")
        return scorer

    return AnalysisRouter(scorer_factory=_factory, clock=lambda: 1_700_000_000_000, **kwargs)


def test_no_api_key_runs_local_scan(caplog):
    with caplog.at_level(logging.WARNING):
        result = _router().route(EMAIL, Settings())
    assert result.source == "local"
    assert result.confidence == 99
    assert not result.recommendation.startswith(FALLBACK_PREFIX)
    assert "No API key configured" in caplog.text


def test_blank_api_key_counts_as_missing():
    result = _router().route(EMAIL, Settings(api_key="   "))
    assert result.source == "local"


def test_remote_result_is_reconciled(fake_scorer, model_reply, remote_settings):
    scorer = fake_scorer(reply=model_reply(isPhishing=False, confidence=30, indicators=["odd link"]))
    result = _router(scorer).route(EMAIL, remote_settings)
    assert result.source == "remote"
    assert result.is_phishing is True
    assert result.confidence == 50
    assert "From: boss@company.com" in scorer.prompts[0]


def test_transport_error_falls_back(fake_scorer, remote_settings, caplog):
    scorer = fake_scorer(error=TransportError("API request failed: 429", status_code=429))
    with caplog.at_level(logging.ERROR):
        result = _router(scorer).route(EMAIL, remote_settings)
    assert result.source == "fallback"
    assert result.recommendation.startswith(FALLBACK_PREFIX)
    assert result.confidence == 99
    assert "429" in caplog.text


def test_format_error_falls_back(fake_scorer, remote_settings):
    result = _router(fake_scorer(reply="sorry, I cannot help")).route(EMAIL, remote_settings)
    assert result.source == "fallback"
    assert result.recommendation.startswith("API Scan failed due to error/limit. ")


def test_out_of_range_remote_confidence_falls_back(fake_scorer, model_reply, remote_settings):
    store = InMemoryAnalysisStore()
    scorer = fake_scorer(reply=model_reply(isPhishing=True, confidence=150, indicators=["x"]))
    result = _router(scorer, store=store).route(EMAIL, remote_settings)
    assert result.source == "fallback"
    assert result.confidence == 99
    assert store.keys() == []


def test_unexpected_scorer_failure_falls_back(remote_settings):
    def _factory(settings):
        raise RuntimeError("boom")

    result = AnalysisRouter(scorer_factory=_factory).route(EMAIL, remote_settings)
    assert result.source == "fallback"


def test_remote_result_is_stored(fake_scorer, model_reply, remote_settings):
    store = InMemoryAnalysisStore()
    scorer = fake_scorer(reply=model_reply(confidence=12))
    _router(scorer, store=store).route(EMAIL, remote_settings)
    record = store.get("analysis_abc123")
    assert record is not None
    assert record["confidence"] == 12
    assert record["timestamp"] == 1_700_000_000_000
    assert record["emailData"] == {"from": "boss@company.com", "subject": "Urgent: verify account"}
    assert record["settings"] == {"model": "test/model", "threshold": 70}


def test_local_results_are_not_stored():
    store = InMemoryAnalysisStore()
    _router(store=store).route(EMAIL, Settings())
    assert store.keys() == []


def test_store_failure_does_not_change_result(fake_scorer, model_reply, remote_settings):
    scorer = fake_scorer(reply=model_reply(confidence=12))
    result = _router(scorer, store=_ExplodingStore()).route(EMAIL, remote_settings)
    assert result.source == "remote"
    assert result.confidence == 12


def test_telemetry_receives_event_when_enabled():
    sink = InMemoryTelemetrySink()
    settings = Settings(telemetry_enabled=True, telemetry_user="analyst@company.com")
    result = _router(telemetry=sink).route(EMAIL, settings)
    assert len(sink.events) == 1
    event = sink.events[0].to_payload()
    assert event["user"] == "analyst@company.com"
    assert event["from"] == "boss@company.com"
    assert event["score"] == result.confidence
    assert event["isPhishing"] is True
    assert event["reasons"] == result.indicators
    assert event["timestamp"] == 1_700_000_000_000


def test_telemetry_skipped_without_user():
    sink = InMemoryTelemetrySink()
    _router(telemetry=sink).route(EMAIL, Settings(telemetry_enabled=True))
    assert sink.events == []


def test_telemetry_failure_is_swallowed(fake_scorer, model_reply, remote_settings):
    settings = remote_settings.model_copy(update={"telemetry_enabled": True, "telemetry_user": "u@x.com"})
    scorer = fake_scorer(reply=model_reply(confidence=5))
    result = _router(scorer, telemetry=_ExplodingSink()).route(EMAIL, settings)
    assert result.source == "remote"
    assert result.confidence == 5


def test_fallback_result_is_also_published(fake_scorer, remote_settings):
    sink = InMemoryTelemetrySink()
    settings = remote_settings.model_copy(update={"telemetry_enabled": True, "telemetry_user": "u@x.com"})
    _router(fake_scorer(error=TransportError("offline")), telemetry=sink).route(EMAIL, settings)
    assert len(sink.events) == 1
    assert sink.events[0].recommendation.startswith(FALLBACK_PREFIX)
