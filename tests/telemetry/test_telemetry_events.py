import pytest
import requests

from phishing_detector.domain.email.models import EmailData, ScanResult
from phishing_detector.errors import TelemetryError
from phishing_detector.telemetry.events import build_telemetry_event
from phishing_detector.telemetry.firestore import FirestoreTelemetrySink, to_firestore_fields


class _Response:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text
        self.ok = 200 <= status_code < 300


class _Session:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


def _event():
    result = ScanResult(is_phishing=True, confidence=72, indicators=["a", "b"], recommendation="Be careful.")
    return build_telemetry_event(EmailData(), result, user="u@x.com", timestamp_ms=1_700_000_000_000)


def test_event_defaults_for_missing_sender_and_subject():
    payload = _event().to_payload()
    assert payload == {
        "timestamp": 1_700_000_000_000,
        "user": "u@x.com",
        "from": "Unknown",
        "subject": "No Subject",
        "score": 72,
        "isPhishing": True,
        "reasons": ["a", "b"],
        "recommendation": "Be careful.",
    }


def test_firestore_typed_fields():
    fields = to_firestore_fields(_event())["fields"]
    assert fields["timestamp"] == {"integerValue": "1700000000000"}
    assert fields["score"] == {"integerValue": "72"}
    assert fields["isPhishing"] == {"booleanValue": True}
    assert fields["reasons"] == {"arrayValue": {"values": [{"stringValue": "a"}, {"stringValue": "b"}]}}
    assert fields["from"] == {"stringValue": "Unknown"}


def test_sink_posts_to_project_collection():
    session = _Session(_Response(200))
    FirestoreTelemetrySink("demo-project", session=session).send(_event())
    url, kwargs = session.calls[0]
    assert url == (
        "https://firestore.googleapis.com/v1/projects/demo-project/databases/(default)/documents/emailEvents"
    )
    assert kwargs["json"]["fields"]["user"] == {"stringValue": "u@x.com"}


def test_sink_rejection_raises_telemetry_error():
    session = _Session(_Response(403, text="PERMISSION_DENIED"))
    with pytest.raises(TelemetryError, match="403"):
        FirestoreTelemetrySink("demo-project", session=session).send(_event())


def test_sink_network_failure_raises_telemetry_error():
    session = _Session(error=requests.ConnectionError("offline"))
    with pytest.raises(TelemetryError):
        FirestoreTelemetrySink("demo-project", session=session).send(_event())
