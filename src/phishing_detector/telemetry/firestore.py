"""Firestore REST sink for the remote dashboard."""

from __future__ import annotations

import logging
from typing import Any

import requests

from phishing_detector.errors import TelemetryError
from phishing_detector.telemetry.events import TelemetryEvent

logger = logging.getLogger(__name__)

FIRESTORE_DOCUMENTS_URL = (
    "https://firestore.googleapis.com/v1/projects/{project}/databases/(default)/documents/{collection}"
)


def to_firestore_fields(event: TelemetryEvent) -> dict[str, Any]:
    """Encode an event as Firestore typed values."""

    return {
        "fields": {
            "timestamp": {"integerValue": str(event.timestamp)},
            "user": {"stringValue": event.user},
            "from": {"stringValue": event.sender},
            "subject": {"stringValue": event.subject},
            "score": {"integerValue": str(event.score)},
            "isPhishing": {"booleanValue": event.is_phishing},
            "reasons": {"arrayValue": {"values": [{"stringValue": item} for item in event.reasons]}},
            "recommendation": {"stringValue": event.recommendation},
        }
    }


class FirestoreTelemetrySink:
    def __init__(
        self,
        project: str,
        *,
        collection: str = "emailEvents",
        timeout_s: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.url = FIRESTORE_DOCUMENTS_URL.format(project=project, collection=collection)
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def send(self, event: TelemetryEvent) -> None:
        try:
            response = self.session.post(
                self.url,
                json=to_firestore_fields(event),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout_s,
            )
        except requests.RequestException as exc:
            raise TelemetryError(f"Dashboard sync failed: {exc}") from exc
        if not response.ok:
            raise TelemetryError(f"Dashboard sync rejected ({response.status_code}): {response.text[:200]}")
        logger.info("Scan event sent to dashboard for %s", event.user)
