"""Remote dashboard telemetry."""

from phishing_detector.telemetry.events import (
    InMemoryTelemetrySink,
    NullTelemetrySink,
    TelemetryEvent,
    TelemetrySink,
    build_telemetry_event,
)
from phishing_detector.telemetry.firestore import FirestoreTelemetrySink, to_firestore_fields

__all__ = [
    "FirestoreTelemetrySink",
    "InMemoryTelemetrySink",
    "NullTelemetrySink",
    "TelemetryEvent",
    "TelemetrySink",
    "build_telemetry_event",
    "to_firestore_fields",
]
