"""Dashboard telemetry events and sinks."""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from phishing_detector.domain.email.models import EmailData, ScanResult


class TelemetryEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    timestamp: int
    user: str
    sender: str = Field(default="Unknown", alias="from")
    subject: str = "No Subject"
    score: int = 0
    is_phishing: bool = Field(default=False, alias="isPhishing")
    reasons: list[str] = Field(default_factory=list)
    recommendation: str = ""

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def build_telemetry_event(email: EmailData, result: ScanResult, *, user: str, timestamp_ms: int) -> TelemetryEvent:
    return TelemetryEvent(
        timestamp=timestamp_ms,
        user=user,
        sender=email.sender or "Unknown",
        subject=email.subject or "No Subject",
        score=result.confidence,
        is_phishing=result.is_phishing,
        reasons=list(result.indicators),
        recommendation=result.recommendation,
    )


class TelemetrySink(Protocol):
    def send(self, event: TelemetryEvent) -> None: ...


class NullTelemetrySink:
    def send(self, event: TelemetryEvent) -> None:
        return None


class InMemoryTelemetrySink:
    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []

    def send(self, event: TelemetryEvent) -> None:
        self.events.append(event)
