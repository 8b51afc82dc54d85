"""Email and scan result domain models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ScanSource = Literal["local", "fallback", "remote"]


class EmailData(BaseModel):
    """Normalized view of the email currently open in a webmail page."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sender: str = Field(default="", alias="from")
    subject: str = ""
    body: str = ""
    links: tuple[str, ...] = ()
    email_id: str = Field(default="", alias="emailId")
    service: str = ""


class ScanResult(BaseModel):
    """Verdict produced by the local scanner or the remote reconciler."""

    model_config = ConfigDict(populate_by_name=True)

    is_phishing: bool = Field(default=False, alias="isPhishing")
    confidence: int = Field(default=0, ge=0, le=100)
    indicators: list[str] = Field(default_factory=list)
    recommendation: str = ""
    source: ScanSource = "local"

    @model_validator(mode="after")
    def _check_verdict_consistency(self) -> "ScanResult":
        if self.is_phishing and not self.recommendation.strip():
            raise ValueError("A phishing verdict requires a recommendation.")
        if self.is_phishing and self.confidence == 0 and not self.indicators:
            raise ValueError("A phishing verdict requires a confidence or an indicator.")
        if self.source != "remote" and self.confidence > 99:
            raise ValueError("Local scan confidence is capped at 99.")
        return self

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class LinkAnalysisOutcome(BaseModel):
    """Indicators and score subtotal for one link-list evaluation."""

    indicators: list[str] = Field(default_factory=list)
    score_delta: int = Field(default=0, ge=0)
