"""Validation and correction of remote model verdicts."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from phishing_detector.domain.email.models import ScanResult
from phishing_detector.errors import FormatError

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

INCONSISTENCY_MIN_CONFIDENCE = 50


@dataclass(frozen=True)
class ReconcileOutcome:
    """Either a reconciled result or the reason the raw output was rejected."""

    result: ScanResult | None = None
    error: FormatError | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None

    def unwrap(self) -> ScanResult:
        if self.result is None:
            raise self.error or FormatError("Remote output was not reconciled.")
        return self.result


def _extract_object(raw: str) -> dict[str, Any]:
    text = _FENCE_PATTERN.sub("", (raw or "").strip())
    match = _OBJECT_PATTERN.search(text)
    if not match:
        raise FormatError("Invalid response format from API. Expected JSON object.")
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise FormatError(f"Response JSON could not be decoded: {exc.msg}.") from exc
    if not isinstance(payload, dict):
        raise FormatError("Invalid response format from API. Expected JSON object.")
    return payload


def _validate_fields(payload: dict[str, Any]) -> tuple[bool, float, list[str], str]:
    is_phishing = payload.get("isPhishing")
    confidence = payload.get("confidence")
    indicators = payload.get("indicators")
    recommendation = payload.get("recommendation")
    if (
        not isinstance(is_phishing, bool)
        or isinstance(confidence, bool)
        or not isinstance(confidence, (int, float))
        or not isinstance(indicators, list)
        or not isinstance(recommendation, str)
    ):
        raise FormatError("Invalid response structure from API")
    if any(not isinstance(item, str) for item in indicators):
        raise FormatError("Invalid response structure from API: indicators must be strings.")
    if confidence != confidence or confidence in (float("inf"), float("-inf")):
        raise FormatError("Invalid response structure from API: confidence must be finite.")
    return is_phishing, confidence, list(indicators), recommendation


def _as_int(value: float) -> int:
    if isinstance(value, int):
        return value
    return int(round(value))


def parse_model_output(raw: str, threshold: int) -> ReconcileOutcome:
    """Parse, validate and correct raw model text into a tagged outcome."""

    try:
        payload = _extract_object(raw)
        is_phishing, confidence, indicators, recommendation = _validate_fields(payload)
    except FormatError as exc:
        return ReconcileOutcome(error=exc)

    score = _as_int(confidence)
    if indicators:
        if not is_phishing:
            logger.warning("Model output was inconsistent: indicators listed but verdict safe. Forcing phishing.")
        is_phishing = True
        score = max(score, INCONSISTENCY_MIN_CONFIDENCE)

    if score >= threshold and not is_phishing:
        is_phishing = True
        recommendation = (
            f"Flagged due to high confidence ({score}%) exceeding threshold ({threshold}%). {recommendation}"
        )

    # Confidence outside 0..100 is not clamped: it fails ScanResult validation
    # and the router falls back to the local scan.
    try:
        result = ScanResult(
            is_phishing=is_phishing,
            confidence=score,
            indicators=indicators,
            recommendation=recommendation,
            source="remote",
        )
    except ValidationError as exc:
        return ReconcileOutcome(error=FormatError(f"Remote verdict failed validation: {exc.errors()[0]['msg']}"))
    return ReconcileOutcome(result=result)


def reconcile(raw: str, threshold: int) -> ScanResult:
    """Return the reconciled result, raising FormatError when the output is unusable."""

    return parse_model_output(raw, threshold).unwrap()
