"""Local keyword and link heuristic scanner.

Pure and deterministic: no network, no clock. Used directly when no remote
scorer is configured and as the fallback when the remote path fails.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from phishing_detector.domain.email.models import EmailData, ScanResult
from phishing_detector.domain.url.links import LinkRiskWeights, analyze_links
from phishing_detector.domain.url.sender import extract_sender_domain

PHISHING_KEYWORDS = (
    "urgent",
    "account suspended",
    "verify account",
    "click here to update",
    "password expired",
    "payment failed",
    "unauthorized access",
    "invoice attached",
    "confirm password",
    "verify identity",
    "bank account",
    "update billing",
    "reset your password",
    "security alert",
    "wire transfer",
    "gift card",
)

PHISHING_RECOMMENDATION = (
    "Potential Phishing Detected via Local Scan. "
    "Use extreme caution and manually verify the sender and links."
)
CAUTION_RECOMMENDATION = (
    "Email appears safe based on basic local checks, but minor indicators were found. "
    "Use caution for complex or novel threats."
)
SAFE_RECOMMENDATION = "Email appears safe based on basic local checks."
FALLBACK_PREFIX = "API Scan failed due to error/limit. "


@dataclass(frozen=True)
class LocalScanPolicy:
    # Independent of the user's remote threshold.
    phishing_threshold: int = 45
    max_confidence: int = 99
    keyword_weight: int = 15
    links_present_weight: int = 8
    keywords: tuple[str, ...] = PHISHING_KEYWORDS
    link_weights: LinkRiskWeights = field(default_factory=LinkRiskWeights)


def _recommendation(is_phishing: bool, confidence: int, *, is_fallback: bool) -> str:
    if is_phishing:
        text = PHISHING_RECOMMENDATION
    elif confidence > 0:
        text = CAUTION_RECOMMENDATION
    else:
        text = SAFE_RECOMMENDATION
    return f"{FALLBACK_PREFIX}{text}" if is_fallback else text


def scan(email: EmailData, is_fallback: bool = False, *, policy: LocalScanPolicy | None = None) -> ScanResult:
    """Score an email from its keywords and links."""

    active = policy or LocalScanPolicy()
    body = (email.body or "").lower()
    subject = (email.subject or "").lower()
    email_text = f"{subject} {body}"
    sender_domain = extract_sender_domain(email.sender)

    indicators: list[str] = []
    confidence = 0
    for keyword in active.keywords:
        if keyword in body or keyword in subject:
            indicators.append(f'Keyword detected: "{keyword}"')
            confidence += active.keyword_weight

    links = list(email.links)
    if links:
        indicators.append(f"Contains {len(links)} external link(s).")
        confidence += active.links_present_weight
        outcome = analyze_links(links, email_text, sender_domain, weights=active.link_weights)
        indicators.extend(outcome.indicators)
        confidence += outcome.score_delta

    confidence = min(confidence, active.max_confidence)
    is_phishing = confidence >= active.phishing_threshold
    return ScanResult(
        is_phishing=is_phishing,
        confidence=confidence,
        indicators=indicators,
        recommendation=_recommendation(is_phishing, confidence, is_fallback=is_fallback),
        source="fallback" if is_fallback else "local",
    )
