"""Per-link risk checks against the sender domain and email text."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Iterable

from phishing_detector.domain.email.models import LinkAnalysisOutcome
from phishing_detector.domain.url.parse import ParsedLink, parse_link
from phishing_detector.errors import MalformedLinkError

logger = logging.getLogger(__name__)

SUSPICIOUS_TLDS = frozenset(
    {"ru", "su", "cn", "info", "xyz", "club", "support", "top", "click", "zip", "kim"}
)
IPV4_HOST_PATTERN = re.compile(r"^\d{1,3}(\.\d{1,3}){3}$")
MALFORMED_LINK_INDICATOR = "Malformed link detected (unable to parse)"


@dataclass(frozen=True)
class LinkRiskWeights:
    malformed: int = 10
    unsecured: int = 15
    unreferenced_domain: int = 10
    sender_mismatch: int = 20
    punycode: int = 15
    suspicious_tld: int = 15
    raw_ip: int = 25


def _check_link(
    link: ParsedLink,
    *,
    email_text: str,
    sender_domain: str | None,
    weights: LinkRiskWeights,
) -> tuple[list[str], int]:
    indicators: list[str] = []
    score = 0
    host = link.host
    normalized_host = link.normalized_host

    if link.scheme != "https":
        indicators.append(f"Unsecured link detected ({link.href})")
        score += weights.unsecured
    if normalized_host not in email_text:
        indicators.append(f"Link domain {host} not referenced in the email body/subject")
        score += weights.unreferenced_domain
    if sender_domain and not normalized_host.endswith(sender_domain):
        indicators.append(f"Link domain {host} differs from sender domain {sender_domain}")
        score += weights.sender_mismatch
    if "xn--" in host:
        indicators.append(f"Link uses punycode/obfuscated domain ({host})")
        score += weights.punycode
    if link.tld in SUSPICIOUS_TLDS:
        indicators.append(f"Link uses high-risk TLD .{link.tld}")
        score += weights.suspicious_tld
    if IPV4_HOST_PATTERN.match(host):
        indicators.append(f"Link uses raw IP address ({host})")
        score += weights.raw_ip
    return indicators, score


def analyze_links(
    links: Iterable[str],
    email_text: str = "",
    sender_domain: str | None = None,
    *,
    weights: LinkRiskWeights | None = None,
) -> LinkAnalysisOutcome:
    """Score every link independently; a malformed link never aborts the batch."""

    active = weights or LinkRiskWeights()
    indicators: list[str] = []
    total = 0
    for raw in links:
        try:
            parsed = parse_link(raw)
        except MalformedLinkError as exc:
            logger.debug("%s", exc)
            indicators.append(MALFORMED_LINK_INDICATOR)
            total += active.malformed
            continue
        link_indicators, link_score = _check_link(
            parsed,
            email_text=email_text,
            sender_domain=sender_domain,
            weights=active,
        )
        indicators.extend(link_indicators)
        total += link_score
    return LinkAnalysisOutcome(indicators=indicators, score_delta=total)
