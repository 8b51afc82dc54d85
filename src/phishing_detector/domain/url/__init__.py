"""Sender domain and link risk checks."""

from phishing_detector.domain.url.links import SUSPICIOUS_TLDS, LinkRiskWeights, analyze_links
from phishing_detector.domain.url.parse import ParsedLink, parse_link, url_hostname
from phishing_detector.domain.url.sender import extract_sender_domain

__all__ = [
    "SUSPICIOUS_TLDS",
    "LinkRiskWeights",
    "ParsedLink",
    "analyze_links",
    "extract_sender_domain",
    "parse_link",
    "url_hostname",
]
