"""Sender domain extraction."""

from __future__ import annotations

import re

from phishing_detector.domain.url.parse import url_hostname

SENDER_ADDRESS_PATTERN = re.compile(r"@([a-z0-9.-]+\.[a-z]{2,})", re.IGNORECASE)


def extract_sender_domain(from_field: str | None) -> str | None:
    """Return the lowercased domain of a free-form sender field.

    The first ``user@host`` address wins; otherwise the whole field is tried as
    a URL. ``None`` means the sender domain is unknown and checks that compare
    against it are skipped.
    """

    raw = from_field or ""
    match = SENDER_ADDRESS_PATTERN.search(raw)
    if match:
        return match.group(1).lower()
    return url_hostname(raw)
