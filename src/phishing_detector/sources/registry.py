"""Registry for webmail source implementations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Type

from phishing_detector.sources.base import HtmlSnapshotSource
from phishing_detector.sources.gmail import GmailSource
from phishing_detector.sources.outlook import OutlookSource


def detect_platform(host: str) -> str | None:
    clean = (host or "").strip().lower()
    if "mail.google.com" in clean:
        return "gmail"
    if "outlook.live.com" in clean or "outlook.office.com" in clean:
        return "outlook"
    return None


@dataclass
class SourceRegistry:
    sources: Dict[str, Type[HtmlSnapshotSource]] = field(
        default_factory=lambda: {"gmail": GmailSource, "outlook": OutlookSource}
    )

    def get(self, name: str) -> Type[HtmlSnapshotSource] | None:
        return self.sources.get(name)

    def for_host(self, host: str, html: str = "") -> HtmlSnapshotSource | None:
        platform = detect_platform(host)
        source_cls = self.get(platform) if platform else None
        return source_cls(html) if source_cls else None
