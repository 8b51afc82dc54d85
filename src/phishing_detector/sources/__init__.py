"""Webmail page readers producing EmailData."""

from phishing_detector.sources.base import EmailSource, HtmlSnapshotSource
from phishing_detector.sources.gmail import GmailSource
from phishing_detector.sources.outlook import OutlookSource
from phishing_detector.sources.registry import SourceRegistry, detect_platform

__all__ = [
    "EmailSource",
    "GmailSource",
    "HtmlSnapshotSource",
    "OutlookSource",
    "SourceRegistry",
    "detect_platform",
]
