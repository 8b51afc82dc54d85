"""Local heuristic scanner."""

from phishing_detector.scanner.local import PHISHING_KEYWORDS, LocalScanPolicy, scan

__all__ = ["PHISHING_KEYWORDS", "LocalScanPolicy", "scan"]
