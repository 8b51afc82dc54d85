"""Email domain models."""

from phishing_detector.domain.email.models import EmailData, LinkAnalysisOutcome, ScanResult, ScanSource

__all__ = ["EmailData", "LinkAnalysisOutcome", "ScanResult", "ScanSource"]
