"""Error kinds raised inside the scan engine and its collaborators."""

from __future__ import annotations


class PhishingDetectorError(Exception):
    """Base class for every error raised by this package."""


class MalformedLinkError(PhishingDetectorError):
    """Raised when a candidate link cannot be parsed as an absolute URL."""

    def __init__(self, link: str, reason: str = "unable to parse") -> None:
        super().__init__(f"Malformed link {link!r}: {reason}.")
        self.link = link
        self.reason = reason


class FormatError(PhishingDetectorError):
    """Raised when remote model output cannot be coerced to a scan result."""


class TransportError(PhishingDetectorError):
    """Raised when the remote scorer cannot be reached or answers with an error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TelemetryError(PhishingDetectorError):
    """Raised by telemetry sinks; the router never lets it escape."""
