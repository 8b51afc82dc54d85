"""Per email-view scan session with auto-scan de-duplication."""

from __future__ import annotations

import base64
from dataclasses import dataclass
import logging
from typing import Callable

from phishing_detector.config.settings import Settings
from phishing_detector.domain.email.models import EmailData, ScanResult
from phishing_detector.orchestrator.router import AnalysisRouter
from phishing_detector.sources.base import EmailSource

logger = logging.getLogger(__name__)

EMAIL_ID_LENGTH = 20


def email_key(email: EmailData) -> str:
    return f"{email.subject}_{email.sender}_{email.body[:100]}"


def email_id_for(key: str) -> str:
    return base64.b64encode(key.encode("utf-8")).decode("ascii")[:EMAIL_ID_LENGTH]


@dataclass
class ScanSession:
    """Tracks which email the current view has already scanned."""

    router: AnalysisRouter
    load_settings: Callable[[], Settings]
    last_scanned_key: str | None = None
    last_result: ScanResult | None = None

    def reset(self) -> None:
        self.last_scanned_key = None
        self.last_result = None

    def _scan(self, email: EmailData, key: str) -> ScanResult:
        self.last_scanned_key = key
        tagged = email.model_copy(update={"email_id": email_id_for(key)})
        result = self.router.route(tagged, self.load_settings())
        self.last_result = result
        return result

    def observe(self, source: EmailSource) -> ScanResult | None:
        """Auto-scan the open email once; returns None when nothing new was scanned."""

        email = source.extract_current()
        if email is None:
            if self.last_scanned_key is not None:
                logger.info("Detected navigation away from email. Resetting state.")
                self.reset()
            return None
        key = email_key(email)
        if key == self.last_scanned_key:
            return None
        logger.info("Auto-scanning new email: %s", email.subject)
        return self._scan(email, key)

    def rescan(self, source: EmailSource) -> ScanResult | None:
        """Manual scan: always routes the open email, even if already scanned."""

        email = source.extract_current()
        if email is None:
            return None
        return self._scan(email, email_key(email))
