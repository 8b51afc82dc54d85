"""Email source interface for webmail vendors."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging

from bs4 import BeautifulSoup, Tag

from phishing_detector.domain.email.models import EmailData

logger = logging.getLogger(__name__)


class EmailSource(ABC):
    name: str

    @abstractmethod
    def extract_current(self) -> EmailData | None:
        """Return the email currently open, or None when no message is shown."""


def _text(node: Tag | None) -> str:
    return node.get_text(" ", strip=True) if node is not None else ""


class HtmlSnapshotSource(EmailSource):
    """Reads the open message from the latest page HTML snapshot."""

    subject_selectors: tuple[str, ...] = ()
    body_selectors: tuple[str, ...] = ()
    sender_selectors: tuple[str, ...] = ()
    link_selector: str = ""

    def __init__(self, html: str = "") -> None:
        self.html = html

    def update(self, html: str) -> None:
        self.html = html

    def _soup(self) -> BeautifulSoup:
        soup = BeautifulSoup(self.html or "", "html.parser")
        for tag in soup(["script", "style"]):
            tag.decompose()
        return soup

    @staticmethod
    def _first(soup: BeautifulSoup, selectors: tuple[str, ...]) -> Tag | None:
        for selector in selectors:
            node = soup.select_one(selector)
            if node is not None:
                return node
        return None

    def _sender(self, soup: BeautifulSoup) -> str:
        return _text(self._first(soup, self.sender_selectors))

    def _links(self, soup: BeautifulSoup) -> list[str]:
        if not self.link_selector:
            return []
        hrefs = (str(node.get("href") or "") for node in soup.select(self.link_selector))
        return [href for href in hrefs if href.startswith("http")]

    def extract_current(self) -> EmailData | None:
        try:
            soup = self._soup()
            subject = _text(self._first(soup, self.subject_selectors))
            body = _text(self._first(soup, self.body_selectors))
            if not subject and not body:
                return None
            return EmailData(
                sender=self._sender(soup),
                subject=subject,
                body=body,
                links=tuple(self._links(soup)),
                service=self.name,
            )
        except Exception as exc:  # noqa: BLE001 - a broken snapshot means no email is shown
            logger.error("Error extracting %s data: %s", self.name, exc)
            return None
