"""Gmail page reader."""

from __future__ import annotations

from bs4 import BeautifulSoup

from phishing_detector.sources.base import HtmlSnapshotSource


class GmailSource(HtmlSnapshotSource):
    name = "gmail"
    subject_selectors = ("h2.hP", ".hP")
    body_selectors = (".a3s.aiL", "div[role='main'] .a3s")
    sender_selectors = (".gD", "[email]")
    link_selector = ".a3s.aiL a, [data-message-id] a"

    def _sender(self, soup: BeautifulSoup) -> str:
        node = self._first(soup, self.sender_selectors)
        if node is None:
            return ""
        return str(node.get("email") or "") or node.get_text(" ", strip=True)
