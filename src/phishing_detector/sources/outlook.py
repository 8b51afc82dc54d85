"""Outlook web page reader."""

from __future__ import annotations

from phishing_detector.sources.base import HtmlSnapshotSource


class OutlookSource(HtmlSnapshotSource):
    name = "outlook"
    subject_selectors = ("div[role='heading'][aria-level='1']", "div._3W2")
    body_selectors = ("div[aria-label='Message body']", "div[role='main'] div[dir='auto']")
    sender_selectors = ("div[role='article'] span[role='link']", "div._3t0 span")
    link_selector = "div[aria-label='Message body'] a, div[role='main'] a"
