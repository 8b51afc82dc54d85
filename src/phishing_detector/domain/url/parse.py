"""Absolute-URL parsing shared by the sender and link checks."""

from __future__ import annotations

from dataclasses import dataclass
import re
from urllib.parse import SplitResult, urlsplit, urlunsplit

from phishing_detector.errors import MalformedLinkError

_SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*$", re.IGNORECASE)
_WHITESPACE_PATTERN = re.compile(r"\s")
_STRIPPED_CONTROL_PATTERN = re.compile(r"[\t\n\r]")
# Schemes whose URLs must carry a host; others (mailto:, javascript:) may not.
HOST_REQUIRED_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})


@dataclass(frozen=True)
class ParsedLink:
    href: str
    scheme: str
    host: str

    @property
    def normalized_host(self) -> str:
        return self.host[4:] if self.host.startswith("www.") else self.host

    @property
    def tld(self) -> str:
        return self.host.rsplit(".", 1)[-1]


def _ascii_host(raw: str, host: str) -> str:
    if host.isascii():
        return host
    try:
        return host.encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise MalformedLinkError(raw, "invalid internationalized host") from exc


def _split(raw: str) -> tuple[SplitResult, str]:
    value = _STRIPPED_CONTROL_PATTERN.sub("", (raw or "").strip())
    if not value:
        raise MalformedLinkError(raw)
    try:
        parts = urlsplit(value)
        # Touch port/hostname so invalid ports and IPv6 literals fail here.
        _ = (parts.port, parts.hostname)
    except ValueError as exc:
        raise MalformedLinkError(raw, str(exc)) from exc
    if not parts.scheme or not _SCHEME_PATTERN.match(parts.scheme):
        raise MalformedLinkError(raw, "missing scheme")
    if _WHITESPACE_PATTERN.search(parts.netloc):
        raise MalformedLinkError(raw, "whitespace in host")
    host = _ascii_host(raw, (parts.hostname or "").lower())
    if not host and parts.scheme.lower() in HOST_REQUIRED_SCHEMES:
        raise MalformedLinkError(raw, "missing host")
    return parts, host


def _encode_spaces(value: str) -> str:
    return value.replace(" ", "%20")


def parse_link(raw: str) -> ParsedLink:
    """Parse an absolute URL, raising MalformedLinkError when it cannot be read.

    Hosts are lowercased and converted to their ASCII (``xn--``) form. Links
    without a host, such as ``mailto:`` ones, parse with an empty host.
    """

    parts, host = _split(raw)
    scheme = parts.scheme.lower()
    netloc = parts.netloc.lower()
    if host and parts.hostname and host != parts.hostname.lower():
        netloc = netloc.replace(parts.hostname.lower(), host)
    path = parts.path
    if scheme in HOST_REQUIRED_SCHEMES and not path:
        path = "/"
    href = urlunsplit(
        (scheme, netloc, _encode_spaces(path), _encode_spaces(parts.query), _encode_spaces(parts.fragment))
    )
    return ParsedLink(href=href, scheme=scheme, host=host)


def url_hostname(raw: str) -> str | None:
    """Return the lowercased ASCII hostname of an absolute URL, or None."""

    try:
        _, host = _split(raw)
    except MalformedLinkError:
        return None
    return host or None
