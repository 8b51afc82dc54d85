"""Analysis record stores keyed like the extension's local storage."""

from __future__ import annotations

import json
from pathlib import Path
import threading
from typing import Any, Protocol

from phishing_detector.domain.email.models import EmailData, ScanResult

ANALYSIS_KEY_PREFIX = "analysis_"


def analysis_key(email: EmailData, timestamp_ms: int) -> str:
    return f"{ANALYSIS_KEY_PREFIX}{email.email_id or timestamp_ms}"


def build_analysis_record(
    email: EmailData,
    result: ScanResult,
    *,
    model: str,
    threshold: int,
    timestamp_ms: int,
) -> dict[str, Any]:
    record = result.to_payload()
    record.update(
        {
            "timestamp": timestamp_ms,
            "emailData": {"from": email.sender, "subject": email.subject},
            "settings": {"model": model, "threshold": threshold},
        }
    )
    return record


class AnalysisStore(Protocol):
    def put(self, key: str, record: dict[str, Any]) -> None: ...

    def get(self, key: str) -> dict[str, Any] | None: ...

    def keys(self) -> list[str]: ...


def latest_record(store: AnalysisStore) -> dict[str, Any] | None:
    records = [store.get(key) for key in store.keys() if key.startswith(ANALYSIS_KEY_PREFIX)]
    dated = [item for item in records if isinstance(item, dict)]
    if not dated:
        return None
    return max(dated, key=lambda item: int(item.get("timestamp", 0)))


class InMemoryAnalysisStore:
    def __init__(self) -> None:
        self._store: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def put(self, key: str, record: dict[str, Any]) -> None:
        with self._lock:
            self._store[key] = dict(record)

    def get(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            value = self._store.get(key)
        return dict(value) if value is not None else None

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._store)


class JsonFileAnalysisStore:
    """Keeps every record in one JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        payload = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        return payload if isinstance(payload, dict) else {}

    def put(self, key: str, record: dict[str, Any]) -> None:
        with self._lock:
            payload = self._load()
            payload[key] = record
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(payload, ensure_ascii=True, indent=2), encoding="utf-8")
            tmp.replace(self.path)

    def get(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            value = self._load().get(key)
        return value if isinstance(value, dict) else None

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._load())
