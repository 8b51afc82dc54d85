"""Config loader from env + yaml, and the scan settings read by the router."""

from __future__ import annotations

from pathlib import Path
import os
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field

from phishing_detector.providers.openrouter import DEFAULT_ENDPOINT, DEFAULT_MODEL

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config" / "defaults.yaml"
ENV_PREFIX = "PHISHING_DETECTOR_"

DEFAULT_THRESHOLD = 70
DEFAULT_LOCAL_THRESHOLD = 45


def clamp_threshold(raw: Any, fallback: int = DEFAULT_THRESHOLD) -> int:
    if isinstance(raw, bool):
        return fallback
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return fallback
    if value == 0:
        return fallback
    return max(1, min(100, value))


class Settings(BaseModel):
    """Remote scoring settings; the engine never mutates them."""

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    threshold: int = Field(default=DEFAULT_THRESHOLD, ge=1, le=100)
    telemetry_enabled: bool = False
    telemetry_user: str | None = None

    @property
    def has_api_key(self) -> bool:
        return bool((self.api_key or "").strip())

    @property
    def telemetry_active(self) -> bool:
        return self.telemetry_enabled and bool(self.telemetry_user)

    @classmethod
    def from_store(cls, store: Mapping[str, Any]) -> "Settings":
        """Build settings from the extension's key-value store."""

        return cls(
            api_key=_parse_optional_str(store.get("or_api_key")),
            endpoint=_parse_str(store.get("or_endpoint"), DEFAULT_ENDPOINT),
            model=_parse_str(store.get("or_model"), DEFAULT_MODEL),
            threshold=clamp_threshold(store.get("user_threshold")),
            telemetry_enabled=_parse_bool(store.get("firebaseEnabled"), False),
            telemetry_user=_parse_optional_str(store.get("userEmail")),
        )


class AppConfig(BaseModel):

    profile: str = Field(default="default")
    api_key: str | None = Field(default=None)
    endpoint: str = Field(default=DEFAULT_ENDPOINT)
    model: str = Field(default=DEFAULT_MODEL)
    threshold: int = Field(default=DEFAULT_THRESHOLD, ge=1, le=100)
    local_threshold: int = Field(default=DEFAULT_LOCAL_THRESHOLD, ge=1, le=99)
    temperature: float = Field(default=0.3)
    max_tokens: int = Field(default=800)
    request_timeout_s: float = Field(default=30.0)
    referer: str | None = Field(default=None)
    telemetry_enabled: bool = Field(default=False)
    telemetry_user: str | None = Field(default=None)
    firestore_project: str = Field(default="shupraprotects")
    telemetry_timeout_s: float = Field(default=10.0)
    store_path: str | None = Field(default=None)
    log_level: str = Field(default="INFO")
    default_config_path: str = Field(default=str(DEFAULT_CONFIG_PATH))

    def to_settings(self) -> Settings:
        return Settings(
            api_key=self.api_key,
            endpoint=self.endpoint,
            model=self.model,
            threshold=self.threshold,
            telemetry_enabled=self.telemetry_enabled,
            telemetry_user=self.telemetry_user,
        )


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    payload = yaml.safe_load(p.read_text(encoding="utf-8"))
    return payload if isinstance(payload, dict) else {}


def _pick_env(name: str, fallback: Any) -> Any:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    return value if value not in (None, "") else fallback


def _parse_int(raw: Any, fallback: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return fallback
    return value if value > 0 else fallback


def _parse_float(raw: Any, fallback: float) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return fallback
    return value if value > 0 else fallback


def _parse_bool(raw: Any, fallback: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return fallback
    value = str(raw).strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return fallback


def _parse_str(raw: Any, fallback: str) -> str:
    value = str(raw if raw is not None else "").strip()
    return value or fallback


def _parse_optional_str(raw: Any) -> str | None:
    value = str(raw if raw is not None else "").strip()
    return value or None


def _resolve_default_config_path(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path)
    env_default_path = os.getenv(f"{ENV_PREFIX}DEFAULT_CONFIG_PATH")
    if env_default_path:
        return Path(env_default_path)
    return DEFAULT_CONFIG_PATH


def load_config(
    path: str | Path | None = None,
    *,
    profile_override: str | None = None,
) -> tuple[AppConfig, dict[str, Any]]:
    default_path = _resolve_default_config_path(path)
    merged = load_yaml(default_path)
    profiles = merged.get("profiles")
    profile_map = profiles if isinstance(profiles, dict) else {}

    active_profile = str(profile_override or _pick_env("PROFILE", merged.get("profile", "default")))
    selected_profile = profile_map.get(active_profile, {})
    selected = selected_profile if isinstance(selected_profile, dict) else {}

    def _value(key: str, fallback: Any) -> Any:
        return _pick_env(key.upper(), selected.get(key, merged.get(key, fallback)))

    payload = {
        "profile": active_profile,
        "api_key": _parse_optional_str(_value("api_key", None)),
        "endpoint": _parse_str(_value("endpoint", DEFAULT_ENDPOINT), DEFAULT_ENDPOINT),
        "model": _parse_str(_value("model", DEFAULT_MODEL), DEFAULT_MODEL),
        "threshold": clamp_threshold(_value("threshold", DEFAULT_THRESHOLD)),
        "local_threshold": min(99, clamp_threshold(_value("local_threshold", DEFAULT_LOCAL_THRESHOLD), DEFAULT_LOCAL_THRESHOLD)),
        "temperature": _parse_float(_value("temperature", 0.3), 0.3),
        "max_tokens": _parse_int(_value("max_tokens", 800), 800),
        "request_timeout_s": _parse_float(_value("request_timeout_s", 30.0), 30.0),
        "referer": _parse_optional_str(_value("referer", None)),
        "telemetry_enabled": _parse_bool(_value("telemetry_enabled", False), False),
        "telemetry_user": _parse_optional_str(_value("telemetry_user", None)),
        "firestore_project": _parse_str(_value("firestore_project", "shupraprotects"), "shupraprotects"),
        "telemetry_timeout_s": _parse_float(_value("telemetry_timeout_s", 10.0), 10.0),
        "store_path": _parse_optional_str(_value("store_path", None)),
        "log_level": _parse_str(_value("log_level", "INFO"), "INFO").upper(),
        "default_config_path": str(default_path),
    }

    cfg = AppConfig.model_validate(payload)
    return cfg, merged
