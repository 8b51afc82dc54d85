"""Build and wire the analysis router from config."""

from __future__ import annotations

from phishing_detector.config.settings import AppConfig, load_config
from phishing_detector.infra.store import AnalysisStore, InMemoryAnalysisStore, JsonFileAnalysisStore
from phishing_detector.orchestrator.router import AnalysisRouter, scorer_factory_from_config
from phishing_detector.scanner.local import LocalScanPolicy
from phishing_detector.telemetry.events import NullTelemetrySink, TelemetrySink
from phishing_detector.telemetry.firestore import FirestoreTelemetrySink


def build_store(cfg: AppConfig) -> AnalysisStore:
    if cfg.store_path:
        return JsonFileAnalysisStore(cfg.store_path)
    return InMemoryAnalysisStore()


def build_telemetry(cfg: AppConfig) -> TelemetrySink:
    if not cfg.telemetry_enabled:
        return NullTelemetrySink()
    return FirestoreTelemetrySink(cfg.firestore_project, timeout_s=cfg.telemetry_timeout_s)


def create_router(
    *,
    profile_override: str | None = None,
    model_override: str | None = None,
) -> tuple[AnalysisRouter, AppConfig, dict[str, object]]:
    env_cfg, yaml_cfg = load_config(profile_override=profile_override)
    if model_override:
        env_cfg = env_cfg.model_copy(update={"model": model_override})
    router = AnalysisRouter(
        scorer_factory=scorer_factory_from_config(env_cfg),
        telemetry=build_telemetry(env_cfg),
        store=build_store(env_cfg),
        local_policy=LocalScanPolicy(phishing_threshold=env_cfg.local_threshold),
    )
    profiles = yaml_cfg.get("profiles")
    profile_map = profiles if isinstance(profiles, dict) else {}
    runtime = {
        "profile": env_cfg.profile,
        "profile_choices": [str(item) for item in profile_map.keys() if str(item).strip()],
        "model": env_cfg.model,
        "endpoint": env_cfg.endpoint,
        "remote_enabled": bool(env_cfg.api_key),
        "threshold": env_cfg.threshold,
        "local_threshold": env_cfg.local_threshold,
        "telemetry_enabled": env_cfg.telemetry_enabled,
    }
    return router, env_cfg, runtime
