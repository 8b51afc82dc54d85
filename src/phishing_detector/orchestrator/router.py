"""Local vs remote scan routing with fallback and result dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import time
from typing import Callable

from phishing_detector.config.settings import AppConfig, Settings
from phishing_detector.domain.email.models import EmailData, ScanResult
from phishing_detector.infra.store import AnalysisStore, analysis_key, build_analysis_record
from phishing_detector.orchestrator.reconciler import reconcile
from phishing_detector.providers.openrouter import OpenRouterClient, ProviderConfig, RemoteScorer
from phishing_detector.providers.prompts import build_prompt
from phishing_detector.scanner.local import LocalScanPolicy, scan
from phishing_detector.telemetry.events import NullTelemetrySink, TelemetrySink, build_telemetry_event

logger = logging.getLogger(__name__)

ScorerFactory = Callable[[Settings], RemoteScorer]


def _now_ms() -> int:
    return int(time.time() * 1000)


def default_scorer_factory(settings: Settings) -> RemoteScorer:
    return OpenRouterClient(
        ProviderConfig(api_key=settings.api_key or "", endpoint=settings.endpoint, model=settings.model)
    )


def scorer_factory_from_config(cfg: AppConfig) -> ScorerFactory:
    def _factory(settings: Settings) -> RemoteScorer:
        return OpenRouterClient(
            ProviderConfig(
                api_key=settings.api_key or "",
                endpoint=settings.endpoint,
                model=settings.model,
                temperature=cfg.temperature,
                max_tokens=cfg.max_tokens,
                timeout_s=cfg.request_timeout_s,
                referer=cfg.referer,
            )
        )

    return _factory


@dataclass
class AnalysisRouter:
    """Runs one scan per call and always hands back a ScanResult."""

    scorer_factory: ScorerFactory = default_scorer_factory
    telemetry: TelemetrySink = field(default_factory=NullTelemetrySink)
    store: AnalysisStore | None = None
    local_policy: LocalScanPolicy = field(default_factory=LocalScanPolicy)
    clock: Callable[[], int] = _now_ms

    def route(self, email: EmailData, settings: Settings) -> ScanResult:
        if not settings.has_api_key:
            logger.warning("No API key configured. Running local, basic scan.")
            result = scan(email, policy=self.local_policy)
        else:
            try:
                result = self._remote_scan(email, settings)
            except Exception as exc:  # noqa: BLE001 - any remote failure falls back to the local scan
                logger.error(
                    "Remote scan failed (%s: %s). Falling back to local scan.",
                    type(exc).__name__,
                    exc,
                )
                result = scan(email, True, policy=self.local_policy)
            else:
                self._persist(email, result, settings)
        self._publish(email, result, settings)
        return result

    def _remote_scan(self, email: EmailData, settings: Settings) -> ScanResult:
        scorer = self.scorer_factory(settings)
        raw = scorer.complete(build_prompt(email))
        return reconcile(raw, settings.threshold)

    def _persist(self, email: EmailData, result: ScanResult, settings: Settings) -> None:
        if self.store is None:
            return
        timestamp = self.clock()
        try:
            self.store.put(
                analysis_key(email, timestamp),
                build_analysis_record(
                    email,
                    result,
                    model=settings.model,
                    threshold=settings.threshold,
                    timestamp_ms=timestamp,
                ),
            )
        except Exception as exc:  # noqa: BLE001 - storage is best-effort
            logger.error("Could not store analysis record: %s", exc)

    def _publish(self, email: EmailData, result: ScanResult, settings: Settings) -> None:
        if not settings.telemetry_active:
            return
        try:
            event = build_telemetry_event(
                email,
                result,
                user=settings.telemetry_user or "",
                timestamp_ms=self.clock(),
            )
            self.telemetry.send(event)
        except Exception as exc:  # noqa: BLE001 - dashboard sync must never affect the result
            logger.error("Error sending scan event to dashboard: %s", exc)
