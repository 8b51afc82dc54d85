"""FastAPI entrypoint used by the browser extension background worker."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from phishing_detector import __version__
from phishing_detector.config.settings import AppConfig, Settings
from phishing_detector.domain.email.models import EmailData
from phishing_detector.infra.store import latest_record
from phishing_detector.orchestrator.build import create_router
from phishing_detector.orchestrator.router import AnalysisRouter
from phishing_detector.scanner.local import scan


class AnalyzeRequest(BaseModel):
    email: EmailData
    settings: dict[str, Any] | None = Field(default=None)


def create_app(router: AnalysisRouter | None = None, cfg: AppConfig | None = None) -> FastAPI:
    if router is None or cfg is None:
        built_router, built_cfg, _ = create_router()
        router = router or built_router
        cfg = cfg or built_cfg
    active_router = router
    default_settings = cfg.to_settings()

    app = FastAPI(title="phishing-detector", version=__version__)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/analyze")
    def analyze(payload: AnalyzeRequest) -> dict[str, object]:
        settings = Settings.from_store(payload.settings) if payload.settings is not None else default_settings
        return active_router.route(payload.email, settings).to_payload()

    @app.post("/scan/local")
    def scan_local(email: EmailData) -> dict[str, object]:
        return scan(email, policy=active_router.local_policy).to_payload()

    @app.get("/analyses/latest")
    def latest_analysis() -> dict[str, object]:
        record = latest_record(active_router.store) if active_router.store is not None else None
        if record is None:
            raise HTTPException(status_code=404, detail="No analysis stored yet.")
        return record

    return app


app = create_app()
