"""Persistence adapters."""

from phishing_detector.infra.store import (
    AnalysisStore,
    InMemoryAnalysisStore,
    JsonFileAnalysisStore,
    analysis_key,
    build_analysis_record,
    latest_record,
)

__all__ = [
    "AnalysisStore",
    "InMemoryAnalysisStore",
    "JsonFileAnalysisStore",
    "analysis_key",
    "build_analysis_record",
    "latest_record",
]
