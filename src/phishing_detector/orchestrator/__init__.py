"""Scan routing, reconciliation and session handling."""

from phishing_detector.orchestrator.reconciler import ReconcileOutcome, parse_model_output, reconcile
from phishing_detector.orchestrator.router import AnalysisRouter, default_scorer_factory, scorer_factory_from_config
from phishing_detector.orchestrator.session import ScanSession, email_id_for, email_key

__all__ = [
    "AnalysisRouter",
    "ReconcileOutcome",
    "ScanSession",
    "default_scorer_factory",
    "email_id_for",
    "email_key",
    "parse_model_output",
    "reconcile",
    "scorer_factory_from_config",
]
