"""Heuristic and model-backed phishing scanner for webmail messages."""

__version__ = "0.3.0"
