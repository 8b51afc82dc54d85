"""Configuration loading."""

from phishing_detector.config.settings import AppConfig, Settings, clamp_threshold, load_config

__all__ = ["AppConfig", "Settings", "clamp_threshold", "load_config"]
