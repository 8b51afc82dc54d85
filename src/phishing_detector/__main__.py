"""CLI entrypoint for phishing_detector."""

from __future__ import annotations

from phishing_detector.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
