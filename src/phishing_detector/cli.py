"""Command line runner."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from phishing_detector.domain.email.models import EmailData
from phishing_detector.orchestrator.build import create_router
from phishing_detector.scanner.local import scan
from phishing_detector.sources.registry import SourceRegistry


def run_once(
    email: EmailData,
    *,
    local_only: bool = False,
    model: str | None = None,
    profile: str | None = None,
) -> str:
    router, cfg, runtime = create_router(profile_override=profile, model_override=model)
    logging.basicConfig(level=getattr(logging, cfg.log_level, logging.INFO))
    if local_only:
        result = scan(email, policy=router.local_policy)
    else:
        result = router.route(email, cfg.to_settings())
    payload = result.to_payload()
    payload["runtime"] = runtime
    return json.dumps(payload, ensure_ascii=True)


def load_email(args: argparse.Namespace) -> EmailData | None:
    if args.email:
        return EmailData.model_validate_json(Path(args.email).read_text(encoding="utf-8"))
    if args.html:
        source_cls = SourceRegistry().get(args.service)
        if source_cls is None:
            raise SystemExit(f"Unknown service: {args.service}")
        return source_cls(Path(args.html).read_text(encoding="utf-8")).extract_current()
    return EmailData(
        sender=args.sender or "",
        subject=args.subject or "",
        body=args.body or "",
        links=tuple(args.link or ()),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="phishing-detector")
    parser.add_argument("--email", help="Path to an EmailData JSON document.")
    parser.add_argument("--html", help="Path to a saved webmail page.")
    parser.add_argument("--service", default="gmail", choices=["gmail", "outlook"], help="Vendor of --html.")
    parser.add_argument("--from", dest="sender", help="Sender field.")
    parser.add_argument("--subject", help="Subject line.")
    parser.add_argument("--body", help="Body text.")
    parser.add_argument("--link", action="append", help="Link found in the body; repeatable.")
    parser.add_argument("--local", action="store_true", help="Skip the remote scorer.")
    parser.add_argument("--model", help="Override the remote model for this run.")
    parser.add_argument("--profile", help="Config profile from defaults.yaml.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    email = load_email(args)
    if email is None:
        print(json.dumps({"error": "No open email found in the page snapshot."}))
        return 1
    print(run_once(email, local_only=args.local, model=args.model, profile=args.profile))
    return 0
