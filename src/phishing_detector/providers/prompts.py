"""Prompt templates for the remote scorer."""

from __future__ import annotations

from phishing_detector.domain.email.models import EmailData

BODY_CHAR_LIMIT = 2000
LINK_LIMIT = 10

SYSTEM_PROMPT = "You are a cybersecurity expert specializing in phishing detection. Respond ONLY with valid JSON."

ANALYSIS_PROMPT = """Analyze this email for phishing indicators. Respond ONLY with a valid JSON object in this exact format (no markdown, no backticks):
{{
  "isPhishing": true or false,
  "confidence": number between 0-100,
  "indicators": ["list", "of", "suspicious", "things"],
  "recommendation": "brief recommendation text"
}}

Email Details:
From: {sender}
Subject: {subject}
Body: {body}
Links: {links}

IMPORTANT: Be conservative in flagging legitimate emails. Only flag as phishing if there are MULTIPLE strong indicators.
Always cross-check link domains against the sender's domain and the email content. Raise confidence when links go to unrelated domains, use non-HTTPS protocols, or request credentials/logins."""


def build_prompt(email: EmailData) -> str:
    return ANALYSIS_PROMPT.format(
        sender=email.sender,
        subject=email.subject,
        body=email.body[:BODY_CHAR_LIMIT],
        links=", ".join(list(email.links)[:LINK_LIMIT]),
    )
