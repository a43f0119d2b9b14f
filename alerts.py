"""
alerts.py: audit alerts for blocked registrations (Resend email).

Best-effort: a failed alert is logged, never raised, and never turns a
block into an accept.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from core.traits.models import BlockAlert
from core.traits.report import format_alert_text

logger = logging.getLogger("genomad")

RESEND_URL = "https://api.resend.com/emails"


def resend_send_email(
    *,
    api_key: Optional[str],
    from_email: Optional[str],
    to_email: Optional[str],
    subject: str,
    text: str,
) -> bool:
    if not api_key or not from_email or not to_email:
        return False
    headers = {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}
    data = {"from": from_email, "to": [to_email], "subject": subject, "text": text}
    try:
        r = requests.post(RESEND_URL, headers=headers, json=data, timeout=20)
        r.raise_for_status()
        return True
    except requests.RequestException:
        logger.exception("Resend send failed")
        return False


def send_block_alert(alert: BlockAlert, settings) -> bool:
    logger.warning(
        "Registration blocked: agent=%s fitness=%.2f reason=%s",
        alert.agent_name, alert.fitness, alert.reason,
    )
    if not settings.alerts_enabled:
        logger.info("Alerts not configured; skipping send")
        return False

    subject = f"[Genomad] Blocked registration: {alert.agent_name} ({alert.fitness:.1f})"
    return resend_send_email(
        api_key=settings.RESEND_API_KEY,
        from_email=settings.NOTIFY_EMAIL_FROM,
        to_email=settings.NOTIFY_EMAIL_TO,
        subject=subject,
        text=format_alert_text(alert),
    )
