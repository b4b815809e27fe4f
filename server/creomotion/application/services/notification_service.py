from __future__ import annotations
"""server/creomotion/application/services/notification_service.py
~~~~~~~~~~~~~~~~~~~~~~~~
Notifications (Slack webhook + email journalisé).
"""
from creomotion.core.config import settings
import logging
import httpx


log = logging.getLogger(__name__)


def notify_slack(text: str, *, webhook: str | None = None) -> bool:
    """
    Poste `text` sur le webhook Slack.
    Réponse HTTP en erreur : False. Erreur réseau (httpx.TransportError) :
    remonte, la tâche Celery appelante gère le retry.
    """
    url = webhook or settings.SLACK_WEBHOOK
    if not url:
        log.info("Slack webhook non configuré : %s", text)
        return False
    resp = httpx.post(url, json={"text": text}, timeout=5.0)
    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        log.warning("Slack send failed: %s", exc)
        return False
    return True


def notify_email(subject: str, body: str, *, to: str | None) -> bool:
    if not to:
        log.info("Email non configuré : %s : %s", subject, body)
        return False
    log.info("Email %s -> %s : %s : %s", settings.NOTIFY_FROM_EMAIL, to, subject, body)
    return True


def format_review_message(payload: dict) -> tuple[str, str]:
    """(sujet, texte) pour une décision de revue sur un livrable."""
    decision = payload.get("decision")
    verb = "approved" if decision == "APPROVED" else "requested changes on"
    who = payload.get("reviewerEmail") or payload.get("reviewerId")
    name = f"{payload.get('deliverableName')} v{payload.get('version')}"
    subject = f"[CreoMotion] {name}: {decision}"
    text = f"{who} {verb} {name} (project {payload.get('projectName')})"
    notes = payload.get("notes")
    if notes:
        text += f"\n> {notes}"
    return subject, text
