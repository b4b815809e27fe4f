from __future__ import annotations
"""server/creomotion/workers/tasks/notification_tasks.py
Tâche Celery de notification des décisions de revue :
- Validation du payload (Pydantic)
- Retry/backoff sur erreur réseau Slack
- Envoi Slack via webhook + email journalisé
"""

from typing import Any, Dict
import uuid

import httpx
from celery.utils.log import get_task_logger
from pydantic import BaseModel, ValidationError, field_validator

from creomotion.application.services.notification_service import (
    format_review_message,
    notify_email,
    notify_slack,
)
from creomotion.workers.celery_app import celery

logger = get_task_logger(__name__)


class ReviewNotificationPayload(BaseModel):
    """Décision de revue d'un livrable, telle qu'envoyée par le service."""
    deliverableId: uuid.UUID
    deliverableName: str
    version: int = 1
    projectId: uuid.UUID
    projectName: str | None = None
    decision: str
    notes: str | None = None
    reviewerId: uuid.UUID
    reviewerType: str
    reviewerEmail: str | None = None
    notifyEmail: str | None = None

    @field_validator("decision")
    @classmethod
    def validate_decision(cls, v: str):
        if v not in ("APPROVED", "CHANGES_REQUESTED"):
            raise ValueError("decision must be APPROVED or CHANGES_REQUESTED")
        return v


@celery.task(
    name="tasks.notify",
    bind=True,
    autoretry_for=(httpx.TransportError,),
    retry_backoff=30,  # 30s, 60s, 120s
    retry_kwargs={"max_retries": 3},
    acks_late=True,
    queue="notify",
)
def notify(self, payload: Dict[str, Any]) -> bool:
    """
    Envoi d'une notification de revue.

    - payload invalide : pas de retry (retour False)
    - webhook absent ou réponse en erreur : retour False
    - erreur réseau Slack : retry automatique (l'exception remonte)
    """
    try:
        validated = ReviewNotificationPayload(**payload)
    except ValidationError as e:
        logger.error("Notification payload invalid: %s", e.errors())
        return False

    subject, text = format_review_message(validated.model_dump(mode="json"))
    notify_email(subject, text, to=validated.notifyEmail)
    sent = notify_slack(text)
    logger.info("Notification livrable %s : slack=%s", validated.deliverableId, sent)
    return sent
