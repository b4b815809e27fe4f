from __future__ import annotations
"""server/creomotion/application/services/deliverable_service.py
~~~~~~~~~~~~~~~~~~~~~~~~
Cycle de vie des livrables : création versionnée, mise à jour, revues.

- Version = max(version) + 1 pour (project_id, name), 1 sinon. La contrainte
  unique (project_id, name, version) ferme la course entre deux créations
  concurrentes : sur IntegrityError on annule et on recalcule, un nombre
  borné de fois (DELIVERABLE_VERSION_RETRIES).
- Un CLIENT ne peut que poser APPROVED / REJECTED (+ commentaire).
- Toute décision APPROVED / REJECTED laisse une DeliverableReview et
  déclenche la tâche Celery `tasks.notify` après commit.
"""
import logging
from typing import Any

from kombu.exceptions import OperationalError as BrokerError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from creomotion.core.config import settings
from creomotion.core.errors import AuthorizationError, ConflictError, ValidationError
from creomotion.core.utils.datetime import utcnow
from creomotion.domain.enums import (
    CLIENT_DECISIONS,
    DeliverableStatus,
    ReviewDecision,
    ReviewerType,
    Role,
    values,
)
from creomotion.infrastructure.persistence.database.models.deliverable import Deliverable, DeliverableReview
from creomotion.infrastructure.persistence.repositories.deliverable_repository import DeliverableRepository
from creomotion.workers.tasks.notification_tasks import notify

log = logging.getLogger(__name__)

CLIENT_ONLY_DECISIONS = "Clients can only approve or request changes"

# statut du livrable -> décision enregistrée
_DECISIONS = {
    DeliverableStatus.APPROVED.value: ReviewDecision.APPROVED.value,
    DeliverableStatus.REJECTED.value: ReviewDecision.CHANGES_REQUESTED.value,
}

# champs modifiables par l'équipe (en plus de status / comment)
STAFF_FIELDS = ("name", "description", "file_url", "thumbnail_url", "file_size", "mime_type", "google_drive_id")
# colonnes non nulles : un null explicite est ignoré
NON_NULL_FIELDS = ("name",)


def create_deliverable(db: Session, *, project_id, name: str, **fields: Any) -> Deliverable:
    """Crée la version suivante de (project_id, name) et commit."""
    repo = DeliverableRepository(db)
    attempts = max(1, int(settings.DELIVERABLE_VERSION_RETRIES))
    for attempt in range(1, attempts + 1):
        version = (repo.max_version(project_id, name) or 0) + 1
        try:
            deliverable = repo.create(
                project_id=project_id,
                name=name,
                version=version,
                status=DeliverableStatus.DRAFT.value,
                **fields,
            )
            db.commit()
            return deliverable
        except IntegrityError:
            db.rollback()
            log.warning(
                "deliverable version clash project=%s name=%r v%s (attempt %s/%s)",
                project_id, name, version, attempt, attempts,
            )
    raise ConflictError("Could not allocate a deliverable version, please retry")


def comment_line(text: str) -> str:
    return f"[Comment {utcnow().strftime('%Y-%m-%d %H:%M UTC')}]: {text}"


def append_comment(description: str | None, text: str) -> str:
    line = comment_line(text)
    return f"{description}\n\n{line}" if description else line


def check_client_update(changes: dict[str, Any]) -> None:
    """Un CLIENT n'envoie que status (APPROVED/REJECTED) et/ou comment."""
    extra = set(changes) - {"status", "comment"}
    status = changes.get("status")
    if extra or (status is not None and status not in CLIENT_DECISIONS):
        raise AuthorizationError(CLIENT_ONLY_DECISIONS)


def update_deliverable(db: Session, deliverable: Deliverable, changes: dict[str, Any], *, actor) -> Deliverable:
    """
    Applique une mise à jour partielle (`changes` = champs effectivement envoyés).
    `actor` : SessionClaims de l'appelant. La propriété du projet est vérifiée en amont.
    """
    if actor.role == Role.CLIENT.value:
        check_client_update(changes)

    status = changes.get("status")
    if status is not None and status not in values(DeliverableStatus):
        raise ValidationError("Invalid status")

    repo = DeliverableRepository(db)
    updates = {
        k: v for k, v in changes.items()
        if k in STAFF_FIELDS and not (v is None and k in NON_NULL_FIELDS)
    }
    comment = (changes.get("comment") or "").strip()
    if comment:
        updates["description"] = append_comment(updates.get("description", deliverable.description), comment)
    if status is not None:
        updates["status"] = status

    try:
        repo.update(deliverable, **updates)
        review = None
        if status in _DECISIONS:
            review = _record_review(repo, deliverable, _DECISIONS[status], comment or None, actor)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("A deliverable with this name and version already exists") from exc

    if review is not None:
        enqueue_review_notification(deliverable, review, actor)
    return deliverable


def decide(db: Session, deliverable: Deliverable, decision: str, *, notes: str | None, actor) -> DeliverableReview:
    """approve / request-changes : statut APPROVED ou REJECTED + revue enregistrée."""
    status = DeliverableStatus.APPROVED.value if decision == ReviewDecision.APPROVED.value else DeliverableStatus.REJECTED.value
    repo = DeliverableRepository(db)
    repo.update(deliverable, status=status)
    review = _record_review(repo, deliverable, decision, (notes or "").strip() or None, actor)
    db.commit()
    enqueue_review_notification(deliverable, review, actor)
    return review


def _record_review(repo: DeliverableRepository, deliverable: Deliverable, decision: str, notes: str | None, actor) -> DeliverableReview:
    reviewer_type = ReviewerType.CLIENT.value if actor.role == Role.CLIENT.value else ReviewerType.USER.value
    return repo.add_review(
        deliverable,
        decision=decision,
        notes=notes,
        reviewer_id=actor.user_id,
        reviewer_type=reviewer_type,
    )


def review_payload(deliverable: Deliverable, review: DeliverableReview, actor) -> dict[str, Any]:
    project = deliverable.project
    # décision de l'équipe : on prévient le client ; décision du client : Slack équipe
    notify_email = None
    if review.reviewer_type == ReviewerType.USER.value and project is not None and project.client is not None:
        notify_email = project.client.email
    return {
        "deliverableId": str(deliverable.id),
        "deliverableName": deliverable.name,
        "version": deliverable.version,
        "projectId": str(deliverable.project_id),
        "projectName": project.name if project is not None else None,
        "decision": review.decision,
        "notes": review.notes,
        "reviewerId": str(review.reviewer_id),
        "reviewerType": review.reviewer_type,
        "reviewerEmail": actor.email,
        "notifyEmail": notify_email,
    }


def enqueue_review_notification(deliverable: Deliverable, review: DeliverableReview, actor) -> None:
    payload = review_payload(deliverable, review, actor)
    try:
        notify.delay(payload)
    except BrokerError as exc:
        # la décision est déjà commitée ; la notification est perdue, on le trace
        log.error("notification enqueue failed for deliverable %s: %s", deliverable.id, exc)
