# server/tests/unit/test_notification_task.py
import uuid

import httpx
import pytest

from creomotion.application.services import notification_service
from creomotion.core.config import settings
from creomotion.workers.tasks.notification_tasks import notify

pytestmark = pytest.mark.unit


def _payload(**overrides):
    data = {
        "deliverableId": str(uuid.uuid4()),
        "deliverableName": "Teaser",
        "version": 2,
        "projectId": str(uuid.uuid4()),
        "projectName": "Brand film",
        "decision": "CHANGES_REQUESTED",
        "notes": "Shorter intro",
        "reviewerId": str(uuid.uuid4()),
        "reviewerType": "CLIENT",
        "reviewerEmail": "buyer@acme.lt",
    }
    data.update(overrides)
    return data


def test_format_review_message():
    subject, text = notification_service.format_review_message(_payload())
    assert subject == "[CreoMotion] Teaser v2: CHANGES_REQUESTED"
    assert "buyer@acme.lt requested changes on Teaser v2" in text
    assert "> Shorter intro" in text


def test_notify_without_webhook_returns_false(monkeypatch):
    monkeypatch.setattr(settings, "SLACK_WEBHOOK", None)
    assert notify.apply(args=[_payload()]).get() is False


def test_notify_posts_to_slack(monkeypatch):
    calls = []

    def _fake_post(url, json=None, timeout=None):
        calls.append((url, json))
        return httpx.Response(200, request=httpx.Request("POST", url))

    monkeypatch.setattr(settings, "SLACK_WEBHOOK", "https://hooks.slack.test/T000")
    monkeypatch.setattr(notification_service.httpx, "post", _fake_post)

    assert notify.apply(args=[_payload(decision="APPROVED")]).get() is True
    assert calls[0][0] == "https://hooks.slack.test/T000"
    assert "approved Teaser v2" in calls[0][1]["text"]


def test_notify_slack_error_status_returns_false(monkeypatch):
    def _fake_post(url, json=None, timeout=None):
        return httpx.Response(500, request=httpx.Request("POST", url))

    monkeypatch.setattr(notification_service.httpx, "post", _fake_post)
    assert notification_service.notify_slack("hi", webhook="https://hooks.slack.test/T000") is False


def test_invalid_payload_is_dropped():
    assert notify.apply(args=[_payload(decision="MAYBE")]).get() is False
