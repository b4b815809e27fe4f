# server/tests/integration/test_time_entries_api.py
import uuid

import pytest

pytestmark = pytest.mark.integration

BASE = "/api/v1/time-entries"


def _log(c, project_id, duration=3600, **overrides):
    payload = {"projectId": str(project_id), "duration": duration, "date": "2026-03-02T10:00:00Z"}
    payload.update(overrides)
    return c.post(BASE, json=payload)


@pytest.fixture
def own_project(portal_client, make_project):
    return make_project(portal_client[0].id)


def test_entry_belongs_to_session_principal(admin, own_project):
    r = _log(admin, own_project.id, hourlyRate=45)
    assert r.status_code == 201, r.text
    entry = r.json()["timeEntry"]
    me = admin.get("/api/v1/auth/me").json()["user"]
    assert entry["userId"] == me["id"]
    assert entry["billable"] is True
    assert entry["hourlyRate"] == 45
    assert entry["project"]["id"] == str(own_project.id)


def test_userid_in_payload_is_ignored(admin, own_project):
    r = _log(admin, own_project.id, userId=str(uuid.uuid4()))
    me = admin.get("/api/v1/auth/me").json()["user"]
    assert r.json()["timeEntry"]["userId"] == me["id"]


def test_validation(admin, own_project):
    assert _log(admin, own_project.id, duration=-1).status_code == 400
    assert admin.post(BASE, json={"projectId": str(own_project.id), "duration": 60}).status_code == 400
    r = _log(admin, uuid.uuid4())
    assert r.status_code == 404
    assert r.json() == {"error": "Project not found"}


def test_task_must_belong_to_project(admin, own_project, make_client, make_project):
    other = make_project(make_client(email="other@else.lt").id)
    task = admin.post(f"/api/v1/projects/{other.id}/tasks", json={"name": "Grade"}).json()["task"]
    r = _log(admin, own_project.id, taskId=task["id"])
    assert r.status_code == 404
    assert r.json() == {"error": "Task not found"}


def test_client_logs_only_on_own_projects(client_session, own_project, make_client, make_project):
    theirs = make_project(make_client(email="other@else.lt").id)
    assert _log(client_session, own_project.id).status_code == 201
    assert _log(client_session, theirs.id).status_code == 403


def test_client_sees_only_own_entries(admin, client_session, portal_client, own_project):
    _log(admin, own_project.id, 7200)
    mine = _log(client_session, own_project.id, 900).json()["timeEntry"]
    assert mine["userId"] == str(portal_client[0].id)

    listed = client_session.get(BASE).json()["timeEntries"]
    assert [e["id"] for e in listed] == [mine["id"]]

    admin_id = admin.get("/api/v1/auth/me").json()["user"]["id"]
    assert client_session.get(BASE, params={"userId": admin_id}).json() == {"timeEntries": []}
    assert len(admin.get(BASE).json()["timeEntries"]) == 2


def test_client_cannot_touch_foreign_entry(admin, client_session, own_project):
    entry = _log(admin, own_project.id).json()["timeEntry"]
    assert client_session.get(f"{BASE}/{entry['id']}").status_code == 403
    assert client_session.put(f"{BASE}/{entry['id']}", json={"duration": 1}).status_code == 403
    assert client_session.delete(f"{BASE}/{entry['id']}").status_code == 403


def test_list_filters(admin, own_project, make_client, make_project):
    other = make_project(make_client(email="other@else.lt").id)
    _log(admin, own_project.id, 600, date="2026-01-05T09:00:00Z")
    _log(admin, own_project.id, 1200, date="2026-02-10T09:00:00Z", billable=False)
    _log(admin, other.id, 1800, date="2026-02-20T09:00:00Z")

    def durations(**params):
        return [e["duration"] for e in admin.get(BASE, params=params).json()["timeEntries"]]

    assert durations() == [1800, 1200, 600]
    assert durations(projectId=str(own_project.id)) == [1200, 600]
    assert durations(billable="false") == [1200]
    assert durations(startDate="2026-02-01T00:00:00Z") == [1800, 1200]
    assert durations(startDate="2026-02-01T00:00:00Z", endDate="2026-02-15T00:00:00Z") == [1200]


def test_update_and_delete_own_entry(client_session, own_project):
    entry = _log(client_session, own_project.id, 600).json()["timeEntry"]
    r = client_session.put(f"{BASE}/{entry['id']}", json={"duration": 1200, "description": "Feedback call"})
    assert r.status_code == 200
    assert r.json()["timeEntry"]["duration"] == 1200
    assert r.json()["timeEntry"]["description"] == "Feedback call"

    assert client_session.delete(f"{BASE}/{entry['id']}").json() == {"success": True}
    assert client_session.get(f"{BASE}/{entry['id']}").status_code == 404
