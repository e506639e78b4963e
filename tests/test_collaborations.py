import json
from datetime import timedelta

from conftest import auth_headers, make_profile
from taskflow.models.collaboration import CollaborationInvitation, TaskActivity
from taskflow.utils.time import utc_now


def make_task(client, headers, title="Shared task"):
    return client.post("/api/tasks", headers=headers, json={"title": title}).json()["data"]


def invite(client, headers, task_id, email="bruno@example.com", permission="edit"):
    return client.post(
        "/api/collaborations/invite",
        headers=headers,
        json={"taskId": task_id, "email": email, "permission": permission, "message": "Join me"}
    )


def test_invite_and_accept(client, headers, other_headers, other_user):
    task = make_task(client, headers)
    response = invite(client, headers, task["id"])
    assert response.status_code == 201
    invitation = response.json()["data"]
    assert invitation["status"] == "pending"
    assert invitation["invited_email"] == "bruno@example.com"

    pending = client.get("/api/collaborations/invitations", headers=other_headers).json()["data"]
    assert [i["id"] for i in pending] == [invitation["id"]]

    accepted = client.post(
        f"/api/collaborations/invitations/{invitation['id']}/accept", headers=other_headers
    )
    assert accepted.status_code == 200
    collaborator = accepted.json()["data"]
    assert collaborator["user_id"] == other_user.id
    assert collaborator["permission"] == "edit"
    assert collaborator["user"]["email"] == "bruno@example.com"

    assert client.get("/api/collaborations/invitations", headers=other_headers).json()["data"] == []
    permission = client.get(f"/api/collaborations/task/{task['id']}/permission", headers=other_headers).json()
    assert permission == {"data": {"permission": "edit"}}


def test_invitation_expires_after_seven_days(client, headers, db):
    task = make_task(client, headers)
    invitation = invite(client, headers, task["id"], email="nobody@example.com").json()["data"]
    row = db.query(CollaborationInvitation).filter(CollaborationInvitation.id == invitation["id"]).first()
    assert timedelta(days=6, hours=23) < row.expires_at - row.created_at <= timedelta(days=7, seconds=1)


def test_cannot_invite_self(client, headers):
    task = make_task(client, headers)
    response = invite(client, headers, task["id"], email="ANA@example.com")
    assert response.status_code == 400
    assert response.json()["detail"] == "You cannot invite yourself"


def test_only_owner_can_invite(client, headers, other_headers):
    task = make_task(client, headers)
    assert invite(client, other_headers, task["id"], email="c@example.com").status_code == 404


def test_expired_invitation_hidden_and_not_acceptable(client, headers, other_headers, db):
    task = make_task(client, headers)
    invitation = invite(client, headers, task["id"]).json()["data"]
    row = db.query(CollaborationInvitation).filter(CollaborationInvitation.id == invitation["id"]).first()
    row.expires_at = utc_now() - timedelta(minutes=1)
    db.commit()

    assert client.get("/api/collaborations/invitations", headers=other_headers).json()["data"] == []
    response = client.post(f"/api/collaborations/invitations/{invitation['id']}/accept", headers=other_headers)
    assert response.status_code == 400


def test_decline_invitation(client, headers, other_headers):
    task = make_task(client, headers)
    invitation = invite(client, headers, task["id"]).json()["data"]
    declined = client.post(f"/api/collaborations/invitations/{invitation['id']}/decline", headers=other_headers)
    assert declined.json()["data"]["status"] == "declined"
    again = client.post(f"/api/collaborations/invitations/{invitation['id']}/accept", headers=other_headers)
    assert again.status_code == 400


def test_invitation_for_someone_else(client, headers):
    task = make_task(client, headers)
    invitation = invite(client, headers, task["id"]).json()["data"]
    stranger = auth_headers(make_profile("carla@example.com"))
    response = client.post(f"/api/collaborations/invitations/{invitation['id']}/accept", headers=stranger)
    assert response.status_code == 404


def test_collaborators_and_removal(client, headers, other_headers, other_user):
    task = make_task(client, headers)
    invitation = invite(client, headers, task["id"]).json()["data"]
    client.post(f"/api/collaborations/invitations/{invitation['id']}/accept", headers=other_headers)

    collaborators = client.get(f"/api/collaborations/task/{task['id']}/collaborators", headers=other_headers)
    assert [c["user_id"] for c in collaborators.json()["data"]] == [other_user.id]

    removed = client.delete(
        f"/api/collaborations/task/{task['id']}/collaborator/{other_user.id}", headers=headers
    )
    assert removed.json() == {"success": True}
    permission = client.get(f"/api/collaborations/task/{task['id']}/permission", headers=other_headers).json()
    assert permission == {"data": {"permission": None}}


def test_collaborator_cannot_remove_others(client, headers, other_headers, user):
    task = make_task(client, headers)
    invitation = invite(client, headers, task["id"]).json()["data"]
    client.post(f"/api/collaborations/invitations/{invitation['id']}/accept", headers=other_headers)

    response = client.delete(f"/api/collaborations/task/{task['id']}/collaborator/{user.id}", headers=other_headers)
    assert response.status_code == 403


def test_activity_log(client, headers, other_headers, db):
    task = make_task(client, headers)
    invitation = invite(client, headers, task["id"]).json()["data"]
    client.post(f"/api/collaborations/invitations/{invitation['id']}/accept", headers=other_headers)

    activity = client.get(f"/api/collaborations/task/{task['id']}/activity", headers=headers).json()["data"]
    assert [a["action"] for a in activity] == ["invitation_accepted", "invitation_sent"]
    assert json.loads(activity[1]["details"]) == {"invited_email": "bruno@example.com", "permission": "edit"}


def test_activity_returns_latest_fifty(client, headers, user, db):
    task = make_task(client, headers)
    for i in range(60):
        db.add(TaskActivity(task_id=task["id"], user_id=user.id, action=f"event_{i}"))
    db.commit()

    activity = client.get(f"/api/collaborations/task/{task['id']}/activity", headers=headers).json()["data"]
    assert len(activity) == 50
    assert activity[0]["action"] == "event_59"
    # nothing is trimmed from storage
    assert db.query(TaskActivity).filter(TaskActivity.task_id == task["id"]).count() == 60


def test_activity_hidden_from_strangers(client, headers, other_headers):
    task = make_task(client, headers)
    response = client.get(f"/api/collaborations/task/{task['id']}/activity", headers=other_headers)
    assert response.status_code == 404


def test_invite_accepts_snake_case_task_id(client, headers):
    task = make_task(client, headers)
    response = client.post(
        "/api/collaborations/invite",
        headers=headers,
        json={"task_id": task["id"], "email": "carla@example.com"}
    )
    assert response.status_code == 201
    assert response.json()["data"]["task_id"] == task["id"]
    assert response.json()["data"]["permission"] == "view"


def test_owner_permission_is_enveloped(client, headers):
    task = make_task(client, headers)
    response = client.get(f"/api/collaborations/task/{task['id']}/permission", headers=headers)
    assert response.json() == {"data": {"permission": "owner"}}
