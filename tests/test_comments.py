from taskflow.models.notification import Notification
from taskflow.services import comment_service
from conftest import TestingSessionLocal


def make_task(client, headers):
    return client.post("/api/tasks", headers=headers, json={"title": "Review design"}).json()["data"]


def share(client, headers, other_headers, task_id):
    invitation = client.post(
        "/api/collaborations/invite",
        headers=headers,
        json={"taskId": task_id, "email": "bruno@example.com", "permission": "edit"}
    ).json()["data"]
    client.post(f"/api/collaborations/invitations/{invitation['id']}/accept", headers=other_headers)


def test_create_comment_not_edited(client, headers, user):
    task = make_task(client, headers)
    response = client.post(f"/api/tasks/{task['id']}/comments", headers=headers, json={"content": "Looks good"})
    assert response.status_code == 201
    comment = response.json()["data"]
    assert comment["created_at"] == comment["updated_at"]
    assert comment["edited"] is False
    assert comment["author"]["id"] == user.id


def test_update_comment_marks_edited(client, headers):
    task = make_task(client, headers)
    comment = client.post(f"/api/tasks/{task['id']}/comments", headers=headers, json={"content": "v1"}).json()["data"]
    updated = client.put(f"/api/comments/{comment['id']}", headers=headers, json={"content": "v2"}).json()["data"]
    assert updated["content"] == "v2"
    assert updated["edited"] is True
    assert updated["updated_at"] > updated["created_at"]


def test_only_author_can_edit_or_delete(client, headers, other_headers):
    task = make_task(client, headers)
    share(client, headers, other_headers, task["id"])
    comment = client.post(f"/api/tasks/{task['id']}/comments", headers=headers, json={"content": "mine"}).json()["data"]

    assert client.put(f"/api/comments/{comment['id']}", headers=other_headers, json={"content": "x"}).status_code == 403
    assert client.delete(f"/api/comments/{comment['id']}", headers=other_headers).status_code == 403
    assert client.delete(f"/api/comments/{comment['id']}", headers=headers).json() == {"success": True}
    assert client.get(f"/api/tasks/{task['id']}/comments", headers=headers).json()["data"] == []


def test_comments_newest_first(client, headers):
    task = make_task(client, headers)
    for content in ("first", "second", "third"):
        client.post(f"/api/tasks/{task['id']}/comments", headers=headers, json={"content": content})
    data = client.get(f"/api/tasks/{task['id']}/comments", headers=headers).json()["data"]
    assert len(data) == 3
    assert data[0]["created_at"] >= data[-1]["created_at"]


def test_collaborator_comment_notifies_owner(client, headers, other_headers, user, db):
    task = make_task(client, headers)
    share(client, headers, other_headers, task["id"])
    long_text = "This is a fairly long comment that goes well past the fifty character preview"
    response = client.post(f"/api/tasks/{task['id']}/comments", headers=other_headers, json={"content": long_text})
    assert response.status_code == 201

    notification = db.query(Notification).filter(
        Notification.user_id == user.id, Notification.type == "comment_added"
    ).one()
    assert notification.message.endswith("...")
    assert long_text[:50].strip() in notification.message
    assert notification.data == {"comment_preview": long_text}


def test_owner_comment_has_no_notification(client, headers, db):
    task = make_task(client, headers)
    client.post(f"/api/tasks/{task['id']}/comments", headers=headers, json={"content": "note to self"})
    assert db.query(Notification).count() == 0


def test_stranger_cannot_read_or_comment(client, headers, other_headers):
    task = make_task(client, headers)
    assert client.get(f"/api/tasks/{task['id']}/comments", headers=other_headers).status_code == 404
    response = client.post(f"/api/tasks/{task['id']}/comments", headers=other_headers, json={"content": "hi"})
    assert response.status_code == 404


def test_subscription_reloads_on_change(client, headers):
    task = make_task(client, headers)
    seen = []
    subscription = comment_service.subscribe_to_task_comments(
        TestingSessionLocal, task["id"], lambda comments: seen.append([c.content for c in comments])
    )

    client.post(f"/api/tasks/{task['id']}/comments", headers=headers, json={"content": "hello"})
    assert seen == [["hello"]]

    subscription.unsubscribe()
    client.post(f"/api/tasks/{task['id']}/comments", headers=headers, json={"content": "again"})
    assert len(seen) == 1
