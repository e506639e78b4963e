from datetime import timedelta

from conftest import TestingSessionLocal
from taskflow.models.notification import Notification
from taskflow.models.task import Task
from taskflow.services import notification_service
from taskflow.utils.time import utc_now


def post(client, headers, title="Hello", **fields):
    payload = {"title": title, "message": "Body"}
    payload.update(fields)
    return client.post("/api/notifications", headers=headers, json=payload)


def test_create_defaults_unread(client, headers, user):
    response = post(client, headers)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["read"] is False
    assert data["type"] == "info"
    assert data["user_id"] == user.id


def test_unknown_type_rejected(client, headers):
    assert post(client, headers, type="party").status_code == 422


def test_unread_count_and_mark_as_read(client, headers):
    first = post(client, headers, title="One").json()["data"]
    post(client, headers, title="Two")
    assert client.get("/api/notifications/unread-count", headers=headers).json()["data"] == {"count": 2}

    read = client.put(f"/api/notifications/{first['id']}/read", headers=headers).json()["data"]
    assert read["read"] is True
    unread = client.get("/api/notifications/unread", headers=headers).json()["data"]
    assert [n["title"] for n in unread] == ["Two"]


def test_mark_all_as_read(client, headers):
    post(client, headers)
    post(client, headers)
    assert client.put("/api/notifications/read-all", headers=headers).json() == {"success": True}
    assert client.get("/api/notifications/unread-count", headers=headers).json()["data"]["count"] == 0


def test_list_limit(client, headers):
    for i in range(25):
        post(client, headers, title=f"N{i}")
    assert len(client.get("/api/notifications", headers=headers).json()["data"]) == 20
    assert len(client.get("/api/notifications", params={"limit": 5}, headers=headers).json()["data"]) == 5


def test_inbox_is_private(client, headers, other_headers):
    notification = post(client, headers).json()["data"]
    assert client.get("/api/notifications", headers=other_headers).json()["data"] == []
    assert client.put(f"/api/notifications/{notification['id']}/read", headers=other_headers).status_code == 404
    assert client.delete(f"/api/notifications/{notification['id']}", headers=other_headers).status_code == 404


def test_delete_notification(client, headers):
    notification = post(client, headers).json()["data"]
    assert client.delete(f"/api/notifications/{notification['id']}", headers=headers).json() == {"success": True}
    assert client.get("/api/notifications", headers=headers).json()["data"] == []


def test_due_soon_message_rounds_hours_up(db, user):
    now = utc_now()
    task = Task(user_id=user.id, title="Pay rent", status="pending", completed=False,
                due_date=now + timedelta(hours=2, minutes=10))
    db.add(task)
    db.commit()

    notification = notification_service.notify_task_due_soon(db, user.id, task, now=now)
    assert notification.message == 'Task "Pay rent" is due in 3 hours'


def test_notify_due_soon_once_per_task(db, user):
    now = utc_now()
    db.add_all([
        Task(user_id=user.id, title="Soon", status="pending", completed=False, due_date=now + timedelta(hours=5)),
        Task(user_id=user.id, title="Later", status="pending", completed=False, due_date=now + timedelta(days=3)),
        Task(user_id=user.id, title="Done", status="completed", completed=True, due_date=now + timedelta(hours=1)),
    ])
    db.commit()

    assert notification_service.notify_due_soon(db, within_hours=24, now=now) == 1
    assert notification_service.notify_due_soon(db, within_hours=24, now=now) == 0
    only = db.query(Notification).one()
    assert only.type == "task_due_soon"
    assert "Soon" in only.message


def test_subscription_gets_fresh_inbox(client, headers, user):
    seen = []
    subscription = notification_service.subscribe_to_user_notifications(
        TestingSessionLocal, user.id, lambda items: seen.append(len(items))
    )
    post(client, headers)
    post(client, headers)
    subscription.unsubscribe()
    post(client, headers)
    assert seen == [1, 2]
