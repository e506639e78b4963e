from taskflow.models.task import Task
from taskflow.services import task_service


def create(client, headers, **fields):
    payload = {"title": "Write report"}
    payload.update(fields)
    response = client.post("/api/tasks", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# ========== CRUD ==========

def test_create_task_defaults(client, headers, user):
    task = create(client, headers)
    assert task["user_id"] == user.id
    assert task["completed"] is False
    assert task["is_favorite"] is False
    assert task["status"] == "pending"
    assert task["priority"] == "medium"


def test_create_task_empty_title(client, headers):
    response = client.post("/api/tasks", headers=headers, json={"title": ""})
    assert response.status_code == 422


def test_create_task_requires_auth(client):
    response = client.post("/api/tasks", json={"title": "No token"})
    assert response.status_code == 401


def test_tags_from_comma_string(client, headers):
    task = create(client, headers, tags=" work , urgent,, ")
    assert task["tags"] == ["work", "urgent"]


def test_list_newest_first(client, headers):
    first = create(client, headers, title="First")
    second = create(client, headers, title="Second")
    data = client.get("/api/tasks", headers=headers).json()["data"]
    assert [t["id"] for t in data] == [second["id"], first["id"]]


def test_update_task(client, headers):
    task = create(client, headers)
    response = client.put(
        f"/api/tasks/{task['id']}",
        headers=headers,
        json={"title": "Write final report", "priority": "high"}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Write final report"
    assert data["priority"] == "high"
    assert data["id"] == task["id"]


def test_update_with_null_title_keeps_title(client, headers):
    task = create(client, headers)
    response = client.put(f"/api/tasks/{task['id']}", headers=headers, json={"title": None, "priority": "low"})
    assert response.status_code == 200
    assert response.json()["data"]["title"] == task["title"]
    assert response.json()["data"]["priority"] == "low"


def test_delete_task(client, headers):
    task = create(client, headers)
    response = client.delete(f"/api/tasks/{task['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get(f"/api/tasks/{task['id']}", headers=headers).status_code == 404


def test_other_users_task_is_not_found(client, headers, other_headers):
    task = create(client, headers)
    assert client.get(f"/api/tasks/{task['id']}", headers=other_headers).status_code == 404
    assert client.put(f"/api/tasks/{task['id']}", headers=other_headers, json={"title": "x"}).status_code == 404
    assert client.delete(f"/api/tasks/{task['id']}", headers=other_headers).status_code == 404
    assert client.get("/api/tasks", headers=other_headers).json()["data"] == []


# ========== TOGGLES ==========

def test_toggle_is_an_involution(client, headers):
    task = create(client, headers)
    once = client.put(f"/api/tasks/{task['id']}/toggle", headers=headers).json()["data"]
    assert once["completed"] is True
    assert once["status"] == "completed"
    twice = client.put(f"/api/tasks/{task['id']}/toggle", headers=headers).json()["data"]
    assert twice["completed"] is False
    assert twice["status"] == "pending"


def test_toggle_favorite(client, headers):
    task = create(client, headers)
    data = client.put(f"/api/tasks/{task['id']}/favorite", headers=headers).json()["data"]
    assert data["is_favorite"] is True


# ========== KANBAN ==========

def test_move_task_keeps_completed_consistent(client, headers):
    task = create(client, headers)
    moved = client.put(f"/api/tasks/{task['id']}/status", headers=headers, json={"status": "review"}).json()["data"]
    assert moved["status"] == "review"
    assert moved["completed"] is False

    done = client.put(f"/api/tasks/{task['id']}/status", headers=headers, json={"status": "completed"}).json()["data"]
    assert done["completed"] is True


def test_move_task_invalid_status(client, headers):
    task = create(client, headers)
    response = client.put(f"/api/tasks/{task['id']}/status", headers=headers, json={"status": "archived"})
    assert response.status_code == 422


def test_legacy_tags_set_status_on_create(client, headers):
    task = create(client, headers, tags=["revision", "client"])
    assert task["status"] == "review"
    assert task["tags"] == ["client"]

    task = create(client, headers, tags="en-progreso")
    assert task["status"] == "in_progress"
    assert task["tags"] == []


def test_explicit_status_wins_over_completed(client, headers):
    task = create(client, headers, status="completed")
    assert task["completed"] is True


def test_board_has_four_columns(client, headers):
    create(client, headers, title="A")
    b = create(client, headers, title="B")
    client.put(f"/api/tasks/{b['id']}/status", headers=headers, json={"status": "in_progress"})

    columns = client.get("/api/tasks/board", headers=headers).json()["data"]
    assert [c["status"] for c in columns] == ["pending", "in_progress", "review", "completed"]
    assert [t["title"] for t in columns[0]["tasks"]] == ["A"]
    assert [t["title"] for t in columns[1]["tasks"]] == ["B"]
    assert columns[2]["tasks"] == []


def test_status_from_legacy():
    assert task_service.status_from_legacy(True, ["revision"]) == "completed"
    assert task_service.status_from_legacy(False, ["revision"]) == "review"
    assert task_service.status_from_legacy(False, ["en-progreso"]) == "in_progress"
    assert task_service.status_from_legacy(False, ["other"]) == "pending"
    assert task_service.status_from_legacy(False, None) == "pending"


def test_migrate_legacy_statuses(db, user):
    db.add_all([
        Task(user_id=user.id, title="Legacy review", status="pending", completed=False, tags=["revision", "x"]),
        Task(user_id=user.id, title="Legacy done", status="pending", completed=True, tags=[]),
        Task(user_id=user.id, title="Clean", status="pending", completed=False, tags=["x"]),
    ])
    db.commit()

    assert task_service.migrate_legacy_statuses(db) == 2

    by_title = {t.title: t for t in db.query(Task).all()}
    assert by_title["Legacy review"].status == "review"
    assert by_title["Legacy review"].tags == ["x"]
    assert by_title["Legacy done"].status == "completed"
    assert by_title["Clean"].status == "pending"

    # second run has nothing left to do
    assert task_service.migrate_legacy_statuses(db) == 0


def test_setup_init_db_runs_migration(client, db, user):
    db.add(Task(user_id=user.id, title="Legacy", status="pending", completed=False, tags=["en-progreso"]))
    db.commit()

    response = client.post("/api/setup/init-db")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Database initialized", "migrated": 1}


# ========== SEARCH / STATS / FILTER ==========

def test_search_title_and_description(client, headers, other_headers):
    create(client, headers, title="Buy milk")
    create(client, headers, title="Call mom", description="About the MILK order")
    create(client, headers, title="Unrelated")
    create(client, other_headers, title="Milk for Bruno")

    data = client.get("/api/tasks/search", params={"q": "milk"}, headers=headers).json()["data"]
    assert sorted(t["title"] for t in data) == ["Buy milk", "Call mom"]


def test_stats(client, headers):
    create(client, headers)
    create(client, headers)
    done = create(client, headers)
    client.put(f"/api/tasks/{done['id']}/toggle", headers=headers)

    stats = client.get("/api/tasks/stats", headers=headers).json()["data"]
    assert stats == {"total": 3, "completed": 1, "pending": 2}
    assert stats["total"] == stats["completed"] + stats["pending"]


def test_list_by_completed(client, headers):
    open_task = create(client, headers, title="Open")
    done = create(client, headers, title="Done")
    client.put(f"/api/tasks/{done['id']}/toggle", headers=headers)

    completed = client.get("/api/tasks/status/true", headers=headers).json()["data"]
    pending = client.get("/api/tasks/status/false", headers=headers).json()["data"]
    assert [t["id"] for t in completed] == [done["id"]]
    assert [t["id"] for t in pending] == [open_task["id"]]
