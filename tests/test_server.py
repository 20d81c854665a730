"""
Tests for the Flask JSON API.
"""
import pytest


def lane_ids(data, lane):
    return [t["id"] for t in data["board"][lane]]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Board
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_get_board(client):
    resp = client.get("/api/board")
    assert resp.status_code == 200
    data = resp.get_json()
    assert lane_ids(data, "todo") == ["1", "2", "3"]
    assert lane_ids(data, "inProgress") == ["4", "5", "6"]
    assert lane_ids(data, "completed") == ["7", "8", "9"]
    assert data["stats"]["total"] == 9
    assert data["board"]["todo"][0]["dueDate"] == "2025-01-09"


def test_get_filtered_board(client):
    data = client.get("/api/board?category=personal").get_json()
    assert lane_ids(data, "todo") == ["2"]
    assert lane_ids(data, "inProgress") == ["5"]
    assert lane_ids(data, "completed") == ["8"]
    # Stats describe the whole board
    assert data["stats"]["total"] == 9


def test_search_query_arg(client):
    data = client.get("/api/board?q=DESIGN").get_json()
    assert lane_ids(data, "todo") == ["1", "3"]
    assert data["board"]["inProgress"] == []


def test_health(client):
    resp = client.get("/health")
    assert resp.get_json() == {"status": "ok", "tasks": 9}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Tasks
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_create_task(client):
    resp = client.post("/api/tasks", json={
        "title": "Book flights",
        "dueDate": "2025-02-01",
        "category": "personal",
    })
    assert resp.status_code == 201
    data = resp.get_json()
    assert data["id"] == "task-001"
    assert data["task"]["status"] == "TO-DO"
    assert data["task"]["category"] == "PERSONAL"
    board = client.get("/api/board").get_json()
    assert lane_ids(board, "todo")[-1] == "task-001"


def test_create_task_validation_error(client):
    resp = client.post("/api/tasks", json={"title": " ", "dueDate": ""})
    assert resp.status_code == 400
    data = resp.get_json()
    assert data["errors"] == {"title": "title required", "dueDate": "due date required"}
    assert client.get("/health").get_json()["tasks"] == 9


def test_quick_add(client):
    resp = client.post("/api/tasks/quick", json={"title": "Stretch"})
    assert resp.status_code == 201
    task = resp.get_json()["task"]
    assert task["category"] == "WORK"
    assert task["dueDate"] == "2025-01-01"


@pytest.mark.parametrize("body", [{"title": None}, {}])
def test_quick_add_requires_title(client, body):
    resp = client.post("/api/tasks/quick", json=body)
    assert resp.status_code == 400
    assert resp.get_json()["errors"] == {"title": "title required"}
    assert client.get("/health").get_json()["tasks"] == 9


def test_get_task_with_form(client):
    data = client.get("/api/tasks/5").get_json()
    assert data["task"]["title"] == "Code Review"
    assert data["form"]["category"] == "personal"


def test_edit_task_status(client):
    resp = client.put("/api/tasks/1", json={"status": "IN-PROGRESS"})
    assert resp.status_code == 200
    assert resp.get_json()["task"]["status"] == "IN-PROGRESS"
    board = client.get("/api/board").get_json()
    assert lane_ids(board, "todo") == ["2", "3"]
    assert lane_ids(board, "inProgress") == ["4", "5", "6", "1"]


def test_edit_missing_task(client):
    resp = client.put("/api/tasks/404", json={"title": "x"})
    assert resp.status_code == 404
    assert resp.get_json()["id"] == "404"


def test_toggle_task(client):
    resp = client.post("/api/tasks/3/toggle")
    assert resp.get_json()["task"]["isChecked"] is True


def test_delete_task(client):
    resp = client.delete("/api/tasks/9")
    assert resp.get_json() == {"deleted": "9"}
    assert client.delete("/api/tasks/9").status_code == 404


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Moves
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_move_between_lanes(client):
    resp = client.post("/api/moves", json={
        "draggableId": "3",
        "source": {"droppableId": "todo", "index": 2},
        "destination": {"droppableId": "inProgress", "index": 0},
    })
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["task"]["status"] == "IN-PROGRESS"
    assert lane_ids(data, "todo") == ["1", "2"]
    assert lane_ids(data, "inProgress") == ["3", "4", "5", "6"]


def test_drop_outside_lanes(client):
    resp = client.post("/api/moves", json={
        "draggableId": "3",
        "source": {"droppableId": "todo", "index": 2},
        "destination": None,
    })
    assert resp.status_code == 204
    assert lane_ids(client.get("/api/board").get_json(), "todo") == ["1", "2", "3"]


def test_stale_move_conflict(client):
    resp = client.post("/api/moves", json={
        "draggableId": "3",
        "source": {"droppableId": "todo", "index": 5},
        "destination": {"droppableId": "completed", "index": 0},
    })
    assert resp.status_code == 409
    assert lane_ids(client.get("/api/board").get_json(), "todo") == ["1", "2", "3"]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Form helpers
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_validate_endpoint(client):
    data = client.post("/api/validate", json={"title": "", "dueDate": "2025-01-01"}).get_json()
    assert data["ok"] is False
    assert data["errors"] == {"title": "title required"}
    assert client.get("/health").get_json()["tasks"] == 9


def test_attachments_endpoint(client):
    data = client.post("/api/attachments", json={"files": [
        {"name": "a.png", "type": "image/png", "size": 10},
        {"name": "b.exe", "type": "application/octet-stream", "size": 10},
        {"name": "c.pdf", "type": "application/pdf", "size": 6 * 1024 * 1024},
    ]}).get_json()
    assert data == {"accepted": ["a.png"]}


def test_attachments_bad_body(client):
    assert client.post("/api/attachments", json={"files": "a.png"}).status_code == 400
    assert client.post("/api/attachments", json={"files": ["a.png"]}).status_code == 400
