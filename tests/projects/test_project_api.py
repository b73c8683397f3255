from __future__ import annotations

from datetime import date

from workforce_scheduler.core.enums import AttendanceStatus


def _team(client, project_id=1):
    resp = client.get(f"/api/projects/{project_id}")
    assert resp.status_code == 200
    return resp.get_json()["data"]


def test_project_read_returns_roster(client, world):
    world.add_project(2, end_date=date(2099, 9, 30), roster=[5, 3])

    data = _team(client, 2)

    assert data == {
        "projectId": 2,
        "name": "P2",
        "endDate": "2099-09-30",
        "assignedWorkers": [3, 5],
        "teamSize": 2,
    }


def test_unknown_project_is_404(client):
    resp = client.get("/api/projects/404")
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Project not found"


def test_roster_only_grows_through_task_writes(client, world):
    for wid in (1, 2, 3):
        world.add_worker(wid)
        world.mark(wid, AttendanceStatus.PRESENT)

    body = {"projectId": 1, "title": "Fit-out", "dueDate": "2099-06-01", "assignedWorkers": [1, 2]}
    assert client.post("/api/tasks", json=body).status_code == 201
    assert _team(client)["assignedWorkers"] == [1, 2]

    assert client.put("/api/tasks/1", json={"assignedWorkers": [3]}).status_code == 200
    assert _team(client)["assignedWorkers"] == [1, 2, 3]

    assert client.delete("/api/tasks/1").status_code == 200
    assert _team(client)["assignedWorkers"] == [1, 2, 3]
