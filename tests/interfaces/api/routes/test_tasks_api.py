"""Integration tests for the task and subtask endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")


@pytest.fixture()
def team(make_user):
    return {name: make_user(name) for name in ("alice", "bob", "carol")}


def _create_task(client, headers, assigned_to, **extra):
    payload = {"title": "Launch", "description": "Ship the release", "assigned_to": assigned_to}
    payload.update(extra)
    response = client.post("/tasks/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_task_lifecycle(client, team, auth_headers) -> None:
    alice, bob, carol = team["alice"], team["bob"], team["carol"]
    as_alice, as_bob = auth_headers(alice), auth_headers(bob)

    task = _create_task(client, as_alice, [bob.id], priority="medium")
    assert task["creator_id"] == alice.id
    assert task["status"] == "to do"
    assert task["assigned_to"] == [bob.id]

    listing = client.get("/tasks/", params={"scope": "assigned"}, headers=as_bob)
    assert listing.status_code == 200
    body = listing.json()
    assert body["totalCount"] == 1
    assert body["totalPages"] == 1
    assert body["page"] == 1
    assert body["items"][0]["id"] == task["id"]

    status_response = client.patch(
        f"/tasks/{task['id']}/status", json={"status": "pending"}, headers=as_bob
    )
    assert status_response.json()["status"] == "pending"

    comment = client.post(
        f"/tasks/{task['id']}/comments", json={"text": "Halfway there"}, headers=as_bob
    )
    assert comment.status_code == 201
    assert comment.json()["comments"][0]["text"] == "Halfway there"

    update = client.patch(
        f"/tasks/{task['id']}", json={"assigned_to": [bob.id, carol.id]}, headers=as_alice
    )
    assert update.json()["assigned_to"] == sorted([bob.id, carol.id])

    filtered = client.get("/tasks/", params={"status": "completed"}, headers=as_alice)
    assert filtered.json()["totalCount"] == 0

    deleted = client.delete(f"/tasks/{task['id']}", headers=as_alice)
    assert deleted.status_code == 204
    assert client.get(f"/tasks/{task['id']}", headers=as_alice).status_code == 404


def test_task_errors_map_to_http_statuses(client, team, auth_headers) -> None:
    alice, bob, carol = team["alice"], team["bob"], team["carol"]
    task = _create_task(client, auth_headers(alice), [bob.id])

    outsider = client.get(f"/tasks/{task['id']}", headers=auth_headers(carol))
    assert outsider.status_code == 403

    assignee_edit = client.patch(
        f"/tasks/{task['id']}", json={"title": "Renamed"}, headers=auth_headers(bob)
    )
    assert assignee_edit.status_code == 403

    bad_status = client.patch(
        f"/tasks/{task['id']}/status", json={"status": "done"}, headers=auth_headers(bob)
    )
    assert bad_status.status_code == 400

    unknown_user = client.post(
        "/tasks/",
        json={"title": "X", "description": "Y", "assigned_to": [9999]},
        headers=auth_headers(alice),
    )
    assert unknown_user.status_code == 400

    missing = client.get("/tasks/9999", headers=auth_headers(alice))
    assert missing.status_code == 404


def test_subtask_lifecycle(client, team, auth_headers) -> None:
    alice, bob, carol = team["alice"], team["bob"], team["carol"]
    as_alice, as_bob = auth_headers(alice), auth_headers(bob)
    task = _create_task(client, as_alice, [bob.id])
    base = f"/tasks/{task['id']}/subtasks"

    outsider_assignee = client.post(
        f"{base}/",
        json={"title": "Notes", "description": "Write notes", "assigned_to": [carol.id]},
        headers=as_bob,
    )
    assert outsider_assignee.status_code == 400

    created = client.post(
        f"{base}/",
        json={"title": "Notes", "description": "Write notes", "assigned_to": [alice.id]},
        headers=as_bob,
    )
    assert created.status_code == 201, created.text
    subtask = created.json()
    assert subtask["task_id"] == task["id"]
    assert subtask["creator_id"] == bob.id

    mine = client.get(f"{base}/", params={"scope": "mine"}, headers=as_bob)
    assert [item["id"] for item in mine.json()["items"]] == [subtask["id"]]

    assigned = client.get(f"{base}/", params={"scope": "assigned"}, headers=as_bob)
    assert assigned.json()["totalCount"] == 0

    status_response = client.patch(
        f"{base}/{subtask['id']}/status", json={"status": "completed"}, headers=as_alice
    )
    assert status_response.json()["status"] == "completed"

    comment = client.post(
        f"{base}/{subtask['id']}/comments", json={"text": "Looks good"}, headers=as_alice
    )
    assert comment.status_code == 201

    renamed = client.patch(f"{base}/{subtask['id']}", json={"title": "Release notes"}, headers=as_bob)
    assert renamed.json()["title"] == "Release notes"

    forbidden = client.get(f"{base}/{subtask['id']}", headers=auth_headers(carol))
    assert forbidden.status_code == 403

    deleted = client.delete(f"{base}/{subtask['id']}", headers=as_alice)
    assert deleted.status_code == 204
    assert client.get(f"{base}/{subtask['id']}", headers=as_alice).status_code == 404
