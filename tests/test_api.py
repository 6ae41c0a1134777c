# tests/test_api.py

from __future__ import annotations

import inspect
from datetime import timedelta

from taskexchange.models.base import utcnow


def _task_body(**overrides) -> dict:
    body = {
        "title": "Fix sink",
        "description": "Kitchen sink is leaking",
        "category": "plumbing",
        "urgency": "high",
        "location": "12 Elm Street",
        "deadline": (utcnow() + timedelta(days=3)).isoformat(),
        "womenSafe": True,
        "images": ["/uploads/task-1.png"],
    }
    body.update(overrides)
    return body


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["status"] == "ok"


def test_signup_login_me(client) -> None:
    r = client.post(
        "/api/auth/signup",
        json={"name": "Dana", "email": "Dana@Example.com", "password": "password123"},
    )
    assert r.status_code == 201
    assert r.json()["user"]["email"].lower() == "dana@example.com"
    assert "passwordHash" not in r.json()["user"]

    dup = client.post(
        "/api/auth/signup",
        json={"name": "Dana Two", "email": "dana@example.com", "password": "password123"},
    )
    assert dup.status_code == 400
    assert dup.json()["detail"] == "A user with that email already exists"

    bad = client.post("/api/auth/login", json={"email": "dana@example.com", "password": "wrong-pass"})
    assert bad.status_code == 401

    ok = client.post("/api/auth/login", json={"email": "dana@example.com", "password": "password123"})
    assert ok.status_code == 200
    token = ok.json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["name"] == "Dana"
    assert me.json()["role"] == "user"


def test_protected_routes_need_token(client) -> None:
    assert client.post("/api/tasks", json=_task_body()).status_code in (401, 403)
    r = client.get("/api/tasks/mine", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_task_workflow_over_http(client, alice, bob, carol, auth_headers) -> None:
    r = client.post("/api/tasks", json=_task_body(), headers=auth_headers(alice))
    assert r.status_code == 201
    task = r.json()
    assert task["status"] == "open"
    assert task["posterId"] == alice.id
    assert task["womenSafe"] is True
    task_id = task["id"]

    r = client.post(f"/api/tasks/{task_id}/accept", headers=auth_headers(alice))
    assert r.status_code == 400
    assert r.json()["detail"] == "You cannot accept your own task"

    r = client.post(f"/api/tasks/{task_id}/accept", headers=auth_headers(bob))
    assert r.json()["status"] == "pending_approval"
    r = client.post(f"/api/tasks/{task_id}/accept", headers=auth_headers(bob))
    assert r.status_code == 400
    assert r.json()["detail"] == "You have already accepted this task"
    client.post(f"/api/tasks/{task_id}/accept", headers=auth_headers(carol))

    r = client.post(f"/api/tasks/{task_id}/assign", json={"userId": bob.id}, headers=auth_headers(carol))
    assert r.status_code == 403

    r = client.post(f"/api/tasks/{task_id}/assign", json={"userId": 999}, headers=auth_headers(alice))
    assert r.status_code == 400
    assert r.json()["detail"] == "User has not accepted this task"

    r = client.post(f"/api/tasks/{task_id}/assign", json={"userId": bob.id}, headers=auth_headers(alice))
    assert r.status_code == 200
    assert r.json()["assignedToUserId"] == bob.id
    assert r.json()["status"] == "assigned"

    mine = client.get("/api/tasks/mine", headers=auth_headers(alice)).json()
    assert [t["id"] for t in mine] == [task_id]
    accepted = client.get("/api/tasks/accepted", headers=auth_headers(bob)).json()
    assert [t["id"] for t in accepted] == [task_id]
    assert client.get("/api/tasks/accepted", headers=auth_headers(carol)).json() == []

    r = client.post(f"/api/tasks/{task_id}/complete", headers=auth_headers(carol))
    assert r.status_code == 403
    r = client.post(f"/api/tasks/{task_id}/complete", headers=auth_headers(bob))
    assert r.json()["status"] == "completed"
    assert r.json()["completedAt"] is not None

    r = client.post(
        "/api/ratings",
        json={"toUserId": bob.id, "score": 5, "comment": "Great job", "taskId": task_id},
        headers=auth_headers(alice),
    )
    assert r.status_code == 201
    assert r.json()["score"] == 5

    summary = client.get(f"/api/users/{bob.id}/summary").json()
    assert summary["avgRating"] == 5
    assert summary["ratingCount"] == 1
    reviews = client.get(f"/api/users/{bob.id}/reviews").json()
    assert [rv["comment"] for rv in reviews] == ["Great job"]


def test_missing_task_is_404(client, bob, auth_headers) -> None:
    assert client.get("/api/tasks/41").status_code == 404
    r = client.post("/api/tasks/41/accept", headers=auth_headers(bob))
    assert r.status_code == 404
    assert r.json()["detail"] == "Task not found"


def test_browse_filters_and_expiry(client, alice, auth_headers) -> None:
    client.post("/api/tasks", json=_task_body(), headers=auth_headers(alice))
    client.post(
        "/api/tasks",
        json=_task_body(
            title="Mow lawn",
            description="Front yard grass is overgrown",
            category="garden",
            urgency="low",
        ),
        headers=auth_headers(alice),
    )
    client.post(
        "/api/tasks",
        json=_task_body(title="Old errand", deadline=(utcnow() - timedelta(days=1)).isoformat()),
        headers=auth_headers(alice),
    )

    titles = [t["title"] for t in client.get("/api/tasks").json()]
    assert titles == ["Fix sink", "Mow lawn"]

    r = client.get("/api/tasks", params={"category": "garden", "urgency": "all"})
    assert [t["title"] for t in r.json()] == ["Mow lawn"]
    r = client.get("/api/tasks", params={"search": "SINK"})
    assert [t["title"] for t in r.json()] == ["Fix sink"]
    # description-only match
    r = client.get("/api/tasks", params={"search": "Overgrown"})
    assert [t["title"] for t in r.json()] == ["Mow lawn"]


def test_status_patch_and_delete(client, alice, bob, auth_headers) -> None:
    task_id = client.post("/api/tasks", json=_task_body(), headers=auth_headers(alice)).json()["id"]

    r = client.patch(f"/api/tasks/{task_id}", json={"status": "completed"}, headers=auth_headers(bob))
    assert r.status_code == 200
    assert r.json()["status"] == "completed"

    r = client.patch(f"/api/tasks/{task_id}", json={"status": "archived"}, headers=auth_headers(bob))
    assert r.status_code == 422

    assert client.delete(f"/api/tasks/{task_id}", headers=auth_headers(bob)).status_code == 403
    assert client.delete(f"/api/tasks/{task_id}", headers=auth_headers(alice)).status_code == 200
    assert client.get(f"/api/tasks/{task_id}").status_code == 404


def test_chat_over_http(client, alice, bob, auth_headers) -> None:
    r = client.post(
        "/api/chat",
        json={"taskId": 1, "toUserId": bob.id, "message": " hi there "},
        headers=auth_headers(alice),
    )
    assert r.status_code == 201
    assert r.json()["message"] == "hi there"
    assert r.json()["fromUserName"] == "Alice"

    r = client.post("/api/chat", json={"taskId": 1, "toUserId": bob.id}, headers=auth_headers(alice))
    assert r.status_code == 400

    client.post(
        "/api/chat",
        json={"taskId": 1, "toUserId": alice.id, "message": "hello"},
        headers=auth_headers(bob),
    )
    msgs = client.get("/api/chat/1", headers=auth_headers(bob)).json()
    assert [(m["fromUserName"], m["message"]) for m in msgs] == [("Alice", "hi there"), ("Bob", "hello")]


def test_user_profile_routes(client, alice, bob, auth_headers) -> None:
    r = client.patch(f"/api/users/{alice.id}", json={"firstName": "Al"}, headers=auth_headers(bob))
    assert r.status_code == 403

    r = client.patch(
        f"/api/users/{alice.id}",
        json={"firstName": "Alice", "lastName": "Liddell"},
        headers=auth_headers(alice),
    )
    assert r.status_code == 200
    assert r.json()["name"] == "Alice Liddell"
    assert r.json()["ratingCount"] == 0
    assert r.json()["avgRating"] is None

    assert client.get(f"/api/users/{alice.id}/profile").status_code == 404
    r = client.put(f"/api/users/{alice.id}/profile", json={"bio": "Gardener"}, headers=auth_headers(alice))
    assert r.status_code == 200
    assert r.json()["bio"] == "Gardener"
    assert client.get("/api/users/999").status_code == 404


def test_admin_routes(client, make_user, alice, bob, auth_headers) -> None:
    admin = make_user("Root", role="admin")
    client.post(
        "/api/tasks",
        json=_task_body(deadline=(utcnow() - timedelta(days=1)).isoformat()),
        headers=auth_headers(alice),
    )

    assert client.get("/api/admin/users", headers=auth_headers(alice)).status_code == 403

    users = client.get("/api/admin/users", headers=auth_headers(admin)).json()
    assert {u["name"] for u in users} == {"Alice", "Bob", "Root"}
    assert all("passwordHash" not in u for u in users)

    # expired tasks are still visible to admins
    tasks = client.get("/api/admin/tasks", headers=auth_headers(admin)).json()
    assert len(tasks) == 1
    r = client.delete(f"/api/admin/tasks/{tasks[0]['id']}", headers=auth_headers(admin))
    assert r.json() == {"message": "Task deleted successfully"}

    assert client.delete(f"/api/admin/users/{admin.id}", headers=auth_headers(admin)).status_code == 400
    assert client.delete(f"/api/admin/users/{bob.id}", headers=auth_headers(admin)).status_code == 200
    assert client.delete(f"/api/admin/users/{bob.id}", headers=auth_headers(admin)).status_code == 404


def test_route_handlers_run_in_threadpool(client) -> None:
    # the store blocks on file I/O and a thread lock, so no handler may run on the event loop
    from fastapi.routing import APIRoute

    routes = [r for r in client.app.routes if isinstance(r, APIRoute) and r.path.startswith("/api")]
    assert routes
    assert [r.path for r in routes if inspect.iscoroutinefunction(r.endpoint)] == []
