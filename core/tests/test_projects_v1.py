from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from uigen_core.app import create_app


def _sign_up(client: TestClient, email: str) -> None:
    r = client.post("/v1/auth/sign-up", json={"email": email, "password": "password123"})
    assert r.json()["data"]["success"] is True


def test_projects_require_session(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("UIGEN_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.get("/v1/projects")
        assert r.status_code == 401
        body = r.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "unauthorized"

        r2 = client.post("/v1/projects", json={"name": "Nope"})
        assert r2.status_code == 401


def test_projects_create_get_and_validation(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("UIGEN_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        _sign_up(client, "owner@example.com")

        created = client.post(
            "/v1/projects",
            json={
                "name": "Landing page",
                "messages": [{"role": "user", "content": "hero section"}],
                "data": {"/App.jsx": {"type": "file"}},
            },
        )
        assert created.status_code == 200
        project = created.json()["data"]
        assert project["name"] == "Landing page"

        fetched = client.get(f"/v1/projects/{project['id']}").json()["data"]
        assert fetched["messages"] == [{"role": "user", "content": "hero section"}]
        assert fetched["data"] == {"/App.jsx": {"type": "file"}}

        missing = client.get("/v1/projects/does-not-exist")
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "not_found"

        invalid = client.post("/v1/projects", json={"name": ""})
        assert invalid.status_code == 422
        assert invalid.json()["error"]["code"] == "validation_error"


def test_projects_are_scoped_to_their_owner(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("UIGEN_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        _sign_up(client, "alice@example.com")
        alice_ids = [p["id"] for p in client.get("/v1/projects").json()["data"]["items"]]
        client.post("/v1/auth/sign-out")

        _sign_up(client, "bob@example.com")
        bob_ids = [p["id"] for p in client.get("/v1/projects").json()["data"]["items"]]

        assert len(alice_ids) == 1
        assert len(bob_ids) == 1
        assert set(alice_ids).isdisjoint(bob_ids)
        assert client.get(f"/v1/projects/{alice_ids[0]}").status_code == 404
