from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from uigen_core.app import create_app
from uigen_core.auth import AUTH_COOKIE


def test_sign_in_page_is_public_and_root_redirects(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("UIGEN_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.get("/ui/sign-in")
        assert r.status_code == 200
        assert "Sign in" in r.text

        r2 = client.get("/ui/sign-up")
        assert r2.status_code == 200
        assert "Sign up" in r2.text

        root = client.get("/", follow_redirects=False)
        assert root.status_code == 302
        assert root.headers["location"] == "/ui/sign-in"

        page = client.get("/some-project", follow_redirects=False)
        assert page.status_code == 302
        assert page.headers["location"] == "/ui/sign-in"


def test_sign_up_form_redirects_to_project_page(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("UIGEN_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.post(
            "/ui/sign-up",
            data={"email": "form@example.com", "password": "password123"},
            follow_redirects=False,
        )
        assert r.status_code == 303
        assert AUTH_COOKIE in r.cookies

        target = r.headers["location"]
        ids = [p["id"] for p in client.get("/v1/projects").json()["data"]["items"]]
        assert target == f"/{ids[0]}"

        page = client.get(target)
        assert page.status_code == 200
        assert "New Design #" in page.text
        assert "form@example.com" in page.text

        root = client.get("/", follow_redirects=False)
        assert root.headers["location"] == target


def test_failed_form_sign_in_re_renders_with_error(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("UIGEN_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.post(
            "/ui/sign-in",
            data={"email": "ghost@example.com", "password": "password123"},
            follow_redirects=False,
        )
        assert r.status_code == 401
        assert "Invalid credentials" in r.text
        assert AUTH_COOKIE not in r.cookies

        short = client.post(
            "/ui/sign-up",
            data={"email": "new@example.com", "password": "short"},
            follow_redirects=False,
        )
        assert short.status_code == 400
        assert "Password must be at least 8 characters" in short.text


def test_project_page_renders_tool_invocations(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("UIGEN_HOME", str(tmp_path))

    messages = [
        {"role": "user", "content": "Make a button"},
        {
            "role": "assistant",
            "content": "",
            "toolInvocations": [
                {
                    "toolName": "str_replace_editor",
                    "args": {"command": "create", "path": "/components/Button.jsx"},
                    "state": "result",
                    "result": "Success",
                },
                {
                    "toolName": "file_manager",
                    "args": '{"command": "rename", "path": "/old.jsx", "new_path": "/new.jsx"}',
                    "state": "call",
                },
                {"toolName": "str_replace_editor", "args": "[]", "state": "call"},
                {"toolName": "str_replace_editor", "args": "{broken", "state": "call"},
            ],
        },
    ]

    with TestClient(create_app()) as client:
        client.post("/v1/auth/sign-up", json={"email": "t@example.com", "password": "password123"})
        created = client.post(
            "/v1/projects", json={"name": "Buttons", "messages": messages, "data": {}}
        ).json()["data"]

        page = client.get(f"/{created['id']}")
        assert page.status_code == 200
        assert "Creating Button.jsx" in page.text
        assert "Renaming old.jsx to new.jsx" in page.text
        assert "Modifying" in page.text
        assert 'data-complete="true"' in page.text
        assert 'data-complete="false"' in page.text

        client.post("/ui/sign-out", follow_redirects=False)
        client.post("/v1/auth/sign-up", json={"email": "u@example.com", "password": "password123"})
        other = client.get(f"/{created['id']}")
        assert other.status_code == 404
