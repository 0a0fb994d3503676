from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from uigen_core.app import create_app
from uigen_core.prompts import GENERATION_PROMPT


def test_describe_endpoint(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("UIGEN_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.post(
            "/v1/tool-invocations/describe",
            json={
                "tool_name": "str_replace_editor",
                "args": '{"command": "create", "path": "/components/Button.jsx"}',
                "state": "result",
                "result": "Success",
            },
        )
        assert r.status_code == 200
        assert r.json()["data"] == {
            "icon": "file-plus",
            "label": "Creating Button.jsx",
            "complete": True,
        }

        bad = client.post(
            "/v1/tool-invocations/describe",
            json={"tool_name": "str_replace_editor", "args": "{oops", "state": "call"},
        )
        assert bad.status_code == 422
        assert bad.json()["error"]["code"] == "validation_error"

        for args in ("[]", "5", '"x"', {"command": ["create"]}):
            odd = client.post(
                "/v1/tool-invocations/describe",
                json={"tool_name": "str_replace_editor", "args": args, "state": "call"},
            )
            assert odd.status_code == 200
            assert odd.json()["data"] == {
                "icon": "file-edit",
                "label": "Modifying",
                "complete": False,
            }

        bad_state = client.post(
            "/v1/tool-invocations/describe",
            json={"tool_name": "x", "args": {}, "state": "finished"},
        )
        assert bad_state.status_code == 422


def test_generation_prompt_endpoint(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("UIGEN_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.get("/v1/prompts/generation")
        assert r.status_code == 200
        assert r.json()["data"]["prompt"] == GENERATION_PROMPT
        assert "/App.jsx" in GENERATION_PROMPT
