from __future__ import annotations

import asyncio

import pytest

from uigen_core.accounts import AuthFailure, AuthSuccess
from uigen_core.anon_work import AnonymousWork, InMemoryAnonWorkStore
from uigen_core.gateway import AuthGateway
from uigen_core.reconcile import SessionReconciler

from fakes import FakeAnonWorkStore, FakeProjectStore


class FakeActions:
    def __init__(self, result: AuthSuccess | AuthFailure | Exception) -> None:
        self.result = result
        self.calls: list[tuple[str, str, str]] = []

    async def _respond(self, kind: str, email: str, password: str) -> AuthSuccess | AuthFailure:
        self.calls.append((kind, email, password))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    async def sign_in(self, email: str, password: str) -> AuthSuccess | AuthFailure:
        return await self._respond("sign_in", email, password)

    async def sign_up(self, email: str, password: str) -> AuthSuccess | AuthFailure:
        return await self._respond("sign_up", email, password)


def _gateway(
    actions: FakeActions,
    anon: FakeAnonWorkStore | None = None,
    projects: FakeProjectStore | None = None,
) -> tuple[AuthGateway, FakeAnonWorkStore, FakeProjectStore, list[str]]:
    anon = anon or FakeAnonWorkStore(None)
    projects = projects or FakeProjectStore(existing=["p1"])
    navigated: list[str] = []
    reconciler = SessionReconciler(anon_work=anon, projects=projects, navigate=navigated.append)
    return AuthGateway(actions, reconciler), anon, projects, navigated


def test_gateway_starts_idle() -> None:
    gateway, *_ = _gateway(FakeActions(AuthSuccess()))
    assert gateway.is_loading is False


def test_sign_in_passes_credentials_and_returns_result() -> None:
    expected = AuthFailure(error="Invalid credentials")
    actions = FakeActions(expected)
    gateway, *_ = _gateway(actions)

    result = asyncio.run(gateway.sign_in("user@test.com", "password123"))

    assert actions.calls == [("sign_in", "user@test.com", "password123")]
    assert result == expected


def test_sign_up_passes_credentials_and_returns_result() -> None:
    actions = FakeActions(AuthSuccess())
    gateway, _, _, navigated = _gateway(actions)

    result = asyncio.run(gateway.sign_up("new@test.com", "pass4567"))

    assert actions.calls == [("sign_up", "new@test.com", "pass4567")]
    assert result == AuthSuccess()
    assert navigated == ["/p1"]


@pytest.mark.parametrize("method", ["sign_in", "sign_up"])
def test_is_loading_is_true_only_while_in_flight(method: str) -> None:
    async def scenario() -> None:
        release = asyncio.Event()

        class SlowActions(FakeActions):
            async def _respond(self, kind: str, email: str, password: str):
                await release.wait()
                return AuthFailure(error="nope")

        gateway, *_ = _gateway(SlowActions(AuthSuccess()))
        assert gateway.is_loading is False

        task = asyncio.create_task(getattr(gateway, method)("a@b.com", "pw"))
        await asyncio.sleep(0)
        assert gateway.is_loading is True

        release.set()
        await task
        assert gateway.is_loading is False

    asyncio.run(scenario())


@pytest.mark.parametrize("method", ["sign_in", "sign_up"])
def test_errors_propagate_and_reset_loading(method: str) -> None:
    actions = FakeActions(ConnectionError("Network error"))
    gateway, anon, projects, navigated = _gateway(actions)

    with pytest.raises(ConnectionError, match="Network error"):
        asyncio.run(getattr(gateway, method)("a@b.com", "pw"))

    assert gateway.is_loading is False
    assert navigated == []
    assert projects.created == []


def test_failed_sign_in_has_no_side_effects() -> None:
    work = AnonymousWork(messages=[{"role": "user", "content": "hi"}], file_system_data={})
    gateway, anon, projects, navigated = _gateway(
        FakeActions(AuthFailure(error="Bad password")),
        anon=FakeAnonWorkStore(work),
        projects=FakeProjectStore(existing=[]),
    )

    asyncio.run(gateway.sign_in("a@b.com", "pw"))

    assert navigated == []
    assert projects.created == []
    assert projects.list_calls == 0
    assert anon.take_calls == 0
    assert anon.clear_calls == 0
    assert gateway.last_outcome is None


def test_sign_up_saves_anonymous_work() -> None:
    work = AnonymousWork(
        messages=[{"role": "user", "content": "hi"}],
        file_system_data={"/App.jsx": "code"},
    )
    gateway, anon, projects, navigated = _gateway(
        FakeActions(AuthSuccess()), anon=FakeAnonWorkStore(work)
    )

    asyncio.run(gateway.sign_up("a@b.com", "pw"))

    assert len(projects.created) == 1
    assert anon.clear_calls == 1
    assert navigated == ["/created-1"]
    assert gateway.last_outcome is not None
    assert gateway.last_outcome.created is True


def test_reconciler_factory_is_built_after_auth() -> None:
    built: list[str] = []
    navigated: list[str] = []

    def factory() -> SessionReconciler:
        built.append("reconciler")
        return SessionReconciler(
            anon_work=InMemoryAnonWorkStore(),
            projects=FakeProjectStore(existing=["p9"]),
            navigate=navigated.append,
        )

    failing = AuthGateway(FakeActions(AuthFailure(error="x")), factory)
    asyncio.run(failing.sign_in("a@b.com", "pw"))
    assert built == []

    succeeding = AuthGateway(FakeActions(AuthSuccess()), factory)
    asyncio.run(succeeding.sign_in("a@b.com", "pw"))
    assert built == ["reconciler"]
    assert navigated == ["/p9"]
