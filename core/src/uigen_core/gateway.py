from __future__ import annotations

from collections.abc import Awaitable, Callable

from uigen_core.accounts import AccountActions, AuthResult
from uigen_core.reconcile import ReconciliationOutcome, SessionReconciler


class AuthGateway:
    """Runs an account action and, on success, routes the user to a project.

    `is_loading` is True only while a call is in flight and is reset on every
    exit path, including raised errors (which propagate unchanged). Re-entrant
    calls are not guarded; the caller disables its trigger while loading.

    The reconciler is built lazily because the project store depends on the
    user that just authenticated.
    """

    def __init__(
        self,
        actions: AccountActions,
        reconciler: SessionReconciler | Callable[[], SessionReconciler],
    ) -> None:
        self._actions = actions
        self._reconciler = reconciler
        self.is_loading = False
        self.last_outcome: ReconciliationOutcome | None = None

    async def sign_in(self, email: str, password: str) -> AuthResult:
        return await self._run(self._actions.sign_in, email, password)

    async def sign_up(self, email: str, password: str) -> AuthResult:
        return await self._run(self._actions.sign_up, email, password)

    async def _run(
        self,
        action: Callable[[str, str], Awaitable[AuthResult]],
        email: str,
        password: str,
    ) -> AuthResult:
        self.is_loading = True
        try:
            result = await action(email, password)
            if result.success:
                self.last_outcome = await self._resolve_reconciler().reconcile()
            return result
        finally:
            self.is_loading = False

    def _resolve_reconciler(self) -> SessionReconciler:
        if isinstance(self._reconciler, SessionReconciler):
            return self._reconciler
        return self._reconciler()
