"""Post-authentication project routing.

After a successful sign-in or sign-up the user lands on exactly one project:

- pending anonymous work with messages becomes a new "Design from ..." project
  (and is consumed from the anonymous store once the project exists);
- otherwise the most recent existing project is resumed;
- otherwise an empty "New Design #<n>" project is created.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime

from uigen_core.anon_work import AnonWorkStore
from uigen_core.projects import ProjectStore

logger = logging.getLogger(__name__)

Navigate = Callable[[str], Awaitable[None] | None]


@dataclass(frozen=True)
class ReconciliationOutcome:
    target: str
    project_id: str
    created: bool


def project_path(project_id: str) -> str:
    return f"/{project_id}"


def anonymous_design_name(now: datetime | None = None) -> str:
    stamp = (now or datetime.now()).strftime("%I:%M:%S %p").lstrip("0")
    return f"Design from {stamp}"


class DesignCounter:
    """Millisecond clock that never repeats or goes backwards.

    Two calls within the same millisecond still get distinct, increasing values.
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock or time.time_ns
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            value = max(self._clock() // 1_000_000, self._last + 1)
            self._last = value
            return value


class SessionReconciler:
    def __init__(
        self,
        *,
        anon_work: AnonWorkStore,
        projects: ProjectStore,
        navigate: Navigate,
        counter: DesignCounter | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._anon_work = anon_work
        self._projects = projects
        self._navigate = navigate
        self._counter = counter or DesignCounter()
        self._now = now or datetime.now

    async def reconcile(self) -> ReconciliationOutcome:
        outcome = await self._resolve()
        logger.info(
            "Post-auth navigation to project %s (created=%s)",
            outcome.project_id,
            outcome.created,
        )

        result = self._navigate(outcome.target)
        if result is not None:
            await result
        return outcome

    async def _resolve(self) -> ReconciliationOutcome:
        work = await self._anon_work.take()
        if work is not None:
            try:
                project = await self._projects.create(
                    name=anonymous_design_name(self._now()),
                    messages=work.messages,
                    data=work.file_system_data,
                )
            except Exception:
                # Taken work must not vanish with a failed import.
                await self._anon_work.save(work.messages, work.file_system_data)
                logger.warning("Project import failed; anonymous work restored")
                raise
            return ReconciliationOutcome(
                target=project_path(project.id), project_id=project.id, created=True
            )

        existing = await self._projects.list_projects()
        if existing:
            latest = existing[0]
            return ReconciliationOutcome(
                target=project_path(latest.id), project_id=latest.id, created=False
            )

        project = await self._projects.create(
            name=f"New Design #{self._counter.next()}",
            messages=[],
            data={},
        )
        return ReconciliationOutcome(
            target=project_path(project.id), project_id=project.id, created=True
        )
