from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from uigen_core.db.anon_work import (
    delete_anon_work,
    get_anon_work,
    take_nonempty_anon_work,
    upsert_anon_work,
)


@dataclass(frozen=True)
class AnonymousWork:
    """Chat + virtual file system captured before the visitor signed in."""

    messages: list[Any] = field(default_factory=list)
    file_system_data: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return len(self.messages) == 0


def has_content(messages: list[Any], file_system_data: dict[str, Any]) -> bool:
    """Whether pre-sign-in work is worth keeping.

    A serialized file system always holds the root "/" entry, so it only counts
    once something else is in it.
    """

    return len(messages) > 0 or len(file_system_data) > 1


class AnonWorkStore(Protocol):
    """Holds at most one pending AnonymousWork."""

    async def save(self, messages: list[Any], file_system_data: dict[str, Any]) -> None: ...

    async def get(self) -> AnonymousWork | None: ...

    async def clear(self) -> None: ...

    async def take(self) -> AnonymousWork | None:
        """Return the pending work and clear it, but only if it has messages.

        Empty or absent work yields None and leaves the store untouched.
        """
        ...


class InMemoryAnonWorkStore:
    def __init__(self, work: AnonymousWork | None = None) -> None:
        self._work = work

    async def save(self, messages: list[Any], file_system_data: dict[str, Any]) -> None:
        self._work = AnonymousWork(messages=list(messages), file_system_data=dict(file_system_data))

    async def get(self) -> AnonymousWork | None:
        return self._work

    async def clear(self) -> None:
        self._work = None

    async def take(self) -> AnonymousWork | None:
        work = self._work
        if work is None or work.is_empty:
            return None
        self._work = None
        return work


class SqliteAnonWorkStore:
    """Pending work for one anonymous visitor (identified by the uigen-anon cookie)."""

    def __init__(self, db_path: Path, anon_id: str) -> None:
        self._db_path = db_path
        self._anon_id = anon_id

    async def save(self, messages: list[Any], file_system_data: dict[str, Any]) -> None:
        upsert_anon_work(
            self._db_path,
            anon_id=self._anon_id,
            messages=messages,
            file_system_data=file_system_data,
        )

    async def get(self) -> AnonymousWork | None:
        row = get_anon_work(self._db_path, anon_id=self._anon_id)
        if row is None:
            return None
        return AnonymousWork(messages=row.messages, file_system_data=row.file_system_data)

    async def clear(self) -> None:
        delete_anon_work(self._db_path, anon_id=self._anon_id)

    async def take(self) -> AnonymousWork | None:
        row = take_nonempty_anon_work(self._db_path, anon_id=self._anon_id)
        if row is None:
            return None
        return AnonymousWork(messages=row.messages, file_system_data=row.file_system_data)
