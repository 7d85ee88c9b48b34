"""In-memory result log."""

from __future__ import annotations

import itertools
from collections.abc import Iterator

from authpay.types import Accent, RequestOutcome, ResultEntry


class ResultStore:
    """Append-only log of completed calls, newest first."""

    def __init__(self) -> None:
        self._entries: list[ResultEntry] = []
        self._ids = itertools.count(1)

    def append(self, title: str, outcome: RequestOutcome, accent: Accent) -> ResultEntry:
        entry = ResultEntry(id=next(self._ids), title=title, outcome=outcome, accent=accent)
        self._entries.insert(0, entry)
        return entry

    def clear(self) -> None:
        # Ids keep counting so entries from before and after a clear never collide.
        self._entries = []

    def entries(self) -> tuple[ResultEntry, ...]:
        return tuple(self._entries)

    @property
    def latest(self) -> ResultEntry | None:
        return self._entries[0] if self._entries else None

    @property
    def can_clear(self) -> bool:
        """Whether a "clear all" control is offered for the current log."""
        return len(self._entries) > 1

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ResultEntry]:
        return iter(tuple(self._entries))
