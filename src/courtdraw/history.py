"""Bounded log of the last two rounds' waiting lists and partnerships."""

from typing import Iterable, Iterator

from courtdraw.models import HISTORY_DEPTH, HistoryEntry
from courtdraw.store import HISTORY_KEY


class HistoryLog:
    """Most-recent-first, never more than HISTORY_DEPTH entries."""

    def __init__(self, store=None):
        self.store = store
        self._entries: list[HistoryEntry] = []
        if store is not None:
            raw = store.get(HISTORY_KEY, [])
            self._entries = [HistoryEntry.from_dict(e) for e in raw][:HISTORY_DEPTH]

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def record_round(self, waiting: Iterable[str],
                     pairs: Iterable[Iterable[str]]) -> None:
        entry = HistoryEntry(
            waiting=list(waiting),
            pairs=[frozenset(p) for p in pairs],
        )
        self._entries.insert(0, entry)
        del self._entries[HISTORY_DEPTH:]
        self._save()

    def last_waiting(self) -> list[str]:
        if len(self._entries) > 0:
            return list(self._entries[0].waiting)
        return []

    def second_last_waiting(self) -> list[str]:
        if len(self._entries) > 1:
            return list(self._entries[1].waiting)
        return []

    def all_pairs(self) -> Iterator[frozenset[str]]:
        for entry in self._entries:
            yield from entry.pairs

    def clear(self) -> None:
        self._entries = []
        self._save()

    def _save(self) -> None:
        if self.store is not None:
            self.store.set(HISTORY_KEY, [e.to_dict() for e in self._entries])
