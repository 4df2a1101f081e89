"""Active player roster and the saved base roster snapshot."""

from courtdraw.errors import NoRosterToSave, NoSavedBase
from courtdraw.store import BASE_MEMBERS_KEY, MEMBERS_KEY


def draw_label(count: int) -> str:
    """Call-to-action text for the draw button, with the live player count."""
    noun = "player" if count == 1 else "players"
    return f"Draw matches ({count} {noun})"


class RosterStore:
    """Ordered, duplicate-free list of player names, persisted on every change.

    `history` is cleared whenever the roster is replaced wholesale, since
    waiting and partnership history means nothing against a new roster.
    """

    def __init__(self, store, history=None):
        self.store = store
        self.history = history
        self._names: list[str] = list(store.get(MEMBERS_KEY, []))

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def count(self) -> int:
        return len(self._names)

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def add(self, name: str) -> bool:
        """Add a player. Empty or already-present names are ignored."""
        name = name.strip()
        if not name or name in self._names:
            return False
        self._names.append(name)
        self._save()
        return True

    def remove(self, name: str) -> bool:
        if name not in self._names:
            return False
        self._names.remove(name)
        self._save()
        return True

    def replace_all(self, names: list[str]) -> None:
        """Swap in a whole new roster. Blank and repeated names are dropped,
        keeping the first occurrence of each."""
        cleaned = (name.strip() for name in names)
        self._names = list(dict.fromkeys(name for name in cleaned if name))
        self._save()
        if self.history is not None:
            self.history.clear()

    def save_base(self) -> int:
        """Snapshot the current roster as the base roster; returns its size."""
        if not self._names:
            raise NoRosterToSave()
        self.store.set(BASE_MEMBERS_KEY, list(self._names))
        return len(self._names)

    def has_base(self) -> bool:
        return self.store.get(BASE_MEMBERS_KEY) is not None

    def apply_base(self) -> list[str]:
        base = self.store.get(BASE_MEMBERS_KEY)
        if base is None:
            raise NoSavedBase()
        self.replace_all(base)
        return self.names

    def _save(self) -> None:
        self.store.set(MEMBERS_KEY, list(self._names))
