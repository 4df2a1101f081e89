"""Data models for the courtdraw session organizer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

COURT_SIZE = 4
HISTORY_DEPTH = 2


class DrawMode(Enum):
    Normal = "normal"
    Smart = "smart"

    @classmethod
    def from_str(cls, s: str) -> "DrawMode":
        return cls(s.strip().lower())


def make_pair(a: str, b: str) -> frozenset[str]:
    """A doubles partnership, unordered."""
    return frozenset((a, b))


def court_pairs(court: list[str]) -> list[frozenset[str]]:
    """Split a court into its two sides: (slot0, slot1) vs (slot2, slot3)."""
    return [make_pair(court[0], court[1]), make_pair(court[2], court[3])]


@dataclass
class Round:
    """One draw outcome: courts of four plus everyone left waiting."""
    courts: list[list[str]] = field(default_factory=list)
    waiting: list[str] = field(default_factory=list)

    @property
    def players(self) -> list[str]:
        out = [p for court in self.courts for p in court]
        out.extend(self.waiting)
        return out

    def pairs(self) -> list[frozenset[str]]:
        out = []
        for court in self.courts:
            out.extend(court_pairs(court))
        return out

    def to_dict(self) -> dict:
        return {
            "courts": [list(c) for c in self.courts],
            "waiting": list(self.waiting),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Round":
        return cls(
            courts=[list(c) for c in data.get("courts", [])],
            waiting=list(data.get("waiting", [])),
        )


@dataclass
class HistoryEntry:
    """Waiting list and partnerships of one past round."""
    waiting: list[str] = field(default_factory=list)
    pairs: list[frozenset[str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "waiting": list(self.waiting),
            "pairs": [sorted(p) for p in self.pairs],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryEntry":
        return cls(
            waiting=list(data.get("waiting", [])),
            pairs=[frozenset(p) for p in data.get("pairs", [])],
        )


@dataclass(frozen=True)
class SlotRef:
    """A board position: a court seat, or a place in the waiting list."""
    kind: str  # "court" or "waiting"
    index: int  # waiting index, or court index for court seats
    position: Optional[int] = None  # 0-3 for court seats

    @classmethod
    def court(cls, court_index: int, position: int) -> "SlotRef":
        if court_index < 0:
            raise ValueError(f"Court index must be >= 0, got {court_index}")
        if not 0 <= position < COURT_SIZE:
            raise ValueError(f"Court position must be 0-3, got {position}")
        return cls("court", court_index, position)

    @classmethod
    def wait(cls, index: int) -> "SlotRef":
        if index < 0:
            raise ValueError(f"Waiting index must be >= 0, got {index}")
        return cls("waiting", index)

    @property
    def is_court(self) -> bool:
        return self.kind == "court"

    def label(self) -> str:
        """1-based label used by the CLI: '2.3' or 'w1'."""
        if self.is_court:
            return f"{self.index + 1}.{self.position + 1}"
        return f"w{self.index + 1}"

    @classmethod
    def parse(cls, s: str) -> "SlotRef":
        """Parse a 1-based label: 'C.P' for a court seat, 'wN' for waiting."""
        s = s.strip().lower()
        try:
            if s.startswith("w"):
                return cls.wait(int(s[1:]) - 1)
            court_str, pos_str = s.split(".")
            return cls.court(int(court_str) - 1, int(pos_str) - 1)
        except ValueError:
            raise ValueError(f"Cannot parse slot: {s!r} (use C.P or wN)")
