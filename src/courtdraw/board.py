"""Live, editable view of the current round.

After a draw the only way to change the board is to swap the occupants of
two slots. Slots are picked one at a time: the first pick is remembered,
picking it again cancels, picking a different slot swaps the two.
"""

from typing import Optional

from courtdraw.models import Round, SlotRef

SELECTED = "selected"
CANCELLED = "cancelled"
SWAPPED = "swapped"


class BoardState:
    def __init__(self, rnd: Round | None = None):
        self.round = rnd if rnd is not None else Round()
        self.selection: Optional[SlotRef] = None

    def replace(self, rnd: Round) -> None:
        """Install a freshly drawn round and drop any pending selection."""
        self.round = rnd
        self.selection = None

    def occupant_at(self, ref: SlotRef) -> str:
        if ref.is_court:
            if ref.index >= len(self.round.courts):
                raise IndexError(f"No court {ref.index + 1} on the board")
            return self.round.courts[ref.index][ref.position]
        if ref.index >= len(self.round.waiting):
            raise IndexError(f"No waiting slot {ref.index + 1} on the board")
        return self.round.waiting[ref.index]

    def _put(self, ref: SlotRef, name: str) -> None:
        if ref.is_court:
            self.round.courts[ref.index][ref.position] = name
        else:
            self.round.waiting[ref.index] = name

    def swap(self, a: SlotRef, b: SlotRef) -> None:
        """Exchange the players in two slots. Court and waiting sizes never change."""
        name_a = self.occupant_at(a)
        name_b = self.occupant_at(b)
        self._put(a, name_b)
        self._put(b, name_a)
        self.selection = None

    def select_slot(self, ref: SlotRef) -> str:
        # Validates the reference before any state changes
        self.occupant_at(ref)

        if self.selection is None:
            self.selection = ref
            return SELECTED
        if self.selection == ref:
            self.selection = None
            return CANCELLED
        self.swap(self.selection, ref)
        return SWAPPED

    def is_selected(self, ref: SlotRef) -> bool:
        return self.selection == ref

    def slots(self) -> list[SlotRef]:
        """Every occupied slot, courts first, in board order."""
        refs = [SlotRef.court(c, p)
                for c, court in enumerate(self.round.courts)
                for p in range(len(court))]
        refs.extend(SlotRef.wait(i) for i in range(len(self.round.waiting)))
        return refs
