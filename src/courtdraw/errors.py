"""Errors reported back to whoever issued a session command."""


class CourtDrawError(ValueError):
    """Base class for request-level failures. No state is changed."""


class InsufficientPlayers(CourtDrawError):
    def __init__(self, count: int, needed: int = 4):
        super().__init__(f"At least {needed} players are needed to draw (have {count})")
        self.count = count
        self.needed = needed


class NoSavedBase(CourtDrawError):
    def __init__(self):
        super().__init__("No saved base roster to apply")


class NoRosterToSave(CourtDrawError):
    def __init__(self):
        super().__init__("Roster is empty, nothing to save as base")
