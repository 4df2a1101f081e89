"""Text rendering of the roster, the board and the timer."""

from courtdraw.board import BoardState
from courtdraw.models import SlotRef


def _chip(board: BoardState, ref: SlotRef) -> str:
    name = board.occupant_at(ref)
    if board.is_selected(ref):
        return f"[*{name}*]"
    return f"[{name}]"


def format_board(board: BoardState, show_labels: bool = True) -> str:
    """Courts with the net between the two pairs, then the waiting list.

    The selected slot, if any, is marked with asterisks.
    """
    rnd = board.round
    lines = []
    if not rnd.courts and not rnd.waiting:
        return "No round drawn yet."

    for c, court in enumerate(rnd.courts):
        lines.append(f"Court {c + 1}")
        for side in ((0, 1), (2, 3)):
            chips = []
            for p in side:
                ref = SlotRef.court(c, p)
                label = f"{ref.label():>4} " if show_labels else ""
                chips.append(f"{label}{_chip(board, ref)}")
            lines.append("  " + "  ".join(chips))
            if side == (0, 1):
                lines.append("  " + "-" * 30)
        lines.append("")

    if rnd.waiting:
        lines.append("Waiting")
        for i in range(len(rnd.waiting)):
            ref = SlotRef.wait(i)
            label = f"{ref.label():>4} " if show_labels else ""
            lines.append(f"  {label}{_chip(board, ref)}")

    return "\n".join(lines).rstrip()


def format_roster(names: list[str]) -> str:
    if not names:
        return "Roster is empty."
    lines = [f"Roster ({len(names)})"]
    for i, name in enumerate(names, start=1):
        lines.append(f"  {i:>3}. {name}")
    return "\n".join(lines)


def format_session(session) -> str:
    """Full view used as the CLI renderer."""
    parts = [
        format_roster(session.roster.names),
        "",
        f"{session.draw_label}  courts={session.court_count} mode={session.mode.value}",
        "",
        format_board(session.board),
    ]
    if session.timer_visible:
        state = "running" if session.timer.running else "stopped"
        parts.extend(["", f"Timer {session.timer.display()} ({state})"])
    return "\n".join(parts)
