"""Session controller: the single owner of all mutable session state.

Front ends call the `on_*` commands in response to user input or timer
ticks; after every change the controller hands itself to the renderer.
Request-level failures (too few players, no base roster) are raised as
CourtDrawError subclasses before anything is changed.
"""

import logging
import random

from courtdraw.board import BoardState
from courtdraw.config import default_config
from courtdraw.draw import draw_round
from courtdraw.history import HistoryLog
from courtdraw.models import DrawMode, Round, SlotRef
from courtdraw.roster import RosterStore, draw_label
from courtdraw.store import CURRENT_ROUND_KEY, MemoryStore
from courtdraw.timer import RoundTimer

logger = logging.getLogger(__name__)


class SessionController:
    def __init__(self, store=None, config: dict | None = None,
                 rng: random.Random | None = None, renderer=None,
                 alarm=None, wake_lock=None):
        self.config = config if config is not None else default_config()
        self.store = store if store is not None else MemoryStore()
        self.rng = rng if rng is not None else random.Random()
        self.renderer = renderer

        self.history = HistoryLog(self.store)
        self.roster = RosterStore(self.store, history=self.history)

        saved_round = self.store.get(CURRENT_ROUND_KEY)
        self.board = BoardState(Round.from_dict(saved_round) if saved_round else None)

        session = self.config["session"]
        self.court_count: int = session["courts"]
        self.mode: DrawMode = session["mode"]
        self.max_attempts: int = self.config["draw"]["max_attempts"]

        timer_cfg = self.config["timer"]
        self.timer = RoundTimer(
            timer_cfg["default_seconds"], alarm=alarm, wake_lock=wake_lock,
            alarm_seconds=timer_cfg["alarm_seconds"],
        )
        self.timer_presets: list[int] = list(timer_cfg["presets"])
        self.timer_visible = False

    @property
    def draw_label(self) -> str:
        return draw_label(self.roster.count())

    def _render(self) -> None:
        if self.renderer is not None:
            self.renderer(self)

    def _save_round(self) -> None:
        self.store.set(CURRENT_ROUND_KEY, self.board.round.to_dict())

    # Roster

    def on_add_player(self, name: str) -> bool:
        added = self.roster.add(name)
        if added:
            self._render()
        return added

    def on_remove_player(self, name: str) -> bool:
        removed = self.roster.remove(name)
        if removed:
            self._render()
        return removed

    def on_save_base(self) -> int:
        count = self.roster.save_base()
        logger.info("Saved base roster of %d players", count)
        return count

    def on_apply_base(self) -> list[str]:
        names = self.roster.apply_base()
        self._render()
        return names

    # Draw settings

    def on_set_courts(self, count: int) -> None:
        if count < 1:
            raise ValueError(f"Court count must be at least 1, got {count}")
        self.court_count = count

    def on_set_mode(self, mode: DrawMode | str) -> None:
        if isinstance(mode, str):
            mode = DrawMode.from_str(mode)
        self.mode = mode

    # Draw and board

    def on_draw(self):
        result = draw_round(
            self.roster.names, self.court_count, self.mode,
            history=self.history, rng=self.rng, max_attempts=self.max_attempts,
        )
        self.board.replace(result.round)
        self.history.record_round(result.round.waiting, result.pairs)
        self._save_round()
        self._render()
        return result

    def on_slot_clicked(self, ref: SlotRef) -> str:
        outcome = self.board.select_slot(ref)
        self._save_round()
        self._render()
        return outcome

    # Timer

    def on_toggle_timer_view(self) -> bool:
        self.timer_visible = not self.timer_visible
        self._render()
        return self.timer_visible

    def on_set_timer_preset(self, seconds: int) -> None:
        if seconds not in self.timer_presets:
            raise ValueError(
                f"{seconds}s is not a timer preset (presets: {self.timer_presets})"
            )
        self.timer.set_preset(seconds)
        self._render()

    def on_set_timer_seconds(self, seconds: int) -> None:
        """Free-form round length, e.g. from a command-line duration."""
        if seconds < 1:
            raise ValueError(f"Timer duration must be positive, got {seconds}")
        self.timer.set_preset(seconds)
        self._render()

    def on_set_timer_custom(self, minutes: int) -> None:
        self.timer.set_custom_minutes(minutes)
        self._render()

    def on_timer_toggle(self) -> bool:
        running = self.timer.toggle()
        self._render()
        return running

    def on_timer_reset(self) -> None:
        self.timer.reset()
        self._render()

    def on_timer_tick(self) -> bool:
        if not self.timer.running:
            return False
        finished = self.timer.tick()
        self._render()
        return finished

    def on_resume(self) -> None:
        self.timer.resume()
