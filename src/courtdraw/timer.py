"""Round countdown timer.

The timer does not schedule anything itself: whoever hosts it calls `tick()`
once per second. Reaching zero stops the countdown and sounds the alarm.
While running it holds a stay-awake hint so the display does not sleep.
"""

import logging

logger = logging.getLogger(__name__)

DEFAULT_SECONDS = 60
DEFAULT_ALARM_SECONDS = 10


class SilentAlarm:
    """Alarm collaborator that does nothing; stands in when no audio exists."""

    def play(self, duration_seconds: int) -> None:
        pass

    def stop(self) -> None:
        pass


class NoWakeLock:
    held = False

    def request(self) -> None:
        pass

    def release(self) -> None:
        pass


def format_clock(seconds: int) -> str:
    seconds = max(0, seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class RoundTimer:
    def __init__(self, duration_seconds: int = DEFAULT_SECONDS,
                 alarm=None, wake_lock=None,
                 alarm_seconds: int = DEFAULT_ALARM_SECONDS):
        if duration_seconds < 0:
            raise ValueError(f"Timer duration must be >= 0, got {duration_seconds}")
        self.duration = duration_seconds
        self.remaining = duration_seconds
        self.running = False
        self.alarm = alarm if alarm is not None else SilentAlarm()
        self.wake_lock = wake_lock if wake_lock is not None else NoWakeLock()
        self.alarm_seconds = alarm_seconds

    def display(self) -> str:
        return format_clock(self.remaining)

    @property
    def finished(self) -> bool:
        return self.remaining <= 0

    def set_preset(self, seconds: int) -> None:
        """Choose a new round length; stops the timer and rewinds to it."""
        if seconds < 0:
            raise ValueError(f"Timer duration must be >= 0, got {seconds}")
        self.duration = seconds
        self.stop()
        self.remaining = seconds

    def set_custom_minutes(self, minutes: int) -> None:
        if minutes < 1:
            raise ValueError(f"Custom duration must be at least 1 minute, got {minutes}")
        self.set_preset(minutes * 60)

    def start(self) -> bool:
        if self.running or self.remaining <= 0:
            return False
        self.running = True
        self.wake_lock.request()
        return True

    def stop(self) -> None:
        """Pause: no more ticks, alarm silenced, remaining time kept."""
        self.running = False
        self.alarm.stop()
        if self.wake_lock.held:
            self.wake_lock.release()

    def toggle(self) -> bool:
        """Start if stopped, pause if running. Returns the new running state."""
        if self.running:
            self.stop()
        else:
            self.start()
        return self.running

    def reset(self) -> None:
        self.stop()
        self.remaining = self.duration

    def tick(self) -> bool:
        """Advance one second. Returns True on the tick that reaches zero."""
        if not self.running:
            return False
        self.remaining -= 1
        if self.remaining > 0:
            return False

        self.remaining = 0
        self.running = False
        if self.wake_lock.held:
            self.wake_lock.release()
        logger.info("Round timer finished, sounding alarm")
        self.alarm.play(self.alarm_seconds)
        return True

    def resume(self) -> None:
        """Host app came back to the foreground; re-take a lost stay-awake hint."""
        if self.running and not self.wake_lock.held:
            self.wake_lock.request()
