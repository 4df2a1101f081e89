"""Config loading and validation for courtdraw."""

from pathlib import Path

import yaml

from courtdraw.draw import MAX_PAIRING_ATTEMPTS
from courtdraw.models import DrawMode
from courtdraw.timer import DEFAULT_ALARM_SECONDS, DEFAULT_SECONDS

DEFAULT_PRESETS = [60, 300, 420, 600, 900]
MAX_COURTS = 6


def parse_duration(s: str) -> int:
    """Parse durations like '90', '90s', '7m', '7:30' into seconds."""
    s = str(s).strip().lower()
    if ":" in s:
        m, sec = s.split(":")
        return int(m) * 60 + int(sec)
    if s.endswith("m"):
        return int(s[:-1]) * 60
    if s.endswith("s"):
        return int(s[:-1])
    return int(s)


def default_config() -> dict:
    return {
        "session": {
            "courts": 2,
            "mode": DrawMode.Smart,
            "store": "courtdraw.json",
        },
        "draw": {
            "max_attempts": MAX_PAIRING_ATTEMPTS,
        },
        "timer": {
            "default_seconds": DEFAULT_SECONDS,
            "presets": list(DEFAULT_PRESETS),
            "alarm_seconds": DEFAULT_ALARM_SECONDS,
        },
    }


def build_config(raw: dict | None) -> dict:
    """Merge a raw YAML mapping over the defaults, validating as we go.

    Returns dict with:
    - session: {courts, mode (DrawMode), store}
    - draw: {max_attempts}
    - timer: {default_seconds, presets, alarm_seconds}
    - errors: list of validation messages (bad values fall back to defaults)
    """
    config = default_config()
    raw = raw or {}
    errors = []

    session_raw = raw.get("session") or {}
    courts = session_raw.get("courts", config["session"]["courts"])
    if not isinstance(courts, int) or not 1 <= courts <= MAX_COURTS:
        errors.append(f"session.courts must be 1-{MAX_COURTS}, got {courts!r}")
    else:
        config["session"]["courts"] = courts

    mode = session_raw.get("mode")
    if mode is not None:
        try:
            config["session"]["mode"] = DrawMode.from_str(str(mode))
        except ValueError:
            errors.append(f"session.mode must be 'normal' or 'smart', got {mode!r}")

    if session_raw.get("store"):
        config["session"]["store"] = str(session_raw["store"])

    draw_raw = raw.get("draw") or {}
    attempts = draw_raw.get("max_attempts", config["draw"]["max_attempts"])
    if not isinstance(attempts, int) or attempts < 1:
        errors.append(f"draw.max_attempts must be a positive integer, got {attempts!r}")
    else:
        config["draw"]["max_attempts"] = attempts

    timer_raw = raw.get("timer") or {}
    for key in ("default_seconds", "alarm_seconds"):
        if key not in timer_raw:
            continue
        try:
            value = parse_duration(timer_raw[key])
        except ValueError:
            errors.append(f"timer.{key}: cannot parse {timer_raw[key]!r}")
            continue
        if value < 1:
            errors.append(f"timer.{key} must be positive, got {value}")
        else:
            config["timer"][key] = value

    if "presets" in timer_raw:
        presets = []
        for p in timer_raw["presets"] or []:
            try:
                presets.append(parse_duration(p))
            except ValueError:
                errors.append(f"timer.presets: cannot parse {p!r}")
        presets = [p for p in presets if p > 0]
        if presets:
            config["timer"]["presets"] = presets
        else:
            errors.append("timer.presets is empty, keeping defaults")

    config["errors"] = errors
    return config


def load_config(path: str | Path) -> dict:
    """Load config YAML; missing sections take their defaults."""
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at top level")

    config = build_config(raw)
    if config["errors"]:
        print("Config validation errors:")
        for e in config["errors"]:
            print(f"  {e}")
    return config
