"""Settings for calcpad, read from CALCPAD_* environment variables.

Self-contained: plain os.environ lookups with defaults, no config files.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from calcpad.formatting import FRACTION_DIGITS, MAX_LENGTH

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsError(ValueError):
    """An environment variable holds a value calcpad cannot use."""


@dataclass(frozen=True)
class EngineSettings:
    """Display limits and logging level for one calculator session."""

    max_input_length: int = MAX_LENGTH
    fraction_digits: int = FRACTION_DIGITS
    log_level: str = "WARNING"

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


def _positive_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise SettingsError(f"{key} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise SettingsError(f"{key} must be positive, got {value}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> EngineSettings:
    """Build EngineSettings from the environment.

    Args:
        env: Mapping to read instead of os.environ (tests pass a dict).

    Raises:
        SettingsError: on a non-integer or non-positive limit, or an unknown
            log level name.
    """
    env = os.environ if env is None else env
    level = env.get("CALCPAD_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
    if level not in _LOG_LEVELS:
        raise SettingsError(
            f"CALCPAD_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {level!r}"
        )
    return EngineSettings(
        max_input_length=_positive_int(env, "CALCPAD_MAX_INPUT_LENGTH", MAX_LENGTH),
        fraction_digits=_positive_int(env, "CALCPAD_FRACTION_DIGITS", FRACTION_DIGITS),
        log_level=level,
    )
