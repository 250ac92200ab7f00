from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from . import canon, exceptions, utils


@dataclass
class WindowBounds:
    start: str  # "HH:MM"
    end: str  # "HH:MM", exclusive; wraps midnight when start > end


@dataclass
class LAeqConfig:
    tz: str = canon.DEFAULT_TZ

    # Day-part windows on local wall-clock time
    daytime: WindowBounds = field(default_factory=lambda: WindowBounds("06:00", "18:00"))
    evening: WindowBounds = field(default_factory=lambda: WindowBounds("18:00", "22:00"))
    night: WindowBounds = field(default_factory=lambda: WindowBounds("22:00", "06:00"))

    # L1h: trailing wall-clock window, or the legacy "most recent N samples"
    hourly_mode: Literal["wall_clock", "last_n"] = "wall_clock"
    hourly_minutes: int = 60
    hourly_last_n: int = 60

    # Presentation
    max_points: int = canon.DEFAULT_MAX_POINTS
    display_decimals: int = 1

    def validate(self) -> "LAeqConfig":
        exceptions.require(
            self.hourly_mode in ("wall_clock", "last_n"),
            f"Unknown hourly_mode {self.hourly_mode!r}.",
            exceptions.ConfigError,
        )
        exceptions.require(
            self.hourly_minutes > 0, "hourly_minutes must be positive.", exceptions.ConfigError
        )
        exceptions.require(
            self.hourly_last_n > 0, "hourly_last_n must be positive.", exceptions.ConfigError
        )
        exceptions.require(
            self.max_points >= 2, "max_points must be at least 2.", exceptions.ConfigError
        )
        exceptions.require(
            self.display_decimals >= 0,
            "display_decimals must be non-negative.",
            exceptions.ConfigError,
        )
        try:
            utils.resolve_tz(self.tz)
            for bounds in (self.daytime, self.evening, self.night):
                utils.parse_time_str(bounds.start)
                utils.parse_time_str(bounds.end)
        except exceptions.InvalidWindowError as err:
            raise exceptions.ConfigError(str(err)) from err
        return self


def default_config() -> LAeqConfig:
    return LAeqConfig()
