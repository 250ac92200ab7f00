from __future__ import annotations
import logging
from datetime import date as _date, datetime
from typing import Dict, Optional, cast, get_args

import pandas as pd

from . import exceptions, utils, validate
from .config import LAeqConfig, WindowBounds, default_config
from .types import SampleFrame, WindowName

log = logging.getLogger(__name__)

WINDOW_NAMES: tuple[str, ...] = get_args(WindowName)

# UI spellings seen in the map front-end and API requests
_ALIASES: Dict[str, str] = {
    "l1h": "L1h",
    "laeq1h": "L1h",
    "1h": "L1h",
    "hourly": "L1h",
    "l24h": "L24h",
    "laeq24h": "L24h",
    "24h": "L24h",
    "daily": "L24h",
    "lday": "Lday",
    "day": "Lday",
    "daytime": "Lday",
    "levening": "Levening",
    "evening": "Levening",
    "lnight": "Lnight",
    "night": "Lnight",
}


def parse_window(value: str) -> WindowName:
    """Map a window name or UI alias onto a canonical WindowName."""
    if not isinstance(value, str):
        raise exceptions.InvalidWindowError(f"Window must be a string, got {value!r}.")
    key = value.strip().lower()
    if key not in _ALIASES:
        raise exceptions.InvalidWindowError(
            f"Unsupported window {value!r}. Expected one of: {', '.join(WINDOW_NAMES)}."
        )
    return cast(WindowName, _ALIASES[key])


def day_part_bounds(window: WindowName, config: LAeqConfig) -> Optional[WindowBounds]:
    return {
        "Lday": config.daytime,
        "Levening": config.evening,
        "Lnight": config.night,
    }.get(window)


def _resolve_now(now: Optional[datetime | pd.Timestamp | str], tz: str) -> pd.Timestamp:
    zone = utils.resolve_tz(tz)
    if now is None:
        return pd.Timestamp.now(tz=zone)
    try:
        ts = pd.Timestamp(now)
    except (ValueError, TypeError) as err:
        raise exceptions.InvalidWindowError(f"Bad reference time {now!r}.") from err
    if pd.isna(ts):
        raise exceptions.InvalidWindowError("Reference time must not be NaT.")
    return utils.localize_timestamp(ts, zone) if ts.tzinfo is None else ts.tz_convert(zone)


def trailing_hour(
    df: SampleFrame,
    *,
    now: Optional[datetime | pd.Timestamp | str] = None,
    config: Optional[LAeqConfig] = None,
) -> SampleFrame:
    """
    L1h selection.

    wall_clock: samples with timestamps in (now - hourly_minutes, now].
    last_n:     the most recent hourly_last_n samples, whatever their age.
    """
    cfg = (config or default_config()).validate()
    if cfg.hourly_mode == "last_n":
        return cast(SampleFrame, df.iloc[-cfg.hourly_last_n :])

    end = _resolve_now(now, cfg.tz)
    start = end - pd.Timedelta(minutes=cfg.hourly_minutes)
    idx = pd.DatetimeIndex(df.index)
    mask = (idx > start) & (idx <= end)
    return cast(SampleFrame, df[mask])


def restrict_to_day(df: SampleFrame, day: _date | datetime | str, tz: str) -> SampleFrame:
    start, end = utils.local_day_bounds(utils.parse_date(day), tz)
    idx = pd.DatetimeIndex(df.index)
    return cast(SampleFrame, df[(idx >= start) & (idx < end)])


def select(
    df: SampleFrame,
    window: str,
    *,
    day: Optional[_date | datetime | str] = None,
    now: Optional[datetime | pd.Timestamp | str] = None,
    config: Optional[LAeqConfig] = None,
) -> SampleFrame:
    """
    Filter a SampleFrame down to the samples of one reporting window.

    - L1h:      trailing hour (see trailing_hour); ``day`` is ignored.
    - L24h:     the local calendar ``day``, or the whole series without one.
    - Lday, Levening, Lnight: local hour-of-day bands from config, inside
      ``day`` when given, otherwise across the whole series. Lnight wraps
      midnight, so for a single day it covers both 00:00-06:00 and 22:00-24:00.

    Hours are read in ``config.tz``, never the host's zone. The result may be
    empty; callers treat that as "no data for window".
    """
    name = parse_window(window)
    cfg = (config or default_config()).validate()
    validate.assert_canon(df)
    local = cast(SampleFrame, df.tz_convert(utils.resolve_tz(cfg.tz)))

    if name == "L1h":
        out = trailing_hour(local, now=now, config=cfg)
    else:
        if day is not None:
            local = restrict_to_day(local, day, cfg.tz)
        bounds = day_part_bounds(name, cfg)
        if bounds is None:
            out = local
        else:
            times = utils.local_time_series(pd.DatetimeIndex(local.index))
            mask = utils.time_in_range(
                times, utils.parse_time_str(bounds.start), utils.parse_time_str(bounds.end)
            )
            out = cast(SampleFrame, local[mask.to_numpy(dtype=bool)])

    log.debug("Window %s selected %d of %d samples", name, len(out), len(df))
    return out
