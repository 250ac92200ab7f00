# laeqlogic/utils.py
from __future__ import annotations
import pandas as pd
import pytz
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from datetime import date as _date, datetime, time as _time

from . import canon, exceptions


def resolve_tz(tz: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError, TypeError) as err:
        raise exceptions.InvalidWindowError(f"Unknown time zone {tz!r}.") from err


def localize_index(idx: pd.DatetimeIndex, zone: ZoneInfo) -> pd.DatetimeIndex:
    """
    Attach ``zone`` to naive wall-clock timestamps.

    A repeated fall-back hour is resolved from the order of the data; when
    that is impossible the ambiguous stamps become NaT. Stamps inside a
    spring-forward gap move to the first valid time after it.
    """
    try:
        return idx.tz_localize(zone, ambiguous="infer", nonexistent="shift_forward")
    except (ValueError, pytz.exceptions.AmbiguousTimeError):
        # pandas < 3 raises the pytz error, later releases ValueError
        return idx.tz_localize(zone, ambiguous="NaT", nonexistent="shift_forward")


def localize_timestamp(ts: pd.Timestamp, zone: ZoneInfo) -> pd.Timestamp:
    """Scalar version of localize_index; an ambiguous stamp takes its first occurrence."""
    return ts.tz_localize(zone, ambiguous=True, nonexistent="shift_forward")


def ensure_tz_aware_index(df: pd.DataFrame, tz: str) -> pd.DataFrame:
    """Localise or convert the index to tz; unresolvable local stamps become NaT."""
    if df.index.name != canon.INDEX_NAME:
        raise ValueError(f"Index must be '{canon.INDEX_NAME}', got {df.index.name}")
    idx = pd.DatetimeIndex(df.index)
    zone = resolve_tz(tz)
    if idx.tz is None:
        idx = localize_index(idx, zone)
    else:
        idx = idx.tz_convert(zone)
    return df.set_axis(idx.rename(canon.INDEX_NAME), axis=0)


def safe_localize_series(ts: pd.Series, tz: str) -> pd.Series:
    s = pd.to_datetime(ts, errors="coerce")
    zone = resolve_tz(tz)
    if getattr(s.dt, "tz", None) is None:
        return pd.Series(localize_index(pd.DatetimeIndex(s), zone), index=s.index, name=s.name)
    return s.dt.tz_convert(zone)


def parse_time_str(tstr: str) -> _time:
    """Allow '24:00' → '00:00' rollover safely."""
    s = tstr.strip()
    if s == "24:00":
        return _time(0, 0)
    try:
        return pd.to_datetime(s, format="%H:%M").time()
    except (ValueError, TypeError) as err:
        raise exceptions.InvalidWindowError(f"Bad HH:MM time {tstr!r}.") from err


def time_in_range(times: pd.Series, start: _time, end: _time) -> pd.Series:
    """Return mask for times within [start, end). Handles wrap-around."""
    if start < end:
        return (times >= start) & (times < end)
    else:
        # e.g. 22:00 → 06:00 next day
        return (times >= start) | (times < end)


def local_time_series(idx: pd.DatetimeIndex) -> pd.Series:
    """
    Return a Series of local wall-clock times (datetime.time) indexed by idx.
    Assumes idx is tz-aware and already converted to the reporting zone.
    """
    if idx.tz is None:
        raise ValueError("Index must be tz-aware for local_time_series.")
    return pd.Series(idx.time, index=idx)


def parse_date(value: _date | datetime | pd.Timestamp | str) -> _date:
    """Normalise a requested calendar day; malformed input is rejected."""
    if value is pd.NaT:
        raise exceptions.InvalidWindowError("Date must not be NaT.")
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, _date):
        return value
    if isinstance(value, str):
        try:
            return pd.to_datetime(value.strip(), format="%Y-%m-%d").date()
        except (ValueError, TypeError) as err:
            raise exceptions.InvalidWindowError(
                f"Expected a YYYY-MM-DD date, got {value!r}."
            ) from err
    raise exceptions.InvalidWindowError(f"Unsupported date value {value!r}.")


def local_day_bounds(day: _date, tz: str) -> tuple[pd.Timestamp, pd.Timestamp]:
    """Return [start, end) of the local calendar day in tz."""
    zone = resolve_tz(tz)
    # midnight may be skipped or repeated by a DST change
    start = localize_timestamp(pd.Timestamp(day), zone)
    end = localize_timestamp(pd.Timestamp(day) + pd.Timedelta(days=1), zone)
    return start, end


def iso_labels(idx: pd.DatetimeIndex) -> list[str]:
    return [ts.isoformat() for ts in idx]
