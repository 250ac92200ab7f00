from __future__ import annotations
import logging
from datetime import date as _date, datetime
from typing import Iterable, Optional, cast

import numpy as np
import pandas as pd

from . import exceptions, laeq, utils, validate, windows
from .config import LAeqConfig, default_config
from .downsample import chart_series
from .types import LAeqResult, SampleFrame, SummaryPayload, TrendPoint

log = logging.getLogger(__name__)


def assemble(levels: Iterable[float] | np.ndarray, window: str) -> LAeqResult:
    """
    Combine the LAeq of ``levels`` with min, max, arithmetic mean and count.

    ``avg_db`` answers "typical instantaneous level"; ``laeq_db`` answers
    "energy-equivalent level". Both come from the same samples.
    """
    name = windows.parse_window(window)
    arr = np.asarray(levels if isinstance(levels, np.ndarray) else list(levels), dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        raise exceptions.NoDataError(f"No samples for window {name}.")
    return LAeqResult(
        laeq_db=laeq.laeq_db(arr),
        count=int(arr.size),
        min_db=float(arr.min()),
        max_db=float(arr.max()),
        avg_db=float(arr.mean()),
        window=name,
    )


def compute(
    df: SampleFrame,
    window: str,
    *,
    day: Optional[_date | datetime | str] = None,
    now: Optional[datetime | pd.Timestamp | str] = None,
    config: Optional[LAeqConfig] = None,
) -> LAeqResult:
    """Select the window's samples and reduce them; always from raw samples."""
    cfg = config or default_config()
    selected = windows.select(df, window, day=day, now=now, config=cfg)
    if selected.empty:
        raise exceptions.NoDataError(
            f"No samples for window {windows.parse_window(window)}"
            + (f" on {utils.parse_date(day)}" if day is not None else "")
            + "."
        )
    return assemble(selected["level_db"].to_numpy(dtype=float), window)


def try_compute(
    df: SampleFrame,
    window: str,
    *,
    day: Optional[_date | datetime | str] = None,
    now: Optional[datetime | pd.Timestamp | str] = None,
    config: Optional[LAeqConfig] = None,
) -> Optional[LAeqResult]:
    """Like compute, but None is the absent signal instead of NoDataError."""
    try:
        return compute(df, window, day=day, now=now, config=config)
    except exceptions.NoDataError:
        return None


def hourly_trend(
    df: SampleFrame,
    day: _date | datetime | str,
    *,
    config: Optional[LAeqConfig] = None,
) -> list[TrendPoint]:
    """
    Per-hour LAeq and sample count for one local day (the 24 h view's trend).
    Hours with no samples are left out rather than reported as zero.
    """
    cfg = config or default_config()
    selected = windows.select(df, "L24h", day=day, config=cfg)
    if selected.empty:
        return []
    hours = pd.DatetimeIndex(selected.index).hour
    grouped = selected.groupby(np.asarray(hours))["level_db"]
    out: list[TrendPoint] = []
    for hour, levels in grouped:
        out.append(
            {
                "hour": int(hour),
                "laeq": laeq.laeq_db(levels.to_numpy(dtype=float)),
                "count": int(len(levels)),
            }
        )
    return out


def summarise(
    df: SampleFrame,
    *,
    day: Optional[_date | datetime | str] = None,
    now: Optional[datetime | pd.Timestamp | str] = None,
    config: Optional[LAeqConfig] = None,
) -> SummaryPayload:
    """
    All five windows for one cell, plus hourly trend and a chart series.

    Windows without samples map to None. The chart is built from the day's
    samples (or the whole series) and never feeds the window statistics.
    """
    cfg = config or default_config()
    validate.assert_canon(df)
    day_val = utils.parse_date(day) if day is not None else None

    results: dict[str, Optional[dict[str, float | int | str]]] = {}
    for name in windows.WINDOW_NAMES:
        res = try_compute(df, name, day=day_val, now=now, config=cfg)
        results[name] = res.to_dict() if res is not None else None

    if day_val is not None:
        chart_df = windows.select(df, "L24h", day=day_val, config=cfg)
        trend = hourly_trend(df, day_val, config=cfg)
    else:
        chart_df = df
        trend = []
    chart = chart_series(chart_df, config=cfg)

    idx = pd.DatetimeIndex(df.index)
    if len(idx):
        idx = idx.tz_convert(utils.resolve_tz(cfg.tz))
    start_str: str = idx.min().isoformat() if len(idx) else ""
    end_str: str = idx.max().isoformat() if len(idx) else ""

    log.debug("Summarised %d samples (%s)", len(df), day_val)
    payload: SummaryPayload = cast(
        SummaryPayload,
        {
            "meta": {
                "cells": sorted(df["cell_id"].astype(str).unique()),
                "start": start_str,
                "end": end_str,
                "samples": int(len(df)),
                "tz": cfg.tz,
                "day": day_val.isoformat() if day_val is not None else None,
            },
            "windows": results,
            "trend": trend,
            "chart": {"labels": chart.labels, "values": chart.values},
        },
    )
    return payload
