from __future__ import annotations
import math
from datetime import datetime
from typing import Optional, Sequence, cast

import numpy as np
import pandas as pd

from . import canon, exceptions, utils
from .config import LAeqConfig, default_config
from .types import ChartSeries, SampleFrame


def downsample(
    labels: Sequence[str],
    values: Sequence[float],
    max_points: int = canon.DEFAULT_MAX_POINTS,
) -> ChartSeries:
    """
    Shrink a (label, value) series to at most ``max_points`` for plotting.

    Series that already fit are returned unchanged. Otherwise the series is
    cut into contiguous chunks of ``ceil(n / max_points)`` points and each
    chunk becomes (label of its first point, arithmetic mean of its values).
    The last original point always closes the output; when there is no room
    left to append it, it takes the place of the final chunk.

    The chunk mean is dB-space line smoothing for display only. It is not an
    LAeq and must never feed reported statistics.
    """
    labels = list(labels)
    vals = [float(v) for v in values]
    if len(labels) != len(vals):
        raise ValueError(
            f"labels and values differ in length ({len(labels)} != {len(vals)})"
        )
    exceptions.require(
        max_points >= 2, "max_points must be at least 2.", exceptions.ConfigError
    )

    n = len(vals)
    if n <= max_points:
        return ChartSeries(labels=labels, values=vals)

    step = math.ceil(n / max_points)
    means = pd.Series(vals).groupby(np.arange(n) // step).mean()
    starts = range(0, n, step)
    out_labels = [labels[i] for i in starts]
    out_vals = [float(v) for v in means.to_numpy()]

    if starts[-1] != n - 1:
        if len(out_vals) >= max_points:
            out_labels[-1], out_vals[-1] = labels[-1], vals[-1]
        else:
            out_labels.append(labels[-1])
            out_vals.append(vals[-1])

    return ChartSeries(labels=out_labels, values=out_vals)


def chart_series(
    df: SampleFrame,
    max_points: Optional[int] = None,
    config: Optional[LAeqConfig] = None,
) -> ChartSeries:
    """Chart-ready series of a SampleFrame, labelled in the reporting zone."""
    cfg = (config or default_config()).validate()
    points = max_points if max_points is not None else cfg.max_points
    idx = pd.DatetimeIndex(df.index)
    if idx.tz is not None:
        idx = idx.tz_convert(utils.resolve_tz(cfg.tz))
    return downsample(
        utils.iso_labels(idx),
        df["level_db"].to_numpy(dtype=float),
        points,
    )


def _as_bound(value: datetime | pd.Timestamp | str, tz) -> pd.Timestamp:
    ts = pd.Timestamp(value)
    if tz is None:
        return ts.tz_localize(None) if ts.tzinfo is not None else ts
    return utils.localize_timestamp(ts, tz) if ts.tzinfo is None else ts.tz_convert(tz)


def filter_range(
    df: SampleFrame,
    start: Optional[datetime | pd.Timestamp | str] = None,
    end: Optional[datetime | pd.Timestamp | str] = None,
) -> SampleFrame:
    """Inclusive [start, end] view for charts; naive bounds use the frame's zone."""
    if start is None and end is None:
        return df
    idx = pd.DatetimeIndex(df.index)
    mask = np.ones(len(idx), dtype=bool)
    if start is not None:
        mask &= idx >= _as_bound(start, idx.tz)
    if end is not None:
        mask &= idx <= _as_bound(end, idx.tz)
    return cast(SampleFrame, df[mask])
