from __future__ import annotations

from datetime import date as _date, datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from . import laeq, utils, validate
from .config import LAeqConfig, default_config
from .types import ChartSeries, LAeqResult, Sample, SampleFrame, TrendPoint


def result_to_payload(
    result: Optional[LAeqResult],
    *,
    day: Optional[_date | datetime | str] = None,
    decimals: Optional[int] = None,
    trend: Optional[List[TrendPoint]] = None,
    config: Optional[LAeqConfig] = None,
) -> Optional[Dict[str, Any]]:
    """
    Shape an LAeqResult like the map front-end's LAeq response:

        {"laeq", "totalRecords", "min", "max", "avg", "type", "date", "trendData"}

    Rounding happens here, on the way out; ``result`` keeps full precision.
    ``decimals`` defaults to ``config.display_decimals``.
    A missing result stays None rather than a zero-filled payload.
    """
    if result is None:
        return None
    if decimals is None:
        decimals = (config or default_config()).validate().display_decimals
    return {
        "laeq": laeq.round_db(result.laeq_db, decimals),
        "totalRecords": result.count,
        "min": laeq.round_db(result.min_db, decimals),
        "max": laeq.round_db(result.max_db, decimals),
        "avg": laeq.round_db(result.avg_db, decimals),
        "type": result.window,
        "date": utils.parse_date(day).isoformat() if day is not None else None,
        "trendData": [
            {
                "hour": p["hour"],
                "laeq": laeq.round_db(p["laeq"], decimals),
                "count": p["count"],
            }
            for p in (trend or [])
        ],
    }


def chart_to_payload(chart: ChartSeries, label: str = "Noise level dB(A)") -> Dict[str, Any]:
    return {
        "labels": list(chart.labels),
        "datasets": [{"label": label, "data": list(chart.values)}],
    }


def to_samples(df: SampleFrame) -> List[Sample]:
    """
    Convert a canonical frame back into immutable Sample records (UTC).
    """
    validate.assert_canon(df)
    idx = pd.DatetimeIndex(df.index).tz_convert("UTC")
    return [
        Sample(timestamp_utc=ts.to_pydatetime(), level_db=float(v))
        for ts, v in zip(idx, df["level_db"].to_numpy(dtype=float))
    ]
