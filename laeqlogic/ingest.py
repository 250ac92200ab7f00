from __future__ import annotations
import logging
import pandas as pd
from typing import Any, Iterable, Mapping, Optional, cast

from . import canon, exceptions, utils, validate
from .types import Sample, SampleFrame

log = logging.getLogger(__name__)


def empty_sample_frame(tz: str = canon.DEFAULT_TZ) -> SampleFrame:
    """
    Return an empty SampleFrame with the correct tz-aware index and required columns.
    """
    idx = pd.DatetimeIndex([], tz=utils.resolve_tz(tz), name=canon.INDEX_NAME)
    out = pd.DataFrame(
        {"cell_id": pd.Series(dtype="object"), "level_db": pd.Series(dtype=float)},
        index=idx,
    )
    return SampleFrame(out)


def _pick(columns: Iterable[str], candidates: Iterable[str]) -> Optional[str]:
    cols = {str(c).lower(): c for c in columns}
    return next((cols[k] for k in candidates if k in cols), None)


def _auto_rename(df: pd.DataFrame) -> pd.DataFrame:
    new = df.copy()

    # 1) If index is already datetime-like, just name it 'time'
    if isinstance(new.index, pd.DatetimeIndex):
        new = new.rename_axis(canon.INDEX_NAME)
    else:
        # 2) Otherwise try to find a timestamp column and set as index
        tcol = _pick(new.columns, canon.COMMON_TIMESTAMP_NAMES)
        if tcol is None:
            raise exceptions.IngestError(
                "No timestamp column found and index is not datetime. "
                "Expected one of: time, timestamp, ts, datetime, date."
            )
        new = new.rename(columns={tcol: canon.INDEX_NAME}).set_index(canon.INDEX_NAME)

    # 3) Standardize level and cell column names if needed
    if "level_db" not in new.columns:
        lcol = _pick(new.columns, canon.COMMON_LEVEL_NAMES)
        if lcol is not None:
            new = new.rename(columns={lcol: "level_db"})
    if "cell_id" not in new.columns:
        ccol = _pick(new.columns, canon.COMMON_CELL_NAMES)
        if ccol is not None:
            new = new.rename(columns={ccol: "cell_id"})

    return new


def from_dataframe(
    df: pd.DataFrame,
    *,
    tz: str = canon.DEFAULT_TZ,
    cell_id: Optional[str] = None,
) -> SampleFrame:
    """
    Parse a provided DataFrame of noise samples and normalise to canon:
      - index: tz-aware 'time', sorted ascending (source order is not trusted)
      - columns: cell_id, level_db (finite floats)
    Non-finite levels are dropped here so they never reach the reducer.
    """
    df = _auto_rename(df)

    if "level_db" not in df.columns:
        raise exceptions.IngestError("Missing required column: level_db")

    if "cell_id" not in df.columns:
        df = df.assign(cell_id=str(cell_id) if cell_id is not None else canon.DEFAULT_CELL_ID)
    df = validate.validate_cell(df, cell_id)

    if not isinstance(df.index, pd.DatetimeIndex):
        df = df.set_axis(pd.to_datetime(df.index, errors="coerce"), axis=0)
    df = _drop_bad_times(df)

    levels = pd.to_numeric(df["level_db"], errors="coerce").astype(float)
    keep = validate.finite_mask(levels)
    dropped = int((~keep).sum())
    if dropped:
        log.warning("Dropped %d sample(s) with non-finite level_db", dropped)
    df = df.assign(level_db=levels)[keep]
    df = df.assign(cell_id=df["cell_id"].astype(str))

    # localise in source order so a repeated fall-back hour can be inferred,
    # then stable sort keeps duplicate timestamps in source order
    df = utils.ensure_tz_aware_index(df.rename_axis(canon.INDEX_NAME), tz)
    df = _drop_bad_times(df).sort_index(kind="mergesort")

    out = SampleFrame(df[canon.REQUIRED_COLS].copy())
    validate.assert_canon(out)
    return out


def _drop_bad_times(df: pd.DataFrame) -> pd.DataFrame:
    bad = df.index.isna()
    if bad.any():
        log.warning("Dropped %d sample(s) with missing or ambiguous timestamps", int(bad.sum()))
        df = df[~bad]
    return df


def from_samples(
    samples: Iterable[Sample | tuple[Any, float]],
    *,
    tz: str = canon.DEFAULT_TZ,
    cell_id: str = canon.DEFAULT_CELL_ID,
) -> SampleFrame:
    """
    Build a SampleFrame from Sample objects or (timestamp, level) pairs.

    Naive ``Sample.timestamp_utc`` values are UTC; naive pair timestamps are
    local wall-clock times in ``tz``.
    """
    zone = utils.resolve_tz(tz)
    stamps: list[pd.Timestamp] = []
    levels: list[Any] = []
    for s in samples:
        if isinstance(s, Sample):
            ts = pd.Timestamp(s.timestamp_utc)
            stamps.append(ts.tz_localize("UTC") if ts.tzinfo is None else ts)
            levels.append(s.level_db)
        else:
            raw, level = s
            ts = pd.Timestamp(raw)
            stamps.append(utils.localize_timestamp(ts, zone) if ts.tzinfo is None else ts)
            levels.append(level)
    if not stamps:
        return empty_sample_frame(tz)

    df = pd.DataFrame(
        {
            canon.INDEX_NAME: pd.to_datetime(stamps, utc=True),
            "cell_id": str(cell_id),
            "level_db": levels,
        }
    ).set_index(canon.INDEX_NAME)
    return from_dataframe(df, tz=tz, cell_id=cell_id)


def from_features(
    features: Iterable[Mapping[str, Any]] | Mapping[str, Any],
    *,
    tz: str = canon.DEFAULT_TZ,
    cell_id: Optional[str] = None,
) -> SampleFrame:
    """
    Parse GeoJSON-like features as returned by a WFS GetFeature query:
    ``{"properties": {"time": ..., "noise_level": ..., "hex_id": ...}}``.
    A whole FeatureCollection is accepted too.
    """
    if isinstance(features, Mapping):
        features = features.get("features") or []

    records = []
    for feat in features:
        props = feat.get("properties") or {}
        records.append(
            {
                canon.INDEX_NAME: props.get("time"),
                "level_db": props.get("noise_level", props.get("level_db")),
                "cell_id": props.get("hex_id", props.get("cell_id", cell_id)),
            }
        )
    if not records:
        return empty_sample_frame(tz)

    df = pd.DataFrame.from_records(records)
    if df["cell_id"].isna().all():
        df = df.drop(columns=["cell_id"])
    else:
        # features without a hex_id belong to the requested cell
        df["cell_id"] = df["cell_id"].fillna(
            cell_id if cell_id is not None else canon.DEFAULT_CELL_ID
        )
    df[canon.INDEX_NAME] = utils.safe_localize_series(df[canon.INDEX_NAME], tz)
    df = df.set_index(canon.INDEX_NAME)
    return cast(SampleFrame, from_dataframe(df, tz=tz, cell_id=cell_id))
