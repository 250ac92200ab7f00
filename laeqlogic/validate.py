from __future__ import annotations
import numpy as np
import pandas as pd
from typing import Optional, cast

from . import canon, exceptions


def finite_mask(values) -> np.ndarray:
    arr = pd.to_numeric(pd.Series(values, dtype="object"), errors="coerce")
    return np.isfinite(arr.to_numpy(dtype=float))


def assert_canon(df: pd.DataFrame) -> None:
    if df.index.name != canon.INDEX_NAME:
        raise exceptions.CanonError(f"Index must be '{canon.INDEX_NAME}'.")
    if not isinstance(df.index, pd.DatetimeIndex):
        raise exceptions.CanonError("Index must be a DatetimeIndex.")
    tz_index = cast(pd.DatetimeIndex, df.index)
    if tz_index.tz is None:
        raise exceptions.CanonError("Index must be tz-aware.")
    for col in canon.REQUIRED_COLS:
        if col not in df.columns:
            raise exceptions.CanonError(f"Missing required column '{col}'.")
    if not df.index.is_monotonic_increasing:
        raise exceptions.CanonError("Index must be sorted ascending.")
    if len(df) and not finite_mask(df["level_db"]).all():
        raise exceptions.CanonError(
            "Non-finite level_db values detected; reject them before aggregation."
        )


def validate_cell(df: pd.DataFrame, cell_id: Optional[str] = None) -> pd.DataFrame:
    """Validates that data contains a single cell or narrows it to the requested one."""
    cells = df["cell_id"].astype(str).unique()
    if cell_id is not None:
        if len(df) and str(cell_id) not in cells:
            raise exceptions.IngestError(
                f"Specified cell {cell_id} is not in the dataset. Available cells: {', '.join(cells)}"
            )
        return df[df["cell_id"].astype(str) == str(cell_id)]
    if len(cells) > 1:
        raise exceptions.IngestError(
            f"Multiple cells detected: {', '.join(cells)}. Please specify a cell_id."
        )
    return df
