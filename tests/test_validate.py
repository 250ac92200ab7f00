"""Validation tests to enforce canonical frame invariants."""

import pandas as pd
import pytest
from laeqlogic import validate, exceptions


def _raw(idx, levels=None):
    return pd.DataFrame(
        {"cell_id": "hex-1", "level_db": levels if levels is not None else 60.0},
        index=pd.DatetimeIndex(idx, name="time"),
    )


def test_assert_canon_accepts_fixture(day_frame):
    validate.assert_canon(day_frame)


def test_assert_canon_rejects_non_monotonic(minute_rng):
    with pytest.raises(exceptions.CanonError):
        validate.assert_canon(_raw(minute_rng[[1, 0, 2]]))


def test_assert_canon_rejects_naive_index(minute_rng):
    with pytest.raises(exceptions.CanonError):
        validate.assert_canon(_raw(minute_rng[:3].tz_localize(None)))


def test_assert_canon_rejects_missing_column(day_frame):
    with pytest.raises(exceptions.CanonError):
        validate.assert_canon(day_frame.drop(columns=["level_db"]))


def test_assert_canon_rejects_non_finite(minute_rng):
    with pytest.raises(exceptions.CanonError):
        validate.assert_canon(_raw(minute_rng[:3], [60.0, float("nan"), 61.0]))


def test_assert_canon_rejects_wrong_index_name(day_frame):
    df = day_frame.copy()
    df.index.name = "t_start"
    with pytest.raises(exceptions.CanonError):
        validate.assert_canon(df)


def test_finite_mask():
    assert validate.finite_mask([1.0, float("inf"), None, "x", 2]).tolist() == [
        True,
        False,
        False,
        False,
        True,
    ]
