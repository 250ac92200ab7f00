"""Tests for result assembly and the per-cell summary payload."""

import math

import numpy as np
import pytest

from laeqlogic import summary, exceptions
from laeqlogic.config import LAeqConfig

TZ = "Asia/Bangkok"
CFG = LAeqConfig(tz=TZ)


def test_assemble_concrete_scenario():
    res = summary.assemble([60, 60, 60, 70], "L24h")
    assert res.avg_db == 62.5
    assert res.min_db == 60
    assert res.max_db == 70
    assert res.count == 4
    assert res.laeq_db == pytest.approx(10 * math.log10(3.25e6), abs=1e-9)
    assert res.window == "L24h"


def test_assemble_ordering_of_stats(random_levels):
    res = summary.assemble(random_levels, "day")
    assert res.min_db <= res.avg_db <= res.max_db
    assert res.laeq_db >= res.avg_db
    assert res.window == "Lday"


def test_assemble_empty_is_no_data():
    with pytest.raises(exceptions.NoDataError):
        summary.assemble([], "Lnight")


def test_compute_windows(day_frame):
    day = summary.compute(day_frame, "Lday", day="2025-01-01", config=CFG)
    evening = summary.compute(day_frame, "Levening", day="2025-01-01", config=CFG)
    night = summary.compute(day_frame, "Lnight", day="2025-01-01", config=CFG)
    assert (day.count, day.laeq_db) == (720, 70.0)
    assert (evening.count, evening.laeq_db) == (240, 65.0)
    assert (night.count, night.laeq_db) == (480, 50.0)

    full = summary.compute(day_frame, "L24h", day="2025-01-01", config=CFG)
    assert full.count == 1440
    expected = 10 * math.log10((720 * 1e7 + 240 * 10**6.5 + 480 * 1e5) / 1440)
    assert full.laeq_db == pytest.approx(expected, abs=1e-9)


def test_evening_without_data_is_no_data(early_morning_frame):
    with pytest.raises(exceptions.NoDataError):
        summary.compute(early_morning_frame, "Levening", config=CFG)
    assert summary.try_compute(early_morning_frame, "Levening", config=CFG) is None


def test_invalid_window_rejected_before_compute(day_frame):
    with pytest.raises(exceptions.InvalidWindowError):
        summary.compute(day_frame, "Lweekend", config=CFG)


def test_compute_l1h(day_frame):
    res = summary.compute(day_frame, "L1h", now="2025-01-01 19:00", config=CFG)
    assert res.count == 60
    assert res.laeq_db == 65.0


def test_hourly_trend(day_frame):
    trend = summary.hourly_trend(day_frame, "2025-01-01", config=CFG)
    assert [p["hour"] for p in trend] == list(range(24))
    assert all(p["count"] == 60 for p in trend)
    assert trend[7]["laeq"] == 70.0
    assert trend[23]["laeq"] == 50.0


def test_hourly_trend_skips_empty_hours(early_morning_frame):
    trend = summary.hourly_trend(early_morning_frame, "2025-01-01", config=CFG)
    assert [p["hour"] for p in trend] == [0, 1, 2, 3, 4]
    assert summary.hourly_trend(early_morning_frame, "2025-02-01", config=CFG) == []


def test_summarise_payload(day_frame):
    payload = summary.summarise(
        day_frame, day="2025-01-01", now="2025-01-01 12:00", config=CFG
    )
    assert payload["meta"]["cells"] == ["hex-1"]
    assert payload["meta"]["samples"] == 1440
    assert payload["meta"]["day"] == "2025-01-01"
    assert set(payload["windows"]) == {"L1h", "L24h", "Lday", "Levening", "Lnight"}
    assert payload["windows"]["L1h"]["count"] == 60
    assert payload["windows"]["Lday"]["laeq_db"] == 70.0
    assert len(payload["trend"]) == 24
    assert len(payload["chart"]["values"]) <= CFG.max_points


def test_summarise_reports_missing_windows_as_none(early_morning_frame):
    payload = summary.summarise(
        early_morning_frame, day="2025-01-01", now="2025-01-01 12:00", config=CFG
    )
    assert payload["windows"]["Levening"] is None
    assert payload["windows"]["Lday"] is None
    assert payload["windows"]["L1h"] is None
    assert payload["windows"]["Lnight"]["count"] == 300
    assert np.isclose(payload["windows"]["L24h"]["laeq_db"], 55.0)
