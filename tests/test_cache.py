"""Tests for the caller-owned result cache."""

from datetime import date

import pytest

from laeqlogic import exceptions, summary
from laeqlogic.cache import LAeqCache
from laeqlogic.config import LAeqConfig

CFG = LAeqConfig(tz="Asia/Bangkok")
DAY = date(2025, 1, 1)


def test_get_or_compute_calls_once(day_frame):
    cache = LAeqCache()
    calls = []

    def fn():
        calls.append(1)
        return summary.compute(day_frame, "Lday", day=DAY, config=CFG)

    key = ("hex-1", "Lday", DAY)
    a = cache.get_or_compute(key, fn)
    b = cache.get_or_compute(key, fn)
    assert a is b
    assert len(calls) == 1
    assert key in cache


def test_no_data_is_not_cached(early_morning_frame):
    cache = LAeqCache()
    key = ("hex-2", "Levening", DAY)
    with pytest.raises(exceptions.NoDataError):
        cache.get_or_compute(
            key, lambda: summary.compute(early_morning_frame, "Levening", day=DAY, config=CFG)
        )
    assert len(cache) == 0
    assert cache.get(key) is None


def test_lru_eviction():
    cache = LAeqCache(max_entries=2)
    r1 = summary.assemble([60.0], "Lday")
    r2 = summary.assemble([61.0], "Lday")
    r3 = summary.assemble([62.0], "Lday")
    cache.put(("a", "Lday", DAY), r1)
    cache.put(("b", "Lday", DAY), r2)
    cache.get(("a", "Lday", DAY))  # touch a so b is the oldest
    cache.put(("c", "Lday", DAY), r3)
    assert ("b", "Lday", DAY) not in cache
    assert cache.get(("a", "Lday", DAY)) is r1
    assert len(cache) == 2
    cache.clear()
    assert len(cache) == 0


def test_rejects_bad_size():
    with pytest.raises(exceptions.ConfigError):
        LAeqCache(max_entries=0)
