from __future__ import annotations

from collections import OrderedDict
from datetime import date as _date
from typing import Callable, Optional, Tuple

from . import exceptions
from .types import LAeqResult, WindowName

CacheKey = Tuple[str, WindowName, Optional[_date]]


class LAeqCache:
    """
    Caller-owned LRU cache of results keyed by (cell_id, window, day).

    Nothing in the aggregator reads or writes it implicitly; the caller
    decides when a cached value is still valid. No-data outcomes are not
    stored. Keys for L1h depend on "now", so callers usually skip caching it.
    """

    def __init__(self, max_entries: int = 256):
        exceptions.require(
            max_entries > 0, "max_entries must be positive.", exceptions.ConfigError
        )
        self.max_entries = max_entries
        self._data: "OrderedDict[CacheKey, LAeqResult]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._data

    def get(self, key: CacheKey) -> Optional[LAeqResult]:
        if key not in self._data:
            return None
        self._data.move_to_end(key)
        return self._data[key]

    def put(self, key: CacheKey, result: LAeqResult) -> None:
        self._data[key] = result
        self._data.move_to_end(key)
        while len(self._data) > self.max_entries:
            self._data.popitem(last=False)

    def get_or_compute(
        self, key: CacheKey, fn: Callable[[], LAeqResult]
    ) -> LAeqResult:
        """Return the cached result or compute, store and return it.

        NoDataError from ``fn`` propagates and nothing is stored.
        """
        hit = self.get(key)
        if hit is not None:
            return hit
        result = fn()
        self.put(key, result)
        return result

    def clear(self) -> None:
        self._data.clear()
