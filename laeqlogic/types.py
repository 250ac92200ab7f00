from __future__ import annotations
from typing import TypedDict, Literal, List, Dict, Optional
from dataclasses import dataclass, field, replace
from datetime import datetime

import pandas as pd

WindowName = Literal["L1h", "L24h", "Lday", "Levening", "Lnight"]


# Canon DataFrame
class SampleFrame(pd.DataFrame):
    """
    Strongly-typed canonical sample dataframe (one SampleSeries).

    Expected:
      - DatetimeIndex named 'time', tz-aware, sorted ascending
      - Columns: ['cell_id', 'level_db']
    """

    @property
    def _constructor(self):
        return SampleFrame

    @property
    def cell_id(self) -> pd.Series:
        return self["cell_id"]

    @property
    def level_db(self) -> pd.Series:
        return self["level_db"]


@dataclass(frozen=True)
class Sample:
    timestamp_utc: datetime
    level_db: float


@dataclass(frozen=True)
class LAeqResult:
    """Energy-equivalent level plus plain statistics for one window.

    Values are kept at full precision; use ``rounded`` for display.
    """

    laeq_db: float
    count: int
    min_db: float
    max_db: float
    avg_db: float
    window: WindowName

    def rounded(self, decimals: int = 1) -> "LAeqResult":
        return replace(
            self,
            laeq_db=round(self.laeq_db, decimals),
            min_db=round(self.min_db, decimals),
            max_db=round(self.max_db, decimals),
            avg_db=round(self.avg_db, decimals),
        )

    def to_dict(self) -> Dict[str, float | int | str]:
        return {
            "laeq_db": self.laeq_db,
            "count": self.count,
            "min_db": self.min_db,
            "max_db": self.max_db,
            "avg_db": self.avg_db,
            "window": self.window,
        }


@dataclass
class ChartSeries:
    labels: list[str] = field(default_factory=list)
    values: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)


class TrendPoint(TypedDict):
    hour: int
    laeq: float
    count: int


class SummaryMeta(TypedDict):
    cells: List[str]
    start: str
    end: str
    samples: int
    tz: str
    day: Optional[str]


class SummaryPayload(TypedDict):
    meta: SummaryMeta
    windows: Dict[str, Optional[Dict[str, float | int | str]]]
    trend: List[TrendPoint]
    chart: Dict[str, list]
