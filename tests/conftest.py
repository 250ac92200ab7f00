import numpy as np
import pandas as pd
import pytest

from laeqlogic import ingest

TZ = "Asia/Bangkok"
DAY = "2025-01-01"


@pytest.fixture
def minute_rng():
    return pd.date_range(DAY, periods=24 * 60, freq="1min", tz=TZ)


def _level_for_hour(hour: int) -> float:
    if 6 <= hour < 18:
        return 70.0
    if 18 <= hour < 22:
        return 65.0
    return 50.0


@pytest.fixture
def day_frame(minute_rng):
    # One day at 1-minute cadence: 70 dB daytime, 65 dB evening, 50 dB night
    df = pd.DataFrame(
        {
            "time": minute_rng,
            "cell_id": "hex-1",
            "level_db": [_level_for_hour(h) for h in minute_rng.hour],
        }
    ).set_index("time")
    return ingest.from_dataframe(df, tz=TZ)


@pytest.fixture
def early_morning_frame():
    # Only 00:00–05:00 covered
    idx = pd.date_range(DAY, periods=5 * 60, freq="1min", tz=TZ)
    df = pd.DataFrame({"time": idx, "level_db": 55.0}).set_index("time")
    return ingest.from_dataframe(df, tz=TZ, cell_id="hex-2")


@pytest.fixture
def random_levels():
    rng = np.random.default_rng(42)
    return rng.uniform(35.0, 95.0, size=500)
