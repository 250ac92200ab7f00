from __future__ import annotations
import logging
from typing import Iterable

import numpy as np

from . import exceptions

log = logging.getLogger(__name__)


def laeq_db(levels: Iterable[float] | np.ndarray) -> float:
    """
    Energy-equivalent continuous level of a set of dB samples:

        LAeq = 10 * log10( (1/N) * sum(10 ** (L_i / 10)) )

    Averaging happens in the power domain; the arithmetic mean of dB values
    is a different quantity. The maximum level is factored out before
    exponentiating so very large levels cannot overflow. Non-finite levels
    are rejected before aggregation; if nothing finite remains this raises
    NoDataError rather than returning 0 or NaN. Result is unrounded.
    """
    arr = np.asarray(list(levels) if not isinstance(levels, np.ndarray) else levels, dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        raise exceptions.NoDataError("LAeq needs at least one finite level.")

    peak = float(arr.max())
    energy = np.mean(np.power(10.0, (arr - peak) / 10.0))
    out = peak + 10.0 * float(np.log10(energy))
    log.debug("LAeq over %d samples: %.4f dB", arr.size, out)
    return out


def round_db(value: float, decimals: int = 1) -> float:
    """Display rounding; apply only to final presented values."""
    return float(round(float(value), decimals))
