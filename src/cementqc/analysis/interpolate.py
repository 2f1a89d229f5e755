# src/cementqc/analysis/interpolate.py
from __future__ import annotations

import numpy as np


def interpolate_gaps(values: np.ndarray) -> np.ndarray:
    """
    Fill interior NaN gaps by linear interpolation on sample index.

    Only gaps bracketed by two valid samples are filled; leading/trailing NaNs
    are left as-is (no extrapolation). Returns a new array.
    """
    out = np.array(values, dtype="float64", copy=True).reshape(-1)
    good = np.flatnonzero(~np.isnan(out))
    for lo, hi in zip(good[:-1], good[1:]):
        steps = int(hi - lo)
        if steps <= 1:
            continue
        start = out[lo]
        diff = out[hi] - start
        j = np.arange(1, steps, dtype="float64")
        out[lo + 1 : hi] = start + (diff * j / steps)
    return out
