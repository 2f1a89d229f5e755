# src/cementqc/analysis/bond.py
from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from cementqc.config.schema import BondConfig

GOOD = "Bueno"
MEDIUM = "Medio"
BAD = "Malo"
CATEGORIES = (GOOD, MEDIUM, BAD)


def classify_bond(amplitude: np.ndarray, *, cfg: BondConfig) -> Tuple[Optional[str], ...]:
    """
    Per-sample bond quality from amplitude (mV):
      amp >= bad_min_mv                 -> Malo
      good_max_mv < amp < bad_min_mv    -> Medio
      otherwise (incl. == good_max_mv)  -> Bueno
    NaN amplitude -> None (no category).
    """
    amp = np.asarray(amplitude, dtype="float64").reshape(-1)
    lo = float(cfg.good_max_mv)
    hi = float(cfg.bad_min_mv)

    with np.errstate(invalid="ignore"):
        cats = np.select([amp >= hi, (amp > lo) & (amp < hi)], [BAD, MEDIUM], default=GOOD)
    valid = ~np.isnan(amp)
    return tuple(str(c) if ok else None for c, ok in zip(cats, valid))


def category_counts(categories: Sequence[Optional[str]]) -> Dict[str, int]:
    counts = {c: 0 for c in CATEGORIES}
    for c in categories:
        if c in counts:
            counts[c] += 1
    return counts


def category_meters(categories: Sequence[Optional[str]], step: float) -> Dict[str, float]:
    """Sample count per category times the sample step."""
    return {c: n * float(step) for c, n in category_counts(categories).items()}
