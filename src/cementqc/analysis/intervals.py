# src/cementqc/analysis/intervals.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from cementqc.config.schema import IntervalConfig

from .bond import BAD, MEDIUM

FT_TO_M = 0.3048
REPORTED_CATEGORIES = (BAD, MEDIUM)


@dataclass(frozen=True)
class QualityInterval:
    category: str
    top: float
    base: float

    @property
    def length(self) -> float:
        return self.base - self.top


def segment_categories(depth: np.ndarray, categories: Sequence[Optional[str]]) -> List[QualityInterval]:
    """
    Collapse consecutive equal categories into intervals (top = first depth of the
    run, base = last depth). Uncategorized samples form their own runs (category "").
    """
    depth = np.asarray(depth, dtype="float64").reshape(-1)
    if depth.size != len(categories):
        raise ValueError(f"depth/categories length mismatch: {depth.size} vs {len(categories)}")
    if depth.size == 0:
        return []

    out: List[QualityInterval] = []
    cur = categories[0]
    start = 0
    for i in range(1, depth.size):
        if categories[i] != cur:
            out.append(QualityInterval(category=cur or "", top=float(depth[start]), base=float(depth[i - 1])))
            cur = categories[i]
            start = i
    out.append(QualityInterval(category=cur or "", top=float(depth[start]), base=float(depth[-1])))
    return out


def find_quality_intervals(
    depth: np.ndarray,
    categories: Sequence[Optional[str]],
    *,
    cfg: IntervalConfig,
) -> List[QualityInterval]:
    """
    Critical (Malo/Medio) intervals at least cfg.min_length_ft long.
    Bueno intervals are never reported.
    """
    min_len_m = float(cfg.min_length_ft) * FT_TO_M
    return [
        iv
        for iv in segment_categories(depth, categories)
        if iv.length >= min_len_m and iv.category in REPORTED_CATEGORIES
    ]
