# src/cementqc/analysis/kpis.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np

from .bond import BAD, GOOD, MEDIUM, category_meters

TOC_TOLERANCE_M = 40.0
TOC_WEIGHT = 30.0
ADHESION_WEIGHT = 70.0


@dataclass(frozen=True)
class CementKpis:
    toc_found: float
    total_meters: float
    good_meters: float
    medium_meters: float
    bad_meters: float
    good_bond_pct: float

    # Echoed whenever supplied
    toc_requested: Optional[float] = None
    annulus_height: Optional[float] = None

    # Only when both requested values are positive
    toc_difference: Optional[float] = None
    t_score: Optional[float] = None  # 0..1
    a_score: Optional[float] = None  # 0..1
    cement_score: Optional[float] = None  # 0..100

    # Only when layers were analyzed and at least one window had data
    apnz_pct: Optional[float] = None
    asello_pct: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def toc_score(requested_minus_found: float) -> float:
    """
    TOC placement score.
      [0, 40]    -> 1.0  (cement at or above the requested top, within tolerance)
      > 40       -> 0.9
      [-40, 0)   -> 0.8
      < -40      -> 0.0
    """
    d = float(requested_minus_found)
    if 0.0 <= d <= TOC_TOLERANCE_M:
        return 1.0
    if d > TOC_TOLERANCE_M:
        return 0.9
    if -TOC_TOLERANCE_M <= d < 0.0:
        return 0.8
    return 0.0


def annulus_score(bad_and_medium_m: float, annulus_height: float) -> float:
    a = 1.0 - float(bad_and_medium_m) / float(annulus_height)
    return float(np.clip(a, 0.0, 1.0))


def cement_score(t: float, a: float) -> float:
    return float(np.clip(TOC_WEIGHT * t + ADHESION_WEIGHT * a, 0.0, 100.0))


def _positive(x: Optional[float]) -> bool:
    return x is not None and bool(np.isfinite(x)) and float(x) > 0.0


def compute_kpis(
    *,
    toc_found: float,
    categories: Sequence[Optional[str]],
    step: float,
    requested_toc: Optional[float] = None,
    annulus_height: Optional[float] = None,
    apnz_pct: Optional[float] = None,
    asello_pct: Optional[float] = None,
) -> CementKpis:
    meters = category_meters(categories, step)
    good, medium, bad = meters[GOOD], meters[MEDIUM], meters[BAD]
    total = good + medium + bad

    # requested values are echoed as given; scores need both to be positive
    toc_req = float(requested_toc) if requested_toc is not None else None
    ann = float(annulus_height) if annulus_height is not None else None
    diff = t = a = score = None
    if toc_req is not None and ann is not None and _positive(toc_req) and _positive(ann):
        diff = float(toc_found) - toc_req
        t = toc_score(toc_req - float(toc_found))
        a = annulus_score(bad + medium, ann)
        score = cement_score(t, a)

    return CementKpis(
        toc_found=float(toc_found),
        total_meters=total,
        good_meters=good,
        medium_meters=medium,
        bad_meters=bad,
        good_bond_pct=(good / total) * 100.0 if total > 0 else 0.0,
        toc_requested=toc_req,
        annulus_height=ann,
        toc_difference=diff,
        t_score=t,
        a_score=a,
        cement_score=score,
        apnz_pct=apnz_pct,
        asello_pct=asello_pct,
    )
