# src/cementqc/analysis/toc.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from cementqc.config.schema import TocConfig


@dataclass(frozen=True)
class TocPick:
    depth: float
    method: str  # "threshold" | "gradient" | "default"


def true_runs(mask: np.ndarray) -> List[Tuple[int, int]]:
    """
    Maximal runs of True as inclusive (start, end) index pairs, in index order.
    """
    m = np.asarray(mask, dtype=bool).reshape(-1)
    if not m.any():
        return []
    padded = np.concatenate(([False], m, [False])).astype("int8")
    d = np.diff(padded)
    starts = np.flatnonzero(d == 1)
    ends = np.flatnonzero(d == -1) - 1
    return [(int(s), int(e)) for s, e in zip(starts, ends)]


def detect_toc(
    depth: np.ndarray,
    amplitude: np.ndarray,
    *,
    cfg: TocConfig,
    default_depth: Optional[float] = None,
) -> TocPick:
    """
    Top of cement from a depth-sorted amplitude curve.

    1) Threshold runs: among samples with a valid amplitude, find maximal runs of
       amplitude < cfg.amplitude_threshold_mv whose depth span (end - start) is at
       least cfg.min_run_m. TOC = depth at the start of the first such run.
    2) Gradient fallback: TOC = depth of the second sample of the most negative
       consecutive amplitude difference (first occurrence on ties).
    3) No valid samples (or a single one): default_depth, else the shallowest depth.
    """
    depth = np.asarray(depth, dtype="float64").reshape(-1)
    amp = np.asarray(amplitude, dtype="float64").reshape(-1)
    if depth.size != amp.size:
        raise ValueError(f"depth/amplitude length mismatch: {depth.size} vs {amp.size}")

    if default_depth is None:
        if depth.size == 0:
            raise ValueError("Cannot pick a default TOC from an empty depth array.")
        default_depth = float(depth[0])

    valid = ~np.isnan(amp)
    d = depth[valid]
    a = amp[valid]
    if d.size == 0:
        return TocPick(depth=float(default_depth), method="default")

    thr = float(cfg.amplitude_threshold_mv)
    min_run = float(cfg.min_run_m)
    for s, e in true_runs(a < thr):
        if (d[e] - d[s]) >= min_run:
            return TocPick(depth=float(d[s]), method="threshold")

    if d.size < 2:
        return TocPick(depth=float(default_depth), method="default")

    i = int(np.argmin(np.diff(a))) + 1
    return TocPick(depth=float(d[i]), method="gradient")
