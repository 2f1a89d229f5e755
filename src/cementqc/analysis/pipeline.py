# src/cementqc/analysis/pipeline.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from cementqc.config.schema import AnalysisConfig
from cementqc.errors import NoCompatibleCurveError, NoValidDataError
from cementqc.io.las import LogDataset
from cementqc.io.layers import LayerBoundary

from .bond import classify_bond
from .interpolate import interpolate_gaps
from .intervals import QualityInterval, find_quality_intervals
from .kpis import CementKpis, compute_kpis
from .layers import LayerAnalysisItem, analyze_layers
from .toc import detect_toc

logger = logging.getLogger(__name__)

CATEGORY_KEY = "Category"


@dataclass(frozen=True)
class AnalysisResult:
    well_name: str
    step: float
    # Records at/below TOC with interpolated values and a "Category" key
    cemented_records: Tuple[Dict[str, object], ...]
    # Whole (filtered, depth-sorted) log; categorized where cemented. Plotting only.
    log_records: Tuple[Dict[str, object], ...]
    amplitude_curve: str
    depth_curve: str
    kpis: CementKpis
    intervals: Tuple[QualityInterval, ...]
    layers: Tuple[LayerAnalysisItem, ...]
    toc_method: str = "default"


def select_amplitude_curve(curves: Sequence[str], candidates: Sequence[str]) -> str:
    for name in candidates:
        if name in curves:
            return name
    raise NoCompatibleCurveError(
        f"No compatible CBL curve found in the LAS file. Looked for: {', '.join(candidates)}"
    )


def _is_valid(v: Optional[float]) -> bool:
    return v is not None and not math.isnan(v)


def _usable_records(ds: LogDataset, amp_curve: str) -> List[Dict[str, float]]:
    """
    Keep depth > 0 and (amplitude absent or amplitude >= 0), sorted by depth (stable).
    NaN amplitudes fail the >= 0 test and are dropped here.
    """
    dc = ds.depth_curve
    kept = [
        r
        for r in ds.records
        if r.get(dc, np.nan) > 0 and (amp_curve not in r or r[amp_curve] >= 0)
    ]
    return sorted(kept, key=lambda r: r[dc])


def analyze(
    dataset: LogDataset,
    layers: Optional[Sequence[LayerBoundary]] = None,
    requested_toc: Optional[float] = None,
    annulus_height: Optional[float] = None,
    *,
    cfg: Optional[AnalysisConfig] = None,
) -> AnalysisResult:
    """
    Run the cement bond analysis on a parsed log.

    Steps:
      1) pick the amplitude curve (first configured candidate present)
      2) drop records with depth <= 0 or negative/NaN amplitude; sort by depth
      3) detect TOC; cemented zone = depth >= TOC
      4) gap-fill amplitude (+ auxiliary curves) in the cemented zone, classify
      5) critical intervals, layer/seal adhesion, KPIs

    Input records are never modified; all output records are new dicts.
    """
    cfg = cfg or AnalysisConfig()
    layers = list(layers or [])

    dc = dataset.depth_curve
    amp_curve = select_amplitude_curve(dataset.curves, cfg.curves.amplitude_candidates)

    records = _usable_records(dataset, amp_curve)
    if not records:
        raise NoValidDataError("No valid data found (Depth > 0 and Amplitude >= 0).")
    logger.debug("Usable records: %d of %d", len(records), dataset.n_records)

    depth = np.asarray([r[dc] for r in records], dtype="float64")
    amp = np.asarray([r.get(amp_curve, np.nan) for r in records], dtype="float64")

    pick = detect_toc(depth, amp, cfg=cfg.toc, default_depth=float(depth[0]))
    logger.info("TOC %.2f via %s (curve %s)", pick.depth, pick.method, amp_curve)

    cem_idx = np.flatnonzero(depth >= pick.depth)
    cem_depth = depth[cem_idx]

    # Gap-fill on the cemented slice only
    keys = [amp_curve] + [k for k in cfg.curves.interpolate_extra if k != amp_curve and dataset.has_curve(k)]
    filled: Dict[str, np.ndarray] = {}
    for key in keys:
        col = np.asarray([records[i].get(key, np.nan) for i in cem_idx], dtype="float64")
        filled[key] = interpolate_gaps(col)

    categories = classify_bond(filled[amp_curve], cfg=cfg.bond)

    cemented: List[Dict[str, object]] = []
    for k, i in enumerate(cem_idx):
        rec: Dict[str, object] = dict(records[i])
        for key, col in filled.items():
            if not _is_valid(rec.get(key)) and not np.isnan(col[k]):
                rec[key] = float(col[k])
        if categories[k] is not None:
            rec[CATEGORY_KEY] = categories[k]
        cemented.append(rec)

    by_index = {int(i): rec for i, rec in zip(cem_idx, cemented)}
    log_records = tuple(dict(by_index.get(i, records[i])) for i in range(len(records)))

    step = float(dataset.step)
    intervals = find_quality_intervals(cem_depth, categories, cfg=cfg.intervals)
    summary = analyze_layers(
        well=dataset.well_name,
        depth=cem_depth,
        categories=categories,
        layers=layers,
        step=step,
        cfg=cfg.layers,
    )
    kpis = compute_kpis(
        toc_found=pick.depth,
        categories=categories,
        step=step,
        requested_toc=requested_toc,
        annulus_height=annulus_height,
        apnz_pct=summary.apnz_pct,
        asello_pct=summary.asello_pct,
    )

    return AnalysisResult(
        well_name=dataset.well_name,
        step=step,
        cemented_records=tuple(cemented),
        log_records=log_records,
        amplitude_curve=amp_curve,
        depth_curve=dc,
        kpis=kpis,
        intervals=tuple(intervals),
        layers=summary.items,
        toc_method=pick.method,
    )
