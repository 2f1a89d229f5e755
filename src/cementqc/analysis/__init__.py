# src/cementqc/analysis/__init__.py
from __future__ import annotations

from .bond import BAD, GOOD, MEDIUM, classify_bond
from .interpolate import interpolate_gaps
from .intervals import QualityInterval, find_quality_intervals
from .kpis import CementKpis, compute_kpis
from .layers import LayerAnalysisItem, LayerSummary, analyze_layers, interval_adhesion
from .pipeline import AnalysisResult, analyze
from .toc import TocPick, detect_toc

__all__ = [
    "BAD",
    "GOOD",
    "MEDIUM",
    "classify_bond",
    "interpolate_gaps",
    "QualityInterval",
    "find_quality_intervals",
    "CementKpis",
    "compute_kpis",
    "LayerAnalysisItem",
    "LayerSummary",
    "analyze_layers",
    "interval_adhesion",
    "AnalysisResult",
    "analyze",
    "TocPick",
    "detect_toc",
]
