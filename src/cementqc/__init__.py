# src/cementqc/__init__.py
"""
cementqc

Cement bond log QC: LAS parsing, top-of-cement detection, bond classification,
critical intervals, layer/seal adhesion and cement score KPIs.
"""

from __future__ import annotations

from cementqc.analysis import AnalysisResult, analyze
from cementqc.config import AnalysisConfig, default_config, load_config
from cementqc.errors import CementQCError, FormatError, NoCompatibleCurveError, NoValidDataError
from cementqc.io import LayerBoundary, LogDataset, load_layers, parse_las_text, read_las

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "analyze",
    "AnalysisConfig",
    "default_config",
    "load_config",
    "CementQCError",
    "FormatError",
    "NoCompatibleCurveError",
    "NoValidDataError",
    "LayerBoundary",
    "LogDataset",
    "load_layers",
    "parse_las_text",
    "read_las",
]
