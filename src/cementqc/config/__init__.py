from __future__ import annotations

from .defaults import config_from_dict, default_config, load_config
from .schema import AnalysisConfig, BondConfig, CurveConfig, IntervalConfig, LayerConfig, TocConfig

__all__ = [
    "AnalysisConfig",
    "BondConfig",
    "CurveConfig",
    "IntervalConfig",
    "LayerConfig",
    "TocConfig",
    "config_from_dict",
    "default_config",
    "load_config",
]
