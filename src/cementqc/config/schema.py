from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CurveConfig:
    # Ordered; first mnemonic present in the log wins.
    amplitude_candidates: Tuple[str, ...] = ("AMP3FT", "CBLF", "CBL")
    # Auxiliary curves gap-filled alongside the amplitude (skipped when absent).
    interpolate_extra: Tuple[str, ...] = ("CLDC", "NEU")


@dataclass(frozen=True)
class BondConfig:
    good_max_mv: float = 10.0
    bad_min_mv: float = 20.0


@dataclass(frozen=True)
class TocConfig:
    amplitude_threshold_mv: float = 10.0
    min_run_m: float = 10.0


@dataclass(frozen=True)
class IntervalConfig:
    min_length_ft: float = 1.5


@dataclass(frozen=True)
class LayerConfig:
    seal_margin_m: float = 3.0


@dataclass(frozen=True)
class AnalysisConfig:
    curves: CurveConfig = CurveConfig()
    bond: BondConfig = BondConfig()
    toc: TocConfig = TocConfig()
    intervals: IntervalConfig = IntervalConfig()
    layers: LayerConfig = LayerConfig()
