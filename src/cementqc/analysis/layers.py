# src/cementqc/analysis/layers.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from cementqc.config.schema import LayerConfig
from cementqc.io.layers import LayerBoundary

from .bond import BAD, MEDIUM


@dataclass(frozen=True)
class LayerAnalysisItem:
    well: str
    layer: str
    top: float
    base: float
    length: float
    adhesion_pct: float
    seal_adhesion_pct: float


@dataclass(frozen=True)
class LayerSummary:
    items: Tuple[LayerAnalysisItem, ...]
    apnz_pct: Optional[float]
    asello_pct: Optional[float]


def interval_adhesion(
    depth: np.ndarray,
    categories: Sequence[Optional[str]],
    mask: np.ndarray,
    step: float,
) -> Tuple[float, float]:
    """
    Adhesion fraction and window length over the masked (depth-sorted) samples.

      length = (last depth - first depth) + step
      A      = clip(1 - (n_malo + n_medio) * step / length, 0, 1)

    Empty window or non-positive length -> (NaN, 0.0).
    """
    idx = np.flatnonzero(np.asarray(mask, dtype=bool))
    if idx.size == 0:
        return float("nan"), 0.0

    step = float(step)
    length = float(depth[idx[-1]] - depth[idx[0]]) + step
    if not (length > 0.0):
        return float("nan"), 0.0

    n_bad = sum(1 for i in idx if categories[i] in (BAD, MEDIUM))
    a = 1.0 - (n_bad * step) / length
    return float(np.clip(a, 0.0, 1.0)), length


def _window(depth: np.ndarray, top: float, base: float) -> np.ndarray:
    return (depth >= top) & (depth <= base)


def _aggregate_pct(bad_m: float, length_m: float) -> Optional[float]:
    if not (length_m > 0.0):
        return None
    return float(np.clip((1.0 - bad_m / length_m) * 100.0, 0.0, 100.0))


def analyze_layers(
    *,
    well: str,
    depth: np.ndarray,
    categories: Sequence[Optional[str]],
    layers: Sequence[LayerBoundary],
    step: float,
    cfg: LayerConfig,
) -> LayerSummary:
    """
    Per-layer adhesion and seal adhesion over the cemented zone.

    Seal window = [top - seal_margin_m, base + seal_margin_m] clamped to the
    cemented depth extent. Layers with base <= top are empty windows.

    Apnz / Asello: 1 - sum(bad meters) / sum(window length) over windows with a
    defined adhesion, in percent; None when nothing contributes.
    """
    depth = np.asarray(depth, dtype="float64").reshape(-1)
    if not layers or depth.size == 0:
        return LayerSummary(items=(), apnz_pct=None, asello_pct=None)

    zmin = float(depth[0])
    zmax = float(depth[-1])
    margin = float(cfg.seal_margin_m)
    empty = np.zeros(depth.shape, dtype=bool)

    bad_layers = len_layers = 0.0
    bad_seals = len_seals = 0.0
    items: List[LayerAnalysisItem] = []

    for layer in layers:
        top, base = float(layer.top), float(layer.base)
        if layer.is_degenerate:
            layer_mask = seal_mask = empty
        else:
            layer_mask = _window(depth, top, base)
            seal_mask = _window(depth, max(top - margin, zmin), min(base + margin, zmax))

        a_layer, l_layer = interval_adhesion(depth, categories, layer_mask, step)
        if np.isfinite(a_layer) and l_layer > 0:
            bad_layers += (1.0 - a_layer) * l_layer
            len_layers += l_layer

        a_seal, l_seal = interval_adhesion(depth, categories, seal_mask, step)
        if np.isfinite(a_seal) and l_seal > 0:
            bad_seals += (1.0 - a_seal) * l_seal
            len_seals += l_seal

        items.append(
            LayerAnalysisItem(
                well=well,
                layer=layer.label,
                top=top,
                base=base,
                length=l_layer,
                adhesion_pct=a_layer * 100.0,
                seal_adhesion_pct=a_seal * 100.0,
            )
        )

    return LayerSummary(
        items=tuple(items),
        apnz_pct=_aggregate_pct(bad_layers, len_layers),
        asello_pct=_aggregate_pct(bad_seals, len_seals),
    )
