from __future__ import annotations

import math

import numpy as np
import pytest

from cementqc.analysis.bond import BAD, GOOD, MEDIUM
from cementqc.analysis.layers import analyze_layers, interval_adhesion
from cementqc.config.schema import LayerConfig
from cementqc.io.layers import LayerBoundary


def _zone():
    # 100 .. 119 m at 1 m; Malo at 105 .. 109
    depth = np.arange(100.0, 120.0, 1.0)
    cats = [BAD if 105.0 <= d <= 109.0 else GOOD for d in depth]
    return depth, cats


def test_interval_adhesion_formula() -> None:
    depth = np.array([0.0, 1.0, 2.0, 3.0])
    a, length = interval_adhesion(depth, [BAD, GOOD, GOOD, MEDIUM], np.ones(4, dtype=bool), 1.0)
    assert length == 4.0
    assert a == pytest.approx(0.5)


def test_interval_adhesion_empty_window() -> None:
    a, length = interval_adhesion(np.array([1.0]), [GOOD], np.zeros(1, dtype=bool), 1.0)
    assert math.isnan(a)
    assert length == 0.0


def test_interval_adhesion_zero_step_single_sample() -> None:
    a, length = interval_adhesion(np.array([1.0]), [BAD], np.ones(1, dtype=bool), 0.0)
    assert math.isnan(a)
    assert length == 0.0


def test_layer_and_seal_adhesion() -> None:
    depth, cats = _zone()
    layers = [
        LayerBoundary("L1", 100.0, 109.0),
        LayerBoundary("L2", 200.0, 210.0),  # outside the cemented zone
        LayerBoundary("L3", 110.0, 110.0),  # degenerate
    ]
    s = analyze_layers(well="W", depth=depth, categories=cats, layers=layers, step=1.0, cfg=LayerConfig(seal_margin_m=3.0))

    l1, l2, l3 = s.items
    assert (l1.well, l1.layer, l1.top, l1.base) == ("W", "L1", 100.0, 109.0)
    assert l1.length == 10.0
    assert l1.adhesion_pct == pytest.approx(50.0)
    # seal: [max(97, 100), min(112, 119)] -> 13 samples, 5 Malo
    assert l1.seal_adhesion_pct == pytest.approx(100.0 * 8.0 / 13.0)

    for empty in (l2, l3):
        assert empty.length == 0.0
        assert math.isnan(empty.adhesion_pct)
        assert math.isnan(empty.seal_adhesion_pct)

    # empty windows contribute nothing to the aggregates
    assert s.apnz_pct == pytest.approx(50.0)
    assert s.asello_pct == pytest.approx(100.0 * 8.0 / 13.0)


def test_only_empty_layers_leave_aggregates_undefined() -> None:
    depth, cats = _zone()
    s = analyze_layers(
        well="W",
        depth=depth,
        categories=cats,
        layers=[LayerBoundary("deep", 500.0, 600.0)],
        step=1.0,
        cfg=LayerConfig(),
    )
    assert len(s.items) == 1
    assert s.apnz_pct is None
    assert s.asello_pct is None


def test_aggregates_are_length_weighted() -> None:
    depth, cats = _zone()
    layers = [LayerBoundary("bad", 105.0, 109.0), LayerBoundary("good", 110.0, 119.0)]
    s = analyze_layers(well="W", depth=depth, categories=cats, layers=layers, step=1.0, cfg=LayerConfig())
    assert s.items[0].adhesion_pct == pytest.approx(0.0)
    assert s.items[1].adhesion_pct == pytest.approx(100.0)
    # 5 bad meters over 5 + 10 meters
    assert s.apnz_pct == pytest.approx(100.0 * (1.0 - 5.0 / 15.0))


def test_no_layers_or_no_data() -> None:
    depth, cats = _zone()
    s = analyze_layers(well="W", depth=depth, categories=cats, layers=[], step=1.0, cfg=LayerConfig())
    assert s.items == () and s.apnz_pct is None and s.asello_pct is None

    s2 = analyze_layers(
        well="W", depth=np.array([]), categories=[], layers=[LayerBoundary("x", 1.0, 2.0)], step=1.0, cfg=LayerConfig()
    )
    assert s2.items == ()
