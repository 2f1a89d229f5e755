from __future__ import annotations

import pytest

from cementqc.analysis.bond import BAD, GOOD, MEDIUM
from cementqc.analysis.kpis import annulus_score, cement_score, compute_kpis, toc_score


@pytest.mark.parametrize(
    "diff, expected",
    [
        (0.0, 1.0),
        (40.0, 1.0),
        (40.1, 0.9),
        (500.0, 0.9),
        (-0.1, 0.8),
        (-40.0, 0.8),
        (-40.1, 0.0),
    ],
)
def test_toc_score_bands(diff: float, expected: float) -> None:
    assert toc_score(diff) == expected


def test_annulus_score_is_clipped() -> None:
    assert annulus_score(100.0, 50.0) == 0.0
    assert annulus_score(0.0, 50.0) == 1.0
    assert annulus_score(5.0, 50.0) == pytest.approx(0.9)


def test_cement_score_weights() -> None:
    assert cement_score(1.0, 1.0) == pytest.approx(100.0)
    assert cement_score(0.0, 0.0) == 0.0
    assert cement_score(0.8, 0.9) == pytest.approx(87.0)


def test_score_composition_scenario() -> None:
    cats = [BAD] * 3 + [MEDIUM] * 2 + [GOOD] * 45
    k = compute_kpis(toc_found=1000.0, categories=cats, step=1.0, requested_toc=990.0, annulus_height=50.0)

    assert k.toc_difference == pytest.approx(10.0)
    assert k.t_score == 0.8
    assert k.a_score == pytest.approx(0.9)
    assert k.cement_score == pytest.approx(87.0)
    assert (k.toc_requested, k.annulus_height) == (990.0, 50.0)


def test_meters_and_good_bond_pct() -> None:
    k = compute_kpis(toc_found=10.0, categories=[GOOD, GOOD, GOOD, MEDIUM, BAD, None], step=0.5)
    assert (k.good_meters, k.medium_meters, k.bad_meters, k.total_meters) == (1.5, 0.5, 0.5, 2.5)
    assert k.good_bond_pct == pytest.approx(60.0)


def test_optional_kpis_absent_without_requested_values() -> None:
    for req, ann in [(None, 50.0), (990.0, None), (0.0, 50.0), (990.0, -1.0), (float("nan"), 50.0)]:
        k = compute_kpis(toc_found=1000.0, categories=[GOOD], step=1.0, requested_toc=req, annulus_height=ann)
        assert k.toc_difference is None
        assert k.t_score is None
        assert k.a_score is None
        assert k.cement_score is None


def test_requested_values_are_echoed_without_scores() -> None:
    k = compute_kpis(toc_found=1000.0, categories=[GOOD], step=1.0, requested_toc=0.0, annulus_height=0.0)
    assert (k.toc_requested, k.annulus_height) == (0.0, 0.0)
    assert k.cement_score is None

    k = compute_kpis(toc_found=1000.0, categories=[GOOD], step=1.0, requested_toc=990.0)
    assert k.toc_requested == 990.0
    assert k.annulus_height is None
    assert k.t_score is None


def test_all_bad_zone_over_annulus_height_clips_a_score_to_zero() -> None:
    k = compute_kpis(toc_found=100.0, categories=[BAD] * 100, step=1.0, requested_toc=100.0, annulus_height=50.0)
    assert k.a_score == 0.0
    assert k.cement_score == pytest.approx(30.0)


def test_empty_zone_and_flat_map() -> None:
    k = compute_kpis(toc_found=5.0, categories=[], step=1.0, apnz_pct=12.5)
    assert k.total_meters == 0.0
    assert k.good_bond_pct == 0.0
    d = k.to_dict()
    assert d["toc_found"] == 5.0
    assert d["apnz_pct"] == 12.5
    assert d["asello_pct"] is None
    assert set(d) >= {"cement_score", "t_score", "a_score", "toc_difference"}
