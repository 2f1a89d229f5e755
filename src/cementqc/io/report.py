# src/cementqc/io/report.py
from __future__ import annotations

import json
import math
import os
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from cementqc.analysis.pipeline import AnalysisResult
from cementqc.config.defaults import as_plain_dict
from cementqc.config.schema import AnalysisConfig

INTERVAL_COLUMNS = ["Calidad", "Tope (m)", "Base (m)", "Longitud (m)"]
LAYER_COLUMNS = ["Pozo", "Capa", "Tope (m)", "Base (m)", "Longitud (m)", "Adherencia (%)", "Adherencia Sello (%)"]


def format_score_band(score: Optional[float]) -> str:
    """Report colour band for a 0..100 cement score."""
    if score is None or not math.isfinite(score):
        return "none"
    if score < 75:
        return "red"
    if score < 85:
        return "yellow"
    if score < 95:
        return "lightgreen"
    return "green"


def intervals_frame(result: AnalysisResult) -> pd.DataFrame:
    rows = [[iv.category, iv.top, iv.base, iv.length] for iv in result.intervals]
    return pd.DataFrame(rows, columns=INTERVAL_COLUMNS)


def layers_frame(result: AnalysisResult) -> pd.DataFrame:
    rows = [
        [it.well, it.layer, it.top, it.base, it.length, it.adhesion_pct, it.seal_adhesion_pct]
        for it in result.layers
    ]
    return pd.DataFrame(rows, columns=LAYER_COLUMNS)


def cemented_frame(result: AnalysisResult) -> pd.DataFrame:
    return pd.DataFrame(list(result.cemented_records))


def result_tables(result: AnalysisResult) -> Dict[str, pd.DataFrame]:
    return {
        "intervals": intervals_frame(result),
        "layers": layers_frame(result),
        "cemented": cemented_frame(result),
    }


def _json_safe(x: Any) -> Any:
    # NaN/inf are not valid JSON; emit null
    if isinstance(x, float) and not math.isfinite(x):
        return None
    if isinstance(x, dict):
        return {k: _json_safe(v) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return [_json_safe(v) for v in x]
    return x


def _write_json_atomic(path: Path, obj: Dict[str, Any]) -> None:
    """tmp + replace so readers never see partial JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(_json_safe(obj), indent=2, sort_keys=True), encoding="utf-8")
    os.replace(tmp, path)


def write_analysis(
    out_dir: Path,
    result: AnalysisResult,
    *,
    cfg: Optional[AnalysisConfig] = None,
    source: str = "",
) -> Dict[str, Path]:
    """
    Write analysis outputs:
      kpis.json, intervals.csv, layers.csv, cemented.csv, manifest.json
    Returns name -> path.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths: Dict[str, Path] = {}

    kpis = result.kpis.to_dict()
    kpis["score_band"] = format_score_band(result.kpis.cement_score)
    paths["kpis"] = out_dir / "kpis.json"
    _write_json_atomic(paths["kpis"], kpis)

    for name, df in result_tables(result).items():
        p = out_dir / f"{name}.csv"
        df.to_csv(p, index=False)
        paths[name] = p

    manifest = {
        "source": source,
        "well_name": result.well_name,
        "step": result.step,
        "amplitude_curve": result.amplitude_curve,
        "depth_curve": result.depth_curve,
        "toc_method": result.toc_method,
        "n_cemented": len(result.cemented_records),
        "n_log": len(result.log_records),
        "n_intervals": len(result.intervals),
        "n_layers": len(result.layers),
        "config": as_plain_dict(cfg or AnalysisConfig()),
    }
    paths["manifest"] = out_dir / "manifest.json"
    _write_json_atomic(paths["manifest"], manifest)
    return paths
