# src/cementqc/io/layers.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Union

import pandas as pd

from cementqc.errors import LayerTableError

logger = logging.getLogger(__name__)

LAYER_SHEET = "Capas"
_EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


@dataclass(frozen=True)
class LayerBoundary:
    label: str
    top: float
    base: float

    @property
    def is_degenerate(self) -> bool:
        # NaN bounds also compare False here
        return not (self.base > self.top)


def layers_from_rows(rows: Iterable[Sequence[object]]) -> List[LayerBoundary]:
    """
    Build boundaries from (label, top, base) triples without any filtering.
    Degenerate rows (base <= top) are kept; the analyzer treats them as empty windows.
    """
    out: List[LayerBoundary] = []
    for r in rows:
        label, top, base = r[0], r[1], r[2]
        out.append(LayerBoundary(label=str(label), top=float(top), base=float(base)))  # type: ignore[arg-type]
    return out


def _read_table(p: Path) -> pd.DataFrame:
    if p.suffix.lower() in _EXCEL_SUFFIXES:
        sheets = pd.read_excel(p, sheet_name=None)
        if not sheets:
            raise LayerTableError(f"No sheets found in {p}")
        if LAYER_SHEET in sheets:
            return sheets[LAYER_SHEET]
        first = next(iter(sheets))
        logger.info("Sheet %r not found in %s; using %r", LAYER_SHEET, p.name, first)
        return sheets[first]

    # sep=None lets the python engine sniff comma/semicolon/tab
    return pd.read_csv(p, sep=None, engine="python")


def load_layers(path: Union[str, Path]) -> List[LayerBoundary]:
    """
    Load layer boundaries from a CSV or Excel table.

    Expected layout (header row required, names free):
      column 0: layer label (coerced to str)
      column 1: top depth (numeric; coerced; non-numeric dropped)
      column 2: base depth (numeric; coerced; non-numeric dropped)

    Notes:
      - Excel files use the 'Capas' sheet when present, else the first sheet.
      - Rows with base <= top are dropped here, before they reach the analysis.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)

    try:
        df = _read_table(p)
    except LayerTableError:
        raise
    except Exception as e:
        raise LayerTableError(f"Failed to read layer table {p}: {type(e).__name__}: {e}") from e

    if df.shape[1] < 3:
        raise LayerTableError(f"Layer table needs 3 columns (label, top, base); got {df.shape[1]} in {p}")

    out_df = df.iloc[:, :3].copy()
    out_df.columns = ["label", "top", "base"]

    out_df["label"] = out_df["label"].astype(str).str.strip()
    out_df["top"] = pd.to_numeric(out_df["top"], errors="coerce")
    out_df["base"] = pd.to_numeric(out_df["base"], errors="coerce")

    n_in = len(out_df)
    out_df = out_df[out_df["top"].notna() & out_df["base"].notna()]
    out_df = out_df[out_df["base"] > out_df["top"]]
    if len(out_df) < n_in:
        logger.debug("Dropped %d unusable layer rows from %s", n_in - len(out_df), p.name)

    return [
        LayerBoundary(label=str(r.label), top=float(r.top), base=float(r.base))
        for r in out_df.itertuples(index=False)
    ]
