# src/cementqc/io/las.py
from __future__ import annotations

import enum
import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from cementqc.errors import FormatError

logger = logging.getLogger(__name__)

DEFAULT_WELL_NAME = "Pozo Desconocido"
DEFAULT_STEP_M = 0.1524  # 6 in
FALLBACK_DEPTH_CURVE = "DEPT"

_SECTION_RE = re.compile(r"^~\s*([A-Z])", re.IGNORECASE)
_WELL_RE = re.compile(r"^WELL\s*\.\s*(.*?)\s*:", re.IGNORECASE)
# "STEP <anything> : <number>" (number after the last colon)
_STEP_AFTER_COLON_RE = re.compile(r"^STEP\.?\s+.*:\s*(-?\d*\.?\d*)", re.IGNORECASE)
_WS_RE = re.compile(r"\s+")


class Section(enum.Enum):
    NONE = "none"
    WELL = "W"
    CURVE = "C"
    ASCII = "A"


_SECTION_BY_LETTER = {s.value: s for s in (Section.WELL, Section.CURVE, Section.ASCII)}


@dataclass(frozen=True)
class LogDataset:
    """
    Parsed log: well identity, sample step, curve mnemonics and depth-indexed records.

    records:
      - one mapping per accepted ~A row, keyed by curve mnemonic
      - values are floats; any curve except the depth curve may be NaN or absent
      - kept in file order (not sorted)
    """
    well_name: str
    step: float
    curves: Tuple[str, ...]
    records: Tuple[Dict[str, float], ...]
    depth_curve: str = field(default=FALLBACK_DEPTH_CURVE)

    @property
    def n_records(self) -> int:
        return len(self.records)

    def has_curve(self, name: str) -> bool:
        return name in self.curves

    def column(self, name: str) -> np.ndarray:
        """float64 values of one curve in record order; NaN where absent."""
        return np.asarray([r.get(name, np.nan) for r in self.records], dtype="float64")

    def depths(self) -> np.ndarray:
        return self.column(self.depth_curve)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([dict(r) for r in self.records], columns=list(self.curves))

    @classmethod
    def from_columns(
        cls,
        columns: Mapping[str, Sequence[float]],
        *,
        well_name: str = DEFAULT_WELL_NAME,
        step: float = DEFAULT_STEP_M,
    ) -> "LogDataset":
        """
        Build a dataset from column arrays, e.g. {"DEPT": [...], "CBL": [...]}.
        The first column is the depth curve; columns must share a length.
        """
        names = tuple(columns.keys())
        if not names:
            raise ValueError("At least one column (depth) is required.")
        sizes = {len(v) for v in columns.values()}
        if len(sizes) > 1:
            raise ValueError(f"Columns have different lengths: {sorted(sizes)}")
        n = sizes.pop()
        records = tuple({c: float(columns[c][i]) for c in names} for i in range(n))
        return cls(well_name=well_name, step=abs(float(step)), curves=names, records=records, depth_curve=names[0])


def _to_float(tok: str) -> float:
    try:
        return float(tok)
    except ValueError:
        return float("nan")


class _LasState:
    """Mutable accumulator for a single parse pass."""

    def __init__(self) -> None:
        self.well_name = DEFAULT_WELL_NAME
        self.step: Optional[float] = None
        self.curves: List[str] = []
        self.records: List[Dict[str, float]] = []
        self.n_dropped_rows = 0


def _on_well_line(state: _LasState, line: str) -> None:
    m = _WELL_RE.match(line)
    if m and m.group(1).strip():
        state.well_name = m.group(1).strip()

    m = _STEP_AFTER_COLON_RE.match(line)
    raw = m.group(1) if m else ""
    if raw:
        v = _to_float(raw)
        if math.isfinite(v):
            state.step = v


def _on_curve_line(state: _LasState, line: str) -> None:
    head = line.split(".", 1)[0].strip()
    mnemonic = _WS_RE.split(head)[0] if head else ""
    if mnemonic:
        state.curves.append(mnemonic)


def _on_ascii_line(state: _LasState, line: str) -> None:
    tokens = [t for t in _WS_RE.split(line) if t]
    if not tokens or len(tokens) != len(state.curves):
        state.n_dropped_rows += 1
        return
    state.records.append({c: _to_float(t) for c, t in zip(state.curves, tokens)})


_HANDLERS: Dict[Section, Callable[[_LasState, str], None]] = {
    Section.WELL: _on_well_line,
    Section.CURVE: _on_curve_line,
    Section.ASCII: _on_ascii_line,
}


def _dedupe(seq: List[str]) -> Tuple[str, ...]:
    seen = set()
    return tuple(x for x in seq if not (x in seen or seen.add(x)))


def parse_las_text(text: str) -> LogDataset:
    """
    Parse LAS-style sectioned ASCII text.

    Sections:
      ~W  well info (WELL and STEP are consumed)
      ~C  curve definitions (mnemonic before the first '.')
      ~A  whitespace-delimited rows; a row is kept only if its token count
          equals the number of declared curves
    Any other section letter (~V, ~P, ~O, ...) is ignored. '#' and blank lines are skipped.

    Raises FormatError when no curves or no data rows were found.
    """
    state = _LasState()
    section = Section.NONE

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith("~"):
            m = _SECTION_RE.match(line)
            if m:
                section = _SECTION_BY_LETTER.get(m.group(1).upper(), Section.NONE)
            continue

        handler = _HANDLERS.get(section)
        if handler is not None:
            handler(state, line)

    if not state.curves or not state.records:
        raise FormatError(
            "Invalid LAS file format: could not find curve definitions in ~C section or data in ~A section."
        )

    depth_curve = state.curves[0] if state.curves else FALLBACK_DEPTH_CURVE

    step = state.step
    if step is None and len(state.records) > 1:
        d0 = state.records[0].get(depth_curve, np.nan)
        d1 = state.records[1].get(depth_curve, np.nan)
        diff = abs(d1 - d0)
        if math.isfinite(diff):
            step = diff
    if step is None:
        step = DEFAULT_STEP_M

    ds = LogDataset(
        well_name=state.well_name,
        step=abs(float(step)),
        curves=_dedupe(state.curves),
        records=tuple(state.records),
        depth_curve=depth_curve,
    )
    logger.debug(
        "Parsed LAS well=%r curves=%d records=%d dropped_rows=%d step=%.4f",
        ds.well_name,
        len(ds.curves),
        ds.n_records,
        state.n_dropped_rows,
        ds.step,
    )
    return ds


def read_las(path: Union[str, Path]) -> LogDataset:
    """Read a log file from disk and parse it with parse_las_text()."""
    p = Path(path)
    text = p.read_text(encoding="utf-8", errors="replace")
    return parse_las_text(text)

