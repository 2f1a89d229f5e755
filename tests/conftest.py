from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from cementqc.io.las import LogDataset


def build_cbl_columns() -> dict:
    """
    60 samples, 100.0 .. 129.5 m at 0.5 m:
      i < 10      -> 60 mV (free pipe)
      i 35..38    -> 25 mV (Malo, 117.5 .. 119.0)
      i 44..45    -> 15 mV (Medio, 122.0 .. 122.5)
      otherwise   -> 5 mV
    NEU = i, with NaN at i = 20, 21.
    """
    n = 60
    depth = [100.0 + 0.5 * i for i in range(n)]
    amp = []
    for i in range(n):
        if i < 10:
            amp.append(60.0)
        elif 35 <= i <= 38:
            amp.append(25.0)
        elif 44 <= i <= 45:
            amp.append(15.0)
        else:
            amp.append(5.0)
    neu = [float(i) for i in range(n)]
    neu[20] = np.nan
    neu[21] = np.nan
    return {"DEPT": depth, "CBL": amp, "NEU": neu}


@pytest.fixture
def cbl_dataset() -> LogDataset:
    return LogDataset.from_columns(build_cbl_columns(), well_name="POZO-1", step=0.5)


SHORT_LAS = "\n".join(
    [
        "~Version information",
        "VERS.   2.0 : CWLS LOG ASCII STANDARD",
        "WRAP.   NO  : ONE LINE PER DEPTH STEP",
        "~Well information",
        "# mnemonic.unit  value : description",
        "WELL.  CGC x-1001 : WELL NAME",
        "STEP.M  0.5 : STEP",
        "NULL.  -999.25 : NULL VALUE",
        "~Curve information",
        "DEPT.M : Depth",
        "CBL.MV : Cement bond amplitude",
        "~ASCII",
        "1000.0 70",
        "1000.5 68",
        "1001.0 66",
        "1001.5 12",
        "1002.0 8",
        "1002.5 7",
        "1003.0 9",
    ]
)


@pytest.fixture
def short_las_path(tmp_path: Path) -> Path:
    p = tmp_path / "short.las"
    p.write_text(SHORT_LAS, encoding="utf-8")
    return p


@pytest.fixture
def cbl_columns() -> dict:
    return build_cbl_columns()


@pytest.fixture
def short_las_text() -> str:
    return SHORT_LAS
