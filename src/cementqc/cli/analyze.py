from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.logging import RichHandler
from rich.table import Table

from cementqc.analysis.bond import BAD
from cementqc.analysis.pipeline import AnalysisResult, analyze
from cementqc.config.defaults import load_config
from cementqc.errors import CementQCError
from cementqc.io.las import read_las
from cementqc.io.layers import load_layers
from cementqc.io.report import format_score_band, write_analysis

app = typer.Typer(add_completion=False)

_KPI_ROWS = [
    ("Cement Score", "cement_score", "%"),
    ("TOC Found", "toc_found", " m"),
    ("TOC Requested", "toc_requested", " m"),
    ("TOC Difference", "toc_difference", " m"),
    ("TOC Score (T)", "t_score", ""),
    ("Annulus Score (A)", "a_score", ""),
    ("Good Bond", "good_bond_pct", " %"),
    ("Total Cemented", "total_meters", " m"),
    ("Good / Medium / Bad", None, " m"),
    ("Layer Adhesion (Apnz)", "apnz_pct", " %"),
    ("Seal Adhesion (Asello)", "asello_pct", " %"),
]

_BAND_STYLE = {"red": "red", "yellow": "yellow", "lightgreen": "bright_green", "green": "green", "none": "dim"}


def _fmt(v: Optional[float], unit: str = "") -> str:
    if v is None or not math.isfinite(v):
        return "N/A"
    return f"{v:.2f}{unit}"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _kpi_table(result: AnalysisResult) -> Table:
    k = result.kpis
    t = Table(title=f"Cement KPIs: {result.well_name}")
    t.add_column("KPI")
    t.add_column("Value", justify="right")
    for label, attr, unit in _KPI_ROWS:
        if attr is None:
            value = f"{k.good_meters:.2f} / {k.medium_meters:.2f} / {k.bad_meters:.2f}{unit}"
        else:
            value = _fmt(getattr(k, attr), unit)
        if attr == "cement_score":
            value = f"[{_BAND_STYLE[format_score_band(k.cement_score)]}]{value}[/]"
        t.add_row(label, value)
    return t


def _intervals_table(result: AnalysisResult) -> Table:
    t = Table(title="Intervals with Medium/Bad Quality")
    for c in ("Quality", "Top (m)", "Base (m)", "Length (m)"):
        t.add_column(c)
    for iv in result.intervals:
        style = "red" if iv.category == BAD else "yellow"
        t.add_row(f"[{style}]{iv.category}[/]", f"{iv.top:.2f}", f"{iv.base:.2f}", f"{iv.length:.2f}")
    return t


def _layers_table(result: AnalysisResult) -> Table:
    t = Table(title="Adhesion Analysis per Layer")
    for c in ("Layer", "Top (m)", "Base (m)", "Length (m)", "Bond %", "Seal %"):
        t.add_column(c)
    for it in result.layers:
        t.add_row(
            it.layer,
            f"{it.top:.2f}",
            f"{it.base:.2f}",
            f"{it.length:.2f}",
            _fmt(it.adhesion_pct),
            _fmt(it.seal_adhesion_pct),
        )
    return t


@app.callback()
def main() -> None:
    """Cement bond log quality control."""


@app.command("analyze")
def analyze_cmd(
    las_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="LAS-style log file"),
    layers: Optional[Path] = typer.Option(None, "--layers", exists=True, dir_okay=False, help="CSV/Excel: label,top,base"),
    toc: Optional[float] = typer.Option(None, "--toc", help="Requested top of cement (m)"),
    annulus: Optional[float] = typer.Option(None, "--annulus", help="Requested annulus height (m)"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML overrides for analysis constants"),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="Write kpis.json and CSV tables here"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    _setup_logging(verbose)

    try:
        cfg = load_config(config)

        print(f"[bold]Reading log[/bold] {las_path.name}...")
        ds = read_las(las_path)
        print(f"Well: {ds.well_name} | curves: {len(ds.curves)} | records: {ds.n_records} | step: {ds.step:.4f}")

        layer_list = []
        if layers is not None:
            print(f"[bold]Reading layers[/bold] {layers.name}...")
            layer_list = load_layers(layers)
            print(f"Layers: {len(layer_list)}")

        result = analyze(ds, layer_list, toc, annulus, cfg=cfg)
    except CementQCError as e:
        print(f"[red]Analysis failed:[/red] {e}")
        raise typer.Exit(code=1)

    print(f"TOC detected at {result.kpis.toc_found:.2f} m ({result.toc_method}) on curve {result.amplitude_curve}")
    print(_kpi_table(result))
    print(_intervals_table(result))
    if result.layers:
        print(_layers_table(result))

    if out_dir is not None:
        paths = write_analysis(out_dir, result, cfg=cfg, source=str(las_path))
        for p in paths.values():
            print("[green]Wrote[/green]", p)


if __name__ == "__main__":
    app()
