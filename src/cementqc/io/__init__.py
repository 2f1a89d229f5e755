# src/cementqc/io/__init__.py
from __future__ import annotations

from .las import LogDataset, parse_las_text, read_las
from .layers import LayerBoundary, layers_from_rows, load_layers

__all__ = [
    "LogDataset",
    "parse_las_text",
    "read_las",
    "LayerBoundary",
    "layers_from_rows",
    "load_layers",
]
