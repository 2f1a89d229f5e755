from __future__ import annotations

from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .schema import AnalysisConfig, BondConfig, CurveConfig, IntervalConfig, LayerConfig, TocConfig

_SECTIONS = {
    "curves": CurveConfig,
    "bond": BondConfig,
    "toc": TocConfig,
    "intervals": IntervalConfig,
    "layers": LayerConfig,
}


def default_config() -> AnalysisConfig:
    return AnalysisConfig()


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Top-level mapping of a YAML file; empty or non-mapping documents give {}."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    return obj if isinstance(obj, dict) else {}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def as_plain_dict(x: Any) -> Any:
    """Dataclass config -> nested dicts/lists, e.g. for YAML round trips or a JSON manifest."""
    if is_dataclass(x):
        return {f.name: as_plain_dict(getattr(x, f.name)) for f in fields(x)}
    if isinstance(x, (list, tuple)):
        return [as_plain_dict(v) for v in x]
    return x


def _build_section(cls: Any, d: Any) -> Any:
    # list values become tuples so the frozen configs stay hashable
    d = d if isinstance(d, dict) else {}
    names = {f.name for f in fields(cls)}
    kwargs = {}
    for k, v in d.items():
        if k not in names:
            continue
        kwargs[k] = tuple(str(x) for x in v) if isinstance(v, (list, tuple)) else v
    return cls(**kwargs)


def config_from_dict(d: Optional[Dict[str, Any]]) -> AnalysisConfig:
    """
    Build an AnalysisConfig from a nested mapping, e.g. a parsed YAML file:

        toc:
          amplitude_threshold_mv: 8
        layers:
          seal_margin_m: 5

    Missing sections/keys keep their defaults; unknown keys are ignored.
    """
    merged = deep_merge(as_plain_dict(default_config()), dict(d or {}))
    return AnalysisConfig(**{name: _build_section(cls, merged.get(name)) for name, cls in _SECTIONS.items()})


def load_config(path: Optional[Union[str, Path]] = None) -> AnalysisConfig:
    if path is None or not str(path).strip():
        return default_config()
    return config_from_dict(load_yaml(path))
