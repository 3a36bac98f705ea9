"""YAML parameter files.

Layout::

    surface: pear            # or: sinusoid
    parameters:
      a: 10
      b: 4
      z_step: 0.05
      angle_step: 10
    lighting:                # optional
      shininess: 40
      light_position: [0, 0, -1]

Missing values take the defaults of the chosen surface.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

import yaml

from revsurf.errors import InvalidParameterError
from revsurf.params import (
    DEFAULT_LIGHTING,
    DEFAULT_PEAR,
    DEFAULT_SINUSOID,
    LightingParameters,
    PearParameters,
    SinusoidParameters,
    validate,
)

logger = logging.getLogger(__name__)

SURFACE_DEFAULTS = {
    'pear': DEFAULT_PEAR,
    'sinusoid': DEFAULT_SINUSOID,
}


def surface_kind(params) -> str:
    if isinstance(params, PearParameters):
        return 'pear'
    elif isinstance(params, SinusoidParameters):
        return 'sinusoid'
    raise InvalidParameterError(f"unsupported parameter set: {type(params).__name__}")


def _build(cls, values: Mapping[str, Any], section: str):
    if not isinstance(values, Mapping):
        raise InvalidParameterError(f"'{section}' must be a mapping")
    names = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - names)
    if unknown:
        raise InvalidParameterError(f"unknown {section} fields: {', '.join(unknown)}",
                                    {'field': unknown[0]})
    kwargs = {}
    for key, value in values.items():
        kwargs[key] = tuple(value) if isinstance(value, list) else value
    return cls(**kwargs)


def parameters_from_dict(data: Mapping[str, Any]) -> Tuple[Any, LightingParameters]:
    """Build validated surface and lighting parameters from ``data``."""

    if not isinstance(data, Mapping):
        raise InvalidParameterError("parameter document must be a mapping")
    kind = data.get('surface', 'pear')
    if kind not in SURFACE_DEFAULTS:
        raise InvalidParameterError(f"unknown surface kind: {kind!r}",
                                    {'field': 'surface', 'value': kind})
    cls = type(SURFACE_DEFAULTS[kind])
    surface = _build(cls, data.get('parameters') or {}, 'parameters')
    lighting = _build(LightingParameters, data.get('lighting') or {}, 'lighting')
    validate(surface)
    validate(lighting)
    return surface, lighting


def parameters_to_dict(surface, lighting: LightingParameters = DEFAULT_LIGHTING) -> Dict[str, Any]:
    def plain(obj):
        return {k: list(v) if isinstance(v, tuple) else v
                for k, v in asdict(obj).items() if v is not None}

    return {
        'surface': surface_kind(surface),
        'parameters': plain(surface),
        'lighting': plain(lighting),
    }


def load_parameters(path: Path | str) -> Tuple[Any, LightingParameters]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"parameter file not found: {path}")
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    logger.debug("loaded parameters from %s", path)
    return parameters_from_dict(data)


def dump_parameters(path: Path | str, surface,
                    lighting: LightingParameters = DEFAULT_LIGHTING) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(parameters_to_dict(surface, lighting), fp, sort_keys=False)


__all__ = [
    "SURFACE_DEFAULTS",
    "dump_parameters",
    "load_parameters",
    "parameters_from_dict",
    "parameters_to_dict",
    "surface_kind",
]
