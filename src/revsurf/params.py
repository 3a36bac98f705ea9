"""Parameter sets for the supported surfaces.

A parameter set fully determines a surface's shape and its tessellation
density. Parameter sets are frozen dataclasses, so equal parameters hash
equally and can key a build cache.

Surfaces:
- PearParameters: surface of revolution of the "pear" profile
  ``r(z) = z*sqrt(z*(a - z))/b`` for ``z`` in ``[0, a]``
- SinusoidParameters: radial sinusoid ``z = a*cos(n*pi/R*r)`` over the
  disc of radius ``R``

Angular and radial step counts are divisors of ``pi``: an ``angle_step``
of 10 gives an angular step of ``pi/10``.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, fields, replace
from math import cos, isfinite, radians
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from revsurf.errors import InvalidParameterError


@dataclass(frozen=True)
class PearParameters:
    """Pear profile coefficients and tessellation density.

    ``z_max`` truncates the profile domain to ``[0, z_max]``; ``None``
    samples the full ``[0, a]``.
    """

    a: float = 10.0
    b: float = 4.0
    z_step: float = 0.05
    angle_step: float = 10.0
    z_max: Optional[float] = None

    @property
    def profile_bound(self) -> float:
        return self.a if self.z_max is None else self.z_max


@dataclass(frozen=True)
class SinusoidParameters:
    """Radial sinusoid amplitude, wave count, radius and density."""

    a: float = 1.5
    n: float = 2.0
    r: float = 7.0
    r_step: float = 10.0
    angle_step: float = 5.0

    @property
    def profile_bound(self) -> float:
        return self.r


ParameterSet = Union[PearParameters, SinusoidParameters]


@dataclass(frozen=True)
class LightingParameters:
    """Material and spotlight settings consumed by the host shader.

    Angles are in degrees, as entered on the demo's controls.
    """

    ka: float = 1.0
    kd: float = 1.0
    ks: float = 1.0
    shininess: float = 40.0
    light_position: Tuple[float, float, float] = (0.0, 0.0, -1.0)
    spotlight_rotation: Tuple[float, float] = (0.0, 0.0)
    inner_limit: float = 10.0
    outer_limit: float = 20.0

    def uniforms(self) -> Dict[str, Any]:
        """Return the values the host uploads as shader uniforms.

        Spotlight limits are passed as cosines, so the shader compares
        them against a dot product directly.
        """

        return {
            'Ka': self.ka,
            'Kd': self.kd,
            'Ks': self.ks,
            'shininess': self.shininess,
            'lightPosition': tuple(self.light_position),
            'u_innerLimit': cos(radians(self.inner_limit)),
            'u_outerLimit': cos(radians(self.outer_limit)),
        }


DEFAULT_PEAR = PearParameters()
DEFAULT_SINUSOID = SinusoidParameters()
DEFAULT_LIGHTING = LightingParameters()


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _require_positive(name, value):
    if not _is_number(value) or not isfinite(value) or value <= 0:
        raise InvalidParameterError(f"{name} must be a positive finite number, got {value!r}",
                                    {'field': name, 'value': value})


def _require_finite(name, value):
    if not _is_number(value) or not isfinite(value):
        raise InvalidParameterError(f"{name} must be a finite number, got {value!r}",
                                    {'field': name, 'value': value})


def _require_angle_step(value):
    _require_positive('angle_step', value)
    # below one the angular step pi/angle_step exceeds a half turn
    if value < 1:
        raise InvalidParameterError(f"angle_step must be at least 1, got {value!r}",
                                    {'field': 'angle_step', 'value': value})


def _require_vector(name, value, length):
    if not isinstance(value, (tuple, list)) or len(value) != length:
        raise InvalidParameterError(f"{name} must have {length} components, got {value!r}",
                                    {'field': name, 'value': value})
    for component in value:
        _require_finite(name, component)


def validate(params) -> None:
    """Raise ``InvalidParameterError`` if ``params`` violates its invariants."""

    if isinstance(params, PearParameters):
        _require_positive('a', params.a)
        _require_finite('b', params.b)
        if params.b == 0:
            raise InvalidParameterError("b must be non-zero", {'field': 'b', 'value': params.b})
        _require_positive('z_step', params.z_step)
        _require_angle_step(params.angle_step)
        if params.z_max is not None:
            _require_positive('z_max', params.z_max)
            # z*(a - z) goes negative past a and the radius turns imaginary
            if params.z_max > params.a:
                raise InvalidParameterError(
                    f"z_max={params.z_max} exceeds a={params.a}: profile radius undefined",
                    {'field': 'z_max', 'value': params.z_max})
    elif isinstance(params, SinusoidParameters):
        _require_finite('a', params.a)
        _require_finite('n', params.n)
        _require_positive('r', params.r)
        _require_positive('r_step', params.r_step)
        _require_angle_step(params.angle_step)
    elif isinstance(params, LightingParameters):
        for name in ('ka', 'kd', 'ks'):
            value = getattr(params, name)
            _require_finite(name, value)
            if value < 0:
                raise InvalidParameterError(f"{name} must be non-negative",
                                            {'field': name, 'value': value})
        _require_positive('shininess', params.shininess)
        _require_vector('light_position', params.light_position, 3)
        _require_vector('spotlight_rotation', params.spotlight_rotation, 2)
        _require_finite('inner_limit', params.inner_limit)
        _require_finite('outer_limit', params.outer_limit)
        if params.inner_limit > params.outer_limit:
            raise InvalidParameterError("inner_limit must not exceed outer_limit",
                                        {'field': 'inner_limit', 'value': params.inner_limit})
    else:
        raise InvalidParameterError(f"unsupported parameter set: {type(params).__name__}")


def _parse_float(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            return float(value)
        except ValueError:
            return None
    return None


def coerce_parameters(raw: Mapping[str, Any], previous):
    """Merge raw field values into ``previous``.

    Mirrors how the demo reads its input fields: every value is parsed as a
    float, and empty or unparsable fields keep their last-known-good value.
    Keys that are not fields of ``previous`` are ignored. The result is not
    validated.
    """

    changes = {}
    for f in fields(previous):
        if f.name not in raw:
            continue
        current = getattr(previous, f.name)
        if isinstance(current, tuple):
            candidate = raw[f.name]
            if not isinstance(candidate, (list, tuple)) or len(candidate) != len(current):
                continue
            parsed = tuple(_parse_float(v) for v in candidate)
            changes[f.name] = tuple(old if new is None else new
                                    for old, new in zip(current, parsed))
        else:
            parsed = _parse_float(raw[f.name])
            if parsed is not None:
                changes[f.name] = parsed
    return replace(previous, **changes)


__all__ = [
    "DEFAULT_LIGHTING",
    "DEFAULT_PEAR",
    "DEFAULT_SINUSOID",
    "LightingParameters",
    "ParameterSet",
    "PearParameters",
    "SinusoidParameters",
    "coerce_parameters",
    "validate",
]
