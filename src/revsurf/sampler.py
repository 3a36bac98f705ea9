"""Evaluation of the parametric surfaces on a (profile, angle) grid.

Each surface is parameterized as:
- profile: coordinate along the revolution axis (``z`` for the pear) or
  the radius (for the sinusoid), sampled over ``[0, bound]``
- angle: rotation about the axis, sampled over ``[0, 2*pi]``

Sample coordinates are computed as ``start + index*step`` rather than by
repeated addition, so the grid is deterministic for a given parameter set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import cos, floor, pi, sin, sqrt
from typing import List, Tuple

from revsurf.errors import InvalidParameterError
from revsurf.geometry_utils import Point3
from revsurf.params import PearParameters, SinusoidParameters, validate

logger = logging.getLogger(__name__)

FULL_TURN = 2 * pi

# Absorbs representation error when step divides length, e.g. 10/0.05
_COUNT_TOL = 1e-9


def sample_count(length: float, step: float) -> int:
    """Return the number of samples ``0, step, 2*step, ...`` within ``length``.

    A trailing partial step is dropped; the last sample never exceeds
    ``length``.
    """

    if step <= 0:
        raise InvalidParameterError(f"step must be positive, got {step}",
                                    {'field': 'step', 'value': step})
    return int(floor(length / step + _COUNT_TOL)) + 1


def angle_increment(params) -> float:
    return pi / params.angle_step


def profile_domain(params) -> Tuple[float, float, float]:
    """Return ``(start, bound, step)`` of the profile coordinate."""

    if isinstance(params, PearParameters):
        return 0.0, params.profile_bound, params.z_step
    elif isinstance(params, SinusoidParameters):
        return 0.0, params.r, pi / params.r_step
    else:
        raise InvalidParameterError(f"unsupported parameter set: {type(params).__name__}")


# -----------------------------------------------------------------------------
# Pear
# -----------------------------------------------------------------------------

def pear_radius(params: PearParameters, z: float) -> float:
    """Return the pear profile radius ``z*sqrt(z*(a - z))/b`` at ``z``."""

    radicand = z * (params.a - z)
    if radicand < 0:
        # slack for z landing a rounding error past a
        if radicand > -1e-9 * max(1.0, params.a * params.a):
            radicand = 0.0
        else:
            raise InvalidParameterError(
                f"z={z} lies outside [0, a={params.a}]: profile radius undefined",
                {'field': 'z', 'value': z})
    return z * sqrt(radicand) / params.b


def pear_point(params: PearParameters, z: float, angle: float) -> Point3:
    r_z = pear_radius(params, z)
    return Point3(r_z * sin(angle), r_z * cos(angle), z)


# -----------------------------------------------------------------------------
# Sinusoid
# -----------------------------------------------------------------------------

def sinusoid_point(params: SinusoidParameters, r: float, angle: float) -> Point3:
    """Return the sinusoid point at radius ``r`` and ``angle``.

    Height is ``a*cos(n*pi/R * sqrt(x^2 + y^2))``, with ``R`` the outer
    radius of the sampled disc.
    """

    x = r * cos(angle)
    y = r * sin(angle)
    z = params.a * cos(params.n * pi / params.r * sqrt(x * x + y * y))
    return Point3(x, y, z)


def evaluate_surface(params, profile: float, angle: float) -> Point3:
    """Evaluate a point on a surface at ``(profile, angle)``.

    This is a generic dispatcher for all supported surface types.
    """
    if isinstance(params, PearParameters):
        return pear_point(params, profile, angle)
    elif isinstance(params, SinusoidParameters):
        return sinusoid_point(params, profile, angle)
    else:
        raise InvalidParameterError(f"unsupported parameter set: {type(params).__name__}")


# -----------------------------------------------------------------------------
# Grid
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SampleGrid:
    """Sampled points indexed as ``rows[profile_index][angle_index]``."""

    profiles: Tuple[float, ...]
    angles: Tuple[float, ...]
    rows: Tuple[Tuple[Point3, ...], ...]

    @property
    def profile_count(self) -> int:
        return len(self.profiles)

    @property
    def angle_count(self) -> int:
        return len(self.angles)

    def __len__(self) -> int:
        return self.profile_count * self.angle_count

    def point(self, i: int, j: int) -> Point3:
        return self.rows[i][j]


def profile_samples(params) -> List[float]:
    start, bound, step = profile_domain(params)
    count = sample_count(bound - start, step)
    return [start + step * i for i in range(count)]


def angle_samples(params) -> List[float]:
    """Return angles from 0 to a full turn in steps of ``pi/angle_step``.

    When the step does not divide the full turn, a final partial step to
    exactly ``2*pi`` closes the revolution.
    """

    step = angle_increment(params)
    count = sample_count(FULL_TURN, step)
    angles = [step * j for j in range(count)]
    if FULL_TURN - angles[-1] > _COUNT_TOL * step:
        angles.append(FULL_TURN)
    return angles


def sample_grid(params) -> SampleGrid:
    """Validate ``params`` and evaluate the surface on its sample grid."""

    validate(params)
    profiles = profile_samples(params)
    angles = angle_samples(params)
    rows = tuple(tuple(evaluate_surface(params, p, theta) for theta in angles)
                 for p in profiles)
    logger.debug("sampled %s: %d profile x %d angle samples",
                 type(params).__name__, len(profiles), len(angles))
    return SampleGrid(tuple(profiles), tuple(angles), rows)


__all__ = [
    "FULL_TURN",
    "SampleGrid",
    "angle_increment",
    "angle_samples",
    "evaluate_surface",
    "pear_point",
    "pear_radius",
    "profile_domain",
    "profile_samples",
    "sample_count",
    "sample_grid",
    "sinusoid_point",
]
