"""Smoothed per-vertex normals for triangle meshes.

Each vertex normal is the normalized sum of the flat normals of every
face incident to that vertex. What "incident" means is selected by
``NormalMatching``:

- ``IDENTITY`` matches the exact point instance. Because quads never
  share point instances, this shades each quad independently of its
  neighbours (seams stay visible).
- ``POSITION`` matches points by quantized coordinates, so coincident
  points from neighbouring quads share their faces (seams are smoothed).

Both build the incidence sums in a single pass over the faces.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple

from revsurf.errors import DegenerateNormalError
from revsurf.geometry_utils import Face, Point3, Vec3, add, cross, mag, sub

logger = logging.getLogger(__name__)

# Lengths at or below this are treated as zero
NORMAL_EPSILON = 1e-12

# Grid used to quantize coordinates for POSITION matching
POSITION_TOLERANCE = 1e-9

UP: Vec3 = (0.0, 0.0, 1.0)


class NormalMatching(str, Enum):
    IDENTITY = "identity"
    POSITION = "position"


class Weighting(str, Enum):
    UNIFORM = "uniform"
    AREA = "area"


def normalize(vec: Vec3, index: Optional[int] = None) -> Vec3:
    """Return ``vec`` scaled to unit length.

    Raises ``DegenerateNormalError`` for a zero-length vector.
    """

    length = mag(vec)
    if length <= NORMAL_EPSILON:
        raise DegenerateNormalError("cannot normalize zero-length normal", index)
    return (vec[0] / length, vec[1] / length, vec[2] / length)


def face_normal(face: Face, weighting: Weighting = Weighting.UNIFORM) -> Vec3:
    """Return the flat normal ``(p2 - p1) x (p3 - p1)`` of ``face``.

    With ``UNIFORM`` weighting the result is unit length, or zero for a
    degenerate face. With ``AREA`` weighting it is the raw cross product,
    whose length is twice the triangle's area.
    """

    p1, p2, p3 = face.p1.xyz, face.p2.xyz, face.p3.xyz
    n = cross(sub(p2, p1), sub(p3, p1))
    if weighting == Weighting.AREA:
        return n
    length = mag(n)
    if length <= NORMAL_EPSILON:
        return (0.0, 0.0, 0.0)
    return (n[0] / length, n[1] / length, n[2] / length)


def position_key(pt: Point3, tolerance: float = POSITION_TOLERANCE) -> Tuple[int, int, int]:
    """Create a hashable key for a point quantized to ``tolerance``."""

    scale = 1.0 / tolerance
    return (
        round(pt.x * scale),
        round(pt.y * scale),
        round(pt.z * scale),
    )


def _identity_key(pt: Point3) -> Point3:
    return pt


def _key_function(matching: NormalMatching, tolerance: float) -> Callable[[Point3], Hashable]:
    if NormalMatching(matching) == NormalMatching.POSITION:
        return lambda pt: position_key(pt, tolerance)
    return _identity_key


def accumulate_normals(faces: Sequence[Face], *,
                       matching: NormalMatching = NormalMatching.IDENTITY,
                       weighting: Weighting = Weighting.UNIFORM,
                       tolerance: float = POSITION_TOLERANCE) -> Dict[Hashable, Vec3]:
    """Sum face normals per matching key.

    A face referencing the same key more than once (e.g. two corners
    collapsed onto the axis) counts once for that key.
    """

    key_of = _key_function(matching, tolerance)
    sums: Dict[Hashable, Vec3] = {}
    for face in faces:
        n = face_normal(face, weighting)
        keys = []
        for pt in face.points:
            key = key_of(pt)
            if key not in keys:
                keys.append(key)
        for key in keys:
            sums[key] = add(sums.get(key, (0.0, 0.0, 0.0)), n)
    return sums


def vertex_normals(points: Sequence[Point3], faces: Sequence[Face], *,
                   matching: NormalMatching = NormalMatching.IDENTITY,
                   weighting: Weighting = Weighting.UNIFORM,
                   default_normal: Optional[Vec3] = None,
                   tolerance: float = POSITION_TOLERANCE) -> Tuple[List[Vec3], List[int]]:
    """Return one unit normal per entry of ``points``, in the same order.

    If a vertex's accumulated normal has zero length (it touches no face,
    or only degenerate ones), ``DegenerateNormalError`` is raised, unless
    ``default_normal`` is given, in which case that normal is used and the
    vertex index is reported in the second element of the result.
    """

    key_of = _key_function(matching, tolerance)
    sums = accumulate_normals(faces, matching=matching, weighting=weighting,
                              tolerance=tolerance)

    normals: List[Vec3] = []
    substituted: List[int] = []
    for index, pt in enumerate(points):
        total = sums.get(key_of(pt), (0.0, 0.0, 0.0))
        try:
            normals.append(normalize(total, index))
        except DegenerateNormalError:
            if default_normal is None:
                raise
            normals.append(tuple(default_normal))
            substituted.append(index)

    if substituted:
        logger.info("substituted default normal for %d of %d vertices",
                    len(substituted), len(points))
    return normals, substituted


__all__ = [
    "NORMAL_EPSILON",
    "NormalMatching",
    "POSITION_TOLERANCE",
    "UP",
    "Weighting",
    "accumulate_normals",
    "face_normal",
    "normalize",
    "position_key",
    "vertex_normals",
]
