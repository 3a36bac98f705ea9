"""Small vector helpers and the point/face types shared by the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from math import sqrt
from typing import Tuple

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True, eq=False)
class Point3:
    """Immutable sampled surface point.

    Points compare and hash by identity: two samples taken at the same
    position are still distinct points.
    """

    x: float
    y: float
    z: float

    @property
    def xyz(self) -> Vec3:
        return (self.x, self.y, self.z)

    def copy(self) -> "Point3":
        """Return a new, distinct point at the same position."""

        return Point3(self.x, self.y, self.z)


@dataclass(frozen=True)
class Face:
    """Triangle referencing three points in winding order."""

    p1: Point3
    p2: Point3
    p3: Point3

    @property
    def points(self) -> Tuple[Point3, Point3, Point3]:
        return (self.p1, self.p2, self.p3)

    def contains(self, pt: Point3) -> bool:
        """Return ``True`` if ``pt`` is one of this face's point instances."""

        return pt is self.p1 or pt is self.p2 or pt is self.p3


def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def mag(a: Vec3) -> float:
    return sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


__all__ = [
    "Face",
    "Point3",
    "Vec3",
    "add",
    "cross",
    "dot",
    "mag",
    "sub",
]
