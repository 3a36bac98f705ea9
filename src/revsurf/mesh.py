"""Assembly of sampled grids into triangles or line strips."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np

from revsurf.geometry_utils import Face, Point3
from revsurf.sampler import SampleGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TriangleMesh:
    """Faces plus the point pool they reference.

    ``points`` holds four entries per quad in the order ``p1, p2, p3, p4``;
    points are never shared between quads, even where two quads meet.
    """

    points: Tuple[Point3, ...]
    faces: Tuple[Face, ...]

    @property
    def quad_count(self) -> int:
        return len(self.points) // 4


def quad_faces(p1: Point3, p2: Point3, p3: Point3, p4: Point3, *,
               flip_winding: bool = False) -> Tuple[Face, Face]:
    """Split the quad ``p1 p2 / p3 p4`` into two triangles.

    ``p2`` is one angle step from ``p1``; ``p3`` is one profile step from
    ``p1``; ``p4`` is diagonal. The default winding is ``(p1, p2, p3)``,
    ``(p2, p4, p3)``.
    """

    if flip_winding:
        return Face(p1, p3, p2), Face(p2, p3, p4)
    return Face(p1, p2, p3), Face(p2, p4, p3)


def triangulate(grid: SampleGrid, *, flip_winding: bool = False) -> TriangleMesh:
    """Return two triangles for every grid quad.

    Quads are visited angle by angle, and along the profile within each
    angle. Every quad gets its own copies of its four corner points.
    """

    points: List[Point3] = []
    faces: List[Face] = []
    for j in range(grid.angle_count - 1):
        for i in range(grid.profile_count - 1):
            p1 = grid.point(i, j).copy()
            p2 = grid.point(i, j + 1).copy()
            p3 = grid.point(i + 1, j).copy()
            p4 = grid.point(i + 1, j + 1).copy()
            faces.extend(quad_faces(p1, p2, p3, p4, flip_winding=flip_winding))
            points.extend((p1, p2, p3, p4))
    logger.debug("triangulated %d quads into %d faces", len(points) // 4, len(faces))
    return TriangleMesh(tuple(points), tuple(faces))


@dataclass(frozen=True)
class WireframeData:
    """Flat vertex buffer of line strips plus the counts to slice it.

    The buffer holds every horizontal strip (one per profile value, running
    over all angles) followed by every vertical strip (one per angle value,
    running over all profile values).
    """

    vertices: Tuple[float, ...]
    horizontal_line_count: int
    vertical_line_count: int
    horizontal_line_length: int
    vertical_line_length: int

    @property
    def vertex_count(self) -> int:
        return len(self.vertices) // 3

    def line_strips(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(first_vertex, vertex_count)`` for one draw call per strip."""

        first = 0
        for _ in range(self.horizontal_line_count):
            yield first, self.horizontal_line_length
            first += self.horizontal_line_length
        for _ in range(self.vertical_line_count):
            yield first, self.vertical_line_length
            first += self.vertical_line_length

    def vertex_array(self) -> np.ndarray:
        return np.asarray(self.vertices, dtype=np.float32)


def build_wireframe(grid: SampleGrid) -> WireframeData:
    vertices: List[float] = []
    for row in grid.rows:
        for pt in row:
            vertices.extend(pt.xyz)
    for j in range(grid.angle_count):
        for i in range(grid.profile_count):
            vertices.extend(grid.point(i, j).xyz)
    return WireframeData(
        vertices=tuple(vertices),
        horizontal_line_count=grid.profile_count,
        vertical_line_count=grid.angle_count,
        horizontal_line_length=grid.angle_count,
        vertical_line_length=grid.profile_count,
    )


__all__ = [
    "TriangleMesh",
    "WireframeData",
    "build_wireframe",
    "quad_faces",
    "triangulate",
]
