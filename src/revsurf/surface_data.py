"""Entry points that turn a parameter set into host-ready buffers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from revsurf.geometry_utils import Vec3
from revsurf.mesh import WireframeData, build_wireframe, triangulate
from revsurf.normals import UP, NormalMatching, Weighting, vertex_normals
from revsurf.sampler import sample_grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SurfaceData:
    """Parallel flat vertex and normal buffers of a shaded surface.

    ``substituted`` lists the vertex indices whose normal was degenerate
    and replaced by the default normal.
    """

    vertices: Tuple[float, ...]
    normals: Tuple[float, ...]
    substituted: Tuple[int, ...] = ()

    @property
    def vertex_count(self) -> int:
        return len(self.vertices) // 3

    def vertex_array(self) -> np.ndarray:
        return np.asarray(self.vertices, dtype=np.float32)

    def normal_array(self) -> np.ndarray:
        return np.asarray(self.normals, dtype=np.float32)


def create_surface_data(params, *,
                        matching: NormalMatching = NormalMatching.IDENTITY,
                        weighting: Weighting = Weighting.UNIFORM,
                        flip_winding: bool = False,
                        default_normal: Optional[Vec3] = UP) -> SurfaceData:
    """Tessellate the surface described by ``params`` with smoothed normals.

    Parameters
    ----------
    params : PearParameters or SinusoidParameters
        Shape and density; validated before sampling.
    matching : NormalMatching
        ``IDENTITY`` shades each quad on its own, ``POSITION`` smooths
        normals across quad boundaries.
    weighting : Weighting
        ``UNIFORM`` counts each incident face equally, ``AREA`` weights
        faces by their area.
    flip_winding : bool
        Reverse the triangle winding, and with it the normal direction.
    default_normal : vector or None
        Normal used for vertices with a degenerate accumulated normal.
        ``None`` lets ``DegenerateNormalError`` propagate instead.

    Returns
    -------
    SurfaceData
        Four vertices per quad with one normal per vertex.
    """
    grid = sample_grid(params)
    mesh = triangulate(grid, flip_winding=flip_winding)
    normals, substituted = vertex_normals(mesh.points, mesh.faces,
                                          matching=matching,
                                          weighting=weighting,
                                          default_normal=default_normal)

    vertex_list = []
    normal_list = []
    for pt, n in zip(mesh.points, normals):
        vertex_list.extend(pt.xyz)
        normal_list.extend(n)

    logger.debug("built surface: %d vertices, %d faces",
                 len(mesh.points), len(mesh.faces))
    return SurfaceData(tuple(vertex_list), tuple(normal_list), tuple(substituted))


def create_wireframe_data(params) -> WireframeData:
    """Return ring and profile line strips for the surface ``params``."""

    grid = sample_grid(params)
    data = build_wireframe(grid)
    logger.debug("built wireframe: %d horizontal, %d vertical lines",
                 data.horizontal_line_count, data.vertical_line_count)
    return data


__all__ = [
    "SurfaceData",
    "create_surface_data",
    "create_wireframe_data",
]
