"""Current-surface state and the hand-off to a host renderer."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional, Protocol, Union

from revsurf.errors import InvalidParameterError
from revsurf.mesh import WireframeData
from revsurf.normals import UP, NormalMatching, Weighting
from revsurf.params import (
    DEFAULT_PEAR,
    DEFAULT_SINUSOID,
    PearParameters,
    SinusoidParameters,
    validate,
)
from revsurf.surface_data import SurfaceData, create_surface_data, create_wireframe_data

logger = logging.getLogger(__name__)

MeshData = Union[SurfaceData, WireframeData]


class BufferSink(Protocol):
    """Host side of the buffer upload.

    A shaded host implements ``buffer_data``; a wireframe host implements
    ``buffer_lines`` and issues one line-strip draw per
    ``WireframeData.line_strips()`` entry.
    """

    def buffer_data(self, data: SurfaceData) -> None:
        ...

    def buffer_lines(self, data: WireframeData) -> None:
        ...


class SurfaceModel:
    """Owns the current parameter set and the mesh built from it.

    ``update`` builds the new mesh first and swaps parameters and mesh in
    together, so the two always agree. A failed build leaves the previous
    state untouched.
    """

    def __init__(self, params=None, *, wireframe: bool = False,
                 matching: NormalMatching = NormalMatching.IDENTITY,
                 weighting: Weighting = Weighting.UNIFORM,
                 flip_winding: bool = False,
                 default_normal=UP,
                 cache_size: int = 0):
        self.wireframe = wireframe
        self.matching = NormalMatching(matching)
        self.weighting = Weighting(weighting)
        self.flip_winding = flip_winding
        self.default_normal = default_normal
        if cache_size > 0:
            self._build = lru_cache(maxsize=cache_size)(self._build_uncached)
        else:
            self._build = self._build_uncached
        if params is None:
            params = DEFAULT_PEAR
        self._params = None
        self._mesh: Optional[MeshData] = None
        self.update(params)

    @property
    def params(self):
        return self._params

    @property
    def mesh(self) -> MeshData:
        return self._mesh

    def _build_uncached(self, params) -> MeshData:
        if self.wireframe:
            return create_wireframe_data(params)
        return create_surface_data(params,
                                   matching=self.matching,
                                   weighting=self.weighting,
                                   flip_winding=self.flip_winding,
                                   default_normal=self.default_normal)

    def update(self, params) -> MeshData:
        """Rebuild the mesh for ``params`` and make it current."""

        try:
            validate(params)
            mesh = self._build(params)
        except InvalidParameterError as exc:
            logger.warning("rejected parameters %r: %s", params, exc)
            raise
        self._params, self._mesh = params, mesh
        return mesh

    def reset(self) -> MeshData:
        """Rebuild with the default parameters of the current surface kind."""

        return self.update(_defaults_for(self._params))

    def cache_info(self):
        """Return ``functools`` cache statistics, or ``None`` when not caching."""

        info = getattr(self._build, 'cache_info', None)
        return info() if info is not None else None

    def upload(self, sink: BufferSink) -> None:
        if isinstance(self._mesh, WireframeData):
            sink.buffer_lines(self._mesh)
        else:
            sink.buffer_data(self._mesh)


def _defaults_for(params):
    if isinstance(params, SinusoidParameters):
        return DEFAULT_SINUSOID
    elif isinstance(params, PearParameters):
        return DEFAULT_PEAR
    raise InvalidParameterError(f"unsupported parameter set: {type(params).__name__}")


__all__ = [
    "BufferSink",
    "MeshData",
    "SurfaceModel",
]
