"""Tests for the current-surface model and the host hand-off."""

import pytest

from revsurf.errors import DegenerateNormalError, InvalidParameterError
from revsurf.mesh import WireframeData
from revsurf.model import SurfaceModel
from revsurf.params import DEFAULT_PEAR, DEFAULT_SINUSOID, PearParameters, SinusoidParameters
from revsurf.surface_data import SurfaceData

SMALL = PearParameters(a=10, b=4, z_step=1.0, angle_step=4)
OTHER = PearParameters(a=8, b=3, z_step=1.0, angle_step=4)


class RecordingSink:

    def __init__(self):
        self.surfaces = []
        self.lines = []

    def buffer_data(self, data):
        self.surfaces.append(data)

    def buffer_lines(self, data):
        self.lines.append(data)


def test_defaults_to_pear():
    model = SurfaceModel()
    assert model.params == DEFAULT_PEAR
    assert isinstance(model.mesh, SurfaceData)


def test_update_swaps_params_and_mesh():
    model = SurfaceModel(SMALL)
    before = model.mesh
    mesh = model.update(OTHER)
    assert model.params == OTHER
    assert model.mesh is mesh
    assert mesh.vertices != before.vertices


def test_failed_update_keeps_previous_state():
    model = SurfaceModel(SMALL)
    mesh = model.mesh
    with pytest.raises(InvalidParameterError):
        model.update(PearParameters(z_step=0))
    assert model.params == SMALL
    assert model.mesh is mesh


def test_degenerate_normal_keeps_previous_state():
    model = SurfaceModel(SMALL)
    mesh = model.mesh
    model.default_normal = None
    with pytest.raises(DegenerateNormalError):
        model.update(OTHER)
    assert model.params == SMALL
    assert model.mesh is mesh


def test_reset_restores_defaults():
    model = SurfaceModel(SinusoidParameters(r=3, r_step=4, angle_step=3), wireframe=True)
    model.reset()
    assert model.params == DEFAULT_SINUSOID


def test_reset_follows_current_surface_kind():
    model = SurfaceModel(SMALL, wireframe=True)
    model.update(SinusoidParameters(r=3, r_step=4, angle_step=3))
    model.reset()
    assert model.params == DEFAULT_SINUSOID
    model.update(OTHER)
    model.reset()
    assert model.params == DEFAULT_PEAR


def test_upload_shaded():
    model = SurfaceModel(SMALL)
    sink = RecordingSink()
    model.upload(sink)
    assert sink.surfaces == [model.mesh]
    assert sink.lines == []


def test_upload_wireframe():
    model = SurfaceModel(SinusoidParameters(), wireframe=True)
    sink = RecordingSink()
    model.upload(sink)
    assert isinstance(sink.lines[0], WireframeData)
    assert sink.surfaces == []


def test_cache_reuses_builds():
    model = SurfaceModel(SMALL, cache_size=4)
    first = model.mesh
    model.update(OTHER)
    model.update(PearParameters(a=10, b=4, z_step=1.0, angle_step=4))
    assert model.mesh is first
    assert model.cache_info().hits == 1


def test_no_cache_by_default():
    model = SurfaceModel(SMALL)
    assert model.cache_info() is None
    first = model.mesh
    model.update(SMALL)
    assert model.mesh is not first
    assert model.mesh == first
