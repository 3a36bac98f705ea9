"""Tests for YAML parameter files."""

import pytest

from revsurf.config import (
    dump_parameters,
    load_parameters,
    parameters_from_dict,
    parameters_to_dict,
)
from revsurf.errors import InvalidParameterError
from revsurf.params import DEFAULT_LIGHTING, LightingParameters, PearParameters, SinusoidParameters


def test_partial_file_takes_defaults(tmp_path):
    path = tmp_path / "params.yaml"
    path.write_text(
        "surface: sinusoid\n"
        "parameters:\n"
        "  r: 5\n"
        "lighting:\n"
        "  shininess: 20\n"
        "  light_position: [1, 2, 3]\n",
        encoding="utf-8",
    )
    surface, lighting = load_parameters(path)
    assert surface == SinusoidParameters(r=5)
    assert lighting.shininess == 20
    assert lighting.light_position == (1, 2, 3)
    assert lighting.ka == DEFAULT_LIGHTING.ka


def test_dump_then_load(tmp_path):
    path = tmp_path / "nested" / "pear.yaml"
    surface = PearParameters(a=8, b=3, z_step=0.1, angle_step=12, z_max=6)
    lighting = LightingParameters(kd=0.5)
    dump_parameters(path, surface, lighting)
    assert load_parameters(path) == (surface, lighting)


def test_empty_document_is_default_pear():
    surface, lighting = parameters_from_dict({})
    assert surface == PearParameters()
    assert lighting == DEFAULT_LIGHTING


def test_to_dict_layout():
    data = parameters_to_dict(PearParameters())
    assert data['surface'] == 'pear'
    assert 'z_max' not in data['parameters']
    assert data['lighting']['light_position'] == [0.0, 0.0, -1.0]


@pytest.mark.parametrize("data", [
    {'surface': 'torus'},
    {'parameters': {'radius': 3}},
    {'parameters': [1, 2]},
    {'parameters': {'z_step': 0}},
    {'parameters': {'a': 'ten'}},
    {'parameters': {'angle_step': 0.5}},
    {'lighting': {'light_position': [0, 0]}},
    {'lighting': {'spotlight_rotation': 5}},
    ['pear'],
])
def test_invalid_documents(data):
    with pytest.raises(InvalidParameterError):
        parameters_from_dict(data)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_parameters(tmp_path / "missing.yaml")
