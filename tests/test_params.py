"""Tests for parameter validation and coercion."""

import math

import numpy as np
import pytest

from revsurf.errors import InvalidParameterError
from revsurf.params import (
    DEFAULT_LIGHTING,
    DEFAULT_PEAR,
    LightingParameters,
    PearParameters,
    SinusoidParameters,
    coerce_parameters,
    validate,
)


def test_defaults_are_valid():
    validate(DEFAULT_PEAR)
    validate(SinusoidParameters())
    validate(DEFAULT_LIGHTING)


def test_parameters_are_hashable():
    assert hash(PearParameters()) == hash(PearParameters())
    assert {PearParameters(), PearParameters()} == {PearParameters()}


@pytest.mark.parametrize("params,field", [
    (PearParameters(z_step=0), 'z_step'),
    (PearParameters(angle_step=-1), 'angle_step'),
    (PearParameters(angle_step=0.5), 'angle_step'),
    (SinusoidParameters(angle_step=0.99), 'angle_step'),
    (PearParameters(angle_step=True), 'angle_step'),
    (PearParameters(a=0), 'a'),
    (PearParameters(b=0), 'b'),
    (PearParameters(z_max=11), 'z_max'),
    (PearParameters(z_step=float('nan')), 'z_step'),
    (SinusoidParameters(r=0), 'r'),
    (SinusoidParameters(r_step=0), 'r_step'),
    (LightingParameters(shininess=0), 'shininess'),
    (LightingParameters(kd=-1), 'kd'),
    (LightingParameters(inner_limit=30, outer_limit=20), 'inner_limit'),
    (LightingParameters(light_position=(0.0, 0.0)), 'light_position'),
    (LightingParameters(spotlight_rotation=(0.0, 0.0, 1.0)), 'spotlight_rotation'),
    (LightingParameters(light_position=(0.0, float('inf'), 1.0)), 'light_position'),
])
def test_invalid_fields(params, field):
    with pytest.raises(InvalidParameterError) as info:
        validate(params)
    assert info.value.details['field'] == field
    assert isinstance(info.value, ValueError)


def test_angle_step_of_one_is_valid():
    validate(PearParameters(angle_step=1))
    validate(SinusoidParameters(angle_step=1))


def test_numpy_scalars_are_numbers():
    validate(PearParameters(a=np.float32(10), b=np.int64(4), z_step=np.float64(0.5),
                            angle_step=np.int32(6)))


def test_validate_rejects_unknown_types():
    with pytest.raises(InvalidParameterError):
        validate({'a': 10})


def test_coerce_keeps_last_known_good():
    raw = {'a': '12', 'b': '', 'z_step': 'abc', 'angle_step': 20, 'unknown': '3'}
    params = coerce_parameters(raw, DEFAULT_PEAR)
    assert params == PearParameters(a=12.0, b=4.0, z_step=0.05, angle_step=20.0)


def test_coerce_does_not_validate():
    params = coerce_parameters({'z_step': '0'}, DEFAULT_PEAR)
    assert params.z_step == 0.0
    with pytest.raises(InvalidParameterError):
        validate(params)


def test_coerce_vectors():
    raw = {'light_position': ['1', '', 3], 'spotlight_rotation': ['5']}
    lighting = coerce_parameters(raw, DEFAULT_LIGHTING)
    assert lighting.light_position == (1.0, 0.0, 3.0)
    assert lighting.spotlight_rotation == (0.0, 0.0)


def test_lighting_uniforms():
    uniforms = LightingParameters(inner_limit=10, outer_limit=20).uniforms()
    assert math.isclose(uniforms['u_innerLimit'], math.cos(math.radians(10)))
    assert math.isclose(uniforms['u_outerLimit'], math.cos(math.radians(20)))
    assert uniforms['lightPosition'] == (0.0, 0.0, -1.0)
    assert uniforms['shininess'] == 40.0
