import math
import pickle

import numpy as np
import pytest

from raymarch.color import Color
from raymarch.vector import Vector3


def test_normalize_zero_vector_returns_zero():
    assert Vector3().normalize() == Vector3()
    assert Vector3(1e-12, 0, 0).normalize().is_zero()


@pytest.mark.parametrize('v', [(3, 4, 0), (1e-5, 0, 0), (-2, 7, 1.5), (1e6, -1e6, 3)])
def test_normalize_gives_unit_length(v):
    assert Vector3(*v).normalize().length() == pytest.approx(1.0, abs=1e-12)


def test_divide_by_near_zero_returns_zero():
    assert (Vector3(1, 2, 3) / 1e-12) == Vector3()
    assert (Vector3(2, 4, 6) / 2) == Vector3(1, 2, 3)


def test_basic_algebra():
    a = Vector3(1, 2, 3)
    b = Vector3(4, 5, 6)
    assert a + b == Vector3(5, 7, 9)
    assert b - a == Vector3(3, 3, 3)
    assert a * 2 == 2 * a == Vector3(2, 4, 6)
    assert -a == Vector3(-1, -2, -3)
    assert a.dot(b) == 32
    assert a.length_squared() == 14
    assert a.distance_to(b) == pytest.approx(math.sqrt(27))


def test_cross_matches_numpy():
    a = Vector3(1.5, -2, 0.25)
    b = Vector3(-3, 0.5, 4)
    assert np.allclose(a.cross(b).to_array(), np.cross(a.to_array(), b.to_array()))
    assert Vector3(1, 0, 0).cross(Vector3(0, 1, 0)) == Vector3(0, 0, 1)


def test_array_round_trip_and_pickle():
    v = Vector3(0.1, 0.2, 0.3)
    assert Vector3.from_array(v.to_array()) == v
    assert pickle.loads(pickle.dumps(v)) == v
    assert tuple(v) == (0.1, 0.2, 0.3)


def test_color_arithmetic():
    c = Color(0.2, 0.4, 0.6)
    assert (c + Color(0.1, 0.1, 0.1)).as_tuple() == pytest.approx((0.3, 0.5, 0.7))
    assert (c * 2).as_tuple() == pytest.approx((0.4, 0.8, 1.2))
    assert (c * Color(0.5, 0.5, 2)).as_tuple() == pytest.approx((0.1, 0.2, 1.2))


def test_color_clamp():
    assert Color(-0.5, 0.5, 1.5).clamp() == Color(0.0, 0.5, 1.0)


def test_gamma_correct():
    c = Color(0.25, 1.0, 0.0).gamma_correct(2.0)
    assert c.as_tuple() == pytest.approx((0.5, 1.0, 0.0))
    assert Color(0.5, 0.5, 0.5).gamma_correct().r == pytest.approx(0.5 ** (1 / 2.2))
    # negative channels never produce complex values
    assert Color(-0.1, 0, 0).gamma_correct().r == 0.0


def test_enhance_contrast():
    c = Color(0.5, 0.75, 0.0).enhance_contrast(1.2)
    assert c.as_tuple() == pytest.approx((0.5, 0.8, 0.0))
    assert Color(0.95, 0.02, 0.5).enhance_contrast(2.0).as_tuple() == pytest.approx((1.0, 0.0, 0.5))


def test_luminance_and_is_black():
    assert Color(1, 1, 1).luminance() == pytest.approx(1.0)
    assert Color(1, 0, 0).luminance() == pytest.approx(0.299)
    assert Color(0, 0, 0).is_black()
    assert Color(5e-7, 0, 0).is_black()
    assert not Color(0.03, 0.03, 0.08).is_black()
