import logging
import math
from dataclasses import replace

import numpy as np
import pandas as pd
import pytest

from raymarch.blackhole import BlackHole
from raymarch.camera import Camera, camera_from_preset
from raymarch.color import Color
from raymarch.raytracing import trace_ray
from raymarch.renderer import (post_process, render_frame, render_pixel, sample_offsets,
                               summarize_photon_data)
from raymarch.settings import DEFAULT_CONFIG
from raymarch.vector import Vector3

QUIET = replace(DEFAULT_CONFIG, show_progress=False)


@pytest.fixture
def bh():
    return BlackHole(mass=1.0)


@pytest.fixture
def front_camera():
    return camera_from_preset('front', fov=math.radians(45), aspect_ratio=4 / 3)


def test_sample_offsets():
    assert sample_offsets(QUIET) == (0.25, 0.75)
    assert sample_offsets(replace(QUIET, supersampling_level=3)) == pytest.approx((1 / 6, 0.5, 5 / 6))
    assert sample_offsets(replace(QUIET, antialiasing=False)) == (0.0,)


def test_post_process():
    c = post_process(Color(0.75, 0.5, -0.2), QUIET)
    assert c.as_tuple() == pytest.approx((0.8, 0.5, 0.0))
    raw = replace(QUIET, post_processing=False, clamp_colors=False)
    assert post_process(Color(1.5, 0.5, -0.2), raw) == Color(1.5, 0.5, -0.2)
    gamma = replace(QUIET, post_processing=False, gamma_correction=True, gamma=2.0)
    assert post_process(Color(0.25, 0.0, 1.0), gamma).as_tuple() == pytest.approx((0.5, 0.0, 1.0))


def test_render_pixel_averages_supersamples(bh, front_camera):
    w, h = 16, 12
    expected = Color()
    for dx in (0.25, 0.75):
        for dy in (0.25, 0.75):
            d = front_camera.get_ray_direction(5 + dx, 7 + dy, w, h)
            expected = expected + trace_ray(front_camera.position, d, bh)
    expected = (expected * 0.25).enhance_contrast(1.2).clamp()
    assert render_pixel(front_camera, bh, 5, 7, w, h, QUIET).as_tuple() == pytest.approx(expected.as_tuple())


def test_render_pixel_without_antialiasing_uses_pixel_coordinate(bh, front_camera):
    config = replace(QUIET, antialiasing=False, post_processing=False)
    d = front_camera.get_ray_direction(8, 6, 16, 12)
    expected = trace_ray(front_camera.position, d, bh).clamp()
    assert render_pixel(front_camera, bh, 8, 6, 16, 12, config) == expected


def test_render_frame_shape_and_range(bh, front_camera):
    img = render_frame(front_camera, bh, 8, 6, QUIET)
    assert img.shape == (6, 8, 3)
    assert img.dtype == np.float64
    assert np.all((img >= 0.0) & (img <= 1.0))


def test_render_frame_defaults_to_config_dimensions(bh, front_camera):
    config = replace(QUIET, width=5, height=3, antialiasing=False)
    assert render_frame(front_camera, bh, config=config).shape == (3, 5, 3)


def test_render_frame_is_deterministic(bh, front_camera):
    config = replace(QUIET, antialiasing=False)
    a = render_frame(front_camera, bh, 8, 6, config)
    b = render_frame(front_camera, bh, 8, 6, config)
    assert np.array_equal(a, b)


def test_render_frame_sees_hole_and_disk(bh):
    # looking down at 45 degrees: the shadow covers the centre, the far side of the disk shows above it
    cam = Camera.look_at(Vector3(0, 10, -10), Vector3(), Vector3(0, 1, 0), math.radians(60))
    config = replace(QUIET, antialiasing=False)
    img, df = render_frame(cam, bh, 9, 9, config, photon_data=True)
    assert np.allclose(img[4, 4], 0.0)
    assert df['horizon'].sum() > 0
    assert df['disk'].sum() > 0


def test_parallel_render_matches_serial(bh, front_camera):
    config = replace(QUIET, antialiasing=False)
    serial = render_frame(front_camera, bh, 6, 4, config)
    parallel = render_frame(front_camera, bh, 6, 4, replace(config, workers=2))
    assert np.array_equal(serial, parallel)


def test_photon_data(bh, front_camera):
    img, df = render_frame(front_camera, bh, 4, 3, QUIET, photon_data=True)
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ['i', 'j', 'horizon', 'disk', 'escape', 'mean_steps']
    assert len(df) == 12
    assert list(df['i']) == [0, 0, 0, 0, 1, 1, 1, 1, 2, 2, 2, 2]
    assert (df[['horizon', 'disk', 'escape']].sum(axis=1) == 4).all()
    summary = summarize_photon_data(df)
    assert summary['captured'] + summary['disk'] + summary['escaped'] == 48


@pytest.mark.parametrize('w, h', [(0, 10), (10, 0), (-1, 5)])
def test_invalid_dimensions_rejected(bh, front_camera, w, h):
    with pytest.raises(ValueError):
        render_frame(front_camera, bh, w, h, QUIET)


def test_render_frame_logs_sample_count(bh, front_camera, caplog):
    with caplog.at_level(logging.INFO):
        render_frame(front_camera, bh, 2, 1, QUIET)
    assert '4 samples/pixel' in caplog.text


def test_front_view_reference_frame(bh, front_camera):
    img = render_frame(front_camera, bh, 4, 3, QUIET)
    expected = np.zeros((3, 4, 3))
    expected[0, 0, 0] = 0.01107431979709167
    assert img == pytest.approx(expected, rel=1e-9, abs=1e-12)


def test_wide_view_reference_frame(bh):
    cam = camera_from_preset('wide', fov=math.radians(45), aspect_ratio=4 / 3)
    img, df = render_frame(cam, bh, 4, 3, replace(QUIET, post_processing=False), photon_data=True)
    expected = np.array([
        [[0.141536668688889, 0.0721929527519357, 0.0704296365765146],
         [0.0670706397555491, 0.0298389899083309, 0.0274463299694436],
         [0.0626972940934277, 0.0281989852850354, 0.0268996617616785],
         [0.132864470173485, 0.0691049408086593, 0.0711502992620891]],
        [[0.116796940158593, 0.0697469001321258, 0.0912185638788041],
         [0.0, 0.0, 0.0],
         [0.0, 0.0, 0.0],
         [0.13285643139514, 0.0728645218458307, 0.0745744377833724]],
        [[0.383331763043507, 0.187522204492161, 0.113575660406708],
         [0.196022062739456, 0.093540157013503, 0.0545505830717426],
         [0.211708140796115, 0.0994224362847504, 0.0565113428288251],
         [0.431763073368424, 0.205683945864005, 0.119629574197322]],
    ])
    assert img == pytest.approx(expected, rel=1e-9, abs=1e-12)
    assert list(df['horizon']) == [0, 2, 2, 0, 0, 4, 4, 0, 0, 2, 2, 0]
    assert list(df['disk']) == [2, 1, 1, 2, 1, 0, 0, 1, 4, 2, 2, 4]
