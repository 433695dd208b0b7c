import numpy as np

from raymarch.image import load_image, save_image, save_ppm, to_bytes


def test_to_bytes_truncates():
    img = np.array([[[0.0, 0.5, 1.0], [0.999, 1.5, -0.2]]])
    out = to_bytes(img)
    assert out.dtype == np.uint8
    assert out.tolist() == [[[0, 127, 255], [254, 255, 0]]]


def test_save_ppm_plain_format(tmp_path):
    img = np.zeros((2, 3, 3))
    img[0, 0] = (1.0, 0.0, 0.0)
    img[1, 2] = (0.2, 0.4, 0.6)
    path = tmp_path / 'frame.ppm'
    save_ppm(img, str(path))
    lines = path.read_text().splitlines()
    assert lines[:3] == ['P3', '3 2', '255']
    assert len(lines) == 3 + 6
    assert lines[3] == '255 0 0'
    assert lines[-1] == '51 102 153'


def test_save_image_png_round_trip(tmp_path):
    img = np.random.default_rng(0).random((5, 7, 3))
    path = tmp_path / 'nested' / 'frame.png'
    save_image(img, str(path))
    back = load_image(str(path))
    assert back.shape == (5, 7, 3)
    assert np.array_equal((back * 255).round().astype(np.uint8), to_bytes(img))


def test_save_image_ppm_by_extension(tmp_path):
    path = tmp_path / 'frame.ppm'
    save_image(np.full((1, 2, 3), 0.5), str(path))
    assert path.read_text().startswith('P3\n2 1\n255\n127 127 127\n')
