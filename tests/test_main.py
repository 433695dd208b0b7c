import pandas as pd

import main
from raymarch.image import load_image


def test_main_renders_views_and_diagnostics(tmp_path):
    out = tmp_path / 'images'
    main.main(['--width', '6', '--height', '4', '--no-antialiasing', '--view', 'front', '--view', 'top',
               '--output-dir', str(out), '--format', 'png', '--photon-data', '--sample-rays', '3',
               '--no-gravity', '--quiet', '--export-config', str(out / 'config.json')])

    for n in (1, 2):
        img = load_image(str(out / f'black_hole_{n}.png'))
        assert img.shape == (4, 6, 3)
    assert (out / 'no_gravity_front.png').exists()
    assert (out / 'config.json').exists()

    photon = pd.read_csv(out / 'photon_data_top.csv')
    assert len(photon) == 24
    rays = pd.read_csv(out / 'sampled_rays_front.csv')
    assert rays['ray_id'].nunique() == 3
    assert set(rays['outcome']) <= {'horizon', 'disk', 'escape'}
    assert (out / 'scene_side_front.png').exists()
    assert (out / 'scene_topdown_top.png').exists()


def test_main_writes_plain_ppm(tmp_path):
    main.main(['--width', '3', '--height', '2', '--no-antialiasing', '--view', 'side',
               '--output-dir', str(tmp_path), '--prefix', 'bh_', '--quiet'])
    text = (tmp_path / 'bh_1.ppm').read_text()
    assert text.startswith('P3\n3 2\n255\n')
    assert len(text.strip().splitlines()) == 3 + 6
