# renderer.py
import logging
from concurrent.futures import ProcessPoolExecutor, as_completed

import numpy as np
import pandas as pd
from tqdm import tqdm

from .color import Color
from .raytracing import DISK, ESCAPE, HORIZON, march_ray
from .settings import DEFAULT_CONFIG

logger = logging.getLogger(__name__)


def sample_offsets(config=DEFAULT_CONFIG):
    """
    Sub-pixel offsets for one axis: an N x N grid centred in the pixel when
    antialiasing is on, the pixel coordinate itself otherwise.
    """
    if not config.antialiasing:
        return (0.0,)
    n = config.samples_per_axis
    return tuple((d + 0.5) / n for d in range(n))


def post_process(color, config=DEFAULT_CONFIG):
    if config.post_processing:
        color = color.enhance_contrast(config.contrast)
    if config.gamma_correction:
        color = color.gamma_correct(config.gamma)
    if config.clamp_colors:
        color = color.clamp()
    return color


def render_pixel(camera, bh, x, y, width, height, config=DEFAULT_CONFIG, counts=None):
    """
    Average the supersampled rays through pixel (x, y) and post-process.
    If counts is a dict it is updated with per-outcome sample counts and
    the total march steps under 'steps'.
    """
    offsets = sample_offsets(config)
    total = Color()
    for dx in offsets:
        for dy in offsets:
            direction = camera.get_ray_direction(x + dx, y + dy, width, height)
            result = march_ray(camera.position, direction, bh, config)
            total = total + result.color
            if counts is not None:
                counts[result.outcome] += 1
                counts['steps'] += result.steps
    return post_process(total * (1.0 / (len(offsets) * len(offsets))), config)


def _render_row(camera, bh, y, width, height, config, photon_data=False):
    """Render one image row; runs in a worker process when workers > 1."""
    row = np.zeros((width, 3), dtype=np.float64)
    stats = [] if photon_data else None
    for x in range(width):
        counts = {HORIZON: 0, DISK: 0, ESCAPE: 0, 'steps': 0} if photon_data else None
        row[x] = render_pixel(camera, bh, x, y, width, height, config, counts).as_tuple()
        if photon_data:
            n = counts[HORIZON] + counts[DISK] + counts[ESCAPE]
            stats.append({'i': y, 'j': x,
                          HORIZON: counts[HORIZON], DISK: counts[DISK], ESCAPE: counts[ESCAPE],
                          'mean_steps': counts['steps'] / n})
    return y, row, stats


def _iter_rows(camera, bh, width, height, config, photon_data):
    if config.workers > 1:
        with ProcessPoolExecutor(max_workers=config.workers) as executor:
            futures = [executor.submit(_render_row, camera, bh, y, width, height, config, photon_data)
                       for y in range(height)]
            for future in as_completed(futures):
                yield future.result()
    else:
        for y in range(height):
            yield _render_row(camera, bh, y, width, height, config, photon_data)


def render_frame(camera, bh, width=None, height=None, config=DEFAULT_CONFIG, photon_data=False):
    """
    Render the full frame.
    Returns a (height, width, 3) float64 array in [0, 1] (row-major, origin
    top-left). With photon_data=True also returns a DataFrame with one row
    per pixel holding the outcome counts of its samples.
    Rows are independent, so config.workers > 1 spreads them over a
    process pool without changing the result.
    """
    w = config.width if width is None else width
    h = config.height if height is None else height
    if w <= 0 or h <= 0:
        raise ValueError(f"Image dimensions must be positive, got {w}x{h}")

    logger.info("Rendering %dx%d (%d samples/pixel, %d worker(s))...",
                w, h, config.samples_per_axis ** 2, config.workers)
    img = np.zeros((h, w, 3), dtype=np.float64)
    photon_rows = []
    report_every = max(1, h // 10)

    rows = _iter_rows(camera, bh, w, h, config, photon_data)
    for done, (y, row, stats) in enumerate(tqdm(rows, total=h, desc='Ray marching', unit='row',
                                                 disable=not config.show_progress)):
        img[y] = row
        if stats:
            photon_rows.extend(stats)
        if done % report_every == 0:
            logger.info("Progress: %d%%", 100 * done // h)
    logger.info("Rendering complete")

    if photon_data:
        df = pd.DataFrame(photon_rows, columns=['i', 'j', HORIZON, DISK, ESCAPE, 'mean_steps'])
        return img, df.sort_values(['i', 'j']).reset_index(drop=True)
    return img


def summarize_photon_data(df):
    """Total sample outcomes of a photon_data frame."""
    summary = {
        'captured': int(df[HORIZON].sum()),
        'disk': int(df[DISK].sum()),
        'escaped': int(df[ESCAPE].sum()),
    }
    logger.info("Summary: %d samples captured by BH, %d hit the disk, %d escaped.",
                summary['captured'], summary['disk'], summary['escaped'])
    return summary
