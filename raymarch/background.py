#background.py
import hashlib
import logging
from functools import lru_cache

import numpy as np
from tqdm import tqdm

from .color import Color
from .settings import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

SPACE_COLOR = Color(0.03, 0.03, 0.08)
NEBULA_TINT = Color(0.1, 0.05, 0.15)

# (noise above, star colour, brightness gain); the brightest tier's gain comes from the config
STAR_TIERS = (
    (0.994, Color(1.0, 1.0, 1.0), None),   # bright white
    (0.985, Color(0.8, 0.8, 1.0), 15.0),   # blue
    (0.975, Color(1.0, 0.7, 0.5), 8.0),    # orange
)


@lru_cache(maxsize=1 << 16)
def _unit_hash(seed):
    """Stable hash of seed into [0, 1) in steps of 1/1000."""
    digest = hashlib.md5(seed.encode('ascii')).digest()
    return (int.from_bytes(digest[:8], 'little') % 1000) / 1000.0


def direction_noise(components, scale):
    """
    Deterministic pseudo-random value in [0, 1) for a direction.
    Each component is scaled and truncated toward zero, so directions
    sharing the same integer buckets share the same value.
    """
    seed = ','.join(str(int(c * scale)) for c in components)
    return _unit_hash(seed)


def background_color(direction, config=DEFAULT_CONFIG):
    """Procedural starfield / nebula colour seen along an escaped ray."""
    noise = direction_noise((direction.x, direction.y, direction.z), 1000)
    for threshold, color, gain in STAR_TIERS:
        if noise > threshold:
            if gain is None:
                gain = config.star_brightness
            return color * (noise - threshold) * gain

    nebula = direction_noise((direction.x, direction.y), 100)
    if nebula > config.nebula_threshold:
        return SPACE_COLOR + NEBULA_TINT * (nebula - config.nebula_threshold) * 0.5
    return SPACE_COLOR


def render_background(camera, width=None, height=None, config=DEFAULT_CONFIG):
    """
    Render the sky with no black hole in the scene (straight rays).
    Useful as a side-by-side reference for how much lensing distorts the
    background. Returns a (height, width, 3) float array in [0, 1].
    """
    w = config.width if width is None else width
    h = config.height if height is None else height
    if w <= 0 or h <= 0:
        raise ValueError(f"Image dimensions must be positive, got {w}x{h}")
    out_img = np.zeros((h, w, 3), dtype=np.float64)
    for i in tqdm(range(h), desc='Flat sky', unit='row', disable=not config.show_progress):
        for j in range(w):
            ray_dir = camera.get_ray_direction(j, i, w, h)
            out_img[i, j] = background_color(ray_dir, config).clamp().as_tuple()
    logger.info("Rendered %dx%d no-gravity background", w, h)
    return out_img
