# raytracing.py
from collections import namedtuple

import numpy as np

from .background import background_color
from .color import BLACK, Color
from .settings import DEFAULT_CONFIG

HORIZON = 'horizon'
DISK = 'disk'
ESCAPE = 'escape'

FLARE_COLOR = Color(0.8, 0.9, 1.0)

RayResult = namedtuple('RayResult', ['color', 'outcome', 'steps', 'distance', 'position', 'direction'])
RayResult.__doc__ = """
Final state of a marched ray.
color: Color returned to the renderer
outcome: one of HORIZON, DISK, ESCAPE
steps: number of completed march steps
distance: total path length travelled
position, direction: ray state when marching stopped
"""


def adaptive_step_size(distance, rs, config=DEFAULT_CONFIG):
    """Smaller steps closer to the hole, chosen from four distance bands."""
    if distance >= rs * config.band_far:
        return config.step_far
    if distance >= rs * config.band_medium:
        return config.step_medium
    if distance >= rs * config.band_near:
        return config.step_near
    return config.step_close


def shade_disk_hit(bh, position, hit, distance, config=DEFAULT_CONFIG):
    """Disk colour at hit, with optional lens flare and the proximity boost."""
    color = bh.calculate_accretion_disk_color(hit, turbulence=config.turbulence,
                                              doppler_shift=config.doppler_shift)
    hit_distance = position.distance_to(hit)
    intensity = 1.0 + 0.5 / (1.0 + hit_distance)

    if config.lens_flare and distance < bh.rs * config.lens_flare_radius_multiplier:
        flare_strength = 1.0 / (1.0 + (distance - bh.rs))
        color = color + FLARE_COLOR * flare_strength * config.lens_flare_intensity

    return color * intensity


def march_ray(origin, direction, bh, config=DEFAULT_CONFIG, path=None):
    """
    March a ray from origin until it is captured, hits the disk or runs out
    of its step / distance budget.
    If path is a list, every visited position is appended to it.
    Returns a RayResult.
    """
    position = origin
    total_distance = 0.0
    rs = bh.rs
    horizon = rs * bh.physics.horizon_margin
    if path is not None:
        path.append(position)

    steps = 0
    for step in range(config.max_ray_steps):
        distance = position.distance_to(bh.position)
        step_size = adaptive_step_size(distance, rs, config)

        if distance < horizon:
            return RayResult(BLACK, HORIZON, steps, total_distance, position, direction)

        # check the disk before moving; only count crossings within this step's reach
        hit = bh.intersects_accretion_disk(position, direction)
        if hit is not None and position.distance_to(hit) < step_size * 2.0:
            color = shade_disk_hit(bh, position, hit, distance, config)
            return RayResult(color, DISK, steps, total_distance, hit, direction)

        if step % config.lensing_update_frequency == 0:
            direction = bh.apply_gravitational_lensing(position, direction)

        position = position + direction * step_size
        total_distance += step_size
        steps += 1
        if path is not None:
            path.append(position)

        if total_distance > config.max_ray_distance:
            break

    return RayResult(background_color(direction, config), ESCAPE, steps, total_distance, position, direction)


def trace_ray(origin, direction, bh, config=DEFAULT_CONFIG):
    """Colour seen along a single ray. Pure: same inputs, same colour."""
    return march_ray(origin, direction, bh, config).color


def trace_ray_path(origin, direction, bh, config=DEFAULT_CONFIG):
    """
    Like march_ray, but also return the visited positions as an (N, 3) array.
    The last point is the disk hit for rays that struck the disk.
    """
    path = []
    result = march_ray(origin, direction, bh, config, path=path)
    if result.outcome == DISK:
        path.append(result.position)
    return result, np.array([p.to_array() for p in path], dtype=np.float64)
