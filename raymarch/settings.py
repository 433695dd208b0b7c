#settings.py
import json
import logging
import math
import os
from dataclasses import asdict, dataclass, fields

# ---
# NORMALIZED UNITS: G = c = 1
# Schwarzschild radius: r_s = schwarzschild_multiplier * M
# ---

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhysicsConfig:
    """
    Multipliers and strengths of the approximate lensing model.
    Radii are expressed as multiples of the Schwarzschild radius.
    """
    schwarzschild_multiplier: float = 2.0
    photon_sphere_multiplier: float = 1.5
    disk_inner_multiplier: float = 3.0
    disk_outer_multiplier: float = 10.0
    lensing_strength: float = 0.1
    lensing_cutoff_multiplier: float = 10.0
    horizon_margin: float = 1.01
    disk_intersection_threshold: float = 2.0
    turbulence_frequency: float = 8.0
    turbulence_amplitude: float = 0.15
    doppler_amplitude: float = 0.1
    temperature_min: float = 0.1
    temperature_max: float = 1.0

    def __post_init__(self):
        for name in ('schwarzschild_multiplier', 'photon_sphere_multiplier',
                     'disk_inner_multiplier', 'disk_outer_multiplier',
                     'lensing_cutoff_multiplier', 'horizon_margin',
                     'disk_intersection_threshold'):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.disk_inner_multiplier < 1.0:
            raise ValueError("disk_inner_multiplier must keep the disk outside the horizon (>= 1)")
        if self.disk_inner_multiplier > self.disk_outer_multiplier:
            raise ValueError("disk_inner_multiplier must not exceed disk_outer_multiplier")
        if not 0 < self.temperature_min <= self.temperature_max:
            raise ValueError("temperature range must satisfy 0 < temperature_min <= temperature_max")


@dataclass(frozen=True)
class RenderConfig:
    """
    Everything the integrator and frame renderer need, passed explicitly.
    Feature toggles (antialiasing, lens_flare, turbulence, doppler_shift)
    select between the renderer variants; they do not change the
    marching loop itself.
    """
    # image
    width: int = 800
    height: int = 600
    field_of_view: float = 0.785398  # 45 degrees
    # marching budget
    max_ray_steps: int = 500
    max_ray_distance: float = 50.0
    # adaptive step sizes and the distance bands (in r_s) selecting them
    step_far: float = 0.4
    step_medium: float = 0.2
    step_near: float = 0.1
    step_close: float = 0.05
    band_far: float = 8.0
    band_medium: float = 5.0
    band_near: float = 2.0
    lensing_update_frequency: int = 3
    # sampling and post-processing
    antialiasing: bool = True
    supersampling_level: int = 2
    post_processing: bool = True
    contrast: float = 1.2
    gamma_correction: bool = False
    gamma: float = 2.2
    clamp_colors: bool = True
    # effects
    lens_flare: bool = True
    lens_flare_intensity: float = 0.3
    lens_flare_radius_multiplier: float = 4.0
    doppler_shift: bool = True
    turbulence: bool = True
    star_brightness: float = 50.0
    nebula_threshold: float = 0.7
    # execution
    workers: int = 1
    show_progress: bool = True

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if not 0 < self.field_of_view < math.pi:
            raise ValueError("field_of_view must lie in (0, pi) radians")
        if self.max_ray_steps <= 0 or self.max_ray_distance <= 0:
            raise ValueError("max_ray_steps and max_ray_distance must be positive")
        for name in ('step_far', 'step_medium', 'step_near', 'step_close', 'gamma'):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if not self.band_far >= self.band_medium >= self.band_near > 0:
            raise ValueError("distance bands must satisfy band_far >= band_medium >= band_near > 0")
        if self.lensing_update_frequency < 1:
            raise ValueError("lensing_update_frequency must be >= 1")
        if self.supersampling_level < 1:
            raise ValueError("supersampling_level must be >= 1")
        if self.workers < 1:
            raise ValueError("workers must be >= 1")

    @property
    def aspect_ratio(self):
        return self.width / self.height

    @property
    def samples_per_axis(self):
        return self.supersampling_level if self.antialiasing else 1


DEFAULT_PHYSICS = PhysicsConfig()
DEFAULT_CONFIG = RenderConfig()


def describe_config(config, physics=DEFAULT_PHYSICS):
    """Log every configuration field at INFO level."""
    for section in (config, physics):
        logger.info("%s:", type(section).__name__)
        for f in fields(section):
            logger.info("  %-30s %s", f.name, getattr(section, f.name))


def export_config(path, config=DEFAULT_CONFIG, physics=DEFAULT_PHYSICS):
    """Write the render and physics configuration to *path* as JSON."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w') as fh:
        json.dump({'render': asdict(config), 'physics': asdict(physics)}, fh, indent=2)
    logger.info("Exported configuration to %s", path)


def load_config(path):
    """Inverse of export_config: returns (RenderConfig, PhysicsConfig)."""
    with open(path) as fh:
        data = json.load(fh)
    return RenderConfig(**data.get('render', {})), PhysicsConfig(**data.get('physics', {}))
