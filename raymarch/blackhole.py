#blackhole.py
import math

from .color import Color
from .settings import DEFAULT_PHYSICS
from .vector import Vector3

# disk colour bands, hottest first: (temperature above, base colour)
DISK_COLOR_BANDS = (
    (0.8, Color(1.0, 0.95, 0.8)),   # hot white
    (0.6, Color(1.0, 0.8, 0.4)),    # yellow
    (0.4, Color(1.0, 0.6, 0.2)),    # orange
)
DISK_COLOR_COOL = Color(0.8, 0.3, 0.1)  # red

PARALLEL_EPSILON = 1e-6


class BlackHole:
    """
    Represents a non-rotating black hole with a thin accretion disk in the
    plane y = position.y.
    mass: normalized units, must be > 0
    position: 3-vector, same units as mass
    physics: PhysicsConfig with the radius multipliers and lensing strengths
    """
    def __init__(self, mass=1.0, position=Vector3(), physics=DEFAULT_PHYSICS):
        if not mass > 0:
            raise ValueError(f"Black hole mass must be positive, got {mass}")
        self.mass = float(mass)
        self.position = position
        self.physics = physics
        self.rs = physics.schwarzschild_multiplier * self.mass  # Schwarzschild radius
        self.photon_sphere_radius = physics.photon_sphere_multiplier * self.rs
        self.disk_inner_radius = physics.disk_inner_multiplier * self.rs
        self.disk_outer_radius = physics.disk_outer_multiplier * self.rs

    @property
    def schwarzschild_radius(self):
        return self.rs

    def gravitational_field(self, point):
        """Newtonian inverse-square field; zero at or inside the horizon."""
        displacement = point - self.position
        distance = displacement.length()
        if distance < self.rs * self.physics.horizon_margin:
            return Vector3()
        return displacement * (-self.mass / (distance * distance * distance))

    def apply_gravitational_lensing(self, ray_position, ray_direction):
        """
        Bend ray_direction towards the hole.
        Piecewise by distance: unchanged past the horizon, runaway bending
        inside the photon sphere, a small perpendicular nudge at moderate
        range and nothing beyond the lensing cutoff.
        """
        distance = (ray_position - self.position).length()
        strength = self.physics.lensing_strength

        if distance < self.photon_sphere_radius:
            if distance <= self.rs:
                return ray_direction  # captured; the integrator's horizon check handles it
            deflection = 1.0 / (distance - self.rs)
            toward_center = (self.position - ray_position).normalize()
            return (ray_direction + toward_center * deflection * strength).normalize()

        if distance >= self.rs * self.physics.lensing_cutoff_multiplier:
            return ray_direction

        angle = 2.0 * self.mass / (distance * distance)
        toward_center = (self.position - ray_position).normalize()
        perpendicular = ray_direction.cross(toward_center).cross(ray_direction).normalize()
        return (ray_direction + perpendicular * angle * strength).normalize()

    def disk_radius(self, point):
        """Distance of point from the hole's vertical (y) axis."""
        dx = point.x - self.position.x
        dz = point.z - self.position.z
        return math.sqrt(dx * dx + dz * dz)

    def intersects_accretion_disk(self, origin, direction):
        """
        Return the point where the ray hits the disk annulus, or None.
        Only hits within disk_intersection_threshold units of ray parameter
        count, so a long step cannot report a far-away crossing.
        """
        if abs(direction.y) < PARALLEL_EPSILON:
            return None
        t = (self.position.y - origin.y) / direction.y
        if t < 0.0 or t > self.physics.disk_intersection_threshold:
            return None
        hit = origin + direction * t
        r = self.disk_radius(hit)
        if self.disk_inner_radius <= r <= self.disk_outer_radius:
            return hit
        return None

    def disk_temperature(self, radius):
        p = self.physics
        return min(p.temperature_max, max(p.temperature_min, self.rs / radius))

    def calculate_accretion_disk_color(self, point, turbulence=True, doppler_shift=True):
        """
        Emitted disk colour at point (unclamped).
        Temperature falls off as r_s / r; the orbital-velocity Doppler factor
        and the angular turbulence term are optional.
        """
        p = self.physics
        radius = max(self.disk_radius(point), 1e-10)
        temperature = self.disk_temperature(radius)

        doppler = 1.0
        if doppler_shift:
            doppler += math.sqrt(self.mass / radius) * p.doppler_amplitude

        if turbulence:
            angle = math.atan2(point.z - self.position.z, point.x - self.position.x)
            temperature *= math.sin(angle * p.turbulence_frequency + radius * 2.0) * p.turbulence_amplitude + 1.0

        base = DISK_COLOR_COOL
        for threshold, color in DISK_COLOR_BANDS:
            if temperature > threshold:
                base = color
                break
        return base * temperature * doppler

    def __repr__(self):
        return f"BlackHole(mass={self.mass!r}, position={self.position!r})"
