#camera.py
import math
from collections import namedtuple

from .vector import Vector3
from .settings import DEFAULT_CONFIG


class Camera:
    """
    Pinhole camera.
    position: 3-vector
    direction: viewing direction (normalized on construction)
    up: approximate up vector, need not be orthogonal to direction
    fov: vertical field of view in radians
    aspect_ratio: width / height, the only attribute that may change after construction
    """
    def __init__(self, position, direction, up, fov=DEFAULT_CONFIG.field_of_view, aspect_ratio=1.0):
        self.position = position
        self.direction = direction.normalize()
        self.up = up.normalize()
        self.fov = fov
        self.aspect_ratio = aspect_ratio

    @classmethod
    def look_at(cls, position, target, up=Vector3(0, 1, 0), fov=DEFAULT_CONFIG.field_of_view, aspect_ratio=1.0):
        return cls(position, target - position, up, fov, aspect_ratio)

    def set_aspect_ratio(self, aspect):
        self.aspect_ratio = aspect

    def get_ray_direction(self, x, y, width, height):
        """
        Unit direction of the ray through pixel (x, y).
        x, y may be fractional (sub-pixel samples); y grows downwards in the
        image and upwards in camera space.
        """
        scale = math.tan(self.fov * 0.5)

        # normalized device coordinates in [-1, 1]
        px = (2.0 * x / width - 1.0) * scale * self.aspect_ratio
        py = (1.0 - 2.0 * y / height) * scale

        # orthonormal basis; tolerates a non-orthogonal input up vector
        right = self.direction.cross(self.up).normalize()
        true_up = right.cross(self.direction).normalize()

        return (self.direction + right * px + true_up * py).normalize()

    def __repr__(self):
        return (f"Camera(position={self.position!r}, direction={self.direction!r}, "
                f"up={self.up!r}, fov={self.fov!r}, aspect_ratio={self.aspect_ratio!r})")


CameraPreset = namedtuple('CameraPreset', ['name', 'position', 'target', 'up'])

CAMERA_PRESETS = [
    CameraPreset('Front View', Vector3(0.0, 2.0, -8.0), Vector3(), Vector3(0.0, 1.0, 0.0)),
    CameraPreset('Side View', Vector3(-6.0, 1.0, -4.0), Vector3(), Vector3(0.0, 1.0, 0.0)),
    CameraPreset('Top View', Vector3(0.0, 5.0, -6.0), Vector3(), Vector3(0.0, 0.0, -1.0)),
    CameraPreset('Close View', Vector3(0.0, 1.0, -4.0), Vector3(), Vector3(0.0, 1.0, 0.0)),
    CameraPreset('Wide View', Vector3(0.0, 3.0, -12.0), Vector3(), Vector3(0.0, 1.0, 0.0)),
]


def preset_key(name):
    """'Front View' -> 'front'"""
    return name.lower().replace(' view', '').replace(' ', '-')


def get_preset(name):
    key = preset_key(name)
    for preset in CAMERA_PRESETS:
        if preset_key(preset.name) == key:
            return preset
    raise ValueError(f"Unknown camera preset {name!r}; choose from "
                     f"{', '.join(preset_key(p.name) for p in CAMERA_PRESETS)}")


def camera_from_preset(name, fov=DEFAULT_CONFIG.field_of_view, aspect_ratio=1.0):
    preset = get_preset(name)
    return Camera.look_at(preset.position, preset.target, preset.up, fov, aspect_ratio)
