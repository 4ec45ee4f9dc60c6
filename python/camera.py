"""Pinhole camera with pitch/yaw orientation and relative movement."""
import math
from typing import Tuple

from vecmath import Vec3, Mat3, add, mat_vec, rotation_matrix
from objects import Ray

class Camera:
    """
    Maps pixel coordinates to world-space rays.

    Pitch ("horizontal" rotation, about x) is clamped to [-pi/2, pi/2]; yaw
    ("vertical" rotation, about y) is unbounded. There is no roll.
    """

    def __init__(self, width: int, height: int, origin: Vec3,
                 rot_horizontal: float = 0.0, rot_vertical: float = 0.0, viewport: float = 1.5):
        self.origin: Vec3 = tuple(origin)
        self.viewport = viewport
        self.rot_horizontal = 0.0
        self.rot_vertical = 0.0
        self.rotation: Mat3 = rotation_matrix(0.0, 0.0)
        self.set_rotation(rot_horizontal, rot_vertical)
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.pixel_size = math.tan(self.viewport / 2.0) / width if width > 0 else 0.0

    def set_rotation(self, rot_horizontal: float, rot_vertical: float) -> None:
        self.rot_horizontal = min(math.pi / 2, max(-math.pi / 2, rot_horizontal))
        self.rot_vertical = rot_vertical
        self.rotation = rotation_matrix(self.rot_horizontal, self.rot_vertical)

    def rotate_relative(self, d_pitch: float, d_yaw: float) -> None:
        self.set_rotation(self.rot_horizontal + d_pitch, self.rot_vertical + d_yaw)

    def move_relative(self, delta: Vec3) -> None:
        """Move along the current facing."""
        self.origin = add(self.origin, mat_vec(self.rotation, tuple(delta)))

    def local_direction(self, x: int, y: int) -> Tuple[float, float, float]:
        rel_x = x - self.width // 2
        rel_y = y - self.height // 2
        return (rel_x * self.pixel_size, rel_y * self.pixel_size, 1.0)

    def get_ray(self, x: int, y: int) -> Ray:
        return Ray(self.origin, mat_vec(self.rotation, self.local_direction(x, y)))
