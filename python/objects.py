"""
Scene entities: rays, surfaces (materials), primitives and point lights.
"""
import math
from typing import Optional

from vecmath import Vec3, Color, add, sub, mul, dot, length2, norm, unit, color

NO_HIT = -1.0

class Ray:
    """Origin plus a direction that is always unit length (or zero when degenerate)."""
    def __init__(self, origin: Vec3, direction: Vec3):
        self.origin = tuple(origin)
        self.direction = unit(tuple(direction))

    def at(self, t: float) -> Vec3:
        return add(self.origin, mul(self.direction, t))

    def __repr__(self):
        return f"Ray(origin={self.origin}, direction={self.direction})"

class Surface:
    """Material coefficients shared by all surface variants."""

    def __init__(self, color: Color = (1.0, 0.0, 0.0),
                 ambient: float = 0.3, diffuse: float = 0.4, specular: float = 0.5,
                 phong: int = 20, mirror: float = 0.0):
        self.base_color = tuple(color)
        self.ambient = ambient
        self.diffuse = diffuse
        self.specular = specular
        self.phong = phong
        self.mirror = mirror

    def color_at(self, point: Vec3) -> Color:
        raise NotImplementedError

    def mirror_at(self, point: Vec3) -> float:
        return self.mirror

class UniformSurface(Surface):
    """The same base color everywhere."""

    def color_at(self, point: Vec3) -> Color:
        return self.base_color

class PatternSurface(Surface):
    """Base color modulated by sin(|x| mod pi) * sin(|z| mod pi)."""

    def color_at(self, point: Vec3) -> Color:
        k = math.sin(math.fmod(abs(point[0]), math.pi)) * math.sin(math.fmod(abs(point[2]), math.pi))
        r, g, b = self.base_color
        return color(r * k, g * k, b * k)

class Light:
    """Point light without distance falloff."""
    def __init__(self, color: Color, position: Vec3):
        self._color = tuple(color)
        self._position = tuple(position)

    @property
    def color(self) -> Color:
        return self._color

    @property
    def position(self) -> Vec3:
        return self._position

class WorldObject:
    """Primitive owning one surface. Subclasses provide distance and normal."""

    def __init__(self, surface: Optional[Surface] = None):
        self.surface = surface if surface is not None else UniformSurface()

    def distance(self, ray: Ray) -> float:
        raise NotImplementedError

    def normal(self, ray: Ray) -> Vec3:
        raise NotImplementedError

    def intersection(self, ray: Ray) -> Vec3:
        return ray.at(self.distance(ray))

class Plane(WorldObject):
    """Infinite plane through point with a fixed normal (not flipped towards the ray)."""

    def __init__(self, surface: Optional[Surface], point: Vec3, normal: Vec3):
        super().__init__(surface)
        self.point = tuple(point)
        self.plane_normal = norm(tuple(normal))

    def distance(self, ray: Ray) -> float:
        denom = dot(ray.direction, self.plane_normal)
        if denom == 0.0:
            return NO_HIT
        return -dot(self.plane_normal, sub(ray.origin, self.point)) / denom

    def normal(self, ray: Ray) -> Vec3:
        return self.plane_normal

class Sphere(WorldObject):
    def __init__(self, surface: Optional[Surface], center: Vec3, radius: float):
        super().__init__(surface)
        self.center = tuple(center)
        self.radius = radius

    def distance(self, ray: Ray) -> float:
        oc = sub(ray.origin, self.center)
        a = length2(ray.direction)
        if a == 0.0:
            return NO_HIT
        b = 2.0 * dot(ray.direction, oc)
        c = length2(oc) - self.radius * self.radius
        disc = b * b - 4 * a * c
        if disc < 0:
            return NO_HIT

        sdisc = math.sqrt(disc)
        t0 = (-b - sdisc) / (2 * a)
        t1 = (-b + sdisc) / (2 * a)
        if t1 <= 0:
            return NO_HIT
        # origin inside the sphere: fall back to the far root
        return t0 if t0 > 0 else t1

    def normal(self, ray: Ray) -> Vec3:
        return norm(sub(self.intersection(ray), self.center))
