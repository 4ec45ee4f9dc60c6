"""
Vector, rotation matrix and color helpers.
Vectors and colors are plain 3-tuples; matrices are tuples of three row tuples.
"""
import math
from typing import Tuple

Vec3 = Tuple[float, float, float]
Mat3 = Tuple[Vec3, Vec3, Vec3]
Color = Tuple[float, float, float]

# Vector math utilities
def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])

def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])

def mul(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)

def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]

def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0]
    )

def length2(v: Vec3) -> float:
    return dot(v, v)

def length(v: Vec3) -> float:
    return math.sqrt(dot(v, v))

def norm(v: Vec3) -> Vec3:
    l = length(v)
    if l < 1e-8:
        return (0.0, 0.0, 0.0)
    return mul(v, 1.0 / l)

def unit(v: Vec3) -> Vec3:
    """Exact normalization; only the zero vector stays zero."""
    l = math.hypot(v[0], v[1], v[2])
    if l == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / l, v[1] / l, v[2] / l)

def is_zero(v: Vec3) -> bool:
    return v[0] == 0.0 and v[1] == 0.0 and v[2] == 0.0

def reflect(rd: Vec3, n: Vec3) -> Vec3:
    """Reflect ray direction rd off surface with normal n."""
    return sub(rd, mul(n, 2.0 * dot(rd, n)))

# Rotation matrices
IDENTITY: Mat3 = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))

def mat_mul(a: Mat3, b: Mat3) -> Mat3:
    cols = list(zip(*b))
    return tuple(tuple(dot(row, col) for col in cols) for row in a)

def mat_vec(m: Mat3, v: Vec3) -> Vec3:
    return (dot(m[0], v), dot(m[1], v), dot(m[2], v))

def rotate_horizontal(m: Mat3, angle: float) -> Mat3:
    """Compose m with a rotation about the x axis (pitch)."""
    c, s = math.cos(angle), math.sin(angle)
    return mat_mul(m, ((1.0, 0.0, 0.0), (0.0, c, -s), (0.0, s, c)))

def rotate_vertical(m: Mat3, angle: float) -> Mat3:
    """Compose m with a rotation about the y axis (yaw)."""
    c, s = math.cos(angle), math.sin(angle)
    return mat_mul(m, ((c, 0.0, s), (0.0, 1.0, 0.0), (-s, 0.0, c)))

def rotation_matrix(pitch: float, yaw: float) -> Mat3:
    """Identity rotated by yaw, then by pitch."""
    return rotate_horizontal(rotate_vertical(IDENTITY, yaw), pitch)

# Colors; every combination stays inside [0, 1]
BLACK: Color = (0.0, 0.0, 0.0)
WHITE: Color = (1.0, 1.0, 1.0)

def clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))

def color(r: float, g: float, b: float) -> Color:
    return (clamp01(r), clamp01(g), clamp01(b))

def color_add(a: Color, b: Color) -> Color:
    return color(a[0] + b[0], a[1] + b[1], a[2] + b[2])

def color_scale(c: Color, s: float) -> Color:
    return color(c[0] * s, c[1] * s, c[2] * s)

def color_min(a: Color, b: Color) -> Color:
    """Channel-wise cap of a by b."""
    return color(min(a[0], b[0]), min(a[1], b[1]), min(a[2], b[2]))
