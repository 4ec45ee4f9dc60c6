"""
Ray Path Visualization - follow a primary ray through its chain of mirror
reflections, using the same depth cutoff as the shader.
"""
from typing import Tuple, Optional, List, NamedTuple
from PIL import ImageDraw

from vecmath import Vec3, sub, dot, reflect, is_zero
from objects import Ray
from raytrace_cpu import World, render

ESCAPE_DISTANCE = 100.0

class PathSegment(NamedTuple):
    start: Vec3
    end: Vec3
    depth: int
    object_index: Optional[int]  # None when the ray escaped
    mirror: float

class RayPath:
    """Represents a traced reflection chain."""
    def __init__(self):
        self.segments: List[PathSegment] = []

    def add_segment(self, segment: PathSegment):
        self.segments.append(segment)

    @property
    def depth(self) -> int:
        return self.segments[-1].depth if self.segments else 0

    def escaped(self) -> bool:
        return bool(self.segments) and self.segments[-1].object_index is None

def trace_ray_path(world: World, ray: Ray) -> RayPath:
    """
    Record every hit get_color would visit for this ray.

    The chain continues while the hit surface has a nonzero mirror coefficient
    and stops at the first depth beyond world.max_depth.
    """
    path = RayPath()
    depth = 0

    while depth <= world.max_depth:
        hit = world.cast_ray(ray)
        if hit is None:
            path.add_segment(PathSegment(ray.origin, ray.at(ESCAPE_DISTANCE), depth, None, 0.0))
            break

        obj = world.objects[hit]
        inter = obj.intersection(ray)
        mirror = obj.surface.mirror_at(inter)
        path.add_segment(PathSegment(ray.origin, inter, depth, hit, mirror))

        if mirror == 0.0:
            break
        reflected = reflect(ray.direction, obj.normal(ray))
        if is_zero(reflected):
            break
        ray = Ray(inter, reflected)
        depth += 1

    return path

def project_point(camera, p3d: Vec3) -> Optional[Tuple[int, int]]:
    """Project a world point to image coordinates (row 0 at the top)."""
    rel = sub(p3d, camera.origin)
    # rotation is orthonormal, so its transpose takes world to camera space
    local = tuple(dot(col, rel) for col in zip(*camera.rotation))
    if local[2] < 0.1 or camera.pixel_size == 0.0:  # Behind camera
        return None

    px = int(local[0] / local[2] / camera.pixel_size) + camera.width // 2
    py = int(local[1] / local[2] / camera.pixel_size) + camera.height // 2
    if 0 <= px < camera.width and 0 <= py < camera.height:
        return (px, camera.height - 1 - py)
    return None

def render_with_ray_path(context, x: int, y: int, output_path: str = "render_path.png"):
    """Render the scene and overlay the reflection chain of the ray through pixel (x, y)."""
    camera = context.camera
    img = render(context, output_path=None)
    draw = ImageDraw.Draw(img)

    ray_path = trace_ray_path(context.world, camera.get_ray(x, y))
    print(f"Ray path traced: {len(ray_path.segments)} segments, depth {ray_path.depth}")

    for i, segment in enumerate(ray_path.segments):
        start_2d = project_point(camera, segment.start)
        end_2d = project_point(camera, segment.end)
        if start_2d is None or end_2d is None:
            continue

        # Bright for the primary ray, fading with reflection depth
        fade = max(0, 255 - 20 * segment.depth)
        color = (255, fade, 50)
        draw.line([start_2d, end_2d], fill=color, width=2 if segment.depth == 0 else 1)
        if i < len(ray_path.segments) - 1:
            draw.ellipse([end_2d[0]-2, end_2d[1]-2, end_2d[0]+2, end_2d[1]+2],
                         fill=color, outline=color)

    for light in context.world.lights:
        light_2d = project_point(camera, light.position)
        if light_2d:
            for radius in [8, 6, 4]:
                draw.ellipse([light_2d[0]-radius, light_2d[1]-radius,
                              light_2d[0]+radius, light_2d[1]+radius],
                             fill=(255, 255, 200), outline=(255, 255, 150))

    if output_path:
        img.save(output_path)
        print(f"Saved ray path visualization: {output_path}")
    return img

if __name__ == "__main__":
    import os
    from datetime import datetime
    from scene import load_scene, validate_scene, build_context

    scene_path = "../scene.json" if os.path.exists("../scene.json") else "scene.json"
    scene_data = load_scene(scene_path)
    validate_scene(scene_data)
    context = build_context(scene_data)

    renders_dir = "../renders" if os.path.exists("../scene.json") else "renders"
    os.makedirs(renders_dir, exist_ok=True)

    # Ray through the image center
    x, y = context.camera.width // 2, context.camera.height // 2

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"raypath_{timestamp}.png"
    render_with_ray_path(context, x, y, os.path.join(renders_dir, filename))
