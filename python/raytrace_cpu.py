"""
CPU Ray Tracer with planes, spheres and point lights.
Supports Phong local illumination and recursive mirror reflections up to a fixed depth.
"""
from typing import List, Optional, Tuple
from PIL import Image

from vecmath import (
    Color, BLACK, WHITE, add, sub, dot, norm, reflect, is_zero,
    color_add, color_scale, color_min
)
from objects import Ray, WorldObject, Light

MIN_CAST_DIST = 0.001
MAX_DEPTH = 10

class World:
    """Scene representation: primitives, lights and shading constants."""

    def __init__(self, min_cast_dist: float = MIN_CAST_DIST, max_depth: int = MAX_DEPTH,
                 void_color: Color = WHITE, ambient_color: Color = WHITE):
        self.min_cast_dist = min_cast_dist
        self.max_depth = max_depth
        self.void_color = tuple(void_color)
        self.ambient_color = tuple(ambient_color)
        self.objects: List[WorldObject] = []
        self.lights: List[Light] = []

    def add_object(self, obj: WorldObject) -> WorldObject:
        self.objects.append(obj)
        return obj

    def add_light(self, light: Light) -> Light:
        self.lights.append(light)
        return light

    def cast_ray(self, ray: Ray) -> Optional[int]:
        """Index of the nearest object hit beyond min_cast_dist, or None."""
        index = None
        smallest = 0.0
        for i, obj in enumerate(self.objects):
            t = obj.distance(ray)
            # strict comparison keeps the first registered object on ties
            if t > self.min_cast_dist and (index is None or t < smallest):
                smallest = t
                index = i
        return index

    def get_color(self, ray: Ray, depth: int = 0) -> Color:
        """
        Resolve a ray to a color.

        Local illumination is ambient plus diffuse and specular terms from every
        light whose ray from the light position first hits the same object. Mirror
        surfaces blend in a recursively traced reflection. The result is the
        surface color capped channel-wise by the accumulated light.
        """
        if depth > self.max_depth:
            return self.void_color

        hit = self.cast_ray(ray)
        if hit is None:
            return self.void_color

        obj = self.objects[hit]
        inter = obj.intersection(ray)
        normal = obj.normal(ray)
        surf = obj.surface

        light_color = color_scale(self.ambient_color, surf.ambient)

        for light in self.lights:
            light_ray = Ray(light.position, sub(inter, light.position))
            if self.cast_ray(light_ray) != hit:
                continue
            light_dir = light_ray.direction

            # diffuse
            diffusion = max(0.0, -dot(normal, light_dir))
            light_color = color_add(light_color, color_scale(light.color, surf.diffuse * diffusion))

            # specular
            bisector = norm(add(ray.direction, light_dir))
            s = max(0.0, -dot(normal, bisector))
            specular = s ** surf.phong if s > 0.0 or surf.phong >= 0 else 0.0
            light_color = color_add(light_color, color_scale(light.color, surf.specular * specular))

        mirror = surf.mirror_at(inter)
        base = surf.color_at(inter)
        if mirror != 0.0:
            reflection_dir = reflect(ray.direction, normal)
            if is_zero(reflection_dir):
                mirror_color = BLACK
            else:
                mirror_color = self.get_color(Ray(inter, reflection_dir), depth + 1)
            surface_color = color_add(color_scale(base, 1 - mirror), color_scale(mirror_color, mirror))
        else:
            surface_color = base

        return color_min(surface_color, light_color)

    def color_for_ray(self, ray: Ray) -> Color:
        return self.get_color(ray, 0)

def to_rgb8(c: Color) -> Tuple[int, int, int]:
    return (int(c[0] * 255), int(c[1] * 255), int(c[2] * 255))

def render(context, output_path: str = "render.png") -> Image.Image:
    """Full-frame render: one primary ray per pixel."""
    world = context.world
    camera = context.camera
    W, H = camera.width, camera.height

    img = Image.new("RGB", (W, H))
    pix = img.load()

    print(f"Rendering {W}x{H} image with max depth {world.max_depth}...")

    for y in range(H):
        if y % 50 == 0:
            print(f"Progress: {y}/{H} ({100*y//H}%)")
        for x in range(W):
            color = world.color_for_ray(camera.get_ray(x, y))
            # camera y grows upwards, image rows grow downwards
            pix[x, H - 1 - y] = to_rgb8(color)

    if output_path:
        img.save(output_path)
        print(f"Saved {output_path}")
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

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"render_{timestamp}_o{len(context.world.objects)}_l{len(context.world.lights)}_{context.camera.width}x{context.camera.height}.png"
    render(context, os.path.join(renders_dir, filename))
