"""Tests for nearest-hit search, shading and full-frame rendering."""

import math

import pytest
from PIL import Image

from objects import Ray, Plane, Sphere, UniformSurface, Light
from raytrace_cpu import World, render


def record_depths(world):
    """Wrap world.get_color so every recursive evaluation records its depth."""
    depths = []
    original = world.get_color

    def spy(ray, depth=0):
        depths.append(depth)
        return original(ray, depth)

    world.get_color = spy
    return depths


class TestCastRay:
    """Nearest valid hit search."""

    def test_empty_world_has_no_hit(self):
        world = World(void_color=(0.2, 0.4, 0.6))
        ray = Ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
        assert world.cast_ray(ray) is None
        assert world.get_color(ray) == (0.2, 0.4, 0.6)

    def test_ray_missing_everything_returns_void(self, floor_world):
        ray = Ray((0.0, 5.0, 0.0), (0.0, 1.0, 0.0))
        assert floor_world.cast_ray(ray) is None
        assert floor_world.get_color(ray) == floor_world.void_color

    def test_nearest_object_wins(self):
        world = World()
        world.add_object(Sphere(None, (0.0, 0.0, 30.0), 1.0))
        world.add_object(Sphere(None, (0.0, 0.0, 10.0), 1.0))
        assert world.cast_ray(Ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))) == 1

    def test_first_registered_wins_ties(self):
        world = World()
        world.add_object(Sphere(None, (0.0, 0.0, 10.0), 1.0))
        world.add_object(Sphere(None, (0.0, 0.0, 10.0), 1.0))
        assert world.cast_ray(Ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))) == 0

    def test_hits_within_epsilon_are_ignored(self, floor_world):
        # ray starting on the floor and leaving it
        ray = Ray((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        assert floor_world.cast_ray(ray) is None

    def test_registries_are_append_only(self):
        world = World()
        first = world.add_object(Sphere(None, (0.0, 0.0, 0.0), 1.0))
        world.add_object(first)
        world.add_light(Light((1.0, 1.0, 1.0), (0.0, 1.0, 0.0)))
        assert len(world.objects) == 2
        assert len(world.lights) == 1


class TestGetColor:
    """Local illumination with reflection."""

    def test_fully_lit_floor(self, floor_world):
        ray = Ray((0.0, 5.0, 0.0), (0.0, -1.0, 0.0))
        assert floor_world.get_color(ray) == (1.0, 1.0, 1.0)

    def test_diffuse_coefficient_caps_color(self, floor_world):
        floor_world.objects[0].surface.diffuse = 0.5
        ray = Ray((0.0, 5.0, 0.0), (0.0, -1.0, 0.0))
        assert floor_world.get_color(ray) == (0.5, 0.5, 0.5)

    def test_final_color_is_channel_minimum(self, floor_world):
        floor_world.objects[0].surface.base_color = (0.9, 0.2, 0.7)
        floor_world.objects[0].surface.diffuse = 0.5
        ray = Ray((0.0, 5.0, 0.0), (0.0, -1.0, 0.0))
        assert floor_world.get_color(ray) == (0.5, 0.2, 0.5)

    @pytest.mark.parametrize("light_position,expected", [
        ((10.0, 10.0, 0.0), 1.0 / math.sqrt(2.0)),
        ((10.0, 1.0, 0.0), 1.0 / math.sqrt(101.0)),
    ])
    def test_diffuse_follows_light_angle(self, floor_world, light_position, expected):
        floor_world.lights[0] = Light((1.0, 1.0, 1.0), light_position)
        ray = Ray((0.0, 5.0, 0.0), (0.0, -1.0, 0.0))
        assert floor_world.get_color(ray) == pytest.approx((expected,) * 3)

    def test_specular_uses_bisector_and_exponent(self, floor_world):
        surface = floor_world.objects[0].surface
        surface.diffuse = 0.0
        surface.specular = 1.0
        surface.phong = 2
        # 45 degree view, light straight above the hit point
        ray = Ray((10.0, 10.0, 0.0), (-1.0, -1.0, 0.0))
        expected = (2.0 + math.sqrt(2.0)) / 4.0
        assert floor_world.get_color(ray) == pytest.approx((expected,) * 3)

    def test_zero_bisector_with_zero_exponent(self, floor_world):
        surface = floor_world.objects[0].surface
        surface.diffuse = 0.0
        surface.specular = 0.4
        surface.phong = 0
        # light below the floor shines along the viewing ray, so s == 0 and 0 ** 0 == 1
        floor_world.lights[0] = Light((1.0, 1.0, 1.0), (0.0, -10.0, 0.0))
        ray = Ray((0.0, 5.0, 0.0), (0.0, -1.0, 0.0))
        assert floor_world.get_color(ray) == pytest.approx((0.4, 0.4, 0.4))

    def test_lights_accumulate_and_clamp(self, floor_world):
        floor_world.lights[0] = Light((0.3, 0.6, 0.9), (0.0, 10.0, 0.0))
        floor_world.add_light(Light((0.3, 0.6, 0.9), (0.0, 10.0, 0.0)))
        ray = Ray((0.0, 5.0, 0.0), (0.0, -1.0, 0.0))
        assert floor_world.get_color(ray) == pytest.approx((0.6, 1.0, 1.0))

    def test_occluded_point_gets_ambient_only(self, floor_world):
        floor_world.objects[0].surface.ambient = 0.2
        floor_world.add_object(Sphere(None, (0.0, 5.0, 0.0), 1.0))
        ray = Ray((2.0, 1.0, 0.0), (-2.0, -1.0, 0.0))
        assert floor_world.cast_ray(ray) == 0
        assert floor_world.get_color(ray) == (0.2, 0.2, 0.2)

    def test_objects_beyond_the_point_do_not_shadow(self, floor_world):
        floor_world.add_object(Sphere(None, (0.0, -5.0, 0.0), 1.0))
        ray = Ray((0.0, 5.0, 0.0), (0.0, -1.0, 0.0))
        assert floor_world.get_color(ray) == (1.0, 1.0, 1.0)

    def test_mirror_blends_reflection(self):
        world = World(void_color=(0.0, 0.0, 1.0))
        world.add_object(Plane(
            UniformSurface(color=(1.0, 0.0, 0.0), ambient=1.0, mirror=0.5),
            (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)))
        ray = Ray((0.0, 5.0, 0.0), (0.0, -1.0, 0.0))
        assert world.get_color(ray) == (0.5, 0.0, 0.5)

    def test_recursion_is_bounded(self, mirror_corridor):
        depths = record_depths(mirror_corridor)
        color = mirror_corridor.get_color(Ray((0.0, 5.0, 0.0), (0.0, -1.0, 0.0)))
        assert depths == list(range(12))
        assert all(0.0 <= c <= 1.0 for c in color)

    def test_color_for_ray_starts_at_depth_zero(self, mirror_corridor):
        depths = record_depths(mirror_corridor)
        mirror_corridor.color_for_ray(Ray((0.0, 5.0, 0.0), (0.0, 1.0, 0.0)))
        assert depths[0] == 0
        assert max(depths) == 11

    def test_out_of_range_coefficients_still_give_valid_colors(self):
        world = World()
        world.add_object(Sphere(
            UniformSurface(color=(2.0, -1.0, 0.5), ambient=-3.0, diffuse=7.0, specular=9.0, mirror=1.5),
            (0.0, 0.0, 10.0), 2.0))
        world.add_light(Light((1.0, 1.0, 1.0), (0.0, 10.0, 0.0)))
        color = world.get_color(Ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0)))
        assert all(0.0 <= c <= 1.0 for c in color)


class TestRender:
    def test_render_writes_image(self, small_context, tmp_path):
        output = tmp_path / "frame.png"
        img = render(small_context, str(output))
        assert img.size == (8, 6)
        assert output.exists()
        assert Image.open(output).size == (8, 6)

    def test_render_matches_per_pixel_colors(self, small_context):
        img = render(small_context, output_path=None)
        camera = small_context.camera
        expected = small_context.color_for_ray(camera.get_ray(3, 0))
        # bottom camera row is the last image row
        assert img.getpixel((3, 5)) == tuple(int(c * 255) for c in expected)
