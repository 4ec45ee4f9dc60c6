"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Make the flat modules importable without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "python"))

from objects import Plane, Sphere, UniformSurface, Light
from raytrace_cpu import World
from camera import Camera
from render_context import RenderContext


@pytest.fixture(scope="session")
def project_root_path():
    """Provide the project root path."""
    return project_root


@pytest.fixture
def sample_scene():
    """Minimal scene data: floor plane, one sphere, one light."""
    return {
        "camera": {
            "position": [0.0, 2.0, -10.0],
            "rotation_horizontal": 0.0,
            "rotation_vertical": 0.0,
            "viewport": 1.5,
        },
        "render": {"width": 8, "height": 6, "batch_size": 5},
        "lights": [{"color": [1.0, 1.0, 1.0], "position": [0.0, 20.0, 0.0]}],
        "objects": [
            {
                "type": "plane",
                "point": [0.0, 0.0, 0.0],
                "normal": [0.0, 1.0, 0.0],
                "surface": {"type": "pattern", "color": [0.8, 0.8, 0.8], "mirror": 0.2},
            },
            {
                "type": "sphere",
                "center": [0.0, 2.0, 0.0],
                "radius": 2.0,
                "surface": {"color": [0.0, 0.0, 1.0]},
            },
        ],
    }


@pytest.fixture
def floor_world():
    """Single white floor at y=0 lit from straight above."""
    world = World()
    world.add_object(Plane(
        UniformSurface(color=(1.0, 1.0, 1.0), ambient=0.0, diffuse=1.0, specular=0.0),
        (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)))
    world.add_light(Light((1.0, 1.0, 1.0), (0.0, 10.0, 0.0)))
    return world


@pytest.fixture
def mirror_corridor():
    """Two facing perfect mirrors; a vertical ray bounces between them forever."""
    world = World()
    surface = dict(color=(1.0, 1.0, 1.0), mirror=1.0)
    world.add_object(Plane(UniformSurface(**surface), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)))
    world.add_object(Plane(UniformSurface(**surface), (0.0, 10.0, 0.0), (0.0, -1.0, 0.0)))
    return world


@pytest.fixture
def small_context():
    """8x6 render context looking at a sphere above a floor."""
    world = World(void_color=(0.1, 0.2, 0.3))
    world.add_object(Plane(UniformSurface(color=(0.8, 0.8, 0.8)), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)))
    world.add_object(Sphere(UniformSurface(color=(0.0, 0.0, 1.0), mirror=0.3), (0.0, 2.0, 0.0), 2.0))
    world.add_light(Light((1.0, 1.0, 1.0), (5.0, 20.0, -5.0)))
    camera = Camera(8, 6, (0.0, 2.0, -10.0), 0.0, 0.0, 1.5)
    return RenderContext(world, camera, batch_size=4)
