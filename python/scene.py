"""Scene loading and validation from scene.json"""
import json
from typing import Dict, Any

from objects import Light, Plane, Sphere, Surface, UniformSurface, PatternSurface, WorldObject
from raytrace_cpu import World, MIN_CAST_DIST, MAX_DEPTH
from camera import Camera
from render_context import RenderContext

SURFACE_TYPES = {
    "uniform": UniformSurface,
    "pattern": PatternSurface,
}

def load_scene(json_path: str = "scene.json") -> Dict[str, Any]:
    """Load scene configuration from JSON file."""
    with open(json_path, 'r') as f:
        return json.load(f)

def validate_scene(scene: Dict[str, Any]) -> None:
    """Basic validation of scene structure."""
    assert "camera" in scene, "Scene must have camera"
    assert "render" in scene, "Scene must have render settings"
    assert "objects" in scene, "Scene must have objects"
    assert "lights" in scene, "Scene must have lights"

    # Validate camera
    cam = scene["camera"]
    assert "position" in cam and len(cam["position"]) == 3
    assert "viewport" in cam

    # Validate render settings
    render = scene["render"]
    assert "width" in render and "height" in render

    # Validate objects
    for obj in scene["objects"]:
        assert obj.get("type") in ("plane", "sphere"), f"Unknown object type: {obj.get('type')}"
        if obj["type"] == "plane":
            assert "point" in obj and len(obj["point"]) == 3
            assert "normal" in obj and len(obj["normal"]) == 3
        else:
            assert "center" in obj and len(obj["center"]) == 3
            assert "radius" in obj
        surface = obj.get("surface", {})
        assert surface.get("type", "uniform") in SURFACE_TYPES, f"Unknown surface type: {surface.get('type')}"

    # Validate lights
    for light in scene["lights"]:
        assert "position" in light and len(light["position"]) == 3
        assert "color" in light and len(light["color"]) == 3

    print("Scene validation passed!")

def build_surface(data: Dict[str, Any]) -> Surface:
    kind = data.get("type", "uniform")
    if kind not in SURFACE_TYPES:
        raise ValueError(f"Unknown surface type: {kind}")
    return SURFACE_TYPES[kind](
        color=tuple(data.get("color", (1.0, 0.0, 0.0))),
        ambient=data.get("ambient", 0.3),
        diffuse=data.get("diffuse", 0.4),
        specular=data.get("specular", 0.5),
        phong=data.get("phong", 20),
        mirror=data.get("mirror", 0.0),
    )

def build_object(data: Dict[str, Any]) -> WorldObject:
    surface = build_surface(data.get("surface", {}))
    if data["type"] == "plane":
        return Plane(surface, tuple(data["point"]), tuple(data["normal"]))
    if data["type"] == "sphere":
        return Sphere(surface, tuple(data["center"]), data["radius"])
    raise ValueError(f"Unknown object type: {data['type']}")

def build_world(scene: Dict[str, Any]) -> World:
    settings = scene.get("world", {})
    world = World(
        min_cast_dist=settings.get("min_cast_dist", MIN_CAST_DIST),
        max_depth=settings.get("max_depth", MAX_DEPTH),
        void_color=tuple(settings.get("void_color", (1.0, 1.0, 1.0))),
        ambient_color=tuple(settings.get("ambient_color", (1.0, 1.0, 1.0))),
    )
    for light in scene["lights"]:
        world.add_light(Light(tuple(light["color"]), tuple(light["position"])))
    for obj in scene["objects"]:
        world.add_object(build_object(obj))
    return world

def build_context(scene: Dict[str, Any]) -> RenderContext:
    """Turn scene data into a ready-to-step render context."""
    cam = scene["camera"]
    render = scene["render"]
    camera = Camera(
        render["width"],
        render["height"],
        tuple(cam["position"]),
        cam.get("rotation_horizontal", 0.0),
        cam.get("rotation_vertical", 0.0),
        cam["viewport"],
    )
    return RenderContext(build_world(scene), camera, render.get("batch_size", 1000))
