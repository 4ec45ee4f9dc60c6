"""
Interactive 3D preview of the scene using Plotly.
Helps verify geometry and camera placement before rendering.
"""
import plotly.graph_objects as go

from vecmath import add, mul, cross, norm, length, mat_vec
from objects import Plane, Sphere
from scene import load_scene, validate_scene, build_context

PLANE_EXTENT = 30.0

def plane_corners(plane: Plane, extent: float = PLANE_EXTENT):
    """Four corners of a square patch of the plane centered on its anchor point."""
    n = plane.plane_normal
    helper = (1.0, 0.0, 0.0) if abs(n[0]) < 0.9 else (0.0, 0.0, 1.0)
    u = norm(cross(n, helper))
    v = cross(n, u)
    p = plane.point
    return [
        add(p, add(mul(u, -extent), mul(v, -extent))),
        add(p, add(mul(u, extent), mul(v, -extent))),
        add(p, add(mul(u, extent), mul(v, extent))),
        add(p, add(mul(u, -extent), mul(v, extent))),
    ]

def rgb(c) -> str:
    return f"rgb({int(c[0] * 255)}, {int(c[1] * 255)}, {int(c[2] * 255)})"

def create_scene_preview(context):
    """Create interactive 3D plot of scene."""
    fig = go.Figure()
    world = context.world

    for i, obj in enumerate(world.objects):
        surface_color = rgb(obj.surface.base_color)
        if isinstance(obj, Plane):
            corners = plane_corners(obj)
            fig.add_trace(go.Mesh3d(
                x=[c[0] for c in corners],
                y=[c[1] for c in corners],
                z=[c[2] for c in corners],
                i=[0, 0], j=[1, 2], k=[2, 3],
                color=surface_color,
                opacity=0.4,
                name=f'Plane {i+1}'
            ))
        elif isinstance(obj, Sphere):
            fig.add_trace(go.Scatter3d(
                x=[obj.center[0]],
                y=[obj.center[1]],
                z=[obj.center[2]],
                mode='markers',
                marker=dict(size=max(4, obj.radius * 2), color=surface_color, symbol='circle'),
                name=f'Sphere {i+1} (r={obj.radius})'
            ))

    # Lights
    for i, light in enumerate(world.lights):
        fig.add_trace(go.Scatter3d(
            x=[light.position[0]],
            y=[light.position[1]],
            z=[light.position[2]],
            mode='markers',
            marker=dict(size=15, color='yellow', symbol='circle'),
            name=f'Light {i+1}'
        ))

    # Camera
    camera = context.camera
    cam_pos = camera.origin
    facing = mat_vec(camera.rotation, (0.0, 0.0, 1.0))
    look_at = add(cam_pos, mul(facing, 10.0 / max(length(facing), 1e-8)))

    fig.add_trace(go.Scatter3d(
        x=[cam_pos[0]],
        y=[cam_pos[1]],
        z=[cam_pos[2]],
        mode='markers',
        marker=dict(size=10, color='red', symbol='diamond'),
        name='Camera'
    ))

    # Camera look direction
    fig.add_trace(go.Scatter3d(
        x=[cam_pos[0], look_at[0]],
        y=[cam_pos[1], look_at[1]],
        z=[cam_pos[2], look_at[2]],
        mode='lines',
        line=dict(color='red', width=3, dash='dash'),
        name='Camera Look'
    ))

    fig.update_layout(
        title="Scene Preview (Interactive 3D)",
        scene=dict(
            xaxis_title="X",
            yaxis_title="Y",
            zaxis_title="Z",
            aspectmode='data'
        ),
        width=1000,
        height=800
    )

    return fig

if __name__ == "__main__":
    scene_data = load_scene("../scene.json")
    validate_scene(scene_data)
    fig = create_scene_preview(build_context(scene_data))
    fig.show()
