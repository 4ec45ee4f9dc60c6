"""
Render context bundling the world, camera, refinement scheduler and canvas.
Every mutation of the camera or canvas size restarts refinement from scratch.
"""
from typing import Optional

from vecmath import Color
from objects import Ray
from raytrace_cpu import World
from camera import Camera
from progressive import RefinementScheduler, Canvas, Block

class RenderContext:
    def __init__(self, world: World, camera: Camera, batch_size: int = 1000):
        self.world = world
        self.camera = camera
        self.batch_size = batch_size
        self.scheduler = RefinementScheduler(camera.width, camera.height)
        self.canvas = Canvas(camera.width, camera.height)

    def color_for_ray(self, ray: Ray) -> Color:
        return self.world.color_for_ray(ray)

    def sample(self, x: int, y: int) -> Color:
        return self.world.color_for_ray(self.camera.get_ray(x, y))

    def next_block(self) -> Optional[Block]:
        return self.scheduler.next_block(self.sample)

    def step_batch(self, count: Optional[int] = None) -> int:
        """Run up to count steps, painting each block; returns the number run."""
        count = self.batch_size if count is None else count
        steps = 0
        while steps < count:
            block = self.next_block()
            if block is None:
                break
            self.canvas.paint_block(block)
            steps += 1
        return steps

    def reset_content(self, width: Optional[int] = None, height: Optional[int] = None) -> None:
        """Restart refinement; a new size also resizes the camera and canvas."""
        width = self.canvas.width if width is None else width
        height = self.canvas.height if height is None else height
        if (width, height) != (self.camera.width, self.camera.height):
            self.resize(width, height)
            return
        self.scheduler.reset(width, height)

    def resize(self, width: int, height: int) -> None:
        self.camera.resize(width, height)
        self.canvas.resize(width, height)
        self.scheduler.reset(width, height)

    def move_relative(self, dx: float, dz: float, dy: float = 0.0) -> None:
        self.camera.move_relative((dx, dy, dz))
        self.reset_content()

    def rotate_relative(self, d_pitch: float, d_yaw: float) -> None:
        self.camera.rotate_relative(d_pitch, d_yaw)
        self.reset_content()
