"""
Progressive coarse-to-fine rendering.

The scheduler walks the canvas in blocks of tile_size x tile_size. Each step
samples one ray at the block origin and paints the three other quadrants of the
block with that color; the origin quadrant already holds a color from the
previous, coarser pass. After every pass the tile size halves. The pass with
2x2 blocks also paints the origin pixel itself, so every pixel is covered
once the scheduler is done.
"""
from typing import Callable, List, NamedTuple, Optional, Tuple
from PIL import Image

from vecmath import Color, BLACK
from raytrace_cpu import to_rgb8

class Rect(NamedTuple):
    """Half-open pixel rectangle [left, right) x [bottom, top)."""
    left: int
    bottom: int
    right: int
    top: int

    @property
    def area(self) -> int:
        return (self.right - self.left) * (self.top - self.bottom)

class Block(NamedTuple):
    rects: Tuple[Rect, ...]
    color: Color

# Returned by next_block once the finest pass has been drawn
DONE = None

def initial_tile_size(width: int, height: int) -> int:
    size = 1
    while size < width or size < height or size < 2:
        size <<= 1
    return size

class RefinementScheduler:
    """Steppable state machine: Sizing(tile_size, cursor) until DONE."""

    def __init__(self, width: int, height: int):
        self.reset(width, height)

    def reset(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.tile_size = initial_tile_size(width, height)
        self.left = 0
        self.bottom = 0
        self.done = width <= 0 or height <= 0

    @property
    def state(self):
        if self.done:
            return DONE
        return (self.tile_size, (self.left, self.bottom))

    def finished(self) -> bool:
        return self.done

    def _clip(self, left: int, bottom: int, right: int, top: int) -> Optional[Rect]:
        rect = Rect(left, bottom, min(right, self.width), min(top, self.height))
        if rect.right <= rect.left or rect.top <= rect.bottom:
            return None
        return rect

    def current_rects(self) -> List[Rect]:
        """Rects the next step will paint, in painting order."""
        if self.done:
            return []
        l, b, t = self.left, self.bottom, self.tile_size
        h = t // 2
        candidates = [
            (l + h, b, l + t, b + h),
            (l, b + h, l + h, b + t),
            (l + h, b + h, l + t, b + t),
        ]
        if h == 1:
            candidates.insert(0, (l, b, l + 1, b + 1))
        return [r for r in (self._clip(*c) for c in candidates) if r is not None]

    def advance(self) -> None:
        self.bottom += self.tile_size
        if self.bottom >= self.height:
            self.bottom = 0
            self.left += self.tile_size
        if self.left >= self.width:
            self.left = 0
            self.bottom = 0
            self.tile_size >>= 1
            if self.tile_size <= 1:
                self.done = True

    def next_block(self, sample: Callable[[int, int], Color]) -> Optional[Block]:
        """Sample the current block origin, advance, and return what to paint."""
        if self.done:
            return DONE
        rects = tuple(self.current_rects())
        color = sample(self.left, self.bottom)
        self.advance()
        return Block(rects, color)

class Canvas:
    """Backing RGB image painted block by block; y grows upwards."""

    def __init__(self, width: int, height: int, background: Color = BLACK):
        self.background = background
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.image = Image.new("RGB", (max(1, self.width), max(1, self.height)), to_rgb8(self.background))

    def paint(self, rect: Rect, color: Color) -> None:
        box = (rect.left, self.height - rect.top, rect.right, self.height - rect.bottom)
        self.image.paste(to_rgb8(color), box)

    def paint_block(self, block: Block) -> None:
        for rect in block.rects:
            self.paint(rect, block.color)

    def pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        return self.image.getpixel((x, self.height - 1 - y))

    def to_image(self) -> Image.Image:
        return self.image.copy()

def render_progressive(context, output_path: str = "render_progressive.png",
                       batch_size: Optional[int] = None) -> Image.Image:
    """Drive the scheduler to completion in batches and save the canvas."""
    batch_size = batch_size or context.batch_size
    context.reset_content()
    W, H = context.canvas.width, context.canvas.height

    print(f"Progressive render {W}x{H}, starting tile size {context.scheduler.tile_size}...")

    steps = 0
    tile_size = context.scheduler.tile_size
    while not context.scheduler.finished():
        steps += context.step_batch(batch_size)
        if context.scheduler.tile_size != tile_size and not context.scheduler.finished():
            tile_size = context.scheduler.tile_size
            print(f"Refining: tile size {tile_size} ({steps} samples)")

    img = context.canvas.to_image()
    if output_path:
        img.save(output_path)
        print(f"Saved {output_path} after {steps} samples")
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
    filename = f"progressive_{timestamp}_{context.canvas.width}x{context.canvas.height}.png"
    render_progressive(context, os.path.join(renders_dir, filename))
