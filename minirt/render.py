"""Rendering a scene onto an RGBA canvas, camera keys and the command line."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import replace
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from .geometry import closest_hit
from .parsing import SceneError, parse_scene, split_fields
from .scene import (
    B,
    BOUNCES,
    G,
    HEIGHT,
    R,
    V_H,
    V_W,
    WIDTH,
    Camera,
    Color,
    Light,
    Ray,
    RayKind,
    Scene,
)
from .shading import (
    ambient_light,
    diffuse_lighting,
    hard_shadow,
    viewport_axes,
    viewport_distance,
)
from .vector import Vector

STEP = 0.1


class Canvas:
    """A grid of 32-bit RGBA pixels, each stored as 0xRRGGBBAA."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive: {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = bytearray(4 * width * height)

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _offset(self, x: int, y: int) -> int:
        return 4 * (y * self.width + x)

    def put_pixel(self, x: int, y: int, color: int) -> bool:
        """Set the pixel at (x, y); returns False when it lies off the canvas."""
        if not self._contains(x, y):
            return False
        start = self._offset(x, y)
        self._pixels[start:start + 4] = (color & 0xFFFFFFFF).to_bytes(4, "big")
        return True

    def get_pixel(self, x: int, y: int) -> int:
        """Colour of the pixel at (x, y) as 0xRRGGBBAA."""
        if not self._contains(x, y):
            raise IndexError(f"pixel ({x}, {y}) lies outside the canvas")
        start = self._offset(x, y)
        return int.from_bytes(self._pixels[start:start + 4], "big")

    def save(self, path: Union[str, PathLike]) -> None:
        """Write the canvas to an image file; the format follows the suffix."""
        image = Image.frombytes("RGBA", (self.width, self.height), bytes(self._pixels))
        image.save(path)


def to_rgba(r: float, g: float, b: float, a: float) -> int:
    """Pack channels (truncated to integers) into 0xRRGGBBAA."""
    return (int(r) << 24 | int(g) << 16 | int(b) << 8 | int(a)) & 0xFFFFFFFF


def _color_value(color: Color) -> int:
    return to_rgba(color.r * R, color.g * G, color.b * B, 255)


def pixel_position(ray: Ray, camera: Camera) -> tuple[int, int]:
    """Canvas column and row of the viewport point the ray passes through."""
    x = (ray.viewport.x - camera.position.x) * (WIDTH / V_W) + WIDTH / 2
    y = -(ray.viewport.y - camera.position.y) * (HEIGHT / V_H) + HEIGHT / 2
    return int(x), int(y)


def _light_position(light: Light) -> tuple[int, int]:
    x = light.position.x * (WIDTH / V_W) + WIDTH / 2
    y = light.position.y * (HEIGHT / V_H) + HEIGHT / 2
    return int(x), int(y)


def _require_camera(scene: Scene) -> Camera:
    if scene.camera is None:
        raise SceneError("scene has no camera")
    return scene.camera


def trace_ray(scene: Scene, ray: Ray, shadow_ray: Ray, light_ray: Ray,
              target: Vector) -> Color:
    """Send a ray from the camera through target and return its colour.

    The light ray keeps its direction between calls: diffuse light at a
    hit uses the light ray left by the previous hit.
    """
    camera = _require_camera(scene)
    ray.aim(camera.position, target)
    while ray.bounces < BOUNCES:
        index = closest_hit(ray, scene.objects)
        if index > 0:
            in_shadow = hard_shadow(shadow_ray, ray, index, scene)
            ambient_light(ray, scene)
            if not in_shadow:
                diffuse_lighting(ray, light_ray, index, scene)
                light_ray.aim(scene.light.position, ray.point_at(ray.t))
        else:
            ray.rgb = replace(scene.background.color)
        ray.bounces += 1
    ray.bounces = 0
    return replace(ray.rgb)


def draw_image(scene: Scene, canvas: Canvas) -> None:
    """Trace every pixel of the canvas and mark the light's position."""
    camera = _require_camera(scene)
    ray = Ray()
    shadow_ray = Ray()
    shadow_ray.reset(RayKind.SHADOW)
    light_ray = Ray()
    xs, ys = viewport_axes()
    z = viewport_distance() + camera.position.z
    cx, cy = camera.position.x, camera.position.y
    # Rows and columns past the canvas edge would only be clipped.
    for row in ys[:canvas.height]:
        for column in xs[:canvas.width]:
            color = trace_ray(scene, ray, shadow_ray, light_ray,
                              Vector(column + cx, row + cy, z))
            x, y = pixel_position(ray, camera)
            canvas.put_pixel(x, y, _color_value(color))
    lx, ly = _light_position(scene.light)
    canvas.put_pixel(lx, ly, _color_value(scene.light.color))


class Key(str, Enum):
    ESCAPE = "escape"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    W = "w"
    S = "s"
    A = "a"
    D = "d"


class KeyAction(Enum):
    CLOSE = "close"
    REDRAW = "redraw"
    IGNORED = "ignored"


_CAMERA_MOVES = {
    Key.UP: Vector(0.0, STEP, 0.0),
    Key.DOWN: Vector(0.0, -STEP, 0.0),
    Key.LEFT: Vector(-STEP, 0.0, 0.0),
    Key.RIGHT: Vector(STEP, 0.0, 0.0),
}

_OFFSET_MOVES = {
    Key.W: (0.0, STEP),
    Key.S: (0.0, -STEP),
    Key.A: (-STEP, 0.0),
    Key.D: (STEP, 0.0),
}


def handle_key(scene: Scene, key: Union[Key, str]) -> KeyAction:
    """Apply a key press to the scene and say what the viewer should do.

    Arrow keys move the camera, W/S/A/D move the scene offset and
    escape closes the view. Other keys are ignored.
    """
    try:
        key = Key(key.lower())
    except (AttributeError, ValueError):
        return KeyAction.IGNORED
    if key is Key.ESCAPE:
        return KeyAction.CLOSE
    if key in _CAMERA_MOVES:
        camera = _require_camera(scene)
        camera.position = camera.position + _CAMERA_MOVES[key]
        return KeyAction.REDRAW
    dx, dy = _OFFSET_MOVES[key]
    scene.move_x += dx
    scene.move_y += dy
    return KeyAction.REDRAW


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Render the scene file given as the only argument to a PNG beside it."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: minirt SCENE", file=sys.stderr)
        return 1
    path = Path(args[0])
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
        scene = parse_scene(lines)
    except OSError as exc:
        print(f"{path}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"{path}: {exc}", file=sys.stderr)
        return 1
    for line in lines:
        fields = split_fields(line, " ")
        if fields:
            print(fields[0])
    if scene.camera is None:
        print(f"{path}: scene has no camera", file=sys.stderr)
        return 1
    canvas = Canvas()
    draw_image(scene, canvas)
    output = path.with_suffix(".png")
    canvas.save(output)
    return 0