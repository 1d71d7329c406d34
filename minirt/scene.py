"""Scene description: colours, rays, objects, camera and lights."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Union

from .vector import Vector

WIDTH = 1024
HEIGHT = 768

FOV = 70.0
FOV_R = FOV / (math.pi / 2)
T_MIN = 0.001
T_MAX = 1.0e30
ASPECT_RATIO = WIDTH / HEIGHT

V_W = 2.0
V_H = V_W / ASPECT_RATIO

BOUNCES = 2
R = 255.0
G = 255.0
B = 255.0

DIFFUSE_I = 1


@dataclass
class Color:
    """An RGB colour with components normalised to 0..1."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def scaled(self, factor: float) -> Color:
        """Colour with every component multiplied by factor."""
        return Color(self.r * factor, self.g * factor, self.b * factor)


class RayKind(IntEnum):
    """Primary rays travel towards the scene; shadow rays towards the light."""

    PRIMARY = 0
    SHADOW = 1


@dataclass
class Ray:
    """A ray with its current nearest hit distance and accumulated colour."""

    viewport: Vector = field(default_factory=Vector)
    origin: Vector = field(default_factory=Vector)
    direction: Vector = field(default_factory=Vector)
    t: float = T_MAX
    bounces: int = 0
    rgb: Color = field(default_factory=Color)
    kind: RayKind = RayKind.PRIMARY

    def point_at(self, t: float) -> Vector:
        """Point reached after travelling t along the direction."""
        return self.origin + self.direction * t

    def aim(self, origin: Vector, target: Vector) -> None:
        """Point the ray from origin through target and clear its hit distance."""
        self.viewport = target
        self.origin = origin
        self.direction = target - origin
        self.t = T_MAX

    def aim_shadow(self, origin: Vector, light_pos: Vector) -> None:
        """Point the ray from origin at the light; only hits before it count."""
        self.origin = origin
        self.direction = light_pos - origin
        self.t = 1.0

    def reset(self, kind: RayKind | int) -> None:
        """Clear colour and bounces and set the ray kind."""
        self.rgb = Color()
        self.bounces = 0
        self.kind = RayKind(kind)
        self.t = 1.0 if self.kind is RayKind.SHADOW else T_MAX


@dataclass
class Plane:
    position: Vector
    normal: Vector
    color: Color


@dataclass
class Sphere:
    centre: Vector
    radius: float
    color: Color


@dataclass
class Cylinder:
    centre: Vector
    axis: Vector
    radius: float
    height: float
    color: Color


@dataclass
class Background:
    color: Color = field(default_factory=Color)


@dataclass
class Camera:
    position: Vector = field(default_factory=Vector)
    orientation: Vector = field(default_factory=lambda: Vector(0.0, 0.0, 1.0))
    fov: float = FOV


@dataclass
class Ambient:
    ratio: float = 0.0
    color: Color = field(default_factory=Color)


@dataclass
class Light:
    position: Vector = field(default_factory=Vector)
    intensity: float = 0.0
    color: Color = field(default_factory=Color)


SceneObject = Union[Background, Plane, Sphere, Cylinder]


@dataclass
class Scene:
    """All objects of a scene; index 0 is always the background."""

    camera: Optional[Camera] = None
    ambient: Ambient = field(default_factory=Ambient)
    light: Light = field(default_factory=Light)
    objects: list[SceneObject] = field(default_factory=lambda: [Background()])
    move_x: float = 0.0
    move_y: float = 0.0

    @property
    def background(self) -> Background:
        return self.objects[0]

    def add(self, obj: SceneObject) -> int:
        """Append an object and return its index."""
        self.objects.append(obj)
        return len(self.objects) - 1