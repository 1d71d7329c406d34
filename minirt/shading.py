"""Viewport set-up, surface normals, lighting and hard shadows."""

from __future__ import annotations

import math
from dataclasses import replace

from .geometry import closest_hit
from .scene import (
    FOV_R,
    HEIGHT,
    T_MIN,
    V_H,
    V_W,
    WIDTH,
    Camera,
    Color,
    Cylinder,
    Plane,
    Ray,
    Scene,
    SceneObject,
    Sphere,
)
from .vector import Vector


def viewport_distance() -> float:
    """Distance along z from the camera to the viewport."""
    return V_W / (2 * math.tan(FOV_R / 2))


def viewport_axes() -> tuple[list[float], list[float]]:
    """Viewport x coordinates of every column and y of every row."""
    xs = [i * V_W / WIDTH - V_W / 2 for i in range(WIDTH)]
    ys = [V_H / 2 - j * V_H / HEIGHT for j in range(HEIGHT)]
    return xs, ys


def viewport_points(camera: Camera) -> list[Vector]:
    """Viewport point of every pixel, row by row, offset by the camera."""
    xs, ys = viewport_axes()
    z = viewport_distance() + camera.position.z
    cx, cy = camera.position.x, camera.position.y
    return [Vector(x + cx, y + cy, z) for y in ys for x in xs]


def surface_normal(point: Vector, obj: SceneObject) -> Vector:
    """Normal of obj at point; the zero vector for the background."""
    if isinstance(obj, Sphere):
        return (point - obj.centre).normalized()
    if isinstance(obj, Plane):
        return -obj.normal
    if isinstance(obj, Cylinder):
        normal = (point - obj.centre).normalized()
        return normal - obj.axis * normal.dot(obj.axis)
    return Vector()


def ambient_light(ray: Ray, scene: Scene) -> None:
    """Blend the ambient light into the ray's colour."""
    amb = scene.ambient
    ray.rgb = Color(
        (ray.rgb.r + amb.ratio * amb.color.r) / 2,
        (ray.rgb.g + amb.ratio * amb.color.g) / 2,
        (ray.rgb.b + amb.ratio * amb.color.b) / 2,
    )


def diffuse_lighting(ray: Ray, light_ray: Ray, obj_index: int, scene: Scene) -> bool:
    """Blend diffuse light into the ray's colour at its hit point.

    Returns False, leaving the colour alone, when the surface faces away
    from the light or the light ray has no direction.
    """
    hit = ray.point_at(ray.t)
    normal = surface_normal(hit, scene.objects[obj_index])
    if light_ray.direction.length() == 0:
        return False
    towards_light = -light_ray.direction.normalized()
    intensity = normal.dot(towards_light)
    if -0.1 <= intensity < 0:
        intensity /= -2.0
    elif intensity < -0.1:
        return False
    light = scene.light.color
    ray.rgb = Color(
        (ray.rgb.r + intensity * light.r) / 2,
        (ray.rgb.g + intensity * light.g) / 2,
        (ray.rgb.b + intensity * light.b) / 2,
    )
    return True


def shadow_ray_start(obj: SceneObject, ray: Ray) -> Vector:
    """Hit point nudged off the surface so a shadow ray does not hit it."""
    hit = ray.point_at(ray.t)
    if isinstance(obj, Sphere):
        return obj.centre + (hit - obj.centre) * (1 + T_MIN)
    if isinstance(obj, Plane):
        return hit + obj.normal * T_MIN
    return hit


def hard_shadow(shadow_ray: Ray, ray: Ray, obj_index: int, scene: Scene) -> bool:
    """Colour the ray black if its hit point is shadowed, else with the object.

    Returns True when the point lies in shadow.
    """
    obj = scene.objects[obj_index]
    shadow_ray.aim_shadow(shadow_ray_start(obj, ray), scene.light.position)
    if closest_hit(shadow_ray, scene.objects) > 0:
        ray.rgb = Color(0.0, 0.0, 0.0)
        return True
    ray.rgb = replace(obj.color)
    return False