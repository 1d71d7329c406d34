"""Ray intersections with spheres, planes and cylinders."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Callable, Optional

from .scene import T_MAX, T_MIN, Cylinder, Plane, Ray, SceneObject, Sphere
from .vector import Vector


def quadratic_roots(a: float, b: float, c: float) -> Optional[tuple[float, float]]:
    """Both roots of a*t**2 + b*t + c, the larger-sign root first.

    Returns None when there is no real root or the equation is not
    quadratic (a == 0).
    """
    if a == 0 or b * b < 4 * a * c:
        return None
    root = math.sqrt(b * b - 4 * a * c)
    return (-b + root) / (2 * a), (-b - root) / (2 * a)


def _nearest(roots: Optional[tuple[float, float]]) -> Optional[float]:
    if roots is None:
        return None
    return min((t for t in roots if t >= T_MIN), default=None)


def nearest_root(a: float, b: float, c: float) -> Optional[float]:
    """Smallest root that lies at least T_MIN ahead, or None."""
    return _nearest(quadratic_roots(a, b, c))


def plane_distance(ray: Ray, position: Vector, normal: Vector) -> Optional[float]:
    """Distance along the ray to the plane through position, or None.

    Rays parallel to the plane and hits outside (T_MIN, T_MAX) give None.
    """
    denominator = ray.direction.dot(normal)
    if denominator == 0:
        return None
    t = (position - ray.origin).dot(normal) / denominator
    if t <= T_MIN or t >= T_MAX:
        return None
    return t


def intersect_sphere(sphere: Sphere, ray: Ray) -> Optional[float]:
    """Distance to the sphere if it is hit no further than ray.t."""
    offset = ray.origin - sphere.centre
    a = ray.direction.dot(ray.direction)
    b = 2 * offset.dot(ray.direction)
    c = offset.dot(offset) - sphere.radius**2
    t = nearest_root(a, b, c)
    if t is None or t > ray.t:
        return None
    return t


def intersect_plane(plane: Plane, ray: Ray) -> Optional[float]:
    """Distance to the plane if it is hit no further than ray.t."""
    t = plane_distance(ray, plane.position, plane.normal)
    if t is None or t < T_MIN or t > ray.t:
        return None
    return t


def intersect_cylinder(cylinder: Cylinder, ray: Ray) -> Optional[float]:
    """Distance to the side of a finite cylinder if hit no further than ray.t.

    The hit counts when either root of the infinite cylinder lies within
    half the height of the centre along the axis. Caps are not drawn.
    """
    offset = ray.origin - cylinder.centre
    along_dir = ray.direction.dot(cylinder.axis)
    along_offset = offset.dot(cylinder.axis)
    a = ray.direction.dot(ray.direction) - along_dir**2
    b = 2 * (offset.dot(ray.direction) - along_dir * along_offset)
    c = offset.dot(offset) - along_offset**2 - cylinder.radius**2
    roots = quadratic_roots(a, b, c)
    t = _nearest(roots)
    if t is None or t < 0 or t > ray.t:
        return None
    half = cylinder.height / 2
    heights = (along_dir * root + along_offset for root in roots)
    if not any(-half <= m <= half for m in heights):
        return None
    return t


_INTERSECTORS: dict[type, Callable[[object, Ray], Optional[float]]] = {
    Sphere: intersect_sphere,
    Plane: intersect_plane,
    Cylinder: intersect_cylinder,
}


def closest_hit(ray: Ray, objects: Sequence[SceneObject]) -> int:
    """Index of the nearest object the ray hits, 0 when nothing is hit.

    ray.t is lowered to the distance of that hit. On equal distances the
    later object wins.
    """
    index = 0
    for i, obj in enumerate(objects):
        intersect = _INTERSECTORS.get(type(obj))
        if intersect is None:
            continue
        t = intersect(obj, ray)
        if t is not None:
            ray.t = t
            index = i
    return index