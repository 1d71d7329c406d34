import pytest

from minirt.geometry import (
    closest_hit,
    intersect_cylinder,
    intersect_plane,
    intersect_sphere,
    nearest_root,
    plane_distance,
    quadratic_roots,
)
from minirt.scene import T_MAX, Background, Color, Cylinder, Plane, Ray, Sphere
from minirt.vector import Vector


def make_ray(origin, direction, t=T_MAX):
    return Ray(origin=Vector(*origin), direction=Vector(*direction), t=t)


def residual(a, b, c, t):
    return a * t * t + b * t + c


def test_quadratic_roots_solve_equation():
    roots = quadratic_roots(1.0, -3.0, 2.0)
    t1, t2 = roots
    assert t1 >= t2
    assert residual(1.0, -3.0, 2.0, t1) == pytest.approx(0.0, abs=1e-12)
    assert residual(1.0, -3.0, 2.0, t2) == pytest.approx(0.0, abs=1e-12)


def test_quadratic_roots_none_without_real_root():
    assert quadratic_roots(1.0, 0.0, 1.0) is None


def test_quadratic_roots_none_when_linear():
    assert quadratic_roots(0.0, 1.0, 1.0) is None


def test_nearest_root_picks_smaller_positive():
    roots = quadratic_roots(1.0, -3.0, 2.0)
    assert nearest_root(1.0, -3.0, 2.0) == min(roots)


def test_nearest_root_skips_negative_root():
    roots = quadratic_roots(1.0, 0.0, -4.0)
    t = nearest_root(1.0, 0.0, -4.0)
    assert t == max(roots)
    assert t > 0


def test_nearest_root_none_when_behind():
    assert nearest_root(1.0, 3.0, 2.0) is None


def test_plane_distance_hits_plane():
    ray = make_ray((0, 0, 0), (0.2, 0.1, 1))
    position = Vector(0, 0, 5)
    normal = Vector(0, 0, -1)
    t = plane_distance(ray, position, normal)
    assert (ray.point_at(t) - position).dot(normal) == pytest.approx(0.0, abs=1e-9)


def test_plane_distance_parallel_is_none():
    ray = make_ray((0, 0, 0), (1, 0, 0))
    assert plane_distance(ray, Vector(0, 0, 5), Vector(0, 0, 1)) is None


def test_plane_distance_behind_is_none():
    ray = make_ray((0, 0, 0), (0, 0, 1))
    assert plane_distance(ray, Vector(0, 0, -5), Vector(0, 0, 1)) is None


def test_intersect_plane_respects_ray_limit():
    plane = Plane(Vector(0, 0, 5), Vector(0, 0, 1), Color())
    far = make_ray((0, 0, 0), (0, 0, 1))
    near = make_ray((0, 0, 0), (0, 0, 1), t=1.0)
    assert intersect_plane(plane, far) is not None and intersect_plane(plane, far) > 1.0
    assert intersect_plane(plane, near) is None


def test_intersect_sphere_lands_on_surface():
    sphere = Sphere(Vector(0, 0, 5), 1.0, Color())
    ray = make_ray((0, 0, 0), (0.05, 0.02, 1))
    t = intersect_sphere(sphere, ray)
    assert (ray.point_at(t) - sphere.centre).length() == pytest.approx(sphere.radius)
    # front side: closer to the origin than the centre
    assert ray.point_at(t).z < sphere.centre.z


def test_intersect_sphere_miss():
    sphere = Sphere(Vector(0, 0, 5), 1.0, Color())
    assert intersect_sphere(sphere, make_ray((0, 0, 0), (1, 0, 0))) is None


def test_intersect_sphere_beyond_limit():
    sphere = Sphere(Vector(0, 0, 5), 1.0, Color())
    assert intersect_sphere(sphere, make_ray((0, 0, 0), (0, 0, 1), t=1.0)) is None


def test_intersect_cylinder_lands_on_side():
    cyl = Cylinder(Vector(0, 0, 5), Vector(0, 1, 0), 1.0, 2.0, Color())
    ray = make_ray((0, 0, 0), (0.1, 0.05, 1))
    t = intersect_cylinder(cyl, ray)
    rel = ray.point_at(t) - cyl.centre
    radial = rel - cyl.axis * rel.dot(cyl.axis)
    assert radial.length() == pytest.approx(cyl.radius)
    assert abs(rel.dot(cyl.axis)) <= cyl.height / 2


def test_intersect_cylinder_above_height_misses():
    cyl = Cylinder(Vector(0, 0, 5), Vector(0, 1, 0), 1.0, 2.0, Color())
    assert intersect_cylinder(cyl, make_ray((0, 10, 0), (0, 0, 1))) is None


def test_intersect_cylinder_parallel_to_axis_misses():
    cyl = Cylinder(Vector(0, 0, 5), Vector(0, 1, 0), 1.0, 2.0, Color())
    assert intersect_cylinder(cyl, make_ray((0, -10, 5), (0, 1, 0))) is None


def test_closest_hit_picks_nearest_object():
    far = Sphere(Vector(0, 0, 10), 1.0, Color())
    near = Sphere(Vector(0, 0, 5), 1.0, Color())
    objects = [Background(), far, near]
    ray = make_ray((0, 0, 0), (0, 0, 1))
    index = closest_hit(ray, objects)
    assert index == 2
    assert ray.t == intersect_sphere(near, make_ray((0, 0, 0), (0, 0, 1)))


def test_closest_hit_sphere_in_front_of_plane():
    plane = Plane(Vector(0, 0, 20), Vector(0, 0, 1), Color())
    sphere = Sphere(Vector(0, 0, 5), 1.0, Color())
    ray = make_ray((0, 0, 0), (0, 0, 1))
    assert closest_hit(ray, [Background(), sphere, plane]) == 1


def test_closest_hit_nothing():
    ray = make_ray((0, 0, 0), (0, 0, 1))
    assert closest_hit(ray, [Background()]) == 0
    assert ray.t == T_MAX