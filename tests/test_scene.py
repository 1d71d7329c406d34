import pytest

from minirt.scene import (
    T_MAX,
    Background,
    Color,
    Cylinder,
    Plane,
    Ray,
    RayKind,
    Scene,
    Sphere,
)
from minirt.vector import Vector


def test_color_scaled_round_trip():
    c = Color(0.25, 0.5, 1.0)
    assert c.scaled(4.0).scaled(0.25) == c


def test_color_scaled_by_zero_is_black():
    assert Color(0.3, 0.6, 0.9).scaled(0.0) == Color()


def test_point_at_zero_is_origin():
    ray = Ray(origin=Vector(1.0, 2.0, 3.0), direction=Vector(4.0, 5.0, 6.0))
    assert ray.point_at(0.0) == ray.origin


def test_aim_reaches_target_at_one():
    ray = Ray()
    origin = Vector(0.5, -1.0, 2.0)
    target = Vector(3.0, 4.0, -5.0)
    ray.t = 7.0
    ray.aim(origin, target)
    assert ray.origin == origin
    assert ray.viewport == target
    assert ray.point_at(1.0) == target
    assert ray.t == T_MAX


def test_aim_shadow_limits_distance_to_light():
    ray = Ray()
    origin = Vector(1.0, 1.0, 1.0)
    light = Vector(-2.0, 5.0, 10.0)
    ray.aim_shadow(origin, light)
    assert ray.t == 1.0
    assert ray.point_at(ray.t) == light


def test_reset_shadow_ray():
    ray = Ray(bounces=3, rgb=Color(1.0, 1.0, 1.0))
    ray.reset(RayKind.SHADOW)
    assert ray.t == 1.0
    assert ray.bounces == 0
    assert ray.rgb == Color()
    assert ray.kind is RayKind.SHADOW


def test_reset_primary_ray_from_int():
    ray = Ray(t=0.5, bounces=2)
    ray.reset(0)
    assert ray.t == T_MAX
    assert ray.kind is RayKind.PRIMARY
    assert ray.bounces == 0


def test_reset_rejects_unknown_kind():
    with pytest.raises(ValueError):
        Ray().reset(5)


def test_scene_starts_with_background():
    scene = Scene()
    assert len(scene.objects) == 1
    assert isinstance(scene.objects[0], Background)
    assert scene.background is scene.objects[0]
    assert scene.camera is None


def test_scene_add_returns_indices_in_order():
    scene = Scene()
    plane = Plane(Vector(), Vector(0.0, 1.0, 0.0), Color(1.0, 0.0, 0.0))
    sphere = Sphere(Vector(0.0, 0.0, 5.0), 1.0, Color(0.0, 1.0, 0.0))
    cyl = Cylinder(Vector(), Vector(0.0, 1.0, 0.0), 0.5, 2.0, Color())
    indices = [scene.add(o) for o in (plane, sphere, cyl)]
    assert indices == [1, 2, 3]
    assert scene.objects[indices[1]] is sphere


def test_separate_scenes_do_not_share_objects():
    a = Scene()
    b = Scene()
    a.add(Sphere(Vector(), 1.0, Color()))
    assert len(b.objects) == 1