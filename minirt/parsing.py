"""Reading scene description files into a Scene."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from os import PathLike
from typing import Optional, Union

from .scene import (
    Ambient,
    Camera,
    Color,
    Cylinder,
    Light,
    Plane,
    Scene,
    SceneObject,
    Sphere,
)
from .vector import Vector

_INT_PATTERN = re.compile(r"[ \t\n\v\f\r]*([+-]?)(\d*)")


class SceneError(ValueError):
    """Raised when a scene description cannot be understood."""


def parse_int(text: str) -> int:
    """Read a leading integer, skipping whitespace; 0 when there is none.

    Parsing stops at the first character that is not a digit.
    """
    match = _INT_PATTERN.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def split_fields(text: str, sep: str) -> list[str]:
    """Split text on sep, dropping the empty pieces runs of sep leave."""
    return [part for part in text.split(sep) if part]


def parse_number(text: str) -> float:
    """Read a decimal number of the form [sign]digits[.digits].

    Anything after the second dot is ignored. A dot without digits on
    both sides is an error.
    """
    if "." not in text:
        return float(parse_int(text))
    parts = split_fields(text, ".")
    if len(parts) < 2:
        raise SceneError(f"malformed number: {text!r}")
    whole_text, fraction_text = parts[0], parts[1]
    whole = parse_int(whole_text)
    fraction = parse_int(fraction_text) / 10 ** len(fraction_text)
    negative = whole_text.strip().startswith("-")
    return whole - fraction if negative else whole + fraction


def _triple(text: str) -> tuple[float, float, float]:
    parts = split_fields(text, ",")
    if len(parts) < 3:
        raise SceneError(f"expected three comma separated values: {text!r}")
    return parse_number(parts[0]), parse_number(parts[1]), parse_number(parts[2])


def parse_vector(text: str) -> Vector:
    """Read 'x,y,z' into a Vector."""
    return Vector(*_triple(text))


def parse_color(text: str) -> Color:
    """Read 'r,g,b' with 0..255 components into a normalised Color."""
    r, g, b = _triple(text)
    return Color(r / 255.0, g / 255.0, b / 255.0)


def _field(fields: Sequence[str], index: int, kind: str) -> str:
    try:
        return fields[index]
    except IndexError:
        raise SceneError(f"{kind}: missing field {index}") from None


def _plane(fields: Sequence[str]) -> Plane:
    return Plane(
        position=parse_vector(_field(fields, 1, "plane")),
        normal=parse_vector(_field(fields, 2, "plane")),
        color=parse_color(_field(fields, 3, "plane")),
    )


def _sphere(fields: Sequence[str]) -> Sphere:
    return Sphere(
        centre=parse_vector(_field(fields, 1, "sphere")),
        radius=parse_number(_field(fields, 2, "sphere")) / 2,
        color=parse_color(_field(fields, 3, "sphere")),
    )


def _cylinder(fields: Sequence[str]) -> Cylinder:
    return Cylinder(
        centre=parse_vector(_field(fields, 1, "cylinder")),
        axis=parse_vector(_field(fields, 2, "cylinder")),
        radius=parse_number(_field(fields, 3, "cylinder")) / 2,
        height=parse_number(_field(fields, 4, "cylinder")),
        color=parse_color(_field(fields, 5, "cylinder")),
    )


def _camera(fields: Sequence[str]) -> Camera:
    position = parse_vector(_field(fields, 1, "camera"))
    orientation = parse_vector(_field(fields, 2, "camera"))
    try:
        orientation = orientation.normalized()
    except ZeroDivisionError:
        raise SceneError("camera: orientation must not be the zero vector") from None
    return Camera(
        position=position,
        orientation=orientation,
        fov=parse_number(_field(fields, 3, "camera")),
    )


def _ambient(fields: Sequence[str]) -> Ambient:
    return Ambient(
        ratio=parse_number(_field(fields, 1, "ambient")),
        color=parse_color(_field(fields, 2, "ambient")),
    )


def _light(fields: Sequence[str]) -> Light:
    return Light(
        position=parse_vector(_field(fields, 1, "light")),
        intensity=parse_number(_field(fields, 2, "light")),
        color=parse_color(_field(fields, 3, "light")),
    )


SceneItem = Union[SceneObject, Camera, Ambient, Light]


def parse_line(fields: Sequence[str], scene: Scene) -> Optional[SceneItem]:
    """Apply one line's fields to the scene and return what it created.

    The identifier is matched by prefix: 'pl', 'sp', 'cy' for objects and
    'C', 'A', 'L' for camera, ambient light and light. Lines with any
    other identifier are ignored and give None.
    """
    if not fields:
        return None
    ident = fields[0]
    if ident.startswith("pl"):
        plane = _plane(fields)
        scene.add(plane)
        return plane
    if ident.startswith("sp"):
        sphere = _sphere(fields)
        scene.add(sphere)
        return sphere
    if ident.startswith("cy"):
        cylinder = _cylinder(fields)
        scene.add(cylinder)
        return cylinder
    if ident.startswith("C"):
        scene.camera = _camera(fields)
        return scene.camera
    if ident.startswith("A"):
        scene.ambient = _ambient(fields)
        return scene.ambient
    if ident.startswith("L"):
        scene.light = _light(fields)
        return scene.light
    return None


def parse_scene(lines: Iterable[str]) -> Scene:
    """Build a Scene from the lines of a scene description."""
    scene = Scene()
    for number, line in enumerate(lines, start=1):
        fields = split_fields(line.rstrip("\r\n"), " ")
        try:
            parse_line(fields, scene)
        except SceneError as exc:
            raise SceneError(f"line {number}: {exc}") from None
    return scene


def load_scene(path: Union[str, PathLike]) -> Scene:
    """Read and parse the scene file at path."""
    with open(path, encoding="utf-8") as handle:
        return parse_scene(handle)