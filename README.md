# minirt

A small ray tracer. It reads a scene description in the `.rt` format, traces
one ray per pixel against spheres, planes and cylinders, applies ambient and
diffuse light with hard shadows, and writes the result as a PNG image.

## Installing

```
pip install .
```

Pillow is the only runtime dependency. To run the tests:

```
pip install ".[test]"
pytest
```

## Scene files

Each line describes one element, its fields separated by spaces. Vectors and
colours are comma-separated triples; colour channels range from 0 to 255 and
are stored normalised to 0..1.

```
A 0.2 255,255,255
C 0,0,-5 0,0,1 70
L 0,5,-5 0.7 255,255,255
sp 0,0,5 2 255,0,0
pl 0,-1,0 0,1,0 0,0,255
cy 2,0,6 0,1,0 1 3 0,255,0
```

| Identifier | Fields |
|------------|--------|
| `A`  | ambient ratio, colour |
| `C`  | position, orientation, field of view |
| `L`  | position, brightness, colour |
| `sp` | centre, diameter, colour |
| `pl` | point, normal, colour |
| `cy` | centre, axis, diameter, height, colour |

Identifiers are matched by prefix. Lines with any other identifier, and empty
lines, are ignored. A later `C`, `A` or `L` line replaces an earlier one.
Numbers take the form `[sign]digits[.digits]`; the camera orientation is
normalised and must not be the zero vector. A malformed line raises
`minirt.parsing.SceneError` (a `ValueError`) naming the line number.

## Rendering from the command line

```
minirt scene.rt
```

The identifier of each non-empty scene line is printed as the file is read.
The scene is rendered at 1024x768 and written next to the scene file with the
suffix replaced by `.png` (here `scene.png`). The light's position is marked
with a single pixel in its colour. The command exits with status 1, printing
a message to standard error, when it is not given exactly one argument, when
the file cannot be read or parsed, or when the scene has no camera.

## Using the library

```python
from minirt.parsing import load_scene
from minirt.render import Canvas, draw_image

scene = load_scene("scene.rt")
canvas = Canvas()            # 1024x768 by default
draw_image(scene, canvas)
canvas.save("scene.png")     # format follows the suffix
```

- `minirt.vector.Vector` is an immutable 3D vector with `+`, `-`, `*`, `/`,
  unary `-`, `dot`, `cross`, `normalized`, `length`, `add_scalar` and
  `sub_scalar`.
- `minirt.scene` holds the data classes: `Color`, `Ray`, `Plane`, `Sphere`,
  `Cylinder`, `Background`, `Camera`, `Ambient`, `Light` and `Scene`, whose
  `objects` list always starts with the background at index 0.
- `minirt.parsing` reads scenes: `parse_number`, `parse_int`, `split_fields`,
  `parse_vector`, `parse_color`, `parse_line`, `parse_scene` and `load_scene`.
- `minirt.geometry` holds the intersection routines: `quadratic_roots`,
  `nearest_root`, `plane_distance`, `intersect_sphere`, `intersect_plane`,
  `intersect_cylinder` and `closest_hit`.
- `minirt.shading` holds the viewport set-up and lighting model:
  `viewport_distance`, `viewport_axes`, `viewport_points`, `surface_normal`,
  `ambient_light`, `diffuse_lighting`, `shadow_ray_start` and `hard_shadow`.
- `minirt.render` holds `Canvas` (`put_pixel`, `get_pixel`, `save`), `to_rgba`,
  `pixel_position`, `trace_ray`, `draw_image`, `handle_key` and `main`.

## What it does not do

There is no interactive window: the command renders once to a file.
`minirt.render.handle_key` applies a key press to a scene and returns a
`KeyAction` (`CLOSE`, `REDRAW` or `IGNORED`) for a viewer to act on. The arrow
keys move the camera by 0.1; W/S/A/D change `scene.move_x` and `scene.move_y`
by 0.1, but rendering does not use those offsets. Cylinder caps are not drawn,
only the side surface, and there are no reflections.