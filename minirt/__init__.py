"""A small ray tracer for spheres, planes and cylinders described in .rt scene files."""

__version__ = "0.1.0"
__all__ = ["vector", "scene", "parsing", "geometry", "shading", "render"]