"""Geometry module for surfaces, primitives and hit records.

Components:
    surface: The Surface capability (``hit(ray, t_min, t_max)``)
    hit: Hit record returned by successful intersection tests
    sphere: Sphere primitive, host-side and as a Taichi function

Host-side intersection follows the pattern:
    hit = surface.hit(ray, t_min, t_max)  # Hit or None
"""

from .hit import Hit
from .sphere import Sphere, SphereData, SphereHit, hit_sphere
from .surface import Surface

__all__ = [
    "Hit",
    "Sphere",
    "SphereData",
    "SphereHit",
    "Surface",
    "hit_sphere",
]
