"""Core building blocks.

Components:
    ray: Ray data structure, vector helpers and the kernel-side ray mirror
"""

from .ray import Ray, RayData, Vec3, as_vec3, dot, length, normalize, ray_at, vec3

__all__ = [
    "Ray",
    "RayData",
    "Vec3",
    "as_vec3",
    "dot",
    "length",
    "normalize",
    "ray_at",
    "vec3",
]
