"""Ray-sphere intersection core.

This package answers one question for a render driver: given a ray, which
surface does it hit first, where, and with what material. It provides:
- Rays and immutable vector helpers
- A Surface capability implemented by spheres and by surface lists
- A camera mapping screen coordinates to rays
- A Scene bundling image size, world and camera
- Batched intersection of many rays on the Taichi backend

Subpackages:
    core: Ray and vector utilities
    geometry: Surface capability, hit records and the sphere primitive
    scene: Surface lists, scenes and batched queries
    camera: Camera value type, default preset and look-at builder

Shading, pixel loops and image output are left to the caller; material
handles are stored and returned but never inspected.
"""

from spheretrace.camera import Camera, PinholeCamera, build_camera, default_camera
from spheretrace.core import Ray, vec3
from spheretrace.geometry import Hit, Sphere, Surface
from spheretrace.scene import BatchHits, Scene, SurfaceList, intersect_batch

__version__ = "0.1.0"

__all__ = [
    "BatchHits",
    "Camera",
    "Hit",
    "PinholeCamera",
    "Ray",
    "Scene",
    "Sphere",
    "Surface",
    "SurfaceList",
    "build_camera",
    "default_camera",
    "intersect_batch",
    "vec3",
]
