"""Scene module for world aggregation and ray-world queries.

Components:
    world: SurfaceList, the nearest-hit aggregate of surfaces
    scene: Scene bundling image size, world and camera
    intersection: Batched ray-world intersection on the Taichi backend

Scene data is immutable once built, so any number of ray queries, host-side
or batched, may run against it concurrently.
"""

from .intersection import MISS, BatchHits, SphereTable, flatten_world, intersect_batch
from .scene import Scene
from .world import SurfaceList

__all__ = [
    "Scene",
    "SurfaceList",
    "BatchHits",
    "SphereTable",
    "flatten_world",
    "intersect_batch",
    "MISS",
]
