"""Batched ray-world intersection on the Taichi backend.

:meth:`SurfaceList.hit` answers one ray at a time. This module answers many
independent rays against the same world in a single Taichi kernel, one
parallel task per ray. The world is flattened into a sphere table whose rows
keep the host scan order, so each row's result (nearest t, earliest surface
on an exact tie) matches what ``world.hit`` returns for that ray.

Materials never enter the kernel: each result row carries the index of the
sphere that was hit, and :meth:`BatchHits.material` maps it back to the
sphere's material handle.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.scene.intersection import intersect_batch
    >>> origins = np.zeros((2, 3), dtype=np.float32)
    >>> directions = np.array([[0, 0, -1], [0, 1, 0]], dtype=np.float32)
    >>> hits = intersect_batch(world, origins, directions, 0.001, float("inf"))
    >>> hits.hit_mask
    array([ True, False])
"""

import logging
import math
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import RayData
from spheretrace.geometry.sphere import Sphere, SphereData, hit_sphere
from spheretrace.geometry.surface import Surface
from spheretrace.scene.world import SurfaceList

logger = logging.getLogger(__name__)

# surface_index value of a row whose ray hit nothing
MISS = -1


@dataclass(frozen=True)
class SphereTable:
    """Structure-of-arrays view of every sphere in a world, in scan order.

    Attributes:
        centers: (M, 3) float32 sphere centers.
        radii: (M,) float32 sphere radii.
        materials: The M material handles, row-aligned with centers.
    """

    centers: npt.NDArray[np.float32]
    radii: npt.NDArray[np.float32]
    materials: tuple[Any, ...]

    def __len__(self) -> int:
        return len(self.materials)


def _collect_spheres(surface: Surface, out: list[Sphere]) -> None:
    if isinstance(surface, Sphere):
        out.append(surface)
    elif isinstance(surface, SurfaceList):
        for child in surface:
            _collect_spheres(child, out)
    else:
        raise TypeError(
            f"Cannot flatten {type(surface).__name__} for batched intersection; "
            "only Sphere and SurfaceList are supported."
        )


def flatten_world(world: Surface) -> SphereTable:
    """Flatten a world into a SphereTable.

    Nested SurfaceLists are walked depth-first so that the table order is the
    order in which ``world.hit`` would test the spheres.

    Args:
        world: A Sphere or a (possibly nested) SurfaceList of spheres.

    Returns:
        The flattened SphereTable.

    Raises:
        TypeError: If the world contains any other kind of surface.
    """
    spheres: list[Sphere] = []
    _collect_spheres(world, spheres)
    centers = np.array([s.center for s in spheres], dtype=np.float32).reshape(-1, 3)
    radii = np.array([s.radius for s in spheres], dtype=np.float32)
    return SphereTable(
        centers=np.ascontiguousarray(centers),
        radii=radii,
        materials=tuple(s.material for s in spheres),
    )


@dataclass(frozen=True)
class BatchHits:
    """Column-oriented result of :func:`intersect_batch`, one row per ray.

    Attributes:
        t: (N,) ray parameter of the nearest hit; ``inf`` on a miss.
        point: (N, 3) hit points; zero on a miss.
        normal: (N, 3) outward unit normals; zero on a miss.
        surface_index: (N,) row of the hit sphere in ``materials`` order;
            ``MISS`` (-1) on a miss.
        materials: Material handles of the flattened world.
    """

    t: npt.NDArray[np.float32]
    point: npt.NDArray[np.float32]
    normal: npt.NDArray[np.float32]
    surface_index: npt.NDArray[np.int32]
    materials: tuple[Any, ...]

    def __len__(self) -> int:
        return int(self.t.shape[0])

    @property
    def hit_mask(self) -> npt.NDArray[np.bool_]:
        """Boolean mask of rows that hit something."""
        return self.surface_index != MISS

    def material(self, row: int) -> Any:
        """Material handle for result ``row``, or None if that ray missed."""
        index = int(self.surface_index[row])
        if index == MISS:
            return None
        return self.materials[index]


def _empty_result(n_rays: int, materials: tuple[Any, ...]) -> BatchHits:
    return BatchHits(
        t=np.full(n_rays, np.inf, dtype=np.float32),
        point=np.zeros((n_rays, 3), dtype=np.float32),
        normal=np.zeros((n_rays, 3), dtype=np.float32),
        surface_index=np.full(n_rays, MISS, dtype=np.int32),
        materials=materials,
    )


@ti.kernel
def _intersect_kernel(
    origins: ti.types.ndarray(dtype=tm.vec3, ndim=1),
    directions: ti.types.ndarray(dtype=tm.vec3, ndim=1),
    centers: ti.types.ndarray(dtype=tm.vec3, ndim=1),
    radii: ti.types.ndarray(dtype=ti.f32, ndim=1),
    t_min: ti.f32,
    t_max: ti.f32,
    out_t: ti.types.ndarray(dtype=ti.f32, ndim=1),
    out_point: ti.types.ndarray(dtype=tm.vec3, ndim=1),
    out_normal: ti.types.ndarray(dtype=tm.vec3, ndim=1),
    out_index: ti.types.ndarray(dtype=ti.i32, ndim=1),
):
    """Nearest-hit scan for every ray; the outer loop runs in parallel."""
    n_spheres = centers.shape[0]
    for i in range(origins.shape[0]):
        ray = RayData(origin=origins[i], direction=directions[i])
        closest_t = t_max
        best = -1
        best_point = tm.vec3(0.0, 0.0, 0.0)
        best_normal = tm.vec3(0.0, 0.0, 0.0)

        for j in range(n_spheres):
            sphere = SphereData(center=centers[j], radius=radii[j])
            rec = hit_sphere(ray, sphere, t_min, closest_t)
            # Strictly closer only: the earliest sphere keeps an exact tie
            if rec.hit == 1 and (best == -1 or rec.t < closest_t):
                closest_t = rec.t
                best = j
                best_point = rec.point
                best_normal = rec.normal

        if best != -1:
            out_t[i] = closest_t
            out_point[i] = best_point
            out_normal[i] = best_normal
            out_index[i] = best


def intersect_batch(
    world: Surface,
    origins: npt.ArrayLike,
    directions: npt.ArrayLike,
    t_min: float,
    t_max: float = math.inf,
) -> BatchHits:
    """Intersect many rays with the same world in one kernel launch.

    Requires ``ti.init(...)`` to have been called.

    Args:
        world: A Sphere or a (possibly nested) SurfaceList of spheres.
        origins: (N, 3) ray origins.
        directions: (N, 3) ray directions, unnormalized and non-zero.
        t_min: Smallest acceptable t (inclusive).
        t_max: Largest acceptable t (inclusive).

    Returns:
        A BatchHits with one row per ray.

    Raises:
        ValueError: If origins and directions are not matching (N, 3) arrays.
        TypeError: If the world contains surfaces other than spheres and lists.
    """
    origins_arr = np.ascontiguousarray(origins, dtype=np.float32)
    directions_arr = np.ascontiguousarray(directions, dtype=np.float32)
    if origins_arr.ndim != 2 or origins_arr.shape[1] != 3:
        raise ValueError(f"origins must have shape (N, 3), got {origins_arr.shape}")
    if directions_arr.shape != origins_arr.shape:
        raise ValueError(
            f"directions shape {directions_arr.shape} does not match origins "
            f"shape {origins_arr.shape}"
        )

    table = flatten_world(world)
    n_rays = origins_arr.shape[0]
    result = _empty_result(n_rays, table.materials)
    if n_rays == 0 or len(table) == 0:
        return result

    logger.debug("Intersecting %d rays with %d spheres", n_rays, len(table))
    _intersect_kernel(
        origins_arr,
        directions_arr,
        table.centers,
        table.radii,
        t_min,
        t_max,
        result.t,
        result.point,
        result.normal,
        result.surface_index,
    )
    return result
