"""Ray data structure and vector helpers.

This module provides the host-side Ray used by every intersection query,
the small set of vector helpers the rest of the package builds on, and a
Taichi mirror of the ray for use inside kernels.

Host vectors are 3-component ``numpy.float32`` arrays flagged read-only so
that rays, spheres and cameras cannot be mutated after construction.

Example:
    >>> from spheretrace.core.ray import Ray, vec3
    >>> ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
    >>> point = ray.at(5.0)  # Point 5 units along the ray
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

Vec3 = npt.NDArray[np.float32]


def _freeze(array: np.ndarray) -> Vec3:
    array.flags.writeable = False
    return array


def vec3(x: float, y: float, z: float) -> Vec3:
    """Build a read-only float32 3-vector."""
    return _freeze(np.array((x, y, z), dtype=np.float32))


def as_vec3(value: Sequence[float] | np.ndarray) -> Vec3:
    """Coerce a 3-sequence into a read-only float32 3-vector.

    Args:
        value: Any sequence or array holding exactly three numbers.

    Returns:
        A new read-only array, or ``value`` itself if it already is one.

    Raises:
        ValueError: If ``value`` does not have shape (3,).
    """
    if isinstance(value, np.ndarray) and value.dtype == np.float32 and not value.flags.writeable:
        if value.shape != (3,):
            raise ValueError(f"Expected a 3-vector, got shape {value.shape}")
        return value
    array = np.array(value, dtype=np.float32)
    if array.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {array.shape}")
    return _freeze(array)


def dot(a: Vec3, b: Vec3) -> np.float32:
    """Dot product of two 3-vectors."""
    return np.dot(a, b)


def length(v: Vec3) -> float:
    """Euclidean length of a vector."""
    return float(np.sqrt(np.dot(v, v)))


def normalize(v: Vec3) -> Vec3:
    """Return ``v`` scaled to unit length."""
    return _freeze(v / np.float32(length(v)))


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. It is not normalized and must
            not be the zero vector; this is not checked.
    """

    origin: Vec3
    direction: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", as_vec3(self.origin))
        object.__setattr__(self, "direction", as_vec3(self.direction))

    def at(self, t: float) -> Vec3:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Negative values lie behind the origin.

        Returns:
            The point ``origin + t * direction``.
        """
        return _freeze(self.origin + np.float32(t) * self.direction)

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin.tolist()}, direction={self.direction.tolist()})"


# =============================================================================
# Taichi mirror (kernel-side)
# =============================================================================


@ti.dataclass
class RayData:
    """Kernel-side ray.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3), unnormalized.
    """

    origin: tm.vec3
    direction: tm.vec3


@ti.func
def ray_at(ray: RayData, t: ti.f32) -> tm.vec3:
    """Kernel-side equivalent of :meth:`Ray.at`."""
    return ray.origin + t * ray.direction
