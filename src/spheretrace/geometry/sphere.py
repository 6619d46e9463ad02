"""Sphere primitive with analytic ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + 2*b*t + c = 0

where:
    oc = origin - center
    a = dot(direction, direction)
    b = dot(oc, direction)  (half of the textbook 'b')
    c = dot(oc, oc) - radius^2

so the discriminant reduces to ``b*b - a*c`` and the roots to
``(-b -/+ sqrt(discriminant)) / a``.

Two implementations share this math: :class:`Sphere` is the host-side
Surface used by :class:`~spheretrace.scene.world.SurfaceList`, and
:func:`hit_sphere` is the Taichi function used by the batched query in
:mod:`spheretrace.scene.intersection`.

Example:
    >>> from spheretrace.core.ray import Ray, vec3
    >>> from spheretrace.geometry.sphere import Sphere
    >>> sphere = Sphere(vec3(0.0, 0.0, -1.0), 0.5, material="red")
    >>> hit = sphere.hit(Ray(vec3(0, 0, 0), vec3(0, 0, -1)), 0.0, float("inf"))
    >>> hit.t
    0.5
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import Ray, RayData, Vec3, as_vec3, dot, ray_at
from spheretrace.geometry.hit import Hit
from spheretrace.geometry.surface import Surface


@dataclass(frozen=True, eq=False)
class Sphere(Surface):
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere. Must be positive; this is not
            checked.
        material: Opaque material handle copied into every hit.
    """

    center: Vec3
    radius: float
    material: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec3(self.center))
        object.__setattr__(self, "radius", float(self.radius))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Hit | None:
        """Test for ray-sphere intersection.

        The nearer root is tried first; the farther one is only used when the
        nearer root falls outside ``[t_min, t_max]``, which happens when the
        ray starts inside the sphere or the range excludes the front side.

        Args:
            ray: The ray to test.
            t_min: Smallest acceptable t (inclusive).
            t_max: Largest acceptable t (inclusive).

        Returns:
            A Hit with an outward unit normal, or None on a miss.
        """
        oc = ray.origin - self.center
        a = dot(ray.direction, ray.direction)
        b = dot(oc, ray.direction)
        c = dot(oc, oc) - self.radius * self.radius
        discriminant = b * b - a * c
        if discriminant < 0.0:
            return None

        # Roots become Python floats so the bounds are not rounded to float32
        sqrt_d = np.sqrt(discriminant)
        root = float((-b - sqrt_d) / a)
        if root < t_min or root > t_max:
            root = float((-b + sqrt_d) / a)
            if root < t_min or root > t_max:
                return None

        point = ray.at(root)
        normal = (point - self.center) / np.float32(self.radius)
        return Hit(root, ray, self.material, normal)

    def __repr__(self) -> str:
        return (
            f"Sphere(center={self.center.tolist()}, radius={self.radius}, "
            f"material={self.material!r})"
        )


# =============================================================================
# Taichi implementation (kernel-side)
# =============================================================================


@ti.dataclass
class SphereData:
    """Kernel-side sphere geometry.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: tm.vec3
    radius: ti.f32


@ti.dataclass
class SphereHit:
    """Kernel-side result of :func:`hit_sphere`.

    Attributes:
        hit: 1 if the ray intersected the sphere, 0 on a miss.
        t: The ray parameter of the intersection. Only valid if hit == 1.
        point: The intersection point. Only valid if hit == 1.
        normal: Outward unit normal at ``point``. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: tm.vec3
    normal: tm.vec3


@ti.func
def hit_sphere(ray: RayData, sphere: SphereData, t_min: ti.f32, t_max: ti.f32) -> SphereHit:
    """Kernel-side equivalent of :meth:`Sphere.hit`.

    Uses the same coefficients, root order and inclusive bounds so that the
    batched and host queries agree.

    Args:
        ray: The ray to test.
        sphere: The sphere to test against.
        t_min: Smallest acceptable t (inclusive).
        t_max: Largest acceptable t (inclusive).

    Returns:
        A SphereHit; check its ``hit`` field.
    """
    oc = ray.origin - sphere.center
    a = tm.dot(ray.direction, ray.direction)
    b = tm.dot(oc, ray.direction)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = b * b - a * c

    # Taichi requires outer-scope declaration
    did_hit = 0
    hit_t = 0.0
    hit_point = tm.vec3(0.0, 0.0, 0.0)
    hit_normal = tm.vec3(0.0, 0.0, 0.0)

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        root = (-b - sqrt_d) / a
        valid = (root >= t_min) and (root <= t_max)
        if not valid:
            root = (-b + sqrt_d) / a
            valid = (root >= t_min) and (root <= t_max)

        if valid:
            did_hit = 1
            hit_t = root
            hit_point = ray_at(ray, root)
            hit_normal = (hit_point - sphere.center) / sphere.radius

    return SphereHit(hit=did_hit, t=hit_t, point=hit_point, normal=hit_normal)
