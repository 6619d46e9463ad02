"""Hit record produced by a successful intersection test."""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from typing import Any

from spheretrace.core.ray import Ray, Vec3, as_vec3


@dataclass(frozen=True, eq=False)
class Hit:
    """Record of a ray-surface intersection.

    The hit point is not passed in: it is derived from the ray at
    construction, so ``hit.point`` always equals ``ray.at(hit.t)``.

    Attributes:
        t: The ray parameter of the intersection.
        point: The intersection point, ``ray.at(t)``.
        normal: Outward unit normal of the surface at ``point``.
        material: Material handle of the surface that was hit. Opaque to
            this package; it is forwarded as-is for shading.

    Example:
        >>> hit = Hit(0.5, ray, material, normal)
        >>> hit.point  # same as ray.at(0.5)
    """

    t: float
    ray: InitVar[Ray]
    material: Any
    normal: Vec3
    point: Vec3 = field(init=False)

    def __post_init__(self, ray: Ray) -> None:
        object.__setattr__(self, "t", float(self.t))
        object.__setattr__(self, "normal", as_vec3(self.normal))
        object.__setattr__(self, "point", ray.at(self.t))

    def __repr__(self) -> str:
        return (
            f"Hit(t={self.t}, point={self.point.tolist()}, "
            f"normal={self.normal.tolist()}, material={self.material!r})"
        )
