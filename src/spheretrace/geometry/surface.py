"""The Surface capability shared by primitives and aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spheretrace.core.ray import Ray
    from spheretrace.geometry.hit import Hit


class Surface:
    """Anything a ray can be intersected with.

    Subclasses implement :meth:`hit`. Both concrete primitives such as
    :class:`~spheretrace.geometry.sphere.Sphere` and composites such as
    :class:`~spheretrace.scene.world.SurfaceList` are surfaces.
    """

    __slots__ = ()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Hit | None:
        """Intersect ``ray`` with this surface.

        Args:
            ray: The ray to test.
            t_min: Smallest acceptable ray parameter (inclusive).
            t_max: Largest acceptable ray parameter (inclusive).

        Returns:
            The hit with the smallest t in ``[t_min, t_max]``, or None if the
            ray does not meet the surface inside that range.
        """
        raise NotImplementedError("hit() must be implemented by subclasses.")
