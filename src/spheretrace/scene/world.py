"""Surface aggregate resolving the nearest hit among its children."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from spheretrace.core.ray import Ray
from spheretrace.geometry.hit import Hit
from spheretrace.geometry.surface import Surface


class SurfaceList(Surface):
    """An ordered, immutable collection of surfaces that is itself a surface.

    Children may be any Surface, including other SurfaceLists.

    Example:
        >>> world = SurfaceList([Sphere(vec3(0, 0, -1), 0.5, red)])
        >>> hit = world.hit(ray, 0.001, float("inf"))
    """

    __slots__ = ("_surfaces",)

    def __init__(self, surfaces: Iterable[Surface] = ()) -> None:
        self._surfaces: tuple[Surface, ...] = tuple(surfaces)

    @property
    def surfaces(self) -> tuple[Surface, ...]:
        """The children in scan order."""
        return self._surfaces

    def __len__(self) -> int:
        return len(self._surfaces)

    def __iter__(self) -> Iterator[Surface]:
        return iter(self._surfaces)

    def __getitem__(self, index: int) -> Surface:
        return self._surfaces[index]

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Hit | None:
        """Find the nearest intersection across all children.

        Each child is queried with the range narrowed to the closest t found
        so far, so a later child can only win by being closer. A hit replaces
        the current best only when strictly closer: on an exact tie the
        earliest child in scan order is kept.

        Args:
            ray: The ray to test.
            t_min: Smallest acceptable t (inclusive).
            t_max: Largest acceptable t (inclusive).

        Returns:
            The nearest Hit, or None if no child was hit.
        """
        best = None
        closest_so_far = t_max
        for surface in self._surfaces:
            rec = surface.hit(ray, t_min, closest_so_far)
            if rec is not None and (best is None or rec.t < closest_so_far):
                closest_so_far = rec.t
                best = rec
        return best

    def __repr__(self) -> str:
        return f"SurfaceList({list(self._surfaces)!r})"
