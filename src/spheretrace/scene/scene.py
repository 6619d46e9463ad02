"""Scene bundling image dimensions, the world and the camera.

A Scene is built once by scene-construction code and then only read by the
render driver:
    ray = scene.camera.get_ray(u, v)
    hit = scene.world.hit(ray, t_min, t_max)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from spheretrace.camera.camera import Camera, default_camera
from spheretrace.geometry.surface import Surface
from spheretrace.scene.world import SurfaceList

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Scene:
    """Everything a render driver needs to trace primary rays.

    Attributes:
        width: Output image width in pixels (positive).
        height: Output image height in pixels (positive).
        world: The surfaces to intersect. Any iterable of surfaces is
            wrapped into a SurfaceList.
        camera: The camera. Defaults to a fresh :func:`default_camera`.
    """

    width: int
    height: int
    world: SurfaceList
    camera: Camera = field(default_factory=default_camera)

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"Scene {name} must be a positive integer, got {value!r}.")
        if not isinstance(self.world, SurfaceList):
            world: Iterable[Surface] = self.world
            object.__setattr__(self, "world", SurfaceList(world))
        logger.debug(
            "Created %dx%d scene with %d surfaces", self.width, self.height, len(self.world)
        )

    @property
    def aspect_ratio(self) -> float:
        """Image width divided by height."""
        return self.width / self.height
