"""Look-at configuration for building cameras.

This module turns a pinhole (perspective) camera description into a
:class:`~spheretrace.camera.camera.Camera`. The description supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view specification
- Arbitrary aspect ratios

The builder computes an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

and then expresses the viewport in the camera's top-to-bottom convention,
so ``get_ray(0, 0)`` is the top-left corner of the image.

Example:
    >>> from spheretrace.camera.pinhole import PinholeCamera, build_camera
    >>>
    >>> # Camera looking at origin from z=3
    >>> camera = build_camera(
    ...     PinholeCamera(
    ...         lookfrom=(0.0, 0.0, 3.0),
    ...         lookat=(0.0, 0.0, 0.0),
    ...         vup=(0.0, 1.0, 0.0),
    ...         vfov=60.0,
    ...         aspect_ratio=16.0 / 9.0,
    ...     )
    ... )
    >>> ray = camera.get_ray(0.5, 0.5)  # Ray through image center
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from spheretrace.camera.camera import Camera
from spheretrace.core.ray import length, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees, in (0, 180).
        aspect_ratio: Width divided by height of the output image.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    vfov: float = 90.0
    aspect_ratio: float = 2.0


def build_camera(config: PinholeCamera) -> Camera:
    """Build a Camera from a look-at configuration.

    The viewport is a virtual image plane at unit distance from the camera.

    Args:
        config: Camera configuration with position, orientation, and FOV.

    Returns:
        A Camera whose ``lower_left`` is the top-left viewport corner and
        whose ``vert`` points down the image.

    Raises:
        ValueError: If vfov is outside (0, 180), aspect_ratio is not
            positive, lookfrom equals lookat, or vup is parallel to the view
            direction.
    """
    if not 0.0 < config.vfov < 180.0:
        raise ValueError(f"vfov = {config.vfov} is outside (0, 180) degrees.")
    if config.aspect_ratio <= 0.0:
        raise ValueError(f"aspect_ratio = {config.aspect_ratio} must be positive.")

    # Viewport dimensions at unit distance
    h = math.tan(math.radians(config.vfov) / 2.0)
    viewport_height = 2.0 * h
    viewport_width = config.aspect_ratio * viewport_height

    lookfrom = np.array(config.lookfrom, dtype=np.float32)
    lookat = np.array(config.lookat, dtype=np.float32)
    vup = np.array(config.vup, dtype=np.float32)

    # w points from lookat toward lookfrom (backward)
    w = lookfrom - lookat
    if length(w) == 0.0:
        raise ValueError("lookfrom and lookat must be different points.")
    w = normalize(w)

    # u points right (perpendicular to w and vup)
    u = np.cross(vup, w)
    if length(u) < 1e-8:
        raise ValueError(f"vup = {config.vup} is parallel to the view direction.")
    u = normalize(u)

    # v points up in the camera's frame
    v = np.cross(w, u)

    horizontal = viewport_width * u
    vertical = viewport_height * v

    # Top-left of the viewport: forward, half left, half up
    top_left = lookfrom - w - horizontal / 2.0 + vertical / 2.0

    logger.debug(
        "Built camera at %s looking at %s (vfov=%s, aspect=%s)",
        config.lookfrom,
        config.lookat,
        config.vfov,
        config.aspect_ratio,
    )
    return Camera(origin=lookfrom, lower_left=top_left, horiz=horizontal, vert=-vertical)
