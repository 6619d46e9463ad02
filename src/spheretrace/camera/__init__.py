"""Camera module for primary ray generation.

Components:
    camera: Camera value type and the default preset
    pinhole: Look-at configuration and camera builder

Ray generation uses normalized image coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: top to bottom across image
"""

from .camera import (
    DEFAULT_HORIZ,
    DEFAULT_LOWER_LEFT,
    DEFAULT_ORIGIN,
    DEFAULT_VERT,
    Camera,
    default_camera,
)
from .pinhole import PinholeCamera, build_camera

__all__ = [
    "Camera",
    "default_camera",
    "PinholeCamera",
    "build_camera",
    "DEFAULT_ORIGIN",
    "DEFAULT_LOWER_LEFT",
    "DEFAULT_HORIZ",
    "DEFAULT_VERT",
]
