"""Camera mapping normalized screen coordinates to rays.

The camera is four vectors: an ``origin`` and an image plane spanned by
``horiz`` and ``vert`` starting at ``lower_left``. Screen coordinates follow
pixel traversal order:
    u in [0, 1]: left to right across the image
    v in [0, 1]: top to bottom across the image (row 0 is the top)

The name ``lower_left`` is kept for the plane origin even though, with ``vert``
pointing down, it sits at the top-left of the view.
"""

from __future__ import annotations

from dataclasses import dataclass

from spheretrace.core.ray import Ray, Vec3, as_vec3, vec3

# Default view frustum: 2:1 image plane one unit in front of the eye, y down.
DEFAULT_LOWER_LEFT = (-2.0, 1.0, -1.0)
DEFAULT_HORIZ = (4.0, 0.0, 0.0)
DEFAULT_VERT = (0.0, -2.0, 0.0)
DEFAULT_ORIGIN = (-1.0, 0.5, 1.0)


@dataclass(frozen=True, eq=False)
class Camera:
    """A fixed camera.

    Attributes:
        origin: Eye position; every ray starts here.
        lower_left: Image plane point at (u, v) = (0, 0).
        horiz: Vector spanning the image plane from u = 0 to u = 1.
        vert: Vector spanning the image plane from v = 0 to v = 1.
    """

    origin: Vec3
    lower_left: Vec3
    horiz: Vec3
    vert: Vec3

    def __post_init__(self) -> None:
        for name in ("origin", "lower_left", "horiz", "vert"):
            object.__setattr__(self, name, as_vec3(getattr(self, name)))

    @classmethod
    def default(cls) -> Camera:
        """Alias for :func:`default_camera`."""
        return default_camera()

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate a ray through normalized image coordinates (u, v).

        Args:
            u: Horizontal coordinate, 0 at the left edge and 1 at the right.
            v: Vertical coordinate, 0 at the top edge and 1 at the bottom.

        Returns:
            A Ray from ``origin`` toward ``lower_left + u*horiz + v*vert``.
            The direction is not normalized.
        """
        target = self.lower_left + u * self.horiz + v * self.vert
        return Ray(self.origin, target - self.origin)

    def __repr__(self) -> str:
        return (
            f"Camera(origin={self.origin.tolist()}, lower_left={self.lower_left.tolist()}, "
            f"horiz={self.horiz.tolist()}, vert={self.vert.tolist()})"
        )


def default_camera() -> Camera:
    """Build the default camera preset.

    Returns a new value on every call; there is no shared camera state.
    """
    return Camera(
        origin=vec3(*DEFAULT_ORIGIN),
        lower_left=vec3(*DEFAULT_LOWER_LEFT),
        horiz=vec3(*DEFAULT_HORIZ),
        vert=vec3(*DEFAULT_VERT),
    )
