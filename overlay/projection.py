"""Geographic → overlay-local pixel projection through the host transform."""

import math

from overlay.errors import ProjectionFailure
from overlay.geometry import Point


def project(host, lat, lon) -> Point:
    """Project (lat, lon) into the overlay's frame.

    The overlay frame is the map's layer frame: points stay fixed while the
    map pans, and the surface itself is translated to follow the layer
    origin (see ``overlay_translation``).
    """
    point = host.project_to_pixel(lat, lon)
    if not (math.isfinite(point.x) and math.isfinite(point.y)):
        raise ProjectionFailure(lat, lon, reason="non-finite pixel")
    return point


def overlay_translation(viewport) -> Point:
    """Translation to apply to the whole surface for the current viewport."""
    return Point(viewport.pixel_origin.x, viewport.pixel_origin.y)
