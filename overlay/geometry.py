"""Geographic and pixel value types shared by the overlay engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LatLon:
    lat: float
    lon: float


@dataclass(frozen=True)
class Point:
    """Pixel position; x grows right, y grows down."""
    x: float
    y: float

    def __add__(self, other):
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Point(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Viewport:
    """Snapshot of the host map's visible area.

    ``pixel_origin`` is where the map's layer origin currently sits in
    container (screen) pixels. It moves while panning and is reset by the
    host on zoom.

    A view across the antimeridian has ``bounds_ne.lon > 180`` (or
    ``bounds_sw.lon < -180``); samples on the wrapped side still count as
    inside.
    """
    bounds_sw: LatLon
    bounds_ne: LatLon
    zoom: float
    pixel_origin: Point = Point(0.0, 0.0)

    def contains(self, lat: float, lon: float) -> bool:
        """Inclusive bounds test."""
        return bool(self.contains_mask(lat, lon))

    def contains_mask(self, lat, lon):
        """Vectorised ``contains`` for numpy arrays of coordinates."""
        west, east = self.bounds_sw.lon, self.bounds_ne.lon
        in_lon = (lon >= west) & (lon <= east)
        if east > 180.0:
            in_lon = in_lon | ((lon + 360.0 >= west) & (lon + 360.0 <= east))
        if west < -180.0:
            in_lon = in_lon | ((lon - 360.0 >= west) & (lon - 360.0 <= east))
        return (lat >= self.bounds_sw.lat) & (lat <= self.bounds_ne.lat) & in_lon
