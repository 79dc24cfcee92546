"""Exceptions raised by the overlay engine."""


class OverlayError(Exception):
    """Base class for overlay engine errors."""


class AlreadyMounted(OverlayError):
    """Raised when mount() is called on an overlay that is still mounted."""


class ProjectionFailure(OverlayError):
    """Raised by a host when it cannot resolve a coordinate to a pixel.

    Recoverable: the renderer skips the affected sample for the current
    frame and carries on.
    """

    def __init__(self, lat, lon, reason="unresolvable coordinate"):
        super().__init__(f"cannot project ({lat}, {lon}): {reason}")
        self.lat = lat
        self.lon = lon
        self.reason = reason
