"""On-screen cell size as a function of zoom."""

from config import CELL_BASE_PX, CELL_GROWTH, CELL_REF_ZOOM, CELL_MIN_PX, CELL_MAX_PX


def cell_size_px(zoom: float) -> float:
    """Side length of one overlay cell in pixels.

    Shrinks exponentially as the map zooms in, held within
    [CELL_MIN_PX, CELL_MAX_PX] so cells stay legible.
    """
    size = CELL_BASE_PX / CELL_GROWTH ** (zoom - CELL_REF_ZOOM)
    return max(CELL_MIN_PX, min(CELL_MAX_PX, size))
