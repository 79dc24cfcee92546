"""Grid renderer: clear → cull → project → color → draw → re-anchor.

Every call is a full repaint of the one overlay surface, so repeated or
rapid-fire redraws can never leave stale cells behind.
"""

import logging
from dataclasses import dataclass

import numpy as np

from overlay.color import color_of
from overlay.errors import ProjectionFailure
from overlay.host import MapHost, OverlaySurface
from overlay.layout import cell_size_px
from overlay.projection import project, overlay_translation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawnCell:
    """One square cell in overlay-local pixels (top-left corner + side)."""
    x: float
    y: float
    size: float
    color: str
    opacity: float
    lat: float
    lon: float


def cull(samples, viewport):
    """Samples whose position lies inside the viewport bounds (inclusive)."""
    if not samples:
        return []
    n = len(samples)
    lat = np.fromiter((s.lat for s in samples), dtype=np.float64, count=n)
    lon = np.fromiter((s.lon for s in samples), dtype=np.float64, count=n)
    visible = viewport.contains_mask(lat, lon)
    return [samples[i] for i in np.flatnonzero(visible)]


class GridRenderer:
    """Draws filtered samples into a single overlay surface."""

    def __init__(self, host: MapHost, surface: OverlaySurface) -> None:
        self._host = host
        self._surface = surface

    @property
    def surface(self):
        return self._surface

    def render(self, samples, viewport=None):
        """Repaint the surface with ``samples`` (already range-filtered).

        Returns the list of cells drawn this frame.
        """
        if viewport is None:
            viewport = self._host.get_viewport()

        self._surface.clear()
        visible = cull(samples, viewport)

        cells = []
        skipped = 0
        if visible:
            size = cell_size_px(viewport.zoom)
            for sample in visible:
                try:
                    px = project(self._host, sample.lat, sample.lon)
                except ProjectionFailure as exc:
                    skipped += 1
                    logger.debug("Skipping sample this frame: %s", exc)
                    continue
                color = color_of(sample)
                cell = DrawnCell(
                    x=px.x - size / 2, y=px.y - size / 2, size=size,
                    color=color.rgb, opacity=color.opacity,
                    lat=sample.lat, lon=sample.lon,
                )
                self._surface.draw_cell(cell)
                cells.append(cell)

        self._surface.set_geometry(self._host.get_pixel_size(),
                                   overlay_translation(viewport))

        logger.debug("Rendered %d cells (%d of %d samples in view, "
                     "%d projection failures) at zoom %.2f",
                     len(cells), len(visible), len(samples), skipped,
                     viewport.zoom)
        return cells
