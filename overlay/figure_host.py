"""Plotly map host: Web Mercator viewport, pan/zoom events, paper-space surface.

The Dash ``dcc.Graph`` owns the real widget in the browser; this module keeps
the server-side mirror of its viewport (fed from ``relayoutData``) and turns
the overlay surface into ``layout.shapes`` drawn above the base map.

Coordinate frames
-----------------
world px     – Web Mercator pixels of the whole world at the current zoom
layer px     – world px minus the layer origin; fixed while panning
container px – pixels of the graph itself, (0, 0) at its top-left corner
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict

import plotly.graph_objects as go

from config import (
    MAP_CENTER, MAP_ZOOM, MAP_SIZE_PX, MAP_STYLE,
    WORLD_SIZE_PX, MERCATOR_MAX_LAT,
    LAT_MIN, LAT_MAX, LON_MIN, LON_MAX,
)
from overlay.errors import ProjectionFailure
from overlay.geometry import LatLon, Point, Size, Viewport

logger = logging.getLogger(__name__)


# ── Web Mercator ──────────────────────────────────────────────────────

def world_size(zoom):
    return WORLD_SIZE_PX * 2.0 ** zoom


def latlon_to_world(lat, lon, zoom) -> Point:
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ProjectionFailure(lat, lon, reason="non-finite coordinate")
    lat = max(-MERCATOR_MAX_LAT, min(MERCATOR_MAX_LAT, lat))
    size = world_size(zoom)
    x = (lon + 180.0) / 360.0 * size
    s = math.sin(math.radians(lat))
    y = (0.5 - math.log((1 + s) / (1 - s)) / (4 * math.pi)) * size
    return Point(x, y)


def world_to_latlon(point, zoom) -> LatLon:
    size = world_size(zoom)
    lon = point.x / size * 360.0 - 180.0
    n = math.pi * (1 - 2 * point.y / size)
    lat = math.degrees(math.atan(math.sinh(n)))
    return LatLon(lat, lon)


# ── Overlay surface ───────────────────────────────────────────────────

class FigureSurface:
    """Overlay surface that records cells and exports them as Plotly shapes."""

    def __init__(self) -> None:
        self._cells = []
        self.size = Size(*MAP_SIZE_PX)
        self.translate = Point(0.0, 0.0)

    @property
    def cells(self):
        return tuple(self._cells)

    def clear(self) -> None:
        self._cells.clear()

    def draw_cell(self, cell) -> None:
        self._cells.append(cell)

    def set_geometry(self, size, translate) -> None:
        self.size = size
        self.translate = translate

    def to_shapes(self) -> list[dict]:
        """Cells as paper-referenced rectangles (container px → paper)."""
        w, h = self.size.width, self.size.height
        if w <= 0 or h <= 0:
            return []
        shapes = []
        for cell in self._cells:
            cx = cell.x + self.translate.x
            cy = cell.y + self.translate.y
            shapes.append(dict(
                type="rect", xref="paper", yref="paper",
                x0=round(cx / w, 5), x1=round((cx + cell.size) / w, 5),
                y0=round(1 - (cy + cell.size) / h, 5), y1=round(1 - cy / h, 5),
                fillcolor=cell.color, opacity=round(cell.opacity, 4),
                line=dict(width=0), layer="above",
            ))
        return shapes


class _RenderPane:
    """Surface host of a FigureMapHost."""

    def __init__(self) -> None:
        self.surfaces: list[FigureSurface] = []

    def create_surface(self) -> FigureSurface:
        surface = FigureSurface()
        self.surfaces.append(surface)
        return surface

    def remove_surface(self, surface) -> None:
        if surface in self.surfaces:
            self.surfaces.remove(surface)


# ── Host ──────────────────────────────────────────────────────────────

class FigureMapHost:
    """Server-side model of a Plotly ``Scattermap`` widget.

    Map style is passed in explicitly; nothing here touches Plotly defaults.
    """

    def __init__(self, center=None, zoom=MAP_ZOOM, size=MAP_SIZE_PX,
                 style=None) -> None:
        center = center or MAP_CENTER
        self._center = LatLon(float(center["lat"]), float(center["lon"]))
        self._zoom = float(zoom)
        self._size = Size(float(size[0]), float(size[1]))
        self._style = style if style is not None else MAP_STYLE
        self._pane = _RenderPane()
        self._subscribers: Dict[int, Callable[[], None]] = {}
        self._next_token = 0
        self._reset_layer_origin()

    # ------------------------------------------------------------------
    # MapHost protocol
    # ------------------------------------------------------------------
    def get_viewport(self) -> Viewport:
        top_left = self._container_top_left()
        w, h = self._size.width, self._size.height
        world = world_size(self._zoom)

        nw = world_to_latlon(top_left, self._zoom)
        se = world_to_latlon(top_left + Point(w, h), self._zoom)
        north = LAT_MAX if top_left.y <= 0 else nw.lat
        south = LAT_MIN if top_left.y + h >= world else se.lat
        if w >= world:
            west, east = LON_MIN, LON_MAX
        else:
            # may run past ±180 when the view straddles the antimeridian
            west, east = nw.lon, se.lon

        return Viewport(
            bounds_sw=LatLon(south, west),
            bounds_ne=LatLon(north, east),
            zoom=self._zoom,
            pixel_origin=self._layer_origin - top_left,
        )

    def project_to_pixel(self, lat, lon) -> Point:
        """Layer point of the world copy nearest the view center."""
        if math.isfinite(lon):
            lon = lon + 360.0 * round((self._center.lon - lon) / 360.0)
        return latlon_to_world(lat, lon, self._zoom) - self._layer_origin

    def on_viewport_change(self, callback):
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = callback

        def unsubscribe():
            self._subscribers.pop(token, None)

        return unsubscribe

    def get_render_pane(self) -> _RenderPane:
        return self._pane

    def get_pixel_size(self) -> Size:
        return self._size

    # ------------------------------------------------------------------
    # View changes
    # ------------------------------------------------------------------
    @property
    def center(self) -> LatLon:
        return self._center

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def set_view(self, center=None, zoom=None) -> bool:
        """Pan and/or zoom; notifies subscribers once if anything changed."""
        changed = False
        if zoom is not None and float(zoom) != self._zoom:
            self._zoom = float(zoom)
            changed = True
        reset_origin = changed
        if center is not None:
            lon = float(center["lon"])
            wrapped = lon
            if not LON_MIN <= lon <= LON_MAX:
                wrapped = (lon - LON_MIN) % 360.0 + LON_MIN
            new_center = LatLon(
                max(-MERCATOR_MAX_LAT, min(MERCATOR_MAX_LAT, float(center["lat"]))),
                wrapped,
            )
            if new_center != self._center:
                self._center = new_center
                changed = True
                # panning onto another world copy shifts world px by a full width
                reset_origin = reset_origin or wrapped != lon
        if not changed:
            return False
        if reset_origin:
            self._reset_layer_origin()
        logger.debug("View changed: center=(%.4f, %.4f) zoom=%.2f",
                     self._center.lat, self._center.lon, self._zoom)
        self._notify()
        return True

    def resize(self, width, height) -> bool:
        size = Size(float(width), float(height))
        if size == self._size:
            return False
        self._size = size
        self._reset_layer_origin()
        self._notify()
        return True

    def apply_relayout(self, relayout_data) -> bool:
        """Apply a Plotly ``relayoutData`` event from the map graph."""
        if not relayout_data:
            return False
        center = relayout_data.get("map.center")
        zoom = relayout_data.get("map.zoom")
        if center is None and zoom is None:
            return False
        return self.set_view(center=center, zoom=zoom)

    # ------------------------------------------------------------------
    # Figure
    # ------------------------------------------------------------------
    def build_figure(self) -> go.Figure:
        """Base map figure with every attached surface drawn as shapes."""
        fig = go.Figure(data=[
            go.Scattermap(lat=[], lon=[], mode="markers",
                          hoverinfo="skip", showlegend=False),
        ])
        shapes = []
        for surface in self._pane.surfaces:
            shapes.extend(surface.to_shapes())
        fig.update_layout(
            map=dict(style=self._style,
                     center=dict(lat=self._center.lat, lon=self._center.lon),
                     zoom=self._zoom),
            width=int(self._size.width), height=int(self._size.height),
            autosize=False,
            margin=dict(l=0, r=0, t=0, b=0),
            paper_bgcolor="rgba(0,0,0,0)",
            showlegend=False,
            shapes=shapes,
            uirevision="climate-map",
        )
        return fig

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _container_top_left(self) -> Point:
        c = latlon_to_world(self._center.lat, self._center.lon, self._zoom)
        return Point(c.x - self._size.width / 2, c.y - self._size.height / 2)

    def _reset_layer_origin(self) -> None:
        self._layer_origin = self._container_top_left()

    def _notify(self) -> None:
        for callback in list(self._subscribers.values()):
            callback()
