"""Contracts between the overlay engine and the map widget that hosts it."""

from __future__ import annotations

from typing import Callable, Protocol, Sequence, runtime_checkable

from overlay.geometry import Point, Size, Viewport
from overlay.range_filter import ClimateSample

Unsubscribe = Callable[[], None]


class OverlaySurface(Protocol):
    """The single drawable layer composited above the base map."""

    @property
    def cells(self) -> Sequence:
        """Cells currently drawn, in draw order."""
        ...

    def clear(self) -> None:
        ...

    def draw_cell(self, cell) -> None:
        ...

    def set_geometry(self, size: Size, translate: Point) -> None:
        """Resize the surface and move its origin to ``translate`` (container px)."""
        ...


@runtime_checkable
class SurfaceHost(Protocol):
    """Rendering pane of the map widget that surfaces attach to."""

    def create_surface(self) -> OverlaySurface:
        ...

    def remove_surface(self, surface: OverlaySurface) -> None:
        ...


@runtime_checkable
class MapHost(Protocol):
    """Map widget: owns pan/zoom state and the geographic transform."""

    def get_viewport(self) -> Viewport:
        ...

    def project_to_pixel(self, lat: float, lon: float) -> Point:
        """Layer point for (lat, lon); raises ProjectionFailure if unresolvable."""
        ...

    def on_viewport_change(self, callback: Callable[[], None]) -> Unsubscribe:
        ...

    def get_render_pane(self) -> SurfaceHost:
        ...

    def get_pixel_size(self) -> Size:
        ...


@runtime_checkable
class DataSource(Protocol):
    def get_samples(self) -> Sequence[ClimateSample]:
        ...


__all__ = ["DataSource", "MapHost", "OverlaySurface", "SurfaceHost", "Unsubscribe"]
