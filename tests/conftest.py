"""
Shared fixtures for the overlay engine tests.

Puts the project root on sys.path so ``config``, ``overlay`` and ``data``
import the same way the app imports them, and provides a fake map host
with a plain linear (equirectangular) transform.
"""

import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from overlay.errors import ProjectionFailure  # noqa: E402
from overlay.geometry import LatLon, Point, Size, Viewport  # noqa: E402
from overlay.range_filter import ClimateSample, RangeSelection  # noqa: E402

WHOLE_GLOBE = Viewport(LatLon(-90, -180), LatLon(90, 180), zoom=3.0)


class RecordingSurface:
    def __init__(self):
        self._cells = []
        self.clear_count = 0
        self.size = None
        self.translate = None

    @property
    def cells(self):
        return tuple(self._cells)

    def clear(self):
        self.clear_count += 1
        self._cells.clear()

    def draw_cell(self, cell):
        self._cells.append(cell)

    def set_geometry(self, size, translate):
        self.size = size
        self.translate = translate


class FakePane:
    def __init__(self):
        self.surfaces = []
        self.created = 0
        self.removed = 0

    def create_surface(self):
        surface = RecordingSurface()
        self.surfaces.append(surface)
        self.created += 1
        return surface

    def remove_surface(self, surface):
        self.surfaces.remove(surface)
        self.removed += 1


class LinearHost:
    """Map host with x = (lon + 180) * scale, y = (90 - lat) * scale."""

    def __init__(self, viewport=WHOLE_GLOBE, scale=2.0, size=(720, 360)):
        self.viewport = viewport
        self.scale = scale
        self.size = Size(*size)
        self.pane = FakePane()
        self.callbacks = []
        self.failing = set()
        self.project_calls = 0

    def get_viewport(self):
        return self.viewport

    def project_to_pixel(self, lat, lon):
        self.project_calls += 1
        if (lat, lon) in self.failing:
            raise ProjectionFailure(lat, lon, reason="transient transition")
        return Point((lon + 180) * self.scale, (90 - lat) * self.scale)

    def on_viewport_change(self, callback):
        self.callbacks.append(callback)

        def unsubscribe():
            if callback in self.callbacks:
                self.callbacks.remove(callback)

        return unsubscribe

    def get_render_pane(self):
        return self.pane

    def get_pixel_size(self):
        return self.size

    def move(self, viewport):
        """Simulate a pan/zoom tick."""
        self.viewport = viewport
        for callback in list(self.callbacks):
            callback()


@pytest.fixture
def host():
    return LinearHost()


@pytest.fixture
def make_host():
    """Factory fixture: independent LinearHost instances."""
    return LinearHost


@pytest.fixture
def make_sample():
    """Factory fixture: ClimateSample with sensible defaults."""
    def _make(lat=0.0, lon=0.0, temp_f=60.0, solar_index=50.0):
        return ClimateSample(lat=lat, lon=lon, temp_f=temp_f, solar_index=solar_index)
    return _make


@pytest.fixture
def everything():
    """Selection that matches every in-domain sample."""
    return RangeSelection(-20, 120, 0, 100)


@pytest.fixture
def standard_selection():
    return RangeSelection(temp_min=-10, temp_max=90, solar_min=20, solar_max=80)
