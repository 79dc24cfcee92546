"""Dash callbacks: feed slider ranges and map pan/zoom into the overlay.

Single callback: any range change or map relayout → update the host's
viewport mirror, push the latest samples + selection into the overlay
handle, return the redrawn figure and a stats line.
"""

import logging

from dash import Input, Output, callback

from config import MAP_CENTER, MAP_ZOOM, MAP_SIZE_PX, MAP_STYLE, SNAPSHOT_PATH
from data.synthetic_climate import SyntheticClimateSource
from overlay.figure_host import FigureMapHost
from overlay.lifecycle import mount
from overlay.range_filter import RangeSelection

logger = logging.getLogger(__name__)

# ── Session (single-user demo server) ─────────────────────────────────

SOURCE = SyntheticClimateSource(path=SNAPSHOT_PATH)
HOST = FigureMapHost(center=MAP_CENTER, zoom=MAP_ZOOM, size=MAP_SIZE_PX,
                     style=MAP_STYLE)
HANDLE = mount(HOST)


def _stats_text(n_cells, n_samples, selection):
    if n_samples == 0:
        return "No climate data loaded"
    if n_cells == 0:
        return "No samples match the selected ranges in this view"
    return (f"{n_cells:,} of {n_samples:,} samples shown · "
            f"{selection.temp_min:g}–{selection.temp_max:g} °F · "
            f"solar {selection.solar_min:g}–{selection.solar_max:g}")


def build_outputs(host, handle, source, temp_range, solar_range, relayout_data):
    """Apply one round of UI input and return ``(figure, stats)``."""
    host.apply_relayout(relayout_data)
    selection = RangeSelection.from_ranges(temp_range, solar_range)
    samples = source.get_samples()
    handle.update(samples, selection)
    stats = _stats_text(len(handle.cells), len(samples), selection)
    return host.build_figure(), stats


# ── Callback: range sliders + map relayout ───────────────────────────

@callback(
    Output("map-figure", "figure"),
    Output("stats-text", "children"),
    Input("temp-slider", "value"),
    Input("solar-slider", "value"),
    Input("map-figure", "relayoutData"),
)
def update_overlay(temp_range, solar_range, relayout_data):
    return build_outputs(HOST, HANDLE, SOURCE, temp_range, solar_range,
                         relayout_data)
