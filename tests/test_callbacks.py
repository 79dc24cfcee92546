"""Dash callback wiring: slider ranges + relayout → figure and stats."""

import pytest

from callbacks import build_outputs
from overlay.figure_host import FigureMapHost
from overlay.lifecycle import mount

STYLE = {"version": 8, "sources": {}, "layers": []}


class ListSource:
    def __init__(self, samples):
        self.samples = samples

    def get_samples(self):
        return self.samples


@pytest.fixture
def session():
    host = FigureMapHost(center={"lat": 20.0, "lon": 0.0}, zoom=2,
                         size=(1200, 640), style=STYLE)
    handle = mount(host)
    yield host, handle
    handle.unmount()


def test_matching_samples_become_shapes(session, make_sample):
    host, handle = session
    source = ListSource([make_sample(lat=40, lon=-100, temp_f=60, solar_index=70),
                         make_sample(lat=0, lon=0, temp_f=80, solar_index=90)])

    fig, stats = build_outputs(host, handle, source, [-10, 90], [20, 80], None)

    assert len(fig.layout.shapes) == 1
    assert fig.layout.shapes[0].opacity == pytest.approx(0.59)
    assert stats.startswith("1 of 2 samples shown")


def test_relayout_moves_view_before_drawing(session, make_sample):
    host, handle = session
    source = ListSource([make_sample(lat=40, lon=-100)])

    fig, stats = build_outputs(host, handle, source, [-20, 120], [0, 100],
                               {"map.center": {"lat": 40, "lon": 100}, "map.zoom": 4})

    assert host.zoom == 4
    assert len(fig.layout.shapes) == 0
    assert stats == "No samples match the selected ranges in this view"


def test_empty_source_reports_no_data(session):
    host, handle = session
    fig, stats = build_outputs(host, handle, ListSource([]), [-20, 120], [0, 100], None)
    assert len(fig.layout.shapes) == 0
    assert stats == "No climate data loaded"


def test_repeated_calls_are_stable(session, make_sample):
    host, handle = session
    source = ListSource([make_sample(lat=la, lon=lo) for la, lo in [(10, 10), (-20, 30), (45, -60)]])

    fig_a, _ = build_outputs(host, handle, source, [-20, 120], [0, 100], None)
    fig_b, _ = build_outputs(host, handle, source, [-20, 120], [0, 100], None)

    assert fig_a.layout.shapes == fig_b.layout.shapes
    assert len(host.get_render_pane().surfaces) == 1
