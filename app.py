"""Dash application: layout and server entry point."""

import logging

import dash
from dash import dcc, html

from config import (
    TEMP_MIN_F, TEMP_MAX_F, SOLAR_MIN, SOLAR_MAX,
    DEFAULT_TEMP_RANGE, DEFAULT_SOLAR_RANGE,
    MAP_SIZE_PX, PORT, DEBUG, LOG_LEVEL,
)

logging.basicConfig(level=LOG_LEVEL,
                    format="%(asctime)s | %(name)s | %(message)s")

app = dash.Dash(
    __name__,
    title="Interactive Climate Map",
    update_title=None,
)
server = app.server  # for gunicorn

# ── Info card helper ──────────────────────────────────────────────────

_CARD = {
    "background": "#fff", "borderRadius": "8px",
    "border": "1px solid #e0e0e0", "padding": "14px 16px",
}


def _card(title, body, color="#1a73e8"):
    style = {**_CARD, "borderLeft": f"4px solid {color}"}
    return html.Div(style=style, children=[
        html.Div(title, style={"fontWeight": "700", "fontSize": "13px",
                                "marginBottom": "6px", "color": "#333"}),
        html.Div(body, style={"fontSize": "12px", "color": "#555",
                               "lineHeight": "1.55"}),
    ])


def _range_slider(slider_id, label, lo, hi, value, step, marks):
    return html.Div(
        style={"flex": "1", "minWidth": "280px"},
        children=[
            html.Label(label, htmlFor=slider_id,
                       style={"fontSize": "13px", "fontWeight": "600",
                              "color": "#333"}),
            dcc.RangeSlider(
                id=slider_id, min=lo, max=hi, step=step,
                value=list(value), marks=marks,
                allowCross=False,
                updatemode="mouseup",
                tooltip={"placement": "bottom", "always_visible": False},
            ),
        ],
    )


# ── Layout ────────────────────────────────────────────────────────────

app.layout = html.Div(
    style={"fontFamily": "system-ui, -apple-system, sans-serif",
           "margin": "0 auto", "maxWidth": f"{MAP_SIZE_PX[0] + 40}px",
           "padding": "16px"},
    children=[
        html.H2("Interactive Climate Map",
                style={"marginBottom": "2px", "letterSpacing": "-0.5px"}),
        html.P("Temperature and solar intensity, filtered live by range",
               style={"color": "#888", "marginTop": 0, "fontSize": "13px",
                      "marginBottom": "14px"}),

        # Info cards
        html.Div(
            style={"display": "grid",
                   "gridTemplateColumns": "1fr 1fr 1fr",
                   "gap": "10px", "marginBottom": "14px"},
            children=[
                _card("Temperature → colour",
                      "Each cell's colour follows a diverging blue-to-red "
                      "scale from −20 °F to 120 °F. Colder "
                      "than −20 or hotter than 120 saturates at the ends.",
                      "#e84040"),
                _card("Solar intensity → opacity",
                      "Brighter sun means a more opaque cell: index 0 draws "
                      "at 10% opacity, index 100 at 80%. Solar index 100 "
                      "corresponds to roughly 500 W/m².",
                      "#e8a21a"),
                _card("Range filters",
                      "Only samples inside both slider ranges are drawn, "
                      "and both ends of each range count as inside. Cells "
                      "shrink as you zoom in and are redrawn on every pan.",
                      "#1a73e8"),
            ],
        ),

        # Sliders
        html.Div(
            style={"display": "flex", "flexWrap": "wrap", "gap": "24px",
                   "marginBottom": "10px"},
            children=[
                _range_slider("temp-slider", "Temperature (°F)",
                              TEMP_MIN_F, TEMP_MAX_F, DEFAULT_TEMP_RANGE, 1,
                              {int(v): f"{int(v)}" for v in
                               range(int(TEMP_MIN_F), int(TEMP_MAX_F) + 1, 20)}),
                _range_slider("solar-slider", "Solar intensity (0–100)",
                              SOLAR_MIN, SOLAR_MAX, DEFAULT_SOLAR_RANGE, 1,
                              {int(v): f"{int(v)}" for v in
                               range(int(SOLAR_MIN), int(SOLAR_MAX) + 1, 20)}),
            ],
        ),
        html.Div(id="stats-text",
                 style={"fontSize": "12px", "color": "#666",
                        "minHeight": "20px", "marginBottom": "8px"}),

        # Map
        dcc.Graph(id="map-figure",
                  style={"height": f"{MAP_SIZE_PX[1]}px",
                         "width": f"{MAP_SIZE_PX[0]}px"},
                  config={"scrollZoom": True, "displayModeBar": False}),
    ],
)

# Register callbacks
import callbacks  # noqa: F401, E402

if __name__ == "__main__":
    app.run(debug=DEBUG, port=PORT)
