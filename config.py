"""Value domains, visual encoding, map defaults, and app settings."""

import os

# Sample value domains
LAT_MIN, LAT_MAX = -90.0, 90.0
LON_MIN, LON_MAX = -180.0, 180.0
TEMP_MIN_F, TEMP_MAX_F = -20.0, 120.0
SOLAR_MIN, SOLAR_MAX = 0.0, 100.0

# Visual encoding: temperature drives hue, solar index drives opacity
OPACITY_FLOOR = 0.1
OPACITY_SPAN = 0.7          # opacity = floor + span * solar/100

# Cell layout (pixels)
CELL_BASE_PX = 20.0
CELL_GROWTH = 1.5           # per zoom level
CELL_REF_ZOOM = 3.0
CELL_MIN_PX = 2.0
CELL_MAX_PX = 48.0

# Map defaults
MAP_CENTER = dict(lat=20.0, lon=0.0)
MAP_ZOOM = 2.0
MAP_SIZE_PX = (1200, 640)   # width, height of the map graph
TILE_SIZE_PX = 256          # raster source tiles
WORLD_SIZE_PX = 512         # whole-world width at zoom 0 (MapLibre)
MERCATOR_MAX_LAT = 85.0511287798

MAP_STYLE = {
    "version": 8,
    "sources": {
        "osm": {
            "type": "raster",
            "tiles": ["https://tile.openstreetmap.org/{z}/{x}/{y}.png"],
            "tileSize": TILE_SIZE_PX,
            "attribution": "© OpenStreetMap contributors",
        }
    },
    "layers": [{"id": "osm", "type": "raster", "source": "osm"}],
}

# Synthetic climate grid (degrees)
GRID_DLAT = 4.0
GRID_DLON = 4.0
NOISE_SMOOTH_SIGMA = 1.5    # grid cells, for gaussian_filter
GLOBAL_SEED = 42
SNAPSHOT_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                             "data", "climate_samples.npz")

# Default slider ranges
DEFAULT_TEMP_RANGE = (TEMP_MIN_F, TEMP_MAX_F)
DEFAULT_SOLAR_RANGE = (SOLAR_MIN, SOLAR_MAX)

# Server
PORT = int(os.environ.get("CLIMATE_MAP_PORT", "8050"))
DEBUG = os.environ.get("CLIMATE_MAP_DEBUG", "0") == "1"
LOG_LEVEL = os.environ.get("CLIMATE_MAP_LOG_LEVEL", "INFO")
