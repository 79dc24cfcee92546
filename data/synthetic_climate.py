"""Synthetic global climate samples (temperature °F, solar intensity index).

Samples sit at the centres of a regular lat/lon grid. Fields are built from
simple latitude profiles plus Gaussian-filtered noise from a seeded RNG, then
clipped to the documented value domains.

Public API
----------
generate_samples(seed, dlat, dlon) -> list[ClimateSample]
samples_to_arrays(samples) -> dict of 1-D arrays
samples_from_arrays(lat, lon, temp_f, solar_index) -> list[ClimateSample]
save_snapshot(samples, path) / load_snapshot(path)
SyntheticClimateSource(path=None) – DataSource with get_samples()
"""

import logging
import os
import zipfile

import numpy as np
from scipy.ndimage import gaussian_filter

from config import (
    LAT_MIN, LAT_MAX, LON_MIN, LON_MAX,
    TEMP_MIN_F, TEMP_MAX_F, SOLAR_MIN, SOLAR_MAX,
    GRID_DLAT, GRID_DLON, NOISE_SMOOTH_SIGMA, GLOBAL_SEED,
)
from overlay.range_filter import ClimateSample

logger = logging.getLogger(__name__)

# ── Profiles ────────────────────────────────────────────────────────────

_EQUATOR_TEMP_F = 86.0
_POLE_DROP_F = 100.0          # equator → pole
_TEMP_NOISE_F = 7.0
_PEAK_SOLAR = 95.0
_CLOUD_NOISE = 12.0


def _grid(dlat, dlon):
    lat_grid = np.arange(LAT_MIN + dlat / 2, LAT_MAX, dlat)
    lon_grid = np.arange(LON_MIN + dlon / 2, LON_MAX, dlon)
    return np.meshgrid(lon_grid, lat_grid)


def _smoothed_noise(rng, shape, std):
    noise = gaussian_filter(rng.normal(0, 1.0, shape), sigma=NOISE_SMOOTH_SIGMA,
                            mode="wrap")
    scale = noise.std()
    return noise * (std / scale) if scale > 0 else noise


def generate_samples(seed: int = GLOBAL_SEED,
                     dlat: float = GRID_DLAT,
                     dlon: float = GRID_DLON) -> list[ClimateSample]:
    """Deterministic synthetic samples for the whole globe."""
    rng = np.random.default_rng(seed)
    LON, LAT = _grid(dlat, dlon)
    abs_lat = np.abs(LAT) / 90.0

    # Temperature: warm equator, cold poles, smoothed weather noise
    temp = _EQUATOR_TEMP_F - _POLE_DROP_F * abs_lat ** 1.5
    temp = temp + _smoothed_noise(rng, LAT.shape, _TEMP_NOISE_F)
    temp = np.clip(temp, TEMP_MIN_F, TEMP_MAX_F)

    # Solar: insolation falls with latitude; clouds knock it down locally
    solar = _PEAK_SOLAR * np.cos(np.radians(LAT))
    solar = solar - np.abs(_smoothed_noise(rng, LAT.shape, _CLOUD_NOISE))
    solar = np.clip(solar, SOLAR_MIN, SOLAR_MAX)

    samples = samples_from_arrays(LAT.ravel(), LON.ravel(),
                                  temp.ravel(), solar.ravel())
    logger.debug("Generated %d synthetic samples (seed=%d, %.1f°x%.1f°)",
                 len(samples), seed, dlat, dlon)
    return samples


# ── Conversions + snapshot I/O ──────────────────────────────────────────

def samples_to_arrays(samples):
    return dict(
        lat=np.array([s.lat for s in samples], dtype=np.float64),
        lon=np.array([s.lon for s in samples], dtype=np.float64),
        temp_f=np.array([s.temp_f for s in samples], dtype=np.float64),
        solar_index=np.array([s.solar_index for s in samples], dtype=np.float64),
    )


def samples_from_arrays(lat, lon, temp_f, solar_index):
    return [
        ClimateSample(lat=la, lon=lo, temp_f=t, solar_index=s)
        for la, lo, t, s in zip(np.round(lat, 4).tolist(), np.round(lon, 4).tolist(),
                                np.round(temp_f, 2).tolist(),
                                np.round(solar_index, 2).tolist())
    ]


def save_snapshot(samples, path):
    np.savez_compressed(path, **samples_to_arrays(samples))


def load_snapshot(path):
    with np.load(path) as f:
        return samples_from_arrays(f["lat"], f["lon"], f["temp_f"], f["solar_index"])


class SyntheticClimateSource:
    """DataSource: precomputed snapshot if available, else generated on demand."""

    def __init__(self, path=None, seed: int = GLOBAL_SEED) -> None:
        self._path = path
        self._seed = seed
        self._samples = None

    def get_samples(self) -> list[ClimateSample]:
        if self._samples is None:
            if self._path and os.path.exists(self._path):
                try:
                    self._samples = load_snapshot(self._path)
                except (OSError, ValueError, KeyError, zipfile.BadZipFile) as exc:
                    logger.warning("Unreadable snapshot %s (%s); generating instead",
                                   self._path, exc)
                else:
                    logger.info("Loaded %d samples from %s", len(self._samples), self._path)
            if self._samples is None:
                self._samples = generate_samples(seed=self._seed)
                logger.info("Generated %d synthetic samples", len(self._samples))
        return self._samples
