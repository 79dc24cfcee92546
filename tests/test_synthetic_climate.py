"""Synthetic climate data source."""

import logging

import numpy as np

from config import TEMP_MIN_F, TEMP_MAX_F, SOLAR_MIN, SOLAR_MAX
from data.synthetic_climate import (
    SyntheticClimateSource, generate_samples, load_snapshot, save_snapshot,
    samples_to_arrays,
)
from overlay.host import DataSource


def test_samples_lie_inside_documented_domains():
    arrays = samples_to_arrays(generate_samples(seed=1, dlat=10, dlon=10))
    assert np.all((arrays["lat"] >= -90) & (arrays["lat"] <= 90))
    assert np.all((arrays["lon"] >= -180) & (arrays["lon"] <= 180))
    assert np.all((arrays["temp_f"] >= TEMP_MIN_F) & (arrays["temp_f"] <= TEMP_MAX_F))
    assert np.all((arrays["solar_index"] >= SOLAR_MIN) & (arrays["solar_index"] <= SOLAR_MAX))


def test_grid_covers_globe_at_cell_centres():
    samples = generate_samples(seed=1, dlat=10, dlon=20)
    assert len(samples) == 18 * 18
    lats = sorted({s.lat for s in samples})
    assert lats[0] == -85 and lats[-1] == 85


def test_generation_is_deterministic_per_seed():
    assert generate_samples(seed=7, dlat=15, dlon=15) == generate_samples(seed=7, dlat=15, dlon=15)
    assert generate_samples(seed=7, dlat=15, dlon=15) != generate_samples(seed=8, dlat=15, dlon=15)


def test_equator_warmer_than_poles_on_average():
    arrays = samples_to_arrays(generate_samples(seed=3, dlat=5, dlon=5))
    tropics = arrays["temp_f"][np.abs(arrays["lat"]) < 20].mean()
    polar = arrays["temp_f"][np.abs(arrays["lat"]) > 70].mean()
    assert tropics > polar + 40


def test_snapshot_round_trip(tmp_path):
    samples = generate_samples(seed=2, dlat=30, dlon=30)
    path = tmp_path / "snap.npz"
    save_snapshot(samples, path)
    assert load_snapshot(path) == samples


def test_source_prefers_snapshot_and_caches(tmp_path):
    samples = generate_samples(seed=2, dlat=30, dlon=30)
    path = tmp_path / "snap.npz"
    save_snapshot(samples, path)

    source = SyntheticClimateSource(path=str(path))
    first = source.get_samples()

    assert first == samples
    assert source.get_samples() is first


def test_source_generates_when_snapshot_missing(tmp_path):
    source = SyntheticClimateSource(path=str(tmp_path / "missing.npz"), seed=5)
    assert len(source.get_samples()) > 0


def test_source_satisfies_data_source_protocol():
    assert isinstance(SyntheticClimateSource(), DataSource)


def test_corrupt_snapshot_falls_back_to_generation(tmp_path, caplog):
    path = tmp_path / "snap.npz"
    path.write_bytes(b"not an npz archive")
    source = SyntheticClimateSource(path=str(path), seed=5)

    with caplog.at_level(logging.WARNING, logger="data.synthetic_climate"):
        samples = source.get_samples()

    assert samples == generate_samples(seed=5)
    assert "Unreadable snapshot" in caplog.text


def test_snapshot_missing_a_field_falls_back_to_generation(tmp_path):
    path = tmp_path / "snap.npz"
    np.savez(path, lat=np.zeros(3), lon=np.zeros(3))
    source = SyntheticClimateSource(path=str(path), seed=5)
    assert source.get_samples() == generate_samples(seed=5)
