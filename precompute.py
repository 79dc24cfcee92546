"""Pre-generate the synthetic climate snapshot for fast app loading.

Run once:  python precompute.py
Outputs:   data/climate_samples.npz
"""

import os

import numpy as np

from config import GLOBAL_SEED, SNAPSHOT_PATH
from data.synthetic_climate import generate_samples, save_snapshot

print(f"Generating synthetic climate samples (seed={GLOBAL_SEED}) ...")
samples = generate_samples(seed=GLOBAL_SEED)
temps = np.array([s.temp_f for s in samples])
solar = np.array([s.solar_index for s in samples])
print(f"  {len(samples):,} samples · temp {temps.min():.1f}..{temps.max():.1f} °F "
      f"· solar {solar.min():.1f}..{solar.max():.1f}")

save_snapshot(samples, SNAPSHOT_PATH)
print(f"Saved {SNAPSHOT_PATH}  ({os.path.getsize(SNAPSHOT_PATH) / 1024:.0f} KB)")
