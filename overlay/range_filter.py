"""Climate samples, range selections, and the inclusive range filter.

Public API
----------
ClimateSample                       – one geo-located observation
RangeSelection                      – inclusive temperature/solar bounds
filter_samples(samples, selection)  – order-preserving inclusive filter
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass(frozen=True)
class ClimateSample:
    lat: float
    lon: float
    temp_f: float
    solar_index: float


@dataclass(frozen=True)
class RangeSelection:
    temp_min: float
    temp_max: float
    solar_min: float
    solar_max: float

    @classmethod
    def from_ranges(cls, temp_range, solar_range):
        """Build from two ``(min, max)`` pairs, as emitted by range sliders."""
        return cls(float(temp_range[0]), float(temp_range[1]),
                   float(solar_range[0]), float(solar_range[1]))


def filter_samples(samples: Sequence[ClimateSample],
                   selection: RangeSelection) -> list[ClimateSample]:
    """Keep samples whose temperature and solar index lie inside the selection.

    Both bounds are inclusive. Input order is preserved. An inverted range
    (min > max) matches nothing.
    """
    if not samples:
        return []

    temp = np.fromiter((s.temp_f for s in samples), dtype=np.float64,
                       count=len(samples))
    solar = np.fromiter((s.solar_index for s in samples), dtype=np.float64,
                        count=len(samples))
    keep = ((temp >= selection.temp_min) & (temp <= selection.temp_max) &
            (solar >= selection.solar_min) & (solar <= selection.solar_max))
    return [samples[i] for i in np.flatnonzero(keep)]
