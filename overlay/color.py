"""Visual encoding: temperature → diverging blue-to-red hue, solar → opacity."""

from dataclasses import dataclass

from config import (
    TEMP_MIN_F, TEMP_MAX_F, SOLAR_MIN, SOLAR_MAX,
    OPACITY_FLOOR, OPACITY_SPAN,
)

# ── Diverging scale (cold blue → neutral → hot red) ────────────────────

_DIVERGING = [
    (0.00, (49, 54, 149)),
    (0.10, (69, 117, 180)),
    (0.20, (116, 173, 209)),
    (0.30, (171, 217, 233)),
    (0.40, (224, 243, 248)),
    (0.50, (255, 255, 191)),
    (0.60, (254, 224, 144)),
    (0.70, (253, 174, 97)),
    (0.80, (244, 109, 67)),
    (0.90, (215, 48, 39)),
    (1.00, (165, 0, 38)),
]


@dataclass(frozen=True)
class CellColor:
    rgb: str            # "rgb(r,g,b)"
    position: float     # 0 = coldest, 1 = hottest; the scale's redness
    opacity: float


def _clamp(v, lo, hi):
    return max(lo, min(hi, v))


def _diverging_color(t):
    t = _clamp(t, 0.0, 1.0)
    for i in range(len(_DIVERGING) - 1):
        s0, c0 = _DIVERGING[i]
        s1, c1 = _DIVERGING[i + 1]
        if t <= s1:
            f = (t - s0) / (s1 - s0) if s1 > s0 else 0
            r = int(round(c0[0] + f * (c1[0] - c0[0])))
            g = int(round(c0[1] + f * (c1[1] - c0[1])))
            b = int(round(c0[2] + f * (c1[2] - c0[2])))
            return f"rgb({r},{g},{b})"
    r, g, b = _DIVERGING[-1][1]
    return f"rgb({r},{g},{b})"


def temperature_position(temp_f: float) -> float:
    """Position of ``temp_f`` on the scale, clamped to [0, 1]."""
    t = (temp_f - TEMP_MIN_F) / (TEMP_MAX_F - TEMP_MIN_F)
    return _clamp(t, 0.0, 1.0)


def solar_opacity(solar_index: float) -> float:
    t = _clamp((solar_index - SOLAR_MIN) / (SOLAR_MAX - SOLAR_MIN), 0.0, 1.0)
    return OPACITY_FLOOR + OPACITY_SPAN * t


def color_of(sample) -> CellColor:
    """Map a sample to its cell color and opacity.

    The two channels are independent: hue depends on temperature only,
    opacity on solar index only. Out-of-domain values saturate.
    """
    position = temperature_position(sample.temp_f)
    return CellColor(
        rgb=_diverging_color(position),
        position=position,
        opacity=solar_opacity(sample.solar_index),
    )
