"""
Palettes and Color Lookup Tables for Heat Visualization

Each palette is an ordered list of evenly spaced color stops. A palette
is baked into a (256, 4) uint8 RGBA lookup table by piecewise-linear
interpolation; tables are cached per palette name so they are rebuilt
only when the active palette changes, never per frame.
"""

import math
import numpy as np
from PIL import ImageColor


LUT_SIZE = 256


# --- Palette Definitions (hex stops, evenly spaced over [0, 1]) ---

PALETTES = {
    "Magma": ["#000004", "#3b0f70", "#8c2981", "#de4968", "#fe9f6d", "#fcfdbf"],
    "Inferno": ["#000004", "#420a68", "#932667", "#dd513a", "#fca50a", "#fcffa4"],
    "Viridis": ["#440154", "#414487", "#2a788e", "#22a884", "#7ad151", "#fde725"],
    "Ice": ["#000000", "#001f3f", "#0074D9", "#7FDBFF", "#ffffff"],
}

PALETTE_ORDER = list(PALETTES.keys())
DEFAULT_PALETTE = "Magma"

_lut_cache = {}


def palette_stops(name):
    """Return the palette's stops as a tuple of (r, g, b) int triples."""
    if name not in PALETTES:
        raise ValueError(f"Unknown palette: {name!r}. "
                         f"Available: {', '.join(PALETTE_ORDER)}")
    return tuple(ImageColor.getrgb(c)[:3] for c in PALETTES[name])


def _round(v):
    # Half-up rounding, matching CSS rgb() serialization
    return int(math.floor(v + 0.5))


def interpolate_color(stops, t):
    """Map t in [0, 1] to an (r, g, b) triple along evenly spaced stops."""
    if t <= 0:
        return tuple(stops[0])
    if t >= 1:
        return tuple(stops[-1])

    n_segments = len(stops) - 1
    seg_len = 1.0 / n_segments
    seg = min(max(int(math.floor(t / seg_len)), 0), n_segments - 1)
    frac = (t - seg * seg_len) / seg_len

    c1 = stops[seg]
    c2 = stops[seg + 1]
    return tuple(_round(c1[c] + frac * (c2[c] - c1[c])) for c in range(3))


def build_lut(stops, n=LUT_SIZE):
    """
    Build an RGBA lookup table from an ordered list of color stops.

    Args:
        stops: Sequence of at least two (r, g, b) triples
        n: Number of entries in the LUT

    Returns:
        (n, 4) uint8 array, alpha fixed at 255
    """
    if len(stops) < 2:
        raise ValueError(f"A palette needs at least 2 color stops, got {len(stops)}")

    lut = np.zeros((n, 4), dtype=np.uint8)
    lut[:, 3] = 255
    for i in range(n):
        lut[i, :3] = interpolate_color(stops, i / (n - 1))
    return lut


def get_colormap(name):
    """Get the cached (256, 4) LUT for a named palette."""
    lut = _lut_cache.get(name)
    if lut is None:
        lut = build_lut(palette_stops(name))
        lut.flags.writeable = False
        _lut_cache[name] = lut
    return lut


def apply_colormap(field, lut):
    """
    Apply a LUT to a 2D float field.

    Args:
        field: 2D numpy array; values outside [0, 1] saturate
        lut: (256, C) uint8 lookup table

    Returns:
        (H, W, C) uint8 image
    """
    # NaN from a blown-up field renders as the coldest color
    clamped = np.clip(np.nan_to_num(field, nan=0.0), 0.0, 1.0)
    indices = np.floor(clamped * 255).astype(np.intp)
    return lut[indices]
