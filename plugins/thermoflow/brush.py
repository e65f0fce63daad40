"""
Circular Heat Brush

Adds heat to every cell within `radius` of a (possibly fractional) grid
point, directly into the current buffer so the stroke shows up on the
very next render. Injection is additive and saturates at 1.0.
"""

import math
import numpy as np


BRUSH_SCALE = 0.1  # heat added per unit of intensity per event
SATURATION = 1.0


def brush_bounds(x, y, radius, resolution):
    """Bounding box (min_col, max_col, min_row, max_row) clamped to the grid."""
    hi = resolution - 1
    min_col = max(0, math.floor(x - radius))
    max_col = min(hi, math.ceil(x + radius))
    min_row = max(0, math.floor(y - radius))
    max_row = min(hi, math.ceil(y + radius))
    return min_col, max_col, min_row, max_row


def inject_heat(field, x, y, radius, intensity, scale=BRUSH_SCALE):
    """Inject heat around (x, y) in grid space (x = column, y = row).

    Returns the number of cells touched. Points far outside the grid
    produce an empty box and touch nothing.
    """
    min_col, max_col, min_row, max_row = brush_bounds(x, y, radius, field.resolution)
    if min_col > max_col or min_row > max_row:
        return 0

    rows, cols = np.ogrid[min_row:max_row + 1, min_col:max_col + 1]
    inside = (cols - x) ** 2 + (rows - y) ** 2 <= radius * radius

    region = field.grid[min_row:max_row + 1, min_col:max_col + 1]
    region[inside] = np.minimum(SATURATION, region[inside] + intensity * scale)
    return int(inside.sum())
