"""
Frame Rendering and Field Statistics

Turns the current field into an RGBA pixel buffer and a FrameStats
snapshot in one pass. Colors saturate at the LUT ends; statistics use
raw values, so a cell pushed above 1.0 still raises maxTemp and
totalEnergy even though its pixel stops getting brighter.
"""

from dataclasses import dataclass

import numpy as np

from .colormaps import apply_colormap


@dataclass(frozen=True)
class FrameStats:
    max_temp: float
    avg_temp: float
    total_energy: float
    iteration: int

    def as_dict(self):
        return {
            "maxTemp": self.max_temp,
            "avgTemp": self.avg_temp,
            "totalEnergy": self.total_energy,
            "iteration": self.iteration,
        }


def field_stats(field):
    """Compute FrameStats from the current buffer (unclamped values)."""
    values = field.current
    total = float(values.sum())
    # Accumulator starts at zero, so an all-negative field reports 0
    max_temp = max(0.0, float(values.max()))
    return FrameStats(
        max_temp=max_temp,
        avg_temp=total / values.size,
        total_energy=total,
        iteration=field.iteration,
    )


def render_frame(field, lut, out=None):
    """
    Render the field through a LUT.

    Args:
        field: Field to read (current buffer only)
        lut: (256, 4) uint8 RGBA lookup table
        out: optional (resolution, resolution, 4) uint8 array to fill

    Returns:
        (pixels, stats): row-major RGBA uint8 image and FrameStats
    """
    rgba = apply_colormap(field.grid, lut)
    if out is not None:
        np.copyto(out, rgba)
        rgba = out
    return rgba, field_stats(field)
