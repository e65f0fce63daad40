#!/usr/bin/env python3
"""
Tests for frame rendering and statistics.

Verifies:
1. Pixels come from the LUT, row-major, fully opaque
2. Stats use raw values (maxTemp above 1.0 while color saturates)
3. avgTemp = totalEnergy / cellCount
4. FrameStats is immutable
"""

import dataclasses
import numpy as np
from thermoflow.field import Field
from thermoflow.colormaps import build_lut, get_colormap
from thermoflow.renderer import render_frame, field_stats, FrameStats


def test_pixels_follow_lut():
    print("Testing pixel mapping...")
    lut = build_lut([(0, 0, 0), (255, 255, 255)])
    field = Field(4)
    field.set_value(0, 1, 0.5)
    field.set_value(3, 2, 1.0)
    pixels, _ = render_frame(field, lut)

    assert pixels.shape == (4, 4, 4) and pixels.dtype == np.uint8
    assert tuple(pixels[0, 1]) == (127, 127, 127, 255)
    assert tuple(pixels[3, 2]) == (255, 255, 255, 255)
    assert tuple(pixels[2, 3]) == (0, 0, 0, 255), "row-major: (3,2) is not (2,3)"
    assert (pixels[:, :, 3] == 255).all()
    print("  ✓ LUT colors written per cell")


def test_superheated_cell_statistics():
    print("Testing unclamped statistics...")
    lut = get_colormap("Magma")
    field = Field(5)
    field.set_value(2, 2, 3.0)
    field.set_value(1, 1, -0.5)
    pixels, stats = render_frame(field, lut)

    assert tuple(pixels[2, 2]) == tuple(lut[255]), "color saturates at the top stop"
    assert tuple(pixels[1, 1]) == tuple(lut[0]), "negative values render as the bottom stop"
    assert stats.max_temp == 3.0, "maxTemp uses the raw value"
    assert abs(stats.total_energy - 2.5) < 1e-12
    assert abs(stats.avg_temp - 2.5 / 25) < 1e-12
    print("  ✓ colors clamp, statistics do not")


def test_stats_on_empty_and_negative_fields():
    print("Testing stats edge cases...")
    field = Field(3)
    stats = field_stats(field)
    assert stats == FrameStats(max_temp=0.0, avg_temp=0.0, total_energy=0.0, iteration=0)

    field.grid[:] = -0.25
    stats = field_stats(field)
    assert stats.max_temp == 0.0, "max accumulator starts at zero"
    assert abs(stats.avg_temp + 0.25) < 1e-12
    print("  ✓ empty and negative fields")


def test_render_into_buffer_and_iteration():
    print("Testing output buffer reuse...")
    lut = get_colormap("Ice")
    field = Field(6)
    field.iteration = 42
    field.set_value(3, 3, 0.8)
    out = np.zeros((6, 6, 4), dtype=np.uint8)
    pixels, stats = render_frame(field, lut, out=out)
    assert pixels is out
    assert tuple(out[3, 3]) == tuple(lut[int(0.8 * 255)])
    assert stats.iteration == 42
    print("  ✓ renders into a caller-owned buffer")


def test_frame_stats_frozen():
    print("Testing FrameStats immutability...")
    stats = FrameStats(max_temp=1.0, avg_temp=0.5, total_energy=8.0, iteration=10)
    try:
        stats.max_temp = 2.0
    except dataclasses.FrozenInstanceError:
        pass
    else:
        raise AssertionError("FrameStats should be frozen")
    assert stats.as_dict() == {"maxTemp": 1.0, "avgTemp": 0.5, "totalEnergy": 8.0, "iteration": 10}
    print("  ✓ FrameStats is a value snapshot")


if __name__ == "__main__":
    print("\n=== Testing FrameRenderer ===\n")

    test_pixels_follow_lut()
    test_superheated_cell_statistics()
    test_stats_on_empty_and_negative_fields()
    test_render_into_buffer_and_iteration()
    test_frame_stats_frozen()

    print("\n✓ All tests passed!\n")
