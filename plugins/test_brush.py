#!/usr/bin/env python3
"""
Tests for the circular heat brush.

Verifies:
1. Radius-1 injection touches the centre and its 4 neighbors only
2. Repeated injection saturates at 1.0
3. Box clamping at the grid edges and fully off-grid points
4. Fractional centres and radius 0
"""

import numpy as np
from thermoflow.field import Field
from thermoflow.brush import inject_heat, brush_bounds, BRUSH_SCALE


def test_radius_one_injection():
    print("Testing radius-1 injection...")
    field = Field(10)
    touched = inject_heat(field, 5, 5, radius=1, intensity=1.0)
    assert touched == 5

    expected = np.zeros((10, 10))
    for r, c in ((5, 5), (4, 5), (6, 5), (5, 4), (5, 6)):
        expected[r, c] = 0.1
    np.testing.assert_allclose(field.grid, expected, atol=1e-12)
    print("  ✓ centre + 4 neighbors get 0.1")


def test_saturates_at_one():
    print("Testing saturation...")
    field = Field(12)
    for intensity in (0.1, 1.0, 7.5):
        field.clear()
        values = []
        for _ in range(40):
            inject_heat(field, 6, 6, radius=3, intensity=intensity)
            values.append(field.value_at(6, 6))
            assert field.grid.max() <= 1.0, f"exceeded saturation at intensity {intensity}"
        assert values == sorted(values), "injection is additive and monotone"
    assert field.value_at(6, 6) == 1.0
    print("  ✓ repeated injection never exceeds 1.0")


def test_writes_current_buffer_only():
    print("Testing buffer target...")
    field = Field(8)
    inject_heat(field, 4, 4, radius=2, intensity=1.0)
    assert field.current.any()
    assert not field.scratch.any(), "brush must not touch scratch"
    print("  ✓ injects into the current buffer")


def test_clamped_at_edges():
    print("Testing edge clamping...")
    field = Field(10)
    assert brush_bounds(0.5, 9.2, 3, 10) == (0, 4, 6, 9)

    touched = inject_heat(field, 0, 0, radius=2, intensity=1.0)
    # Quarter disc: (0,0) (0,1) (0,2) (1,0) (1,1) (2,0)
    assert touched == 6
    assert field.value_at(0, 0) == BRUSH_SCALE
    assert field.value_at(2, 2) == 0.0

    before = field.current.copy()
    assert inject_heat(field, -50.0, 400.0, radius=4, intensity=1.0) == 0
    np.testing.assert_array_equal(field.current, before)
    print("  ✓ bounding box clamps to the grid")


def test_fractional_centre_and_zero_radius():
    print("Testing fractional centre...")
    field = Field(10)
    # Distance from (5.5, 5.5) to each of the 4 surrounding cells is ~0.707
    assert inject_heat(field, 5.5, 5.5, radius=0.75, intensity=1.0) == 4
    for r, c in ((5, 5), (5, 6), (6, 5), (6, 6)):
        assert abs(field.value_at(r, c) - 0.1) < 1e-12

    field.clear()
    assert inject_heat(field, 3, 7, radius=0, intensity=2.0) == 1
    assert abs(field.value_at(7, 3) - 0.2) < 1e-12, "x is the column, y is the row"
    assert inject_heat(field, 3.5, 7, radius=0, intensity=2.0) == 0
    print("  ✓ fractional centres and radius 0 handled")


if __name__ == "__main__":
    print("\n=== Testing BrushInjector ===\n")

    test_radius_one_injection()
    test_saturates_at_one()
    test_writes_current_buffer_only()
    test_clamped_at_edges()
    test_fractional_centre_and_zero_radius()

    print("\n✓ All tests passed!\n")
