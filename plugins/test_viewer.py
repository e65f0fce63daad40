#!/usr/bin/env python3
"""
Tests for the viewer's interaction plumbing (no window is opened).

Verifies:
1. Display-to-grid coordinate scaling
2. Pointer events inject heat only on the canvas while pressed
3. Slider callbacks produce clamped config snapshots
4. Reset, pause and palette keys reach the simulator
"""

import pygame
from thermoflow.viewer import Viewer, display_to_grid
from thermoflow.presets import DEFAULT_CONFIG


def _viewer(**kwargs):
    return Viewer(width=400, height=400,
                  config=DEFAULT_CONFIG.replace(resolution=100), **kwargs)


def test_display_to_grid():
    print("Testing coordinate mapping...")
    assert display_to_grid(0, 0, 600, 600, 150) == (0.0, 0.0)
    assert display_to_grid(300, 150, 600, 600, 150) == (75.0, 37.5)
    assert display_to_grid(599, 599, 600, 300, 150) == (149.75, 299.5)
    print("  ✓ pixel * resolution / display size")


def test_pointer_injection():
    print("Testing pointer events...")
    viewer = _viewer()
    field = viewer.sim.field

    press = pygame.event.Event(pygame.MOUSEBUTTONDOWN, {"pos": (200, 100), "button": 1})
    assert viewer._handle_pointer(press)
    assert field.value_at(25, 50) > 0.0, "(200, 100) on a 400px canvas -> col 50, row 25"

    hover = pygame.event.Event(pygame.MOUSEMOTION, {"pos": (40, 360), "rel": (0, 0), "buttons": (0, 0, 0)})
    assert not viewer._handle_pointer(hover)
    assert field.value_at(90, 10) == 0.0

    drag = pygame.event.Event(pygame.MOUSEMOTION, {"pos": (40, 360), "rel": (0, 0), "buttons": (1, 0, 0)})
    assert viewer._handle_pointer(drag)
    assert field.value_at(90, 10) > 0.0

    off_canvas = pygame.event.Event(pygame.MOUSEBUTTONDOWN, {"pos": (520, 100), "button": 1})
    assert not viewer._handle_pointer(off_canvas), "panel area is not canvas"
    print("  ✓ one injection per pressed canvas event")


def test_slider_callbacks_clamp():
    print("Testing slider callbacks...")
    viewer = _viewer()
    viewer._make_param_callback("alpha")(0.5)
    assert viewer.config.alpha == 0.24
    viewer._make_param_callback("iterations_per_frame")(7.0)
    assert viewer.config.iterations_per_frame == 7
    assert isinstance(viewer.config.iterations_per_frame, int)

    viewer.sim.tick(viewer.config)
    assert viewer.sim.iteration == 7
    print("  ✓ slider values become clamped snapshots")


def test_controls_reach_simulator():
    print("Testing pause, reset and palette...")
    viewer = _viewer(palette="Ice")
    assert viewer.sim.palette == "Ice"

    viewer._on_toggle_run()
    assert viewer.paused
    viewer.sim.tick(viewer.config)
    assert viewer.sim.iteration == 0
    viewer._on_toggle_run()
    assert not viewer.paused

    viewer.config = viewer.config.replace(iterations_per_frame=10)
    viewer.sim.tick(viewer.config)
    assert len(viewer.history) == 1
    viewer._on_reset()
    assert len(viewer.history) == 0 and viewer.sim.iteration == 0

    viewer._select_palette_index(2)
    assert viewer.sim.palette == "Viridis"
    viewer._select_palette_index(8)
    assert viewer.sim.palette == "Viridis"
    print("  ✓ controls drive the simulator")


if __name__ == "__main__":
    print("\n=== Testing Viewer plumbing ===\n")

    test_display_to_grid()
    test_pointer_injection()
    test_slider_callbacks_clamp()
    test_controls_reach_simulator()

    print("\n✓ All tests passed!\n")
