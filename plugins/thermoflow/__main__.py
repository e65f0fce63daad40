"""
ThermoFlow Heat Diffusion Viewer - Entry Point

Usage:
    python -m thermoflow [palette] [--size N] [--window WxH] [--snap N]

Examples:
    python -m thermoflow
    python -m thermoflow Viridis
    python -m thermoflow Ice --size 200
    python -m thermoflow Inferno --snap 300

Options:
    --size N      Grid resolution (cells per side, >= 3)
    --window WxH  Canvas size in pixels
    --snap N      Headless: brush the centre, run N frames, save a PNG
    --list        List palettes
"""

import os
import sys

from .colormaps import PALETTE_ORDER, DEFAULT_PALETTE
from .field import MIN_RESOLUTION
from .presets import DEFAULT_CONFIG, clamp_config


def snap(palette, config, frames):
    """Headless mode: inject a centre stroke, run frames, save screenshot."""
    from PIL import Image
    from .simulator import HeatSimulator

    sim = HeatSimulator(config, palette)

    # Short horizontal stroke through the centre, five events per cell
    res = config.resolution
    mid = res / 2.0
    half = res // 8
    for dx in range(-half, half + 1):
        for _ in range(5):
            sim.inject(mid + dx, mid)

    print(f"  {palette}: running {frames} frames...", end="", flush=True)
    for _ in range(frames):
        pixels = sim.tick()

    screenshots_dir = os.path.join(
        os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
        "screenshots"
    )
    os.makedirs(screenshots_dir, exist_ok=True)
    path = os.path.join(screenshots_dir, f"thermoflow_{palette.lower()}.png")
    Image.fromarray(pixels).save(path)
    print(f" saved: {path}")

    last = sim.last_stats
    print(f"[Heat] it={last.iteration} max={last.max_temp:.4f} "
          f"avg={last.avg_temp:.6f} total={last.total_energy:.3f}")


def main():
    palette = DEFAULT_PALETTE
    resolution = DEFAULT_CONFIG.resolution
    win_w, win_h = 600, 600
    snap_frames = 0

    args = sys.argv[1:]
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--size" and i + 1 < len(args):
            resolution = int(args[i + 1])
            i += 2
        elif arg == "--window" and i + 1 < len(args):
            parts = args[i + 1].split("x")
            win_w, win_h = int(parts[0]), int(parts[1])
            i += 2
        elif arg == "--snap" and i + 1 < len(args):
            snap_frames = int(args[i + 1])
            i += 2
        elif arg == "--list":
            print("\nAvailable palettes:")
            for name in PALETTE_ORDER:
                print(f"  {name}")
            print()
            return
        elif arg in ("--help", "-h"):
            print(__doc__)
            return
        elif arg in PALETTE_ORDER:
            palette = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print("Use --list to see available palettes")
            return

    if resolution < MIN_RESOLUTION:
        print(f"Resolution must be at least {MIN_RESOLUTION}, got {resolution}")
        return
    config = clamp_config(DEFAULT_CONFIG.replace(resolution=resolution))

    if snap_frames > 0:
        print(f"Headless snap mode: {palette} @ {resolution}x{resolution}, {snap_frames} frames")
        snap(palette, config, snap_frames)
        return

    from .viewer import Viewer

    print("[Heat] Starting ThermoFlow viewer")
    print(f"  Palette: {palette}")
    print(f"  Grid: {resolution}x{resolution}")
    print(f"  Window: {win_w}x{win_h}")
    print()

    viewer = Viewer(width=win_w, height=win_h, config=config, palette=palette)
    viewer.run()


if __name__ == "__main__":
    main()
