"""
HeatSimulator: headless simulation loop with zero pygame dependency

Per displayed frame: run `iterations_per_frame` diffusion steps (when
running), render the field once through the active palette, and publish
a FrameStats snapshot every STATS_INTERVAL-th iteration. The viewer adds
the pygame display layer on top; tests drive it directly.

Usage:
    from thermoflow.simulator import HeatSimulator, StatsHistory
    history = StatsHistory()
    sim = HeatSimulator(on_stats=history.append, on_reset=history.clear)
    sim.inject(75.0, 75.0)
    pixels = sim.tick()  # (R, R, 4) uint8 RGBA
"""

from collections import deque

import numpy as np

from .field import Field
from .diffusion import diffuse_n
from .brush import inject_heat
from .colormaps import DEFAULT_PALETTE, get_colormap
from .renderer import render_frame
from .presets import DEFAULT_CONFIG, MAX_HISTORY_LENGTH, STATS_INTERVAL


class StatsHistory:
    """Bounded trailing window of FrameStats, oldest dropped first."""

    def __init__(self, maxlen=MAX_HISTORY_LENGTH):
        self._entries = deque(maxlen=maxlen)

    def append(self, stats):
        self._entries.append(stats)

    def clear(self):
        self._entries.clear()

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    @property
    def latest(self):
        return self._entries[-1] if self._entries else None

    @property
    def iterations(self):
        return [s.iteration for s in self._entries]

    @property
    def max_temps(self):
        return [s.max_temp for s in self._entries]

    @property
    def total_energies(self):
        return [s.total_energy for s in self._entries]


class HeatSimulator:
    """Frame orchestration around a Field.

    Args:
        config: Initial SimulationConfig snapshot
        palette: Initial palette name
        on_stats: Called with each published FrameStats
        on_frame: Called with the RGBA buffer after every tick
        on_reset: Called after reset() so external history can be cleared
    """

    def __init__(self, config=DEFAULT_CONFIG, palette=DEFAULT_PALETTE,
                 on_stats=None, on_frame=None, on_reset=None):
        self.config = config
        self.field = Field(config.resolution)
        self.running = True

        self.on_stats = on_stats
        self.on_frame = on_frame
        self.on_reset = on_reset

        self.palette = None
        self.lut = None
        self.set_palette(palette)

        self.last_stats = None
        self._last_published = 0
        self._pixels = self._alloc_pixels(self.field.resolution)

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    @property
    def iteration(self):
        return self.field.iteration

    @property
    def pixels(self):
        """RGBA buffer from the most recent tick."""
        return self._pixels

    def set_palette(self, name):
        """Switch palette; the LUT is only looked up when the name changes."""
        if name == self.palette:
            return
        self.lut = get_colormap(name)
        self.palette = name

    def set_config(self, config):
        """Take a new snapshot, resizing the field if resolution changed."""
        if config.resolution != self.field.resolution:
            self.set_resolution(config.resolution)
        self.config = config

    def set_resolution(self, resolution):
        self.field.resize(resolution)
        self.config = self.config.replace(resolution=resolution)
        self._pixels = self._alloc_pixels(resolution)
        self._last_published = 0

    def reset(self):
        """Zero the field, restart the iteration count, clear outside history."""
        self.field.resize(self.config.resolution)
        self._last_published = 0
        self.last_stats = None
        if self.on_reset:
            self.on_reset()

    def inject(self, x, y):
        """Apply one brush event at grid coordinates (x = column, y = row)."""
        cfg = self.config
        return inject_heat(self.field, x, y, cfg.brush_size, cfg.brush_intensity)

    def tick(self, config=None):
        """Advance one display frame and return the RGBA pixel buffer.

        Args:
            config: Optional fresh SimulationConfig; read in full every tick

        Returns:
            (R, R, 4) uint8 array, row-major, matching field indexing
        """
        if config is not None:
            self.set_config(config)
        cfg = self.config

        if self.running:
            diffuse_n(self.field, cfg.iterations_per_frame, cfg.alpha, cfg.damping)

        pixels, stats = render_frame(self.field, self.lut, out=self._pixels)
        self.last_stats = stats

        if self._should_publish(stats.iteration):
            self._last_published = stats.iteration
            if self.on_stats:
                self.on_stats(stats)

        if self.on_frame:
            self.on_frame(pixels)
        return pixels

    # -----------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------

    def _should_publish(self, iteration):
        # Paused frames sit on the same iteration; publish it only once
        return (iteration > 0
                and iteration % STATS_INTERVAL == 0
                and iteration != self._last_published)

    @staticmethod
    def _alloc_pixels(resolution):
        return np.zeros((resolution, resolution, 4), dtype=np.uint8)
