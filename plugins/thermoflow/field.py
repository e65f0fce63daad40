"""
Double-Buffered Scalar Field

Square grid of temperatures stored as two flat float buffers indexed
row * resolution + col. One buffer is current (authoritative), the other
is scratch space that the diffusion step writes into before the roles swap.
"""

import numpy as np


MIN_RESOLUTION = 3  # smallest grid with one interior cell


class InvalidDimension(ValueError):
    """Raised when a field is sized below the minimum resolution."""


class Field:
    """Two same-size scalar buffers plus a selector for the current one."""

    def __init__(self, resolution=150):
        self.resolution = 0
        self._buffers = [np.zeros(0), np.zeros(0)]
        self._current = 0
        self.iteration = 0
        self.resize(resolution)

    def resize(self, resolution):
        """Zero the field at the given resolution.

        Reallocates both buffers only when the cell count changes,
        otherwise clears them in place. Resets the iteration counter.
        """
        if isinstance(resolution, bool) or int(resolution) != resolution:
            raise InvalidDimension(f"Resolution must be an integer, got {resolution!r}")
        resolution = int(resolution)
        if resolution < MIN_RESOLUTION:
            raise InvalidDimension(
                f"Resolution must be at least {MIN_RESOLUTION}, got {resolution}"
            )

        size = resolution * resolution
        if self._buffers[0].size != size:
            self._buffers = [np.zeros(size, dtype=np.float64),
                             np.zeros(size, dtype=np.float64)]
        else:
            self._buffers[0].fill(0.0)
            self._buffers[1].fill(0.0)
        self.resolution = resolution
        self._current = 0
        self.iteration = 0

    def clear(self):
        self.resize(self.resolution)

    @property
    def size(self):
        return self.resolution * self.resolution

    @property
    def current(self):
        """Flat view of the authoritative buffer."""
        return self._buffers[self._current]

    @property
    def scratch(self):
        return self._buffers[1 - self._current]

    @property
    def grid(self):
        """(resolution, resolution) view of the current buffer (no copy)."""
        return self.current.reshape(self.resolution, self.resolution)

    @property
    def scratch_grid(self):
        return self.scratch.reshape(self.resolution, self.resolution)

    def value_at(self, row, col):
        return float(self.current[row * self.resolution + col])

    def set_value(self, row, col, value):
        self.current[row * self.resolution + col] = value

    def swap_buffers(self):
        # Selector flip only; buffer contents are never copied.
        self._current = 1 - self._current
