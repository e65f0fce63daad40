"""
Simulation Configuration and Control Ranges

SimulationConfig is a snapshot handed to the simulator every tick. The
slider definitions double as the configuration policy: clamp_config pins
each field into its slider range, which keeps alpha strictly below the
explicit scheme's stability limit of 0.25.
"""

import dataclasses
from dataclasses import dataclass

from .diffusion import ALPHA_STABILITY_LIMIT

ALPHA_MAX = round(ALPHA_STABILITY_LIMIT - 0.01, 2)  # 0.24


MAX_HISTORY_LENGTH = 50   # trailing stats window kept by the chart
STATS_INTERVAL = 10       # publish stats every Nth iteration


@dataclass(frozen=True)
class SimulationConfig:
    resolution: int = 150
    alpha: float = 0.20            # keep < 0.25 for stability
    iterations_per_frame: int = 5
    brush_size: float = 8
    brush_intensity: float = 1.0
    damping: float = 0.999         # slight energy loss per step

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = SimulationConfig()


SLIDER_DEFS = [
    {"key": "alpha", "label": "Diffusivity (alpha)", "section": "PHYSICS",
     "min": 0.01, "max": ALPHA_MAX, "default": DEFAULT_CONFIG.alpha,
     "fmt": ".2f", "step": 0.01},
    {"key": "iterations_per_frame", "label": "Sim speed (steps/frame)", "section": "PHYSICS",
     "min": 1, "max": 20, "default": DEFAULT_CONFIG.iterations_per_frame,
     "fmt": ".0f", "step": 1},
    {"key": "damping", "label": "Damping", "section": "PHYSICS",
     "min": 0.950, "max": 1.000, "default": DEFAULT_CONFIG.damping,
     "fmt": ".3f", "step": 0.001},
    {"key": "brush_size", "label": "Brush size", "section": "BRUSH",
     "min": 1, "max": 30, "default": DEFAULT_CONFIG.brush_size,
     "fmt": ".0f", "step": 1},
    {"key": "brush_intensity", "label": "Brush intensity", "section": "BRUSH",
     "min": 0.1, "max": 2.0, "default": DEFAULT_CONFIG.brush_intensity,
     "fmt": ".1f", "step": 0.1},
]

_INT_KEYS = ("resolution", "iterations_per_frame")


def get_slider_def(key):
    for sdef in SLIDER_DEFS:
        if sdef["key"] == key:
            return sdef
    return None


def clamp_config(config):
    """Return a copy of config with every slider-backed field in range."""
    changes = {}
    for sdef in SLIDER_DEFS:
        key = sdef["key"]
        val = max(sdef["min"], min(sdef["max"], getattr(config, key)))
        if key in _INT_KEYS:
            val = int(round(val))
        changes[key] = val
    return config.replace(**changes)
