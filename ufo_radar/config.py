"""
ufo_radar.config
================

Tiny helper that loads / saves *radar_config.json* and injects sensible
defaults for any missing keys.
"""

from __future__ import annotations
import json
from pathlib import Path
from ufo_radar.constants import CFG_PATH, DATASET_PATH

_DEFAULT = {
    # data
    "dataset": str(DATASET_PATH),

    # display
    "window": [1100, 750],
    "radar_scale": 0.45,              # radius = scale * min(w, h)
    "fps": 60,                        # ticks per second
    "hover_radius": 6,                # px

    # sweep
    "sweep_speed": 0.02,              # rad / tick
    "sweep_width": 0.2,               # rad
    "seam_wrap": False,               # min(d, 2π-d) instead of |d|

    # reveal / fade
    "fade_step": 2,
    "max_reveal": 100,                # per rotation

    "log_level": "INFO",
}


def load(path: Path = CFG_PATH) -> dict:
    try:
        with open(path) as fh:
            return {**_DEFAULT, **json.load(fh)}
    except FileNotFoundError:
        save(_DEFAULT, path)
        return dict(_DEFAULT)


def save(cfg: dict, path: Path = CFG_PATH) -> None:
    Path(path).write_text(json.dumps(cfg, indent=2))
