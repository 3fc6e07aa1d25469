"""
ufo_radar package
=================

Radar-sweep viewer for UFO sighting reports.
"""

__all__ = [
    "constants",
    "config",
    "errors",
    "projection",
    "sightings",
    "sweep",
    "reveal",
    "session",
    "gui",
]

__version__ = "1.0"
