"""
ufo_radar.projection
====================

Equirectangular lat/lon → radar-pixel mapping.

Longitude −180…180 spans the radar's full width, latitude −90…90 its full
height (north up).  Anything that lands outside the circular face is
thrown away once, at load time, never per frame.
"""
from __future__ import annotations

import logging
import math
from typing import Mapping, Optional, Tuple

from ufo_radar.errors import MalformedRecord
from ufo_radar.sightings import SightingPoint

log = logging.getLogger(__name__)

TWO_PI = 2 * math.pi

# dataset columns copied verbatim onto every point
META_FIELDS = {
    "city":               "city",
    "state":              "state",
    "shape":              "shape",
    "date_posted":        "date posted",
    "duration_seconds":   "duration (seconds)",
    "duration_hours_min": "duration (hours/min)",
    "comments":           "comments",
}


def _lerp(v: float, a0: float, a1: float, b0: float, b1: float) -> float:
    return b0 + (v - a0) * (b1 - b0) / (a1 - a0)


def bearing(x: float, y: float, cx: float, cy: float) -> float:
    """Screen-space angle of (x, y) around (cx, cy), folded into [0, 2π)."""
    ang = math.atan2(y - cy, x - cx)
    if ang < 0:
        ang += TWO_PI
    return ang


class CoordinateProjector:
    """Maps dataset rows onto a radar of given centre & radius."""

    def __init__(self, center: Tuple[float, float], radius: float) -> None:
        self.center = (float(center[0]), float(center[1]))
        self.radius = float(radius)

    # ───────────────────────── parsing
    @staticmethod
    def parse(row: Mapping[str, str]) -> Tuple[float, float]:
        """Return (lat, lon) or raise MalformedRecord."""
        try:
            lat = float(row.get("latitude", ""))
            lon = float(row.get("longitude", ""))
        except (TypeError, ValueError):
            raise MalformedRecord(
                f"non-numeric coordinates {row.get('latitude')!r}, "
                f"{row.get('longitude')!r}") from None

        if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
            raise MalformedRecord(f"latitude out of range: {lat}")
        if not (math.isfinite(lon) and -180.0 <= lon <= 180.0):
            raise MalformedRecord(f"longitude out of range: {lon}")
        return lat, lon

    # ───────────────────────── geometry
    def to_screen(self, lat: float, lon: float) -> Tuple[float, float]:
        cx, cy = self.center
        r = self.radius
        x = _lerp(lon, -180.0, 180.0, cx - r, cx + r)
        y = _lerp(lat, -90.0, 90.0, cy + r, cy - r)     # north up
        return x, y

    def inside(self, x: float, y: float) -> bool:
        cx, cy = self.center
        return math.hypot(x - cx, y - cy) <= self.radius

    # ───────────────────────── public API
    def project(self, row: Mapping[str, str]) -> Optional[SightingPoint]:
        """
        Build a SightingPoint for *row*, or return None when the projected
        position falls outside the radar face.

        Raises MalformedRecord for bad latitude / longitude.
        """
        lat, lon = self.parse(row)
        x, y = self.to_screen(lat, lon)
        if not self.inside(x, y):
            return None

        meta = {key: row.get(col, "") or "" for key, col in META_FIELDS.items()}
        return SightingPoint(
            position=(x, y),
            bearing=bearing(x, y, *self.center),
            **meta,
        )
