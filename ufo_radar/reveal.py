"""
ufo_radar.reveal
================

Per-tick reveal / fade pass.

Order inside one tick (only while playing):

1.  Fade every point that was already visible by `fade_step`, clamped
    at 0; a point reaching 0 turns invisible.
2.  Scan the store in order and reveal every point that
    *   has not been revealed yet during this rotation,
    *   sits strictly inside the beam (`diff < sweep_width`),
    *   still fits the rotation's reveal budget.
    A reveal sets `visible=True`, `fade=FADE_MAX`.

Because of (1) → (2) a freshly revealed point shows full brightness on
the tick it was hit and decays by one step per tick afterwards.

Angular distance defaults to the plain `|bearing - angle|`, which does
not see across the 0/2π seam; `seam_wrap=True` uses the shorter arc.
"""
from __future__ import annotations

import math
from typing import List

from ufo_radar.constants import FADE_MAX
from ufo_radar.sightings import SightingPoint, SightingStore
from ufo_radar.sweep import SweepController

TWO_PI = 2 * math.pi


def angular_distance(a: float, b: float, seam_wrap: bool = False) -> float:
    d = abs(a - b)
    if seam_wrap:
        d = min(d, TWO_PI - d)
    return d


class RevealEngine:
    def __init__(self, sweep_width: float = 0.2, fade_step: int = 2,
                 budget: int = 100, seam_wrap: bool = False) -> None:
        self.sweep_width = float(sweep_width)
        self.fade_step = int(fade_step)
        self.budget = int(budget)
        self.seam_wrap = bool(seam_wrap)

    def in_beam(self, point: SightingPoint, angle: float) -> bool:
        return angular_distance(point.bearing, angle, self.seam_wrap) < self.sweep_width

    def step(self, sweep: SweepController,
             store: SightingStore) -> List[SightingPoint]:
        """Run one tick; returns the points revealed by it."""
        if not sweep.playing:
            return []

        # ―― fade what was already on screen
        for p in store:
            if p.visible:
                p.fade = max(0, p.fade - self.fade_step)
                if p.fade == 0:
                    p.visible = False

        # ―― reveal under the beam
        hits: List[SightingPoint] = []
        angle = sweep.angle
        for p in store:
            if sweep.revealed >= self.budget:
                break
            if p.swept or not self.in_beam(p, angle):
                continue
            p.visible = True
            p.fade = FADE_MAX
            p.swept = True
            sweep.count_reveal()
            hits.append(p)
        return hits
