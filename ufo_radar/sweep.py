"""
Sweep bookkeeping: beam angle, play flag and the per-rotation reveal
counter.

The counter is reset in exactly two places: when the beam wraps past 2π
back to 0, and on an explicit reset.  Nothing else clears it.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ufo_radar.sightings import SightingStore

log = logging.getLogger(__name__)

TWO_PI = 2 * math.pi


@dataclass
class SweepState:
    angle: float = 0.0                 # [0, 2π)
    revealed_this_rotation: int = 0
    playing: bool = False
    rotations: int = 0                 # completed wraps since last reset


class SweepController:
    def __init__(self, speed: float = 0.02,
                 store: Optional[SightingStore] = None) -> None:
        self.speed = float(speed)
        self.store = store
        self.state = SweepState()

    # ───────────────────────── read-only views
    @property
    def angle(self) -> float:
        return self.state.angle

    @property
    def playing(self) -> bool:
        return self.state.playing

    @property
    def revealed(self) -> int:
        return self.state.revealed_this_rotation

    def rotation_seconds(self, fps: float) -> float:
        """Wall-clock time of one full rotation at *fps* ticks per second."""
        return TWO_PI / (self.speed * fps)

    # ───────────────────────── mutation
    def advance(self) -> bool:
        """
        Step the beam one tick.  Returns True when this step wrapped past
        2π (angle is then exactly 0 and the reveal budget is fresh).
        """
        st = self.state
        if not st.playing:
            return False

        st.angle += self.speed
        if st.angle >= TWO_PI:
            st.angle = 0.0
            st.revealed_this_rotation = 0
            st.rotations += 1
            if self.store is not None:
                self.store.clear_pass()
            return True
        return False

    def count_reveal(self) -> None:
        self.state.revealed_this_rotation += 1

    def toggle(self) -> bool:
        self.state.playing = not self.state.playing
        return self.state.playing

    def reset(self) -> None:
        self.state = SweepState()
        if self.store is not None:
            self.store.clear()
