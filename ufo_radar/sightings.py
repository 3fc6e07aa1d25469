"""
Sighting records plus CSV ingestion.

A `SightingPoint` is created once per accepted dataset row and lives for
the whole session.  Its position, bearing and metadata never change;
only `visible`, `fade` and `swept` are touched, and only by the reveal
engine (or a reset).
"""
from __future__ import annotations

import csv
import logging
from types import MappingProxyType
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from ufo_radar.errors import MalformedRecord

log = logging.getLogger(__name__)


class SightingPoint:
    __slots__ = ("_pos", "_bearing", "_meta", "visible", "fade", "swept")

    def __init__(self, position: Tuple[float, float], bearing: float,
                 **meta: str) -> None:
        self._pos = (float(position[0]), float(position[1]))
        self._bearing = float(bearing)
        self._meta: Dict[str, str] = dict(meta)
        self.visible = False
        self.fade = 0
        self.swept = False           # already revealed during this rotation

    # ───────────────────────── read-only
    @property
    def position(self) -> Tuple[float, float]:
        return self._pos

    @property
    def bearing(self) -> float:
        return self._bearing

    @property
    def metadata(self) -> Mapping[str, str]:
        return MappingProxyType(self._meta)

    def __repr__(self) -> str:
        x, y = self._pos
        return (f"SightingPoint(({x:.1f}, {y:.1f}), visible={self.visible}, "
                f"fade={self.fade})")

    def detail_lines(self) -> List[str]:
        """Text rows for the hover panel."""
        m = self._meta
        dur = m.get("duration_hours_min") or f"{m.get('duration_seconds', '')} sec"
        lines = [
            f"City: {m.get('city', '')}",
            f"State: {m.get('state', '')}",
            f"Shape: {m.get('shape', '')}",
            f"Date: {m.get('date_posted', '')}",
            f"Duration: {dur}",
        ]
        if m.get("comments"):
            lines.append(f"Comments: {m['comments']}")
        return lines


class SightingStore:
    """Ordered, load-once collection of points inside the radar face."""

    def __init__(self, points: Iterable[SightingPoint] = ()) -> None:
        self.points: List[SightingPoint] = list(points)
        self.rows_read = 0
        self.dropped_malformed = 0
        self.dropped_outside = 0

    @classmethod
    def build(cls, rows: Iterable[Mapping[str, str]], projector) -> "SightingStore":
        store = cls()
        for n, row in enumerate(rows, 1):
            store.rows_read += 1
            try:
                pt = projector.project(row)
            except MalformedRecord as exc:
                store.dropped_malformed += 1
                log.debug("row %d dropped: %s", n, exc)
                continue
            if pt is None:
                store.dropped_outside += 1
                continue
            store.points.append(pt)

        log.info("loaded %d sightings (%d rows, %d malformed, %d outside radar)",
                 len(store.points), store.rows_read,
                 store.dropped_malformed, store.dropped_outside)
        return store

    # ───────────────────────── sequence protocol
    def __iter__(self) -> Iterator[SightingPoint]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, i: int) -> SightingPoint:
        return self.points[i]

    # ───────────────────────── state helpers
    def clear(self) -> None:
        """Every point invisible, fade 0, eligible again."""
        for p in self.points:
            p.visible = False
            p.fade = 0
            p.swept = False

    def clear_pass(self) -> None:
        """New rotation: everything may be revealed again."""
        for p in self.points:
            p.swept = False

    def visible_count(self) -> int:
        return sum(1 for p in self.points if p.visible)


# ───────────────────────── CSV ingestion
def read_rows(path: str | Path) -> Iterator[Dict[str, str]]:
    """
    Yield one dict per CSV row.  Header names are stripped because the
    public scrubbed dataset ships a `"longitude "` column.
    """
    with open(path, newline="", encoding="utf-8", errors="replace") as fh:
        rdr = csv.DictReader(fh)
        if rdr.fieldnames is None:          # empty file
            return
        rdr.fieldnames = [h.strip() for h in rdr.fieldnames]
        for r in rdr:
            yield r


def load_store(path: str | Path, projector) -> SightingStore:
    """Read *path* and project it.  A missing file yields an empty store."""
    try:
        return SightingStore.build(read_rows(path), projector)
    except FileNotFoundError:
        log.warning("dataset %s not found – radar will be empty", path)
        return SightingStore()


def points_near(points: Iterable[SightingPoint],
                cursor: Tuple[float, float],
                threshold: float) -> Iterator[SightingPoint]:
    """Visible points strictly closer than *threshold* px to *cursor*."""
    mx, my = cursor
    t2 = threshold * threshold
    for p in points:
        if not p.visible:
            continue
        x, y = p.position
        if (x - mx) ** 2 + (y - my) ** 2 < t2:
            yield p
