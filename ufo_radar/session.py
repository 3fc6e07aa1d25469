"""
ufo_radar.session
=================

`RadarSession` owns everything that changes while the radar runs: the
sighting store, the sweep and the reveal engine.  It exposes plain
synchronous calls (`tick`, `toggle`, `reset`, `set_budget`) plus a
read-only `snapshot()` for whatever draws the frame, and a pure
`points_near()` hover query.

One tick is always: advance sweep → reveal / fade pass.  Drawing happens
afterwards, from the snapshot.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, NamedTuple, Optional, Tuple, Union

from ufo_radar.errors import InvalidConfiguration
from ufo_radar.projection import CoordinateProjector
from ufo_radar.reveal import RevealEngine
from ufo_radar.sightings import SightingPoint, SightingStore, load_store, points_near
from ufo_radar.sweep import SweepController

log = logging.getLogger(__name__)

DEFAULT_BUDGET = 100
DEFAULT_SPEED  = 0.02
DEFAULT_FADE   = 2


class PointView(NamedTuple):
    position: Tuple[float, float]
    visible: bool
    fade: int
    metadata: Mapping[str, str]


class Frame(NamedTuple):
    sweep_angle: float
    center: Tuple[float, float]
    radius: float
    playing: bool
    budget: int
    revealed: int
    rotations: int
    on_screen: int
    points: Tuple[PointView, ...]


def parse_budget(value: Union[str, int]) -> int:
    """Positive int or InvalidConfiguration."""
    if isinstance(value, bool):
        raise InvalidConfiguration(f"not a number: {value!r}")
    try:
        n = int(str(value).strip())
    except ValueError:
        raise InvalidConfiguration(f"not a number: {value!r}") from None
    if n <= 0:
        raise InvalidConfiguration(f"must be positive: {n}")
    return n


def _positive(name: str, value, default, kind):
    """*value* as *kind* when > 0, else *default* (logged)."""
    try:
        v = kind(value)
    except (TypeError, ValueError):
        v = None
    if isinstance(value, bool) or v is None or not v > 0:
        log.warning("%s %r must be positive – falling back to %s",
                    name, value, default)
        return default
    return v


def radar_geometry(size: Tuple[int, int], scale: float,
                   bottom_pad: int = 0) -> Tuple[Tuple[float, float], float]:
    """Centre & radius of the radar face for a window of *size*."""
    w, h = size
    h -= bottom_pad
    return (w / 2, h / 2), min(w, h) * scale


class RadarSession:
    def __init__(self, center: Tuple[float, float], radius: float,
                 rows: Iterable[Mapping[str, str]] = (),
                 *, sweep_speed: float = DEFAULT_SPEED, sweep_width: float = 0.2,
                 fade_step: int = DEFAULT_FADE, budget: int = DEFAULT_BUDGET,
                 seam_wrap: bool = False,
                 store: Optional[SightingStore] = None) -> None:
        self.projector = CoordinateProjector(center, radius)
        self.store = store if store is not None else \
            SightingStore.build(rows, self.projector)
        sweep_speed = _positive("sweep_speed", sweep_speed, DEFAULT_SPEED, float)
        fade_step = _positive("fade_step", fade_step, DEFAULT_FADE, int)
        self.sweep = SweepController(sweep_speed, self.store)
        try:
            budget = parse_budget(budget)
        except InvalidConfiguration as exc:
            log.warning("reveal budget %s – falling back to %d", exc, DEFAULT_BUDGET)
            budget = DEFAULT_BUDGET
        self.engine = RevealEngine(sweep_width, fade_step, budget, seam_wrap)

    @classmethod
    def from_config(cls, cfg: dict, size: Tuple[int, int],
                    bottom_pad: int = 0) -> "RadarSession":
        center, radius = radar_geometry(size, cfg["radar_scale"], bottom_pad)
        store = load_store(cfg["dataset"], CoordinateProjector(center, radius))
        return cls(center, radius, store=store,
                   sweep_speed=cfg["sweep_speed"],
                   sweep_width=cfg["sweep_width"],
                   fade_step=cfg["fade_step"],
                   budget=cfg["max_reveal"],
                   seam_wrap=cfg["seam_wrap"])

    # ───────────────────────── read-only
    @property
    def center(self) -> Tuple[float, float]:
        return self.projector.center

    @property
    def radius(self) -> float:
        return self.projector.radius

    @property
    def budget(self) -> int:
        return self.engine.budget

    @property
    def playing(self) -> bool:
        return self.sweep.playing

    @property
    def angle(self) -> float:
        return self.sweep.angle

    # ───────────────────────── controls
    def tick(self) -> List[SightingPoint]:
        """Advance one frame.  Returns points revealed on this tick."""
        self.sweep.advance()
        return self.engine.step(self.sweep, self.store)

    def toggle(self) -> bool:
        return self.sweep.toggle()

    def reset(self) -> None:
        self.sweep.reset()          # cascades to the store
        log.info("radar reset")

    def set_budget(self, value: Union[str, int]) -> bool:
        """
        Replace the per-rotation reveal budget and reset everything.
        Bad input is ignored (logged at debug) and leaves state untouched.
        """
        try:
            n = parse_budget(value)
        except InvalidConfiguration as exc:
            log.debug("reveal budget input ignored: %s", exc)
            return False
        self.engine.budget = n
        log.info("reveal budget set to %d per rotation", n)
        self.reset()
        return True

    # adapters for the UI layer
    def on_play_toggle(self) -> bool:
        return self.toggle()

    def on_reset(self) -> None:
        self.reset()

    def on_set_reveal_budget(self, text: str) -> bool:
        return self.set_budget(text)

    # ───────────────────────── queries
    def snapshot(self) -> Frame:
        return Frame(
            sweep_angle=self.sweep.angle,
            center=self.center,
            radius=self.radius,
            playing=self.sweep.playing,
            budget=self.engine.budget,
            revealed=self.sweep.revealed,
            rotations=self.sweep.state.rotations,
            on_screen=self.store.visible_count(),
            points=tuple(PointView(p.position, p.visible, p.fade, p.metadata)
                         for p in self.store),
        )

    def points_near(self, cursor: Tuple[float, float],
                    threshold: float = 6) -> List[dict]:
        """Metadata of visible points within *threshold* px of *cursor*."""
        return [dict(p.metadata) for p in points_near(self.store, cursor, threshold)]

    def hover(self, cursor: Tuple[float, float],
              threshold: float = 6) -> List[SightingPoint]:
        return list(points_near(self.store, cursor, threshold))
