import logging

import pytest

from ufo_radar.errors import InvalidConfiguration
from ufo_radar.session import RadarSession, parse_budget, radar_geometry

from conftest import CENTER, RADIUS, make_row


def test_first_tick_reveals_at_full_fade_then_decays(session_at_zero):
    s = session_at_zero(n=1)
    s.toggle()
    s.tick()
    p = s.store[0]
    assert (p.visible, p.fade) == (True, 255)
    s.tick()
    assert p.fade == 253


def test_budget_of_one_reveals_only_first_point(session_at_zero):
    s = session_at_zero(n=2, budget=1)
    s.toggle()
    s.tick()
    first, second = s.store
    assert first.visible and not second.visible
    for _ in range(20):
        s.tick()
        assert not second.visible


def test_reveals_never_exceed_budget_within_rotation(row):
    rows = [row(lat, lon) for lat in range(-40, 41, 4) for lon in range(-80, 81, 8)]
    s = RadarSession(CENTER, RADIUS, rows, budget=7)
    s.toggle()
    transitions = 0
    was = [p.visible for p in s.store]
    for _ in range(314):
        s.tick()
        now = [p.visible for p in s.store]
        transitions += sum(1 for a, b in zip(was, now) if b and not a)
        was = now
        assert s.sweep.revealed <= 7
    assert transitions <= 7


@pytest.mark.parametrize("bad", ["-5", "abc", "0", "", "1.5", None])
def test_invalid_budget_is_ignored(session_at_zero, bad):
    s = session_at_zero(budget=4)
    s.toggle()
    for _ in range(3):
        s.tick()
    angle, visible = s.angle, [p.visible for p in s.store]
    assert s.set_budget(bad) is False
    assert s.budget == 4
    assert s.playing is True
    assert s.angle == angle
    assert [p.visible for p in s.store] == visible


def test_valid_budget_replaces_and_resets(session_at_zero):
    s = session_at_zero()
    s.toggle()
    s.tick()
    assert s.on_set_reveal_budget(" 12 ") is True
    assert s.budget == 12
    assert (s.angle, s.playing, s.sweep.revealed) == (0.0, False, 0)
    assert all(not p.visible and p.fade == 0 for p in s.store)


def test_reset_is_idempotent(session_at_zero):
    s = session_at_zero()
    s.toggle()
    for _ in range(5):
        s.tick()
    s.reset()
    once = s.snapshot()
    s.on_reset()
    assert s.snapshot() == once
    assert once.sweep_angle == 0.0 and once.playing is False
    assert all(not pv.visible and pv.fade == 0 for pv in once.points)


def test_pause_freezes_visible_points(session_at_zero):
    s = session_at_zero(n=1)
    s.on_play_toggle()
    s.tick()
    s.on_play_toggle()
    for _ in range(10):
        s.tick()
    assert s.store[0].fade == 255 and s.store[0].visible
    assert s.angle == pytest.approx(0.02)


def test_snapshot_contents(session_at_zero):
    s = session_at_zero(n=1)
    s.toggle()
    s.tick()
    fr = s.snapshot()
    assert fr.center == CENTER and fr.radius == RADIUS
    assert fr.revealed == 1 and fr.budget == 1
    (pv,) = fr.points
    assert pv.position == (700.0, 500.0)
    assert pv.metadata["city"] == "east-0"


def test_points_near_only_returns_visible(session_at_zero):
    s = session_at_zero(n=2, budget=1)
    assert s.points_near((700, 500)) == []
    s.toggle()
    s.tick()
    hits = s.points_near((703, 502), threshold=6)
    assert [h["city"] for h in hits] == ["east-0"]
    assert s.points_near((706, 500), threshold=6) == []


def test_malformed_rows_are_dropped(row):
    rows = [row("x", "1"), row(95, 0), row(10, 10), row(90, 180)]
    s = RadarSession(CENTER, RADIUS, rows)
    assert len(s.store) == 1
    assert s.store.dropped_malformed == 2
    assert s.store.dropped_outside == 1


def test_parse_budget():
    assert parse_budget("3") == 3
    assert parse_budget(8) == 8
    with pytest.raises(InvalidConfiguration):
        parse_budget(True)


def test_radar_geometry():
    center, radius = radar_geometry((1100, 810), 0.45, bottom_pad=60)
    assert center == (550, 375)
    assert radius == pytest.approx(750 * 0.45)


def test_bad_startup_budget_falls_back_to_default(row):
    s = RadarSession(CENTER, RADIUS, [row(0, 0)], budget="lots")
    assert s.budget == 100


def test_rejected_budget_is_logged_at_debug(session_at_zero, caplog):
    s = session_at_zero()
    with caplog.at_level(logging.DEBUG, logger="ufo_radar.session"):
        s.set_budget("abc")
    assert ("ufo_radar.session", logging.DEBUG,
            "reveal budget input ignored: not a number: 'abc'") in caplog.record_tuples


def test_budget_is_fresh_on_next_rotation(session_at_zero):
    s = session_at_zero(n=1, budget=1)
    s.toggle()
    reveal_ticks = [n for n in range(700) if s.tick()]
    assert reveal_ticks == [0, 314, 629]
    assert s.snapshot().rotations == 2


def test_snapshot_counts_points_on_screen(session_at_zero):
    s = session_at_zero(n=2, budget=1)
    assert s.snapshot().on_screen == 0
    s.toggle()
    s.tick()
    fr = s.snapshot()
    assert fr.on_screen == 1 and fr.rotations == 0


@pytest.mark.parametrize("speed", [0, -0.02, "fast", None])
def test_bad_sweep_speed_falls_back_to_default(row, speed):
    s = RadarSession(CENTER, RADIUS, [row(0, 90)], sweep_speed=speed)
    assert s.sweep.speed == 0.02
    s.toggle()
    for _ in range(50):
        s.tick()
        assert 0.0 <= s.angle < 2 * 3.141592653589793


@pytest.mark.parametrize("step", [0, -2, "x"])
def test_bad_fade_step_falls_back_to_default(row, step):
    s = RadarSession(CENTER, RADIUS, [row(0, 90)], fade_step=step)
    assert s.engine.fade_step == 2
    s.toggle()
    s.tick()
    s.tick()
    assert s.store[0].fade == 253
