import pytest

from ufo_radar.session import RadarSession

CENTER, RADIUS = (500.0, 500.0), 400.0


def make_row(lat, lon, **meta):
    row = {
        "latitude": str(lat), "longitude": str(lon),
        "city": "roswell", "state": "nm", "shape": "disk",
        "date posted": "4/27/2004", "duration (seconds)": "900",
        "duration (hours/min)": "15 minutes", "comments": "bright light",
    }
    row.update(meta)
    return row


@pytest.fixture
def row():
    return make_row


@pytest.fixture
def session_at_zero():
    """Two sightings projected onto bearing 0.0, budget 1."""
    def _make(n=2, budget=1, **kw):
        rows = [make_row(0, 90, city=f"east-{i}") for i in range(n)]
        return RadarSession(CENTER, RADIUS, rows, sweep_speed=0.02,
                            sweep_width=0.2, budget=budget, **kw)
    return _make
