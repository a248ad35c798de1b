"""Shared fixtures for livecheck tests.

All face measurements are synthetic; no detector needed.

Default geometry (window 375): preview square x=[25, 350], y=[50, 375],
face max size 235.
"""

import pytest

from livecheck.types import FaceMeasurement, Rect


@pytest.fixture
def make_face():
    """Factory for a single well-positioned neutral face.

    The default 180x180 box at (100, 120) sits inside the preview and is
    below the too-big size.
    """
    def _make(
        x: float = 100.0,
        y: float = 120.0,
        size: float = 180.0,
        **kw,
    ) -> FaceMeasurement:
        return FaceMeasurement(bounds=Rect(x, y, size, size), **kw)
    return _make


@pytest.fixture
def big_face(make_face):
    """Face inside the preview but at least the too-big size."""
    return make_face(x=67.5, y=120.0, size=240.0)


@pytest.fixture
def scheduled():
    """Fake scheduler recording (delay, callback) pairs instead of starting timers."""
    calls = []

    def _schedule(delay, callback):
        calls.append((delay, callback))

    _schedule.calls = calls
    return _schedule
