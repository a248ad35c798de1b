"""Tests for preview geometry and containment."""

from dataclasses import replace

import pytest

from livecheck.config import LivenessConfig
from livecheck.geometry import contains, face_in_preview, is_face_too_big, preview_rect
from livecheck.types import Rect


OUTSIDE = Rect(0.0, 0.0, 100.0, 100.0)


class TestContains:
    def test_inside(self):
        assert contains(OUTSIDE, Rect(10, 10, 50, 50))

    def test_identical_rects(self):
        assert contains(OUTSIDE, OUTSIDE)

    @pytest.mark.parametrize("eps", [0.001, 1.0, 9.0])
    def test_shrinking_preserves_containment(self, eps):
        inside = Rect(10, 10, 50, 50)
        assert contains(OUTSIDE, inside.shrink(2 * eps))

    @pytest.mark.parametrize("inside", [
        Rect(-1, 10, 50, 50),      # left edge
        Rect(10, -1, 50, 50),      # top edge
        Rect(60, 10, 41, 50),      # right edge
        Rect(10, 60, 50, 41),      # bottom edge
    ])
    def test_single_edge_overflow(self, inside):
        assert not contains(OUTSIDE, inside)

    def test_negative_width_not_normalized(self):
        # max_x = 60 - 80 = -20; each edge comparison still holds
        assert contains(OUTSIDE, Rect(60, 10, -80, 20))

    def test_negative_width_past_left_edge(self):
        assert not contains(OUTSIDE, Rect(-10, 10, -5, 20))


class TestRectShrink:
    def test_shrink_insets_half_offset_per_side(self):
        r = Rect(100, 120, 180, 180).shrink(50)
        assert r == Rect(125, 145, 130, 130)
        assert r.max_x == 255
        assert r.max_y == 275


class TestPreviewRect:
    def test_default_centered(self):
        rect = preview_rect(LivenessConfig())
        assert rect == Rect(25.0, 50.0, 325.0, 325.0)

    def test_window_width(self):
        rect = preview_rect(replace(LivenessConfig(), window_width=425.0))
        assert rect.min_x == pytest.approx(50.0)


class TestFacePositioning:
    def test_face_inside(self):
        assert face_in_preview(Rect(100, 120, 180, 180), LivenessConfig())

    def test_face_overhang_within_edge_offset(self):
        # 20 units past the left edge; the 25-unit inset absorbs it
        assert face_in_preview(Rect(5, 120, 180, 180), LivenessConfig())

    def test_face_outside(self):
        assert not face_in_preview(Rect(300, 120, 180, 180), LivenessConfig())

    def test_too_big_requires_both_dimensions(self):
        config = LivenessConfig()
        assert is_face_too_big(Rect(0, 0, 235, 235), config)
        assert not is_face_too_big(Rect(0, 0, 235, 200), config)
        assert not is_face_too_big(Rect(0, 0, 234, 300), config)
