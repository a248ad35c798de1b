"""Tests for the gesture sequence reducer."""

from dataclasses import replace

import pytest

from livecheck.config import DEFAULT_GESTURE_ORDER
from livecheck.state import (
    FaceDetected,
    FaceTooBig,
    NextDetection,
    SequenceState,
    TransitionError,
    initial_state,
    reduce,
)
from livecheck.types import GestureKind


class TestInitialState:
    def test_defaults(self):
        state = initial_state()
        assert state.gesture_order == DEFAULT_GESTURE_ORDER
        assert state.current_index == 0
        assert state.progress_fill == 0.0
        assert not state.face_detected
        assert not state.face_too_big
        assert not state.complete
        assert state.current_gesture is GestureKind.BLINK

    def test_custom_order(self):
        state = initial_state([GestureKind.SMILE, GestureKind.NOD])
        assert state.gesture_order == (GestureKind.SMILE, GestureKind.NOD)

    def test_empty_order_rejected(self):
        with pytest.raises(ValueError):
            initial_state([])


class TestFaceDetected:
    def test_yes_reserves_first_slice(self):
        state = reduce(initial_state(), FaceDetected(True))
        assert state.face_detected
        assert state.progress_fill == pytest.approx(100 / 6)

    @pytest.mark.parametrize("state", [
        SequenceState(face_detected=True, current_index=3, progress_fill=66.7),
        SequenceState(face_too_big=True),
        SequenceState(face_detected=True, face_too_big=True, current_index=1, progress_fill=33.3),
        SequenceState(),
    ])
    def test_no_resets_to_initial(self, state):
        assert reduce(state, FaceDetected(False)) == initial_state()

    def test_no_keeps_gesture_order(self):
        order = (GestureKind.NOD, GestureKind.BLINK)
        state = replace(initial_state(order), face_detected=True, current_index=1)
        assert reduce(state, FaceDetected(False)) == initial_state(order)


class TestFaceTooBig:
    def test_only_flag_changes(self):
        state = replace(initial_state(), progress_fill=10.0)
        result = reduce(state, FaceTooBig(True))
        assert result == replace(state, face_too_big=True)
        assert reduce(result, FaceTooBig(False)) == state


class TestNextDetection:
    def test_progress_strictly_increasing_to_100(self):
        state = reduce(initial_state(), FaceDetected(True))
        fills = [state.progress_fill]
        while not state.complete:
            state = reduce(state, NextDetection())
            fills.append(state.progress_fill)

        assert all(a < b for a, b in zip(fills, fills[1:]))
        assert fills[-1] == 100.0
        assert state.current_index == len(state.gesture_order)
        assert state.current_gesture is None

    def test_single_gesture_order(self):
        state = reduce(initial_state([GestureKind.SMILE]), FaceDetected(True))
        assert state.progress_fill == pytest.approx(50.0)
        state = reduce(state, NextDetection())
        assert state.complete
        assert state.progress_fill == 100.0

    def test_progress_values(self):
        state = reduce(initial_state(), FaceDetected(True))
        expected = [100 * 2 / 6, 50.0, 100 * 4 / 6, 100 * 5 / 6, 100.0]
        for value in expected:
            state = reduce(state, NextDetection())
            assert state.progress_fill == pytest.approx(value)

    def test_complete_is_terminal(self):
        state = initial_state([GestureKind.BLINK])
        state = reduce(state, NextDetection())
        assert state.complete
        assert reduce(state, NextDetection()) is state


class TestUnknownTransition:
    def test_raises(self):
        with pytest.raises(TransitionError) as exc_info:
            reduce(initial_state(), "NEXT_DETECTION")
        assert exc_info.value.transition == "NEXT_DETECTION"
