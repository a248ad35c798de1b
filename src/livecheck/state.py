"""Gesture sequence state machine.

A pure reducer over an immutable :class:`SequenceState`. Three transition
kinds drive it:

- ``FaceDetected(yes)``: face acquired (yes=True) or lost (yes=False, full reset)
- ``FaceTooBig(yes)``: face too close to the camera
- ``NextDetection()``: active gesture satisfied, advance to the next one

Progress is split into ``len(gesture_order) + 1`` equal slices; the first
slice is earned by acquiring the face, each completed gesture earns one more.

Example:
    >>> state = initial_state()
    >>> state = reduce(state, FaceDetected(True))
    >>> state = reduce(state, NextDetection())
    >>> state.current_index, round(state.progress_fill, 2)
    (1, 33.33)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple, Union

from livecheck.config import DEFAULT_GESTURE_ORDER
from livecheck.types import GestureKind


@dataclass(frozen=True)
class SequenceState:
    """Snapshot of one verification attempt."""

    face_detected: bool = False
    face_too_big: bool = False
    gesture_order: Tuple[GestureKind, ...] = DEFAULT_GESTURE_ORDER
    current_index: int = 0
    progress_fill: float = 0.0       # percent, 0-100
    complete: bool = False

    @property
    def current_gesture(self) -> Optional[GestureKind]:
        """Gesture the user must perform now, None once complete."""
        if self.current_index >= len(self.gesture_order):
            return None
        return self.gesture_order[self.current_index]


@dataclass(frozen=True)
class FaceDetected:
    yes: bool


@dataclass(frozen=True)
class FaceTooBig:
    yes: bool


@dataclass(frozen=True)
class NextDetection:
    pass


Transition = Union[FaceDetected, FaceTooBig, NextDetection]


class TransitionError(Exception):
    """Raised when the reducer receives an object outside the transition set.

    Signals a wiring defect in the caller, never a runtime condition.

    Attributes:
        transition: The offending object.
    """

    def __init__(self, transition: object):
        self.transition = transition
        super().__init__(f"Unexpected transition: {transition!r}")


def initial_state(gesture_order: Optional[Sequence[GestureKind]] = None) -> SequenceState:
    """Return the session-initial state for a gesture order.

    Raises:
        ValueError: If the order is empty.
    """
    order = tuple(gesture_order) if gesture_order is not None else DEFAULT_GESTURE_ORDER
    if not order:
        raise ValueError("gesture_order must contain at least one gesture")
    return SequenceState(gesture_order=order)


def _progress(state: SequenceState, earned_slices: int) -> float:
    slices = len(state.gesture_order) + 1
    return min(100.0, 100.0 * earned_slices / slices)


def reduce(state: SequenceState, transition: Transition) -> SequenceState:
    """Apply one transition and return the resulting state.

    Raises:
        TransitionError: If ``transition`` is not a known transition kind.
    """
    if isinstance(transition, FaceDetected):
        if not transition.yes:
            # Losing the face restarts the whole sequence
            return SequenceState(gesture_order=state.gesture_order)
        return replace(state, face_detected=True, progress_fill=_progress(state, 1))

    if isinstance(transition, FaceTooBig):
        return replace(state, face_too_big=transition.yes)

    if isinstance(transition, NextDetection):
        if state.complete:
            return state
        next_index = state.current_index + 1
        # Slice 0 is the face-acquired slice
        progress = _progress(state, next_index + 1)
        if next_index == len(state.gesture_order):
            return replace(
                state,
                current_index=next_index,
                progress_fill=100.0,
                complete=True,
            )
        return replace(state, current_index=next_index, progress_fill=progress)

    raise TransitionError(transition)


__all__ = [
    "SequenceState",
    "FaceDetected",
    "FaceTooBig",
    "NextDetection",
    "Transition",
    "TransitionError",
    "initial_state",
    "reduce",
]
