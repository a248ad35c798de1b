"""Frame evaluator - turns one detector frame into a verdict.

Checks are applied in order, stopping at the first failing one:

1. exactly one face in the frame
2. face (shrunk by the edge offset) inside the preview square
3. face not too big (only before the face is first acquired)
4. active gesture predicate
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, Mapping, Optional, Sequence

import numpy as np

from livecheck.config import GESTURES, LivenessConfig
from livecheck.geometry import face_in_preview, is_face_too_big
from livecheck.state import SequenceState
from livecheck.types import FaceMeasurement, GestureKind, GestureThreshold, Verdict

logger = logging.getLogger(__name__)


def is_blink(face: FaceMeasurement, threshold: float) -> bool:
    # Lower probability means the eye is closed
    return (
        face.left_eye_open_probability <= threshold
        and face.right_eye_open_probability <= threshold
    )


def is_head_turned_left(face: FaceMeasurement, threshold: float) -> bool:
    return face.yaw_angle <= threshold


def is_head_turned_right(face: FaceMeasurement, threshold: float) -> bool:
    return face.yaw_angle >= threshold


def is_smile(face: FaceMeasurement, threshold: float) -> bool:
    return face.smiling_probability >= threshold


_FRAME_PREDICATES: Dict[GestureKind, Callable[[FaceMeasurement, float], bool]] = {
    GestureKind.BLINK: is_blink,
    GestureKind.TURN_HEAD_LEFT: is_head_turned_left,
    GestureKind.TURN_HEAD_RIGHT: is_head_turned_right,
    GestureKind.SMILE: is_smile,
}


class RollAngleHistory:
    """Fixed-capacity FIFO of recent roll angles for nod detection.

    A nod registers as a roll angle that deviates from the mean magnitude
    of the preceding samples by at least ``min_diff`` degrees.
    """

    def __init__(self, capacity: int = 10):
        if capacity < 2:
            raise ValueError(f"capacity must be >= 2, got {capacity}")
        self.capacity = capacity
        self._angles: Deque[float] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._angles)

    @property
    def is_full(self) -> bool:
        return len(self._angles) == self.capacity

    def append(self, angle: float) -> None:
        self._angles.append(float(angle))

    def clear(self) -> None:
        self._angles.clear()

    def values(self) -> list:
        return list(self._angles)

    def deviation(self) -> Optional[float]:
        """``|mean(|previous|) - |latest||``, or None until the window is full."""
        if not self.is_full:
            return None
        angles = np.abs(np.asarray(self._angles, dtype=np.float64))
        avg = float(angles[:-1].mean())
        return abs(avg - float(angles[-1]))


class FrameEvaluator:
    """Per-frame presence, positioning and gesture evaluation.

    Stateless except for the roll-angle history used by the NOD gesture.

    Args:
        config: Geometry and timing constants.
        gestures: Threshold table; defaults to :data:`livecheck.config.GESTURES`.
    """

    def __init__(
        self,
        config: Optional[LivenessConfig] = None,
        gestures: Optional[Mapping[GestureKind, GestureThreshold]] = None,
    ):
        self.config = config or LivenessConfig()
        self.gestures = dict(gestures) if gestures is not None else dict(GESTURES)
        self.roll_history = RollAngleHistory(self.config.roll_history_size)

    def reset(self) -> None:
        self.roll_history.clear()

    def evaluate(
        self,
        faces: Sequence[FaceMeasurement],
        state: SequenceState,
    ) -> Verdict:
        """Evaluate one frame against the current state.

        Args:
            faces: All faces reported by the detector for this frame.
            state: State produced by the previous frame (read only).

        Returns:
            Verdict for this frame.
        """
        if len(faces) != 1:
            logger.debug("Frame rejected: %d faces", len(faces))
            return Verdict.NO_FACE

        face = faces[0]
        if not face_in_preview(face.bounds, self.config):
            logger.debug("Frame rejected: face outside preview %s", face.bounds)
            return Verdict.NO_FACE

        # Size is only gated before acquisition to avoid flicker mid-sequence
        if not state.face_detected and is_face_too_big(face.bounds, self.config):
            logger.debug(
                "Face too big: %.1fx%.1f (max %.1f)",
                face.bounds.width, face.bounds.height, self.config.face_max_size,
            )
            return Verdict.FACE_TOO_BIG

        gesture = state.current_gesture
        if gesture is None:
            return Verdict.FACE_OK

        if self.is_satisfied(gesture, face):
            logger.debug("Gesture %s satisfied", gesture.name)
            return Verdict.GESTURE_SATISFIED
        return Verdict.FACE_OK

    def is_satisfied(self, gesture: GestureKind, face: FaceMeasurement) -> bool:
        """Evaluate a single gesture predicate.

        NOD records the face's roll angle as a side effect.
        """
        threshold = self.gestures[gesture].threshold
        if gesture is GestureKind.NOD:
            self.roll_history.append(face.roll_angle)
            diff = self.roll_history.deviation()
            return diff is not None and diff >= threshold
        return _FRAME_PREDICATES[gesture](face, threshold)


__all__ = [
    "FrameEvaluator",
    "RollAngleHistory",
    "is_blink",
    "is_head_turned_left",
    "is_head_turned_right",
    "is_smile",
]
