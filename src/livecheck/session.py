"""Liveness session - wires detector callbacks to the state machine.

    >>> context = VerificationContext()
    >>> session = LivenessSession(context=context)
    >>> state = session.on_faces_detected([face], timestamp_ms=0)
    >>> session.prompt().headline
    'Keep the device still and perform the following actions:'

One session covers one verification attempt. Frame N is always evaluated
against the state produced by frame N-1; losing the face or calling
:meth:`LivenessSession.reset` restarts the gesture sequence.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Union

from livecheck.config import GESTURES, INSTRUCTIONS, LivenessConfig
from livecheck.evaluator import FrameEvaluator
from livecheck.state import (
    FaceDetected,
    FaceTooBig,
    NextDetection,
    SequenceState,
    Transition,
    initial_state,
    reduce,
)
from livecheck.types import FaceMeasurement, GestureKind, Verdict

logger = logging.getLogger(__name__)

FaceInput = Union[FaceMeasurement, Mapping[str, Any]]
Scheduler = Callable[[float, Callable[[], None]], Any]


@dataclass
class VerificationContext:
    """Caller-owned "verified" flag shared with the rest of the app."""

    verified: bool = False

    def mark_verified(self) -> None:
        self.verified = True


@dataclass(frozen=True)
class Prompt:
    """Instruction text for the current state.

    Attributes:
        headline: General instruction shown above the action.
        action: Instruction for the active gesture, empty when none applies.
    """

    headline: str
    action: str = ""


def _start_timer(delay_sec: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay_sec, callback)
    timer.daemon = True
    timer.start()
    return timer


def prompt_for(state: SequenceState) -> Prompt:
    """Select instruction text for a state snapshot."""
    if state.face_too_big:
        return Prompt(INSTRUCTIONS["too_close"])
    if not state.face_detected:
        return Prompt(INSTRUCTIONS["initial_prompt"])
    gesture = state.current_gesture
    action = GESTURES[gesture].instruction if gesture is not None else ""
    return Prompt(INSTRUCTIONS["perform_actions"], action)


class LivenessSession:
    """Single verification attempt driven by detector frames.

    Args:
        context: Receives ``mark_verified()`` once the sequence completes.
        gesture_order: Gestures to perform, in order. Defaults to
            :data:`livecheck.config.DEFAULT_GESTURE_ORDER`.
        config: Geometry and timing constants.
        scheduler: ``(delay_sec, callback)`` used to report completion.
            Defaults to a daemon ``threading.Timer``.
        throttle: Drop frames closer than ``config.min_detection_interval_ms``
            to the previous accepted frame.
    """

    def __init__(
        self,
        context: Optional[VerificationContext] = None,
        gesture_order: Optional[Sequence[GestureKind]] = None,
        config: Optional[LivenessConfig] = None,
        scheduler: Optional[Scheduler] = None,
        throttle: bool = True,
    ):
        self.context = context if context is not None else VerificationContext()
        self.config = config or LivenessConfig()
        self.evaluator = FrameEvaluator(self.config)
        self._scheduler = scheduler or _start_timer
        self._throttle = throttle
        self._initial = initial_state(gesture_order)
        self._state = self._initial
        self._last_frame_ms: Optional[float] = None
        self._completion_scheduled = False
        self._frames_seen = 0
        self._frames_dropped = 0

    @property
    def state(self) -> SequenceState:
        return self._state

    @property
    def frames_seen(self) -> int:
        return self._frames_seen

    @property
    def frames_dropped(self) -> int:
        return self._frames_dropped

    def prompt(self) -> Prompt:
        return prompt_for(self._state)

    def reset(self) -> None:
        """Restart the gesture sequence from step 0."""
        self._state = self._initial
        self.evaluator.reset()
        self._last_frame_ms = None
        logger.info("Session reset")

    def on_faces_detected(
        self,
        faces: Iterable[FaceInput],
        timestamp_ms: Optional[float] = None,
    ) -> SequenceState:
        """Process one detector callback.

        Args:
            faces: Zero, one or many face records (measurements or
                detector dicts).
            timestamp_ms: Frame time; enables minimum-interval throttling.

        Returns:
            State after this frame.
        """
        if self._state.complete:
            return self._state

        if self._should_drop(timestamp_ms):
            self._frames_dropped += 1
            return self._state

        self._frames_seen += 1
        measurements = [_as_measurement(f) for f in faces]
        verdict = self.evaluator.evaluate(measurements, self._state)
        for transition in self._transitions_for(verdict):
            self._apply(transition)

        if self._state.complete and not self._completion_scheduled:
            self._completion_scheduled = True
            logger.info(
                "Liveness sequence complete after %d frames; reporting in %.1fs",
                self._frames_seen, self.config.completion_delay_sec,
            )
            self._scheduler(self.config.completion_delay_sec, self._report_verified)

        return self._state

    def _should_drop(self, timestamp_ms: Optional[float]) -> bool:
        if timestamp_ms is None or not self._throttle:
            return False
        last = self._last_frame_ms
        # A clock that went backwards restarts the interval
        if last is not None and 0 <= timestamp_ms - last < self.config.min_detection_interval_ms:
            return True
        self._last_frame_ms = timestamp_ms
        return False

    def _transitions_for(self, verdict: Verdict) -> List[Transition]:
        state = self._state
        if verdict is Verdict.NO_FACE:
            return [FaceDetected(False)] if state != self._initial else []
        if verdict is Verdict.FACE_TOO_BIG:
            return [] if state.face_too_big else [FaceTooBig(True)]

        transitions: List[Transition] = []
        if not state.face_detected:
            if state.face_too_big:
                transitions.append(FaceTooBig(False))
            transitions.append(FaceDetected(True))
        if verdict is Verdict.GESTURE_SATISFIED:
            transitions.append(NextDetection())
        return transitions

    def _apply(self, transition: Transition) -> None:
        before = self._state
        self._state = reduce(before, transition)

        if isinstance(transition, FaceDetected):
            if transition.yes:
                logger.info("Face acquired (progress %.1f%%)", self._state.progress_fill)
            else:
                self.evaluator.reset()
                logger.info(
                    "Face lost at step %d/%d; sequence restarted",
                    before.current_index, len(before.gesture_order),
                )
        elif isinstance(transition, NextDetection):
            logger.info(
                "Gesture %s done (%d/%d, progress %.1f%%)",
                before.current_gesture.name if before.current_gesture else "?",
                self._state.current_index, len(self._state.gesture_order),
                self._state.progress_fill,
            )

    def _report_verified(self) -> None:
        self.context.mark_verified()
        logger.info("User marked as verified")


def _as_measurement(face: FaceInput) -> FaceMeasurement:
    if isinstance(face, FaceMeasurement):
        return face
    return FaceMeasurement.from_dict(face)


__all__ = ["LivenessSession", "VerificationContext", "Prompt", "prompt_for"]
