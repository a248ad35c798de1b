"""livecheck - Gesture-sequence liveness check for face verification.

Consumes per-frame face measurements from an external detector, checks the
face is positioned inside the circular preview, and walks the user through a
fixed gesture sequence (blink, turn head left/right, nod, smile).

Quick Start:
    >>> from livecheck import LivenessSession, VerificationContext
    >>> context = VerificationContext()
    >>> session = LivenessSession(context=context)
    >>> state = session.on_faces_detected(faces, timestamp_ms=t)
    >>> print(f"{state.progress_fill:.0f}% - {session.prompt().action}")

Pure building blocks:
    >>> from livecheck import FrameEvaluator, initial_state, reduce, NextDetection
    >>> state = reduce(initial_state(), NextDetection())
"""

from livecheck.types import (
    Rect,
    FaceMeasurement,
    GestureKind,
    GestureThreshold,
    Verdict,
)
from livecheck.config import (
    LivenessConfig,
    GESTURES,
    DEFAULT_GESTURE_ORDER,
    INSTRUCTIONS,
)
from livecheck.geometry import contains, preview_rect
from livecheck.state import (
    SequenceState,
    FaceDetected,
    FaceTooBig,
    NextDetection,
    TransitionError,
    initial_state,
    reduce,
)
from livecheck.evaluator import FrameEvaluator, RollAngleHistory
from livecheck.session import LivenessSession, VerificationContext, Prompt

__all__ = [
    # Types
    "Rect",
    "FaceMeasurement",
    "GestureKind",
    "GestureThreshold",
    "Verdict",
    # Configuration
    "LivenessConfig",
    "GESTURES",
    "DEFAULT_GESTURE_ORDER",
    "INSTRUCTIONS",
    # Geometry
    "contains",
    "preview_rect",
    # State machine
    "SequenceState",
    "FaceDetected",
    "FaceTooBig",
    "NextDetection",
    "TransitionError",
    "initial_state",
    "reduce",
    # Evaluation
    "FrameEvaluator",
    "RollAngleHistory",
    # Session
    "LivenessSession",
    "VerificationContext",
    "Prompt",
]
