"""Liveness flow constants and thresholds."""

from dataclasses import dataclass
from typing import Dict, Tuple

from livecheck.types import GestureKind, GestureThreshold


@dataclass(frozen=True)
class LivenessConfig:
    """Geometry and timing constants for one verification flow.

    Preview geometry is in the same coordinate space as the detector's
    face bounds. The preview square is centered horizontally in a window
    of ``window_width``.
    """

    # Preview square
    preview_size: float = 325.0
    preview_top: float = 50.0
    window_width: float = 375.0

    # Face positioning
    edge_offset: float = 50.0         # total inset applied to face bounds (25 per side)
    too_big_margin: float = 90.0      # face too big when w and h >= preview_size - margin

    # Timing
    min_detection_interval_ms: float = 125.0
    completion_delay_sec: float = 1.0

    # NOD window
    roll_history_size: int = 10

    @property
    def face_max_size(self) -> float:
        return self.preview_size - self.too_big_margin


GESTURES: Dict[GestureKind, GestureThreshold] = {
    GestureKind.BLINK: GestureThreshold("Blink both eyes", 0.3),
    GestureKind.TURN_HEAD_LEFT: GestureThreshold("Turn head left", -15.0),
    GestureKind.TURN_HEAD_RIGHT: GestureThreshold("Turn head right", 15.0),
    GestureKind.NOD: GestureThreshold("Nod", 1.5),
    GestureKind.SMILE: GestureThreshold("Smile", 0.7),
}

DEFAULT_GESTURE_ORDER: Tuple[GestureKind, ...] = (
    GestureKind.BLINK,
    GestureKind.TURN_HEAD_LEFT,
    GestureKind.TURN_HEAD_RIGHT,
    GestureKind.NOD,
    GestureKind.SMILE,
)

INSTRUCTIONS: Dict[str, str] = {
    "initial_prompt": "Position your face in the circle",
    "perform_actions": "Keep the device still and perform the following actions:",
    "too_close": "You're too close. Hold the device further.",
}


__all__ = ["LivenessConfig", "GESTURES", "DEFAULT_GESTURE_ORDER", "INSTRUCTIONS"]
