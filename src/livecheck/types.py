"""Liveness domain types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in camera preview coordinates.

    Used for both the fixed preview circle's bounding square and the
    per-frame face bounding box.
    """

    min_x: float
    min_y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.min_x + self.width

    @property
    def max_y(self) -> float:
        return self.min_y + self.height

    def shrink(self, offset: float) -> Rect:
        """Return a copy inset by ``offset / 2`` on every side.

        Args:
            offset: Total amount removed from width and from height.
        """
        return Rect(
            min_x=self.min_x + offset / 2,
            min_y=self.min_y + offset / 2,
            width=self.width - offset,
            height=self.height - offset,
        )


@dataclass(frozen=True)
class FaceMeasurement:
    """Per-frame face geometry delivered by the external detector.

    Angles are in degrees:
    - yaw_angle: left(-) / right(+) head turn
    - roll_angle: counter-clockwise(-) / clockwise(+) head roll

    Probabilities are in [0.0, 1.0].
    """

    bounds: Rect
    roll_angle: float = 0.0
    yaw_angle: float = 0.0
    left_eye_open_probability: float = 1.0
    right_eye_open_probability: float = 1.0
    smiling_probability: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FaceMeasurement:
        """Build a measurement from the detector's dict form.

        Expected layout::

            {
                "bounds": {"origin": {"x": .., "y": ..},
                           "size": {"width": .., "height": ..}},
                "rollAngle": .., "yawAngle": ..,
                "leftEyeOpenProbability": .., "rightEyeOpenProbability": ..,
                "smilingProbability": ..,
            }

        Raises:
            KeyError: If ``bounds`` or one of its coordinates is missing.
        """
        bounds = data["bounds"]
        origin = bounds["origin"]
        size = bounds["size"]
        return cls(
            bounds=Rect(
                min_x=float(origin["x"]),
                min_y=float(origin["y"]),
                width=float(size["width"]),
                height=float(size["height"]),
            ),
            roll_angle=float(data.get("rollAngle", 0.0)),
            yaw_angle=float(data.get("yawAngle", 0.0)),
            left_eye_open_probability=float(data.get("leftEyeOpenProbability", 1.0)),
            right_eye_open_probability=float(data.get("rightEyeOpenProbability", 1.0)),
            smiling_probability=float(data.get("smilingProbability", 0.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Inverse of :meth:`from_dict`."""
        return {
            "bounds": {
                "origin": {"x": self.bounds.min_x, "y": self.bounds.min_y},
                "size": {"width": self.bounds.width, "height": self.bounds.height},
            },
            "rollAngle": self.roll_angle,
            "yawAngle": self.yaw_angle,
            "leftEyeOpenProbability": self.left_eye_open_probability,
            "rightEyeOpenProbability": self.right_eye_open_probability,
            "smilingProbability": self.smiling_probability,
        }


class GestureKind(Enum):
    """Gestures a user can be asked to perform.

    Example:
        >>> GestureKind.from_name("turn_head_left")
        <GestureKind.TURN_HEAD_LEFT: 'TURN_HEAD_LEFT'>
    """

    BLINK = "BLINK"
    TURN_HEAD_LEFT = "TURN_HEAD_LEFT"
    TURN_HEAD_RIGHT = "TURN_HEAD_RIGHT"
    NOD = "NOD"
    SMILE = "SMILE"

    @classmethod
    def from_name(cls, name: str) -> GestureKind:
        """Case-insensitive lookup; raises ValueError on unknown names."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(g.name for g in cls)
            raise ValueError(f"Unknown gesture {name!r} (expected one of: {valid})") from None


@dataclass(frozen=True)
class GestureThreshold:
    """Instruction text and numeric threshold for one gesture.

    The meaning of ``threshold`` depends on the gesture:
    - BLINK: max eye-open probability (both eyes)
    - TURN_HEAD_LEFT: max yaw angle
    - TURN_HEAD_RIGHT: min yaw angle
    - NOD: min roll-angle deviation from the recent mean
    - SMILE: min smiling probability
    """

    instruction: str
    threshold: float


class Verdict(Enum):
    """Per-frame evaluation outcome."""

    NO_FACE = "no_face"
    FACE_TOO_BIG = "face_too_big"
    FACE_OK = "face_ok"
    GESTURE_SATISFIED = "gesture_satisfied"


__all__ = ["Rect", "FaceMeasurement", "GestureKind", "GestureThreshold", "Verdict"]
