"""Recorded detector traces (JSONL, one frame per line).

Line format::

    {"t_ms": 125, "faces": [{"bounds": {...}, "rollAngle": 0.4, ...}]}

``t_ms`` is optional; ``faces`` holds the detector's dict form accepted by
:meth:`livecheck.types.FaceMeasurement.from_dict`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from livecheck.types import FaceMeasurement


@dataclass
class TraceFrame:
    """One recorded detector callback."""

    faces: List[FaceMeasurement] = field(default_factory=list)
    t_ms: Optional[float] = None

    def to_dict(self) -> dict:
        data: dict = {"faces": [f.to_dict() for f in self.faces]}
        if self.t_ms is not None:
            data["t_ms"] = self.t_ms
        return data


def parse_frame(line: str, lineno: int = 0) -> TraceFrame:
    """Parse a single JSONL line.

    Raises:
        ValueError: On invalid JSON or a malformed face record.
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise ValueError(f"line {lineno}: invalid JSON ({e.msg})") from e

    if not isinstance(data, dict):
        raise ValueError(f"line {lineno}: expected an object, got {type(data).__name__}")

    raw_faces = data.get("faces", [])
    if not isinstance(raw_faces, list):
        raise ValueError(f"line {lineno}: 'faces' must be a list")

    try:
        faces = [FaceMeasurement.from_dict(f) for f in raw_faces]
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"line {lineno}: malformed face record ({e!r})") from e

    t_ms = data.get("t_ms")
    if t_ms is not None:
        try:
            t_ms = float(t_ms)
        except (TypeError, ValueError) as e:
            raise ValueError(f"line {lineno}: invalid 't_ms' {t_ms!r}") from e
    return TraceFrame(faces=faces, t_ms=t_ms)


def load_trace(path: str | Path) -> List[TraceFrame]:
    """Load all frames from a JSONL trace file.

    Blank lines are skipped.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a line cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Trace file not found: {path}")

    frames: List[TraceFrame] = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            frames.append(parse_frame(line, lineno))
    return frames


def save_trace(frames: Iterable[TraceFrame], path: str | Path) -> None:
    """Write frames as JSONL, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for frame in frames:
            f.write(json.dumps(frame.to_dict()) + "\n")


__all__ = ["TraceFrame", "parse_frame", "load_trace", "save_trace"]
