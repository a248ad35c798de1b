"""Preview geometry: containment of the face inside the circular mask."""

from livecheck.config import LivenessConfig
from livecheck.types import Rect


def contains(outside: Rect, inside: Rect) -> bool:
    """Return True if ``inside`` lies entirely within ``outside``.

    Edges may touch. Rects with negative width/height are not normalized;
    the four edge comparisons apply as-is and never raise.
    """
    return (
        inside.min_x >= outside.min_x
        and inside.min_y >= outside.min_y
        and inside.max_x <= outside.max_x
        and inside.max_y <= outside.max_y
    )


def preview_rect(config: LivenessConfig) -> Rect:
    """Bounding square of the circular preview mask."""
    return Rect(
        min_x=(config.window_width - config.preview_size) / 2,
        min_y=config.preview_top,
        width=config.preview_size,
        height=config.preview_size,
    )


def face_in_preview(face: Rect, config: LivenessConfig) -> bool:
    """Check the face is almost fully inside the preview.

    The face box is shrunk by ``config.edge_offset`` first, so a face
    overhanging the mask by less than half the offset on a side still passes.
    """
    return contains(preview_rect(config), face.shrink(config.edge_offset))


def is_face_too_big(face: Rect, config: LivenessConfig) -> bool:
    max_size = config.face_max_size
    return face.width >= max_size and face.height >= max_size


__all__ = ["contains", "preview_rect", "face_in_preview", "is_face_too_big"]
