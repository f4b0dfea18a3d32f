"""
Axis-aligned rectangle geometry for the meter reading pipeline.

Responsibility:
    Represent bounding boxes and measure their overlap with
    Intersection-over-Union (IoU).

Non-goals:
    - No coordinate-space conversion (see preprocessor.to_image_space).
    - No integer rounding or clamping; boxes stay in float pixels.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Rect:
    """An axis-aligned rectangle in float pixel coordinates.

    Attributes:
        left: Left edge x coordinate.
        top: Top edge y coordinate.
        right: Right edge x coordinate (>= left).
        bottom: Bottom edge y coordinate (>= top).

    The coordinate space (letterboxed canvas or original image) is not
    stored on the rect; callers track it. Zero-area rects are legal.

    Raises:
        ValueError: If the edges are inverted.
    """

    left: float
    top: float
    right: float
    bottom: float

    def __post_init__(self) -> None:
        if self.right < self.left or self.bottom < self.top:
            raise ValueError(
                f"Inverted rect: left={self.left}, top={self.top}, "
                f"right={self.right}, bottom={self.bottom}."
            )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_dict(self) -> dict:
        """Return a plain dict suitable for JSON serialization."""
        return {
            "left": round(self.left, 2),
            "top": round(self.top, 2),
            "right": round(self.right, 2),
            "bottom": round(self.bottom, 2),
        }


def iou(a: Rect, b: Rect) -> float:
    """Compute the Intersection-over-Union of two rects.

    Args:
        a: First rect.
        b: Second rect, in the same coordinate space as ``a``.

    Returns:
        Overlap ratio in [0.0, 1.0]. Disjoint or edge-touching rects
        give 0.0, as does a pair whose union has zero area.
    """
    ix_left = max(a.left, b.left)
    ix_top = max(a.top, b.top)
    ix_right = min(a.right, b.right)
    ix_bottom = min(a.bottom, b.bottom)

    if ix_left >= ix_right or ix_top >= ix_bottom:
        return 0.0

    intersection = (ix_right - ix_left) * (ix_bottom - ix_top)
    union = a.area + b.area - intersection
    if union <= 0.0:
        return 0.0

    return intersection / union
