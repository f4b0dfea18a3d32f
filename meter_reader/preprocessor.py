"""
Preprocessing for the meter reading pipeline.

Responsibility:
    Letterbox an arbitrary-size BGR frame into the model's square input,
    convert the letterboxed canvas into a DNN input blob, and map boxes
    from canvas space back to original-image space on request.

Non-goals:
    - No frame acquisition, cropping or rotation.
    - No inference or detection decoding.

Hard-coded:
    - Pixel values are scaled by 1/255 into [0, 1].
    - Blob channel order is RGB (swapRB=True on OpenCV's BGR frames),
      which is what the meter model was trained on.
"""

from dataclasses import dataclass
from typing import Tuple

import cv2
import numpy as np

from meter_reader.geometry import Rect

# Light gray padding (0xCCCCCC), identical in BGR and RGB
BACKGROUND_COLOR: Tuple[int, int, int] = (204, 204, 204)


@dataclass(frozen=True)
class LetterboxResult:
    """A letterboxed canvas and the transform that produced it.

    Attributes:
        image: Square canvas (target_size x target_size x 3, uint8).
        scale: Uniform scale applied to the source image.
        offset_x: Left padding in canvas pixels.
        offset_y: Top padding in canvas pixels.
        scaled_width: Width of the scaled source inside the canvas.
        scaled_height: Height of the scaled source inside the canvas.
    """

    image: np.ndarray
    scale: float
    offset_x: int
    offset_y: int
    scaled_width: int
    scaled_height: int

    @property
    def size(self) -> int:
        """Side length of the square canvas."""
        return self.image.shape[1]


def letterbox(
    frame: np.ndarray,
    target_size: int,
    background: Tuple[int, int, int] = BACKGROUND_COLOR,
) -> LetterboxResult:
    """Fit a frame into a square canvas, preserving aspect ratio.

    The frame is scaled so its longest edge equals ``target_size`` and
    pasted centered onto a canvas filled with ``background``.

    Args:
        frame: Input image as a numpy array (H, W, 3), uint8.
        target_size: Side length of the square canvas.
        background: Padding color, in the frame's channel order.

    Returns:
        A LetterboxResult holding the canvas and its transform.

    Raises:
        ValueError: If the frame is empty or not 3-channel, or the
                    target size is not positive.
    """
    if frame is None or frame.size == 0:
        raise ValueError(
            "Cannot letterbox an empty frame. "
            "Ensure the input source is providing valid frames."
        )

    if frame.ndim != 3 or frame.shape[2] != 3:
        raise ValueError(
            f"Expected a 3-channel frame (H, W, 3), got shape {frame.shape}."
        )

    if target_size <= 0:
        raise ValueError(f"target_size must be positive, got {target_size}.")

    height, width = frame.shape[:2]
    scale = target_size / max(width, height)

    # Rounded so the longest edge lands exactly on target_size
    scaled_width = min(target_size, max(1, round(width * scale)))
    scaled_height = min(target_size, max(1, round(height * scale)))

    scaled = cv2.resize(
        frame, (scaled_width, scaled_height), interpolation=cv2.INTER_LINEAR
    )

    canvas = np.empty((target_size, target_size, 3), dtype=np.uint8)
    canvas[:] = background

    offset_x = (target_size - scaled_width) // 2
    offset_y = (target_size - scaled_height) // 2
    canvas[
        offset_y:offset_y + scaled_height,
        offset_x:offset_x + scaled_width,
    ] = scaled

    return LetterboxResult(
        image=canvas,
        scale=scale,
        offset_x=offset_x,
        offset_y=offset_y,
        scaled_width=scaled_width,
        scaled_height=scaled_height,
    )


def to_blob(canvas: np.ndarray, swap_rb: bool = True) -> np.ndarray:
    """Convert a letterboxed canvas into a DNN input blob.

    Args:
        canvas: Square BGR canvas from letterbox().
        swap_rb: Reorder BGR to RGB. Leave True for OpenCV frames.

    Returns:
        A float32 array of shape (1, 3, S, S) with values in [0, 1].
    """
    size = canvas.shape[1], canvas.shape[0]
    return cv2.dnn.blobFromImage(
        image=canvas,
        scalefactor=1.0 / 255.0,
        size=size,
        mean=(0.0, 0.0, 0.0),
        swapRB=swap_rb,
        crop=False,
    )


def to_image_space(box: Rect, transform: LetterboxResult) -> Rect:
    """Map a box from letterboxed canvas space to original-image space.

    The pipeline reports boxes in canvas space; this undoes the
    letterbox (subtract the padding, divide by the scale) for callers
    that draw on the original frame.
    """
    return Rect(
        left=(box.left - transform.offset_x) / transform.scale,
        top=(box.top - transform.offset_y) / transform.scale,
        right=(box.right - transform.offset_x) / transform.scale,
        bottom=(box.bottom - transform.offset_y) / transform.scale,
    )
