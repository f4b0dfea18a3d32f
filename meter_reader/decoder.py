"""
Decoding of the raw detector output tensor.

Responsibility:
    Turn the YOLOv8-style output tensor into a list of candidate
    Detection objects: per-anchor argmax over class scores, strict
    confidence thresholding, and center/size to corner conversion.

Non-goals:
    - No overlap suppression (see suppressor).
    - No clamping to the image bounds; boxes may extend past the edges.
    - No model loading or inference.

Hard-coded:
    - Tensor layout: (4 + num_classes, num_anchors). Rows 0-3 are
      center-x, center-y, width, height normalized to the model input;
      the remaining rows are independent per-class scores.
"""

import logging
from typing import List, Sequence

import numpy as np

from meter_reader.detection import CLASS_NAMES, Detection
from meter_reader.geometry import Rect

logger = logging.getLogger(__name__)

_BOX_CHANNELS = 4


def decode(
    raw: np.ndarray,
    image_width: int,
    image_height: int,
    score_threshold: float,
    class_names: Sequence[str] = CLASS_NAMES,
) -> List[Detection]:
    """Parse the raw detector output into candidate detections.

    Args:
        raw: Output tensor of shape (4 + num_classes, num_anchors), or
             (1, 4 + num_classes, num_anchors) straight from the network.
        image_width: Width of the image the boxes are mapped onto.
        image_height: Height of the image the boxes are mapped onto.
        score_threshold: Anchors whose best class score is not strictly
                         greater than this are discarded.
        class_names: Class vocabulary indexed by class id.

    Returns:
        Detections in ascending anchor order. Empty list if no anchor
        clears the threshold.

    Raises:
        ValueError: If the tensor layout does not match the vocabulary,
                    the tensor contains NaN, or the image dimensions
                    are not positive.
    """
    tensor = _as_channel_major(raw, len(class_names))

    if image_width <= 0 or image_height <= 0:
        raise ValueError(
            f"Image dimensions must be positive, "
            f"got {image_width}x{image_height}."
        )

    if np.isnan(tensor).any():
        raise ValueError(
            f"Detector output contains NaN values "
            f"({int(np.isnan(tensor).sum())} of {tensor.size})."
        )

    scores = tensor[_BOX_CHANNELS:]
    num_anchors = tensor.shape[1]

    # argmax returns the first maximum, so ties go to the lowest class id
    class_ids = np.argmax(scores, axis=0)
    max_scores = scores[class_ids, np.arange(num_anchors)]

    detections: List[Detection] = []

    for i in np.flatnonzero(max_scores > score_threshold):
        x, y, w, h = (float(v) for v in tensor[:_BOX_CHANNELS, i])
        class_id = int(class_ids[i])

        box = Rect(
            left=(x - w / 2) * image_width,
            top=(y - h / 2) * image_height,
            right=(x + w / 2) * image_width,
            bottom=(y + h / 2) * image_height,
        )

        detections.append(Detection(
            class_id=class_id,
            class_name=class_names[class_id],
            confidence=float(max_scores[i]),
            box=box,
        ))

    logger.debug(
        "Decoded %d candidates from %d anchors (threshold=%.2f)",
        len(detections), num_anchors, score_threshold,
    )
    return detections


def _as_channel_major(raw: np.ndarray, num_classes: int) -> np.ndarray:
    """Validate the tensor layout and drop a leading batch axis of 1."""
    if not isinstance(raw, np.ndarray):
        raise ValueError(
            f"Expected the detector output as a numpy ndarray, "
            f"got {type(raw).__name__}."
        )

    tensor = raw
    if tensor.ndim == 3 and tensor.shape[0] == 1:
        tensor = tensor[0]

    if tensor.ndim != 2:
        raise ValueError(
            f"Expected a (channels, anchors) tensor, got shape {raw.shape}."
        )

    expected_channels = _BOX_CHANNELS + num_classes
    if tensor.shape[0] != expected_channels:
        raise ValueError(
            f"Expected {expected_channels} channels "
            f"(4 box + {num_classes} classes), got {tensor.shape[0]} "
            f"in tensor of shape {raw.shape}."
        )

    return tensor
