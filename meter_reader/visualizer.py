"""
Visualization for the meter reading pipeline.

Responsibility:
    Draw detection boxes with "<symbol> (<confidence>)" labels and the
    assembled reading onto the letterboxed canvas. This is a pure
    rendering module: it produces an annotated copy of the canvas and
    performs no I/O.

Non-goals:
    - No file writing.
    - No detection or model logic.
"""

from typing import List

import cv2
import numpy as np

from meter_reader.config import VisualizationConfig
from meter_reader.detection import Detection

# Hard-coded rendering constants (cosmetic internals, not user-facing)
_FONT = cv2.FONT_HERSHEY_SIMPLEX
_FONT_SCALE = 0.5
_FONT_THICKNESS = 1
_LABEL_PADDING = 4
_WINDOW_NAME = "Meter Reader"
NO_READING_TEXT = "No meter detected"


def draw_detections(
    canvas: np.ndarray,
    detections: List[Detection],
    reading: str,
    config: VisualizationConfig,
) -> np.ndarray:
    """Draw detection boxes, labels and the reading onto a canvas.

    Args:
        canvas: Letterboxed BGR image (not modified — a copy is returned).
        detections: Detections in canvas space.
        reading: Assembled reading, shown in the top-left corner.
        config: Visualization parameters (color, thickness, labels).

    Returns:
        A new BGR numpy array with detections drawn.
    """
    annotated = canvas.copy()

    for det in detections:
        x1, y1 = int(round(det.box.left)), int(round(det.box.top))
        x2, y2 = int(round(det.box.right)), int(round(det.box.bottom))

        cv2.rectangle(
            annotated,
            (x1, y1),
            (x2, y2),
            color=config.box_color,
            thickness=config.thickness,
        )

        label = det.class_name
        if config.show_confidence:
            label = f"{det.class_name} ({det.confidence:.2f})"

        (text_w, text_h), _ = cv2.getTextSize(
            label, _FONT, _FONT_SCALE, _FONT_THICKNESS
        )

        # Label above the box, or below if too close to top
        label_y = y1 - _LABEL_PADDING
        if label_y - text_h - _LABEL_PADDING < 0:
            label_y = y2 + text_h + _LABEL_PADDING

        cv2.rectangle(
            annotated,
            (x1, label_y - text_h - _LABEL_PADDING),
            (x1 + text_w + _LABEL_PADDING, label_y + _LABEL_PADDING),
            color=config.box_color,
            thickness=cv2.FILLED,
        )

        cv2.putText(
            annotated,
            label,
            (x1 + _LABEL_PADDING // 2, label_y),
            _FONT,
            _FONT_SCALE,
            (0, 0, 0),  # Black text on colored background
            _FONT_THICKNESS,
            cv2.LINE_AA,
        )

    cv2.putText(
        annotated,
        reading or NO_READING_TEXT,
        (10, 30),
        _FONT,
        _FONT_SCALE * 2,
        config.box_color,
        _FONT_THICKNESS * 2,
        cv2.LINE_AA,
    )

    return annotated


def show_frame(
    canvas: np.ndarray,
    detections: List[Detection],
    reading: str,
    config: VisualizationConfig,
) -> int:
    """Show the annotated canvas in a window and wait for a key press.

    Returns:
        The key code (int) pressed during waitKey.
    """
    annotated = draw_detections(canvas, detections, reading, config)
    cv2.imshow(_WINDOW_NAME, annotated)
    return cv2.waitKey(0) & 0xFF
