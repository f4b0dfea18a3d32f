"""
Detection data transfer object and the detector's class vocabulary.

This module defines the Detection dataclass, the single element type
flowing between the decoder, the suppressor and the reading assembler.
It is intentionally minimal: a frozen, serializable container with no
behavior beyond data access.

Hard-coded:
    - The 12-class vocabulary the meter model was trained with. Class
      ids index CLASS_NAMES directly.

Non-goals:
    - No rendering logic.
    - No coordinate transformation methods (that belongs in preprocessor).
"""

from dataclasses import dataclass

from meter_reader.geometry import Rect

CLASS_NAMES = (".", "0", "1", "2", "3", "4", "5", "6", "7", "8", "9", "kwh")

# "." and the ten digits; the trailing unit label is never part of a reading
READING_CLASS_IDS = range(0, 11)

NUM_CLASSES = len(CLASS_NAMES)


@dataclass(frozen=True, slots=True)
class Detection:
    """A single detected glyph with class, confidence and bounding box.

    Attributes:
        class_id: Index into the class vocabulary.
        class_name: Symbol for ``class_id`` ("." , a digit, or "kwh").
        confidence: Detection confidence score in [0.0, 1.0].
        box: Bounding box in the coordinate space of the image the
             decoder was given (the letterboxed canvas in the pipeline).
    """

    class_id: int
    class_name: str
    confidence: float
    box: Rect

    def to_dict(self) -> dict:
        """Return a plain dict suitable for JSON serialization."""
        return {
            "class_id": self.class_id,
            "class_name": self.class_name,
            "confidence": round(self.confidence, 4),
            "box": self.box.to_dict(),
        }
