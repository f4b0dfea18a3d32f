"""
Reading assembly: turn surviving detections into a meter reading string.

The result is passed through unvalidated. Multiple or leading decimal
points are the caller's concern (see formatting), and an empty string
means no meter was detected.
"""

from typing import Iterable

from meter_reader.detection import READING_CLASS_IDS, Detection


def assemble_reading(detections: Iterable[Detection]) -> str:
    """Concatenate digit and decimal-point symbols from left to right.

    Args:
        detections: Detections in any order. Classes outside the
                    reading vocabulary (the unit label) are ignored.

    Returns:
        The reading string, or "" if no digit or decimal point was found.
    """
    glyphs = [d for d in detections if d.class_id in READING_CLASS_IDS]
    glyphs.sort(key=lambda d: d.box.left)
    return "".join(d.class_name for d in glyphs)
