"""
Meter Reader — utility meter reading from photographs using OpenCV DNN.

Public API:
    - MeterReader: The single entry point for reading a meter.
    - ReadingResult: Reading string plus the detections behind it.
    - Detection: Data transfer object representing a detected glyph.
    - Rect: Bounding box type used by Detection.

All other modules in this package are internal implementation details
and should not be imported directly by consumers.

Usage:
    from meter_reader import MeterReader

    reader = MeterReader()
    result = reader.read(frame)
    print(result.reading or "No meter detected")
"""

from meter_reader.detection import Detection
from meter_reader.geometry import Rect
from meter_reader.reader import MeterReader, ReadingResult

__all__ = ["MeterReader", "ReadingResult", "Detection", "Rect"]
