"""
Serialization of reading results.

Responsibility:
    Convert a ReadingResult into a JSON-safe dict and a single JSON line
    for downstream consumption (e.g. piping the CLI into another tool).

Non-goals:
    - No file writing. Results go to whichever stream the caller picks.
"""

import json

from meter_reader.preprocessor import to_image_space
from meter_reader.reader import ReadingResult


def result_to_dict(source: str, result: ReadingResult) -> dict:
    """Return a plain dict describing one reading.

    Output schema:
        {
            "source": "images/meter_01.jpg",
            "reading": "1234.5",
            "detected": true,
            "valid": true,
            "letterbox": {"scale": ..., "offset_x": ..., "offset_y": ...},
            "detections": [
                {"class_id": ..., "class_name": ..., "confidence": ...,
                 "box": {...}, "image_box": {...}}
            ]
        }

    "box" is in letterboxed canvas space, "image_box" is the same box
    mapped onto the source image.
    """
    return {
        "source": source,
        "reading": result.reading,
        "detected": not result.is_empty,
        "valid": result.is_valid,
        "letterbox": {
            "scale": round(result.letterbox.scale, 6),
            "offset_x": result.letterbox.offset_x,
            "offset_y": result.letterbox.offset_y,
        },
        "detections": [
            {**d.to_dict(), "image_box": to_image_space(d.box, result.letterbox).to_dict()}
            for d in result.detections
        ],
    }


def result_to_json(source: str, result: ReadingResult) -> str:
    """Return one reading as a compact single-line JSON string."""
    return json.dumps(result_to_dict(source, result), separators=(",", ":"))
