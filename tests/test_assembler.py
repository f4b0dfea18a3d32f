"""
Tests for the reading assembler.
"""

import random

from meter_reader.assembler import assemble_reading
from meter_reader.detection import CLASS_NAMES, Detection
from meter_reader.geometry import Rect


def _glyph(symbol, left, confidence=0.9):
    class_id = CLASS_NAMES.index(symbol)
    return Detection(
        class_id=class_id,
        class_name=symbol,
        confidence=confidence,
        box=Rect(left, 0.0, left + 8.0, 20.0),
    )


def test_assemble_empty():
    assert assemble_reading([]) == ""


def test_assemble_left_to_right():
    dets = [_glyph("1", 0), _glyph("2", 10), _glyph(".", 20), _glyph("3", 30)]
    assert assemble_reading(dets) == "12.3"


def test_assemble_is_input_order_independent():
    dets = [_glyph("1", 0), _glyph("2", 10), _glyph(".", 20), _glyph("3", 30)]
    shuffled = list(dets)
    random.Random(3).shuffle(shuffled)

    assert assemble_reading(shuffled) == "12.3"
    assert assemble_reading(list(reversed(dets))) == "12.3"


def test_assemble_ignores_confidence_order():
    dets = [_glyph("9", 30, confidence=0.99), _glyph("0", 0, confidence=0.51)]
    assert assemble_reading(dets) == "09"


def test_assemble_excludes_unit_label():
    dets = [_glyph("1", 0), _glyph("2", 10), _glyph("kwh", 20)]
    assert assemble_reading(dets) == "12"


def test_assemble_only_unit_label_is_empty():
    assert assemble_reading([_glyph("kwh", 0)]) == ""


def test_assemble_passes_through_unvalidated_readings():
    dets = [_glyph(".", 0), _glyph("4", 10), _glyph(".", 20), _glyph(".", 30)]
    assert assemble_reading(dets) == ".4.."
