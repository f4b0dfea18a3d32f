"""
Tests for the suppressor module.
"""

from meter_reader.detection import CLASS_NAMES, Detection
from meter_reader.geometry import Rect, iou
from meter_reader.suppressor import suppress


def _det(class_id, confidence, left, top=0.0, width=10.0, height=20.0):
    return Detection(
        class_id=class_id,
        class_name=CLASS_NAMES[class_id],
        confidence=confidence,
        box=Rect(left, top, left + width, top + height),
    )


def test_suppress_empty():
    assert suppress([], 0.45) == []


def test_suppress_single_detection():
    det = _det(3, 0.8, 0.0)
    assert suppress([det], 0.45) == [det]


def test_suppress_keeps_most_confident_of_cluster():
    weak = _det(6, 0.6, 1.0)
    strong = _det(6, 0.9, 0.0)

    kept = suppress([weak, strong], 0.45)

    assert kept == [strong]


def test_suppress_never_crosses_classes():
    """A digit and a decimal point at the same place both survive."""
    digit = _det(4, 0.9, 0.0)
    point = _det(0, 0.7, 0.0)

    kept = suppress([point, digit], 0.45)

    assert kept == [digit, point]


def test_suppress_disjoint_set_is_noop():
    dets = [_det(1, 0.7, 0.0), _det(1, 0.9, 50.0), _det(1, 0.8, 100.0)]

    kept = suppress(dets, 0.45)

    assert set(kept) == set(dets)
    assert [d.confidence for d in kept] == [0.9, 0.8, 0.7]


def test_suppress_threshold_is_strict():
    # IoU exactly 0.5: intersection 100, union 200
    a = Detection(2, "1", 0.9, Rect(0.0, 0.0, 10.0, 10.0))
    b = Detection(2, "1", 0.8, Rect(0.0, 0.0, 10.0, 20.0))
    assert iou(a.box, b.box) == 0.5

    assert suppress([a, b], 0.5) == [a, b]
    assert suppress([a, b], 0.49) == [a]


def test_suppress_equal_confidence_keeps_decode_order():
    first = _det(5, 0.8, 0.0)
    second = _det(5, 0.8, 1.0)

    assert suppress([first, second], 0.45) == [first]
    assert suppress([second, first], 0.45) == [second]


def test_suppress_suppressed_detection_cannot_suppress():
    """A removed detection does not knock out a third one it overlaps."""
    a = _det(7, 0.9, 0.0)
    b = _det(7, 0.8, 2.0)  # overlaps a and c
    c = _det(7, 0.7, 4.0)  # overlaps b, barely a
    assert iou(a.box, b.box) > 0.45
    assert iou(b.box, c.box) > 0.45
    assert iou(a.box, c.box) <= 0.45

    assert suppress([a, b, c], 0.45) == [a, c]


def test_suppress_output_properties():
    dets = [
        _det(1, 0.95, 0.0), _det(1, 0.90, 2.0), _det(1, 0.55, 40.0),
        _det(2, 0.85, 41.0), _det(2, 0.60, 80.0), _det(11, 0.99, 0.0, width=200.0),
    ]

    kept = suppress(dets, 0.45)

    assert all(d in dets for d in kept)
    confidences = [d.confidence for d in kept]
    assert confidences == sorted(confidences, reverse=True)
    for i, d1 in enumerate(kept):
        for d2 in kept[i + 1:]:
            if d1.class_id == d2.class_id:
                assert iou(d1.box, d2.box) <= 0.45
