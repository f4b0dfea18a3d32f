"""
Tests for the decoder module.
"""

import numpy as np
import pytest

from meter_reader.decoder import decode
from meter_reader.detection import CLASS_NAMES


def test_decode_valid_detection(raw_builder):
    """Test parsing a single confident anchor into canvas coordinates."""
    # Class id 6 is the digit "5"
    raw = raw_builder([(0, 0.5, 0.5, 0.2, 0.1, {6: 0.9})])

    detections = decode(raw, 640, 640, score_threshold=0.5)

    assert len(detections) == 1
    det = detections[0]
    assert det.class_id == 6
    assert det.class_name == "5"
    assert det.confidence == pytest.approx(0.9, abs=1e-6)
    assert det.box.left == pytest.approx(256.0, abs=1e-3)
    assert det.box.top == pytest.approx(288.0, abs=1e-3)
    assert det.box.right == pytest.approx(384.0, abs=1e-3)
    assert det.box.bottom == pytest.approx(352.0, abs=1e-3)


def test_decode_scales_by_target_dimensions(raw_builder):
    raw = raw_builder([(0, 0.5, 0.5, 0.5, 0.5, {1: 0.8})])

    det = decode(raw, 200, 100, score_threshold=0.5)[0]

    assert det.box.left == pytest.approx(50.0)
    assert det.box.right == pytest.approx(150.0)
    assert det.box.top == pytest.approx(25.0)
    assert det.box.bottom == pytest.approx(75.0)


def test_decode_all_background_is_empty(raw_builder):
    raw = raw_builder([])
    assert decode(raw, 640, 640, score_threshold=0.5) == []


def test_decode_threshold_is_strict(raw_builder):
    """A score exactly at the threshold is rejected."""
    raw = raw_builder([
        (0, 0.2, 0.5, 0.05, 0.1, {2: 0.5}),
        (1, 0.4, 0.5, 0.05, 0.1, {3: 0.51}),
        (2, 0.6, 0.5, 0.05, 0.1, {4: 0.3}),
    ])

    detections = decode(raw, 640, 640, score_threshold=0.5)

    assert [d.class_id for d in detections] == [3]
    assert all(d.confidence > 0.5 for d in detections)


def test_decode_argmax_tie_goes_to_lowest_class(raw_builder):
    raw = raw_builder([(0, 0.5, 0.5, 0.1, 0.1, {3: 0.7, 8: 0.7})])

    det = decode(raw, 640, 640, score_threshold=0.5)[0]

    assert det.class_id == 3
    assert det.class_name == CLASS_NAMES[3]


def test_decode_picks_best_class(raw_builder):
    raw = raw_builder([(0, 0.5, 0.5, 0.1, 0.1, {0: 0.6, 11: 0.95, 5: 0.2})])

    det = decode(raw, 640, 640, score_threshold=0.5)[0]

    assert det.class_name == "kwh"
    assert det.confidence == pytest.approx(0.95, abs=1e-6)


def test_decode_preserves_anchor_order(raw_builder):
    raw = raw_builder([
        (8000, 0.1, 0.5, 0.05, 0.1, {1: 0.9}),
        (12, 0.3, 0.5, 0.05, 0.1, {2: 0.6}),
        (4200, 0.5, 0.5, 0.05, 0.1, {3: 0.8}),
    ])

    detections = decode(raw, 640, 640, score_threshold=0.5)

    assert [d.class_id for d in detections] == [2, 3, 1]


def test_decode_is_deterministic(raw_builder):
    rng = np.random.default_rng(7)
    raw = raw_builder([])
    raw[0:2] = rng.uniform(0.1, 0.9, size=(2, raw.shape[1]))
    raw[2:4] = rng.uniform(0.01, 0.05, size=(2, raw.shape[1]))
    raw[4:] = rng.uniform(0.0, 0.6, size=(12, raw.shape[1]))

    first = decode(raw, 640, 640, score_threshold=0.55)
    second = decode(raw, 640, 640, score_threshold=0.55)

    assert len(first) > 0
    assert first == second


def test_decode_accepts_batch_axis(raw_builder):
    raw = raw_builder([(0, 0.5, 0.5, 0.1, 0.1, {1: 0.9})])[np.newaxis]
    assert raw.shape == (1, 16, 8400)

    detections = decode(raw, 640, 640, score_threshold=0.5)
    assert len(detections) == 1


def test_decode_rejects_wrong_channel_count():
    raw = np.zeros((84, 8400), dtype=np.float32)
    with pytest.raises(ValueError, match="16 channels"):
        decode(raw, 640, 640, score_threshold=0.5)


def test_decode_rejects_wrong_rank():
    with pytest.raises(ValueError, match="shape"):
        decode(np.zeros((2, 16, 8400), dtype=np.float32), 640, 640, 0.5)
    with pytest.raises(ValueError, match="shape"):
        decode(np.zeros(16, dtype=np.float32), 640, 640, 0.5)


def test_decode_rejects_non_positive_dimensions(raw_builder):
    raw = raw_builder([])
    with pytest.raises(ValueError, match="positive"):
        decode(raw, 0, 640, score_threshold=0.5)


def test_decode_rejects_nan_scores(raw_builder):
    """NaN must not win the argmax and silently hide a real digit."""
    raw = raw_builder([(0, 0.5, 0.5, 0.1, 0.1, {1: float("nan"), 6: 0.9})])
    with pytest.raises(ValueError, match="NaN"):
        decode(raw, 640, 640, score_threshold=0.5)
