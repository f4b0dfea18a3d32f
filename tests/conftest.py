"""
Shared fixtures: synthetic detector tensors and a model-free engine.
"""

import numpy as np
import pytest

from meter_reader.detection import NUM_CLASSES

NUM_ANCHORS = 8400


def build_raw(anchors, num_anchors: int = NUM_ANCHORS) -> np.ndarray:
    """Build a (16, num_anchors) tensor with the given anchors filled in.

    Each anchor is (index, cx, cy, w, h, {class_id: score}) with box
    values normalized to the model input. All other anchors are
    all-background (zero scores).
    """
    raw = np.zeros((4 + NUM_CLASSES, num_anchors), dtype=np.float32)
    for index, cx, cy, w, h, scores in anchors:
        raw[0:4, index] = (cx, cy, w, h)
        for class_id, score in scores.items():
            raw[4 + class_id, index] = score
    return raw


class FakeEngine:
    """InferenceEngine returning a fixed tensor and recording its inputs."""

    def __init__(self, output: np.ndarray) -> None:
        self.output = output
        self.blobs = []

    def infer(self, blob: np.ndarray) -> np.ndarray:
        self.blobs.append(blob)
        return self.output


@pytest.fixture
def raw_builder():
    return build_raw


@pytest.fixture
def fake_engine_factory():
    return FakeEngine
