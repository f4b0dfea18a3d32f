"""Inference engine interface and its OpenCV DNN implementation."""

import logging
from typing import Protocol

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class InferenceEngine(Protocol):
    """Anything that maps an input blob to the raw detector tensor."""

    def infer(self, blob: np.ndarray) -> np.ndarray:
        """Run one forward pass.

        Args:
            blob: Input blob of shape (1, 3, S, S), float32 in [0, 1], RGB.

        Returns:
            Raw output tensor, (1, 4 + num_classes, num_anchors).
        """
        ...


class OpenCVInferenceEngine:
    """InferenceEngine backed by a loaded cv2.dnn.Net."""

    def __init__(self, net: cv2.dnn.Net) -> None:
        self._net = net

    def infer(self, blob: np.ndarray) -> np.ndarray:
        """Run the network on a blob.

        Raises:
            RuntimeError: If OpenCV fails during the forward pass.
        """
        try:
            self._net.setInput(blob)
            output = self._net.forward()
        except cv2.error as e:
            raise RuntimeError(f"Inference failed: {e}") from e

        logger.debug("Forward pass output shape: %s", output.shape)
        return output
