"""
Model loading for the meter reading system.

Responsibility:
    Load the exported digit detector from disk, configure the compute
    backend, and return a ready-to-infer cv2.dnn.Net object.

Non-goals:
    - No preprocessing, inference, or frame-level logic.
    - No automatic model downloading.
    - No fallback to alternative models.

Failure behavior:
    - A missing model file raises FileNotFoundError with the exact
      missing path and expected location.
    - An unreadable model or incompatible backend raises RuntimeError.
"""

import logging
from pathlib import Path

import cv2

from meter_reader.config import ModelConfig, get_project_root

logger = logging.getLogger(__name__)

# Formats cv2.dnn.readNet can dispatch on by file extension
_SUPPORTED_EXTENSIONS = {".onnx", ".tflite"}


def load_model(config: ModelConfig) -> cv2.dnn.Net:
    """Load and configure the meter digit detector.

    Args:
        config: ModelConfig containing the model path and backend preference.

    Returns:
        A configured cv2.dnn.Net ready for inference.

    Raises:
        FileNotFoundError: If the model file does not exist.
        ValueError: If the file extension is not a supported export format.
        RuntimeError: If OpenCV cannot read the model or set the backend.
    """
    model_path = Path(config.path)

    # Resolve relative paths against project root
    if not model_path.is_absolute():
        model_path = get_project_root() / model_path

    if not model_path.is_file():
        raise FileNotFoundError(
            f"Model file not found.\n"
            f"  Expected: {model_path}\n"
            f"  Export the detector to ONNX or TFLite and place it at the path above,\n"
            f"  or update 'model.path' in your config."
        )

    if model_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ValueError(
            f"Unsupported model format: '{model_path.suffix}'. "
            f"Supported: {_SUPPORTED_EXTENSIONS}."
        )

    logger.info("Loading model: %s", model_path)
    try:
        net = cv2.dnn.readNet(str(model_path))
    except cv2.error as e:
        raise RuntimeError(
            f"OpenCV could not read the model at {model_path}.\n"
            f"  OpenCV error: {e}"
        ) from e

    # Configure backend and target
    if config.backend == "cuda":
        logger.info("Setting CUDA backend and target.")
        try:
            net.setPreferableBackend(cv2.dnn.DNN_BACKEND_CUDA)
            net.setPreferableTarget(cv2.dnn.DNN_TARGET_CUDA)
        except cv2.error as e:
            raise RuntimeError(
                f"Failed to set CUDA backend. Ensure OpenCV was built with "
                f"CUDA support (opencv-contrib-python or custom build).\n"
                f"  OpenCV error: {e}"
            ) from e
    else:
        logger.info("Using CPU backend.")
        net.setPreferableBackend(cv2.dnn.DNN_BACKEND_OPENCV)
        net.setPreferableTarget(cv2.dnn.DNN_TARGET_CPU)

    logger.info("Model loaded successfully.")
    return net
