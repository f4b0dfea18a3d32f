"""
MeterReader — the single public API for meter reading.

This module is the ONLY intended programmatic entry point for consumers
of the meter reading library. All other modules are internal.

Public contract:
    MeterReader.read(frame: np.ndarray) -> ReadingResult

Constraints:
    - Input must be a BGR numpy array (as returned by OpenCV).
    - The method is stateless per call and deterministic for a given
      inference engine.
    - Detection boxes are reported in letterboxed canvas space. Use
      preprocessor.to_image_space() to map them onto the original frame.

Non-goals:
    - No file reading, camera access, or I/O of any kind.
    - No visualization or output writing.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from meter_reader.assembler import assemble_reading
from meter_reader.config import AppConfig, load_config
from meter_reader.decoder import decode
from meter_reader.detection import Detection
from meter_reader.formatting import insert_decimal, is_valid_reading
from meter_reader.inference import InferenceEngine, OpenCVInferenceEngine
from meter_reader.model_loader import load_model
from meter_reader.preprocessor import LetterboxResult, letterbox, to_blob
from meter_reader.suppressor import suppress

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadingResult:
    """Outcome of reading one frame.

    Attributes:
        reading: Assembled reading, "" when no meter was detected.
        detections: Detections kept after suppression, most confident
                    first, boxes in canvas space.
        letterbox: The canvas fed to the model and its transform.
        is_valid: Whether the reading parses as a number within the
                  configured maximum length. Always False when empty.
    """

    reading: str
    detections: List[Detection]
    letterbox: LetterboxResult
    is_valid: bool = False

    @property
    def canvas(self) -> np.ndarray:
        """The letterboxed image actually seen by the model."""
        return self.letterbox.image

    @property
    def is_empty(self) -> bool:
        """True when no digit or decimal point was detected."""
        return not self.reading


class MeterReader:
    """Meter reader built on a YOLOv8-style digit detector.

    Usage:
        reader = MeterReader()                        # Loads the configured model
        reader = MeterReader(engine=my_engine)        # Any InferenceEngine
        result = reader.read(frame)                   # BGR numpy array
        print(result.reading or "No meter detected")

    The constructor loads the model once. Subsequent read() calls reuse
    the loaded network.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        engine: Optional[InferenceEngine] = None,
    ) -> None:
        """Initialize the reader and, unless an engine is given, load the model.

        Args:
            config: Application configuration. If None, safe defaults
                    are used (no config file required).
            engine: Inference engine to use instead of the configured
                    model file.

        Raises:
            FileNotFoundError: If the model file is missing.
            RuntimeError: If the model cannot be loaded.
        """
        if config is None:
            config = load_config()

        self._config = config
        if engine is None:
            engine = OpenCVInferenceEngine(load_model(config.model))
        self._engine = engine

        logger.info(
            "MeterReader initialized (score_threshold=%.2f, iou_threshold=%.2f)",
            config.detection.score_threshold,
            config.detection.iou_threshold,
        )

    def read(self, frame: np.ndarray) -> ReadingResult:
        """Read the meter shown in a single BGR frame.

        Args:
            frame: A BGR image as a numpy array with shape (H, W, 3)
                   and dtype uint8.

        Returns:
            A ReadingResult. Its reading is "" if nothing was detected.

        Raises:
            TypeError: If frame is not a numpy ndarray.
            ValueError: If frame has incorrect shape or is empty, or the
                        engine returns a tensor of the wrong layout.
            RuntimeError: If inference fails.
        """
        self._validate_frame(frame)
        model_cfg = self._config.model
        detection_cfg = self._config.detection

        # Preprocess: frame → letterboxed canvas → blob
        boxed = letterbox(frame, model_cfg.input_size)
        blob = to_blob(boxed.image)

        # Inference
        output = self._engine.infer(blob)

        # Postprocess: raw output → candidates → kept detections → reading
        candidates = decode(
            raw=output,
            image_width=boxed.image.shape[1],
            image_height=boxed.image.shape[0],
            score_threshold=detection_cfg.score_threshold,
            class_names=model_cfg.class_names,
        )
        detections = suppress(candidates, detection_cfg.iou_threshold)
        reading = assemble_reading(detections)

        if self._config.reading.auto_decimal:
            reading = insert_decimal(reading)

        logger.debug(
            "Read '%s' (%d candidates, %d after suppression)",
            reading, len(candidates), len(detections),
        )
        return ReadingResult(
            reading=reading,
            detections=detections,
            letterbox=boxed,
            is_valid=is_valid_reading(reading, self._config.reading.max_length),
        )

    @property
    def config(self) -> AppConfig:
        """Return the active configuration (read-only)."""
        return self._config

    @staticmethod
    def _validate_frame(frame: np.ndarray) -> None:
        """Validate that the input frame meets the API contract.

        Raises:
            TypeError: If frame is not a numpy ndarray.
            ValueError: If frame is empty or has wrong dimensions.
        """
        if not isinstance(frame, np.ndarray):
            raise TypeError(
                f"Expected frame to be a numpy ndarray, "
                f"got {type(frame).__name__}. "
                f"Use cv2.imread() to obtain frames."
            )

        if frame.size == 0:
            raise ValueError(
                "Frame is empty (zero size). "
                "Ensure the input source is providing valid frames."
            )

        if frame.ndim != 3:
            raise ValueError(
                f"Expected a 3-dimensional frame (H, W, C), "
                f"got {frame.ndim} dimensions with shape {frame.shape}. "
                f"Grayscale images must be converted to BGR first."
            )

        if frame.shape[2] != 3:
            raise ValueError(
                f"Expected 3 channels (BGR), got {frame.shape[2]} channels. "
                f"Input must be a BGR image as returned by OpenCV."
            )
