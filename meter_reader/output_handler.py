"""
Output handling for the meter reading pipeline.

Responsibility:
    Route reading results to configured output sinks: a human-readable
    line, a JSON line per image, or an OpenCV display window.
    Supports multiple orthogonal outputs simultaneously.

Non-goals:
    - No detection logic.
    - No input acquisition.
    - No file or gallery persistence.
"""

import logging
import sys
from typing import Set, TextIO

import cv2

from meter_reader.config import AppConfig
from meter_reader.reader import ReadingResult
from meter_reader.serializer import result_to_json
from meter_reader.visualizer import NO_READING_TEXT, show_frame

logger = logging.getLogger(__name__)


class OutputHandler:
    """Routes reading results to configured output sinks.

    Supports orthogonal outputs - multiple modes can be active simultaneously:
        - 'print': Write "<source>: <reading>" to the stream, marking
                   readings that fail validation.
        - 'json': Write one JSON object per line to the stream.
        - 'display': Show the annotated canvas in an OpenCV window.

    Usage:
        handler = OutputHandler(config)
        handler.process_result(source, result)
        ...
        handler.finalize()
    """

    def __init__(self, config: AppConfig, stream: TextIO = sys.stdout) -> None:
        """Initialize the output handler.

        Args:
            config: Application configuration (output mode, vis params).
            stream: Text stream for 'print' and 'json' output.
        """
        self._config = config
        self._stream = stream
        self._modes: Set[str] = set(m.strip() for m in config.output.mode.split(','))
        self._count = 0
        self._detected = 0

        logger.info("OutputHandler initialized: modes=%s", self._modes)

    def process_result(self, source: str, result: ReadingResult) -> bool:
        """Send a single reading through the output pipeline.

        Args:
            source: Where the frame came from (file path).
            result: Reading result for that frame.

        Returns:
            True to continue processing, False to signal the caller
            should stop (e.g., user pressed 'q' in display mode).
        """
        self._count += 1
        if not result.is_empty:
            self._detected += 1

        if 'print' in self._modes:
            self._stream.write(f"{source}: {self._describe(result)}\n")

        if 'json' in self._modes:
            self._stream.write(result_to_json(source, result) + "\n")

        if 'display' in self._modes:
            return self._handle_display(result)

        return True

    @staticmethod
    def _describe(result: ReadingResult) -> str:
        """Human-readable reading, flagging readings that are not numbers."""
        if result.is_empty:
            return NO_READING_TEXT
        if not result.is_valid:
            return f"{result.reading} (invalid)"
        return result.reading

    def _handle_display(self, result: ReadingResult) -> bool:
        """Show annotated canvas in a window. Returns False on quit key."""
        key = show_frame(
            result.canvas, result.detections, result.reading,
            self._config.visualization,
        )

        if key == ord("q") or key == 27:  # 'q' or ESC
            logger.info("Quit signal received (key press).")
            return False

        return True

    def finalize(self) -> None:
        """Flush the stream and close any display window."""
        self._stream.flush()

        if 'display' in self._modes:
            cv2.destroyAllWindows()

        logger.info(
            "OutputHandler finalized: %d image(s), %d with a reading.",
            self._count, self._detected,
        )
