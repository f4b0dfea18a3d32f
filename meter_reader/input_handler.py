"""
Input handling for the meter reading pipeline.

Responsibility:
    Load meter photographs from a single image file or a directory of
    images. Provides a uniform iterator interface yielding
    (source_path, frame) tuples.

Non-goals:
    - No camera access, cropping or rotation.
    - No detection, drawing, or output writing.
    - No recursive directory traversal.

Robustness:
    - Validates the source at initialization time.
    - Logs and skips unreadable images (never crashes the pipeline).
"""

import logging
from pathlib import Path
from typing import Iterator, List, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)

# Image extensions recognized by this handler
_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp"}


class InputHandler:
    """Iterator over meter images from a file or a directory.

    Usage:
        handler = InputHandler(source="path/to/images/")
        for path, frame in handler:
            # process frame

    Unreadable images are logged and skipped. The iterator never raises
    on a single bad file.
    """

    def __init__(self, source: str) -> None:
        """Initialize the input handler and validate the source.

        Args:
            source: Path to an image file or a directory of images.

        Raises:
            FileNotFoundError: If the source does not exist.
            ValueError: If the file is not an image or the directory
                        holds no images.
        """
        source_path = Path(str(source).strip())

        if source_path.is_file():
            ext = source_path.suffix.lower()
            if ext not in _IMAGE_EXTENSIONS:
                raise ValueError(
                    f"Unrecognized file extension: '{ext}' for source '{source_path}'. "
                    f"Supported images: {_IMAGE_EXTENSIONS}."
                )
            self._image_paths: List[Path] = [source_path]
        elif source_path.is_dir():
            self._image_paths = sorted(
                p for p in source_path.iterdir()
                if p.is_file() and p.suffix.lower() in _IMAGE_EXTENSIONS
            )
            if not self._image_paths:
                raise ValueError(
                    f"No image files found in directory: '{source_path}'. "
                    f"Supported extensions: {_IMAGE_EXTENSIONS}."
                )
            logger.info("Found %d images in directory: %s", len(self._image_paths), source_path)
        else:
            raise FileNotFoundError(
                f"Input source not found: '{source_path}'. "
                f"Provide a valid image file or directory."
            )

        logger.info("InputHandler initialized: %d image(s) from %s", len(self._image_paths), source_path)

    def __len__(self) -> int:
        return len(self._image_paths)

    def __iter__(self) -> Iterator[Tuple[str, np.ndarray]]:
        """Yield (path, frame) tuples, frame being a BGR numpy array."""
        for path in self._image_paths:
            frame = cv2.imread(str(path), cv2.IMREAD_COLOR)
            if frame is None:
                logger.warning("Skipping unreadable image: %s", path)
                continue
            yield str(path), frame
