"""
Meter Reader CLI Entrypoint.

Responsibility:
    Parse command-line arguments, configure the application, wire together
    the reader and I/O handlers, and run the main processing loop.

Usage:
    python main.py --source meter.jpg                    # Single image
    python main.py --source images/ --output-mode json   # Directory, JSON lines
    python main.py --source images/ --output-mode print,display
    python main.py --config my_config.yaml

This module is the executable entry point. It should not be imported
by other modules.
"""

import argparse
import logging
import sys
import time

# Configure logging before importing local modules
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)
logger = logging.getLogger("main")

from meter_reader.config import load_config
from meter_reader.input_handler import InputHandler
from meter_reader.output_handler import OutputHandler
from meter_reader.reader import MeterReader


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Meter Reader — read utility meters from photographs",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--source",
        type=str,
        help="Input source: path to an image file or a directory of images.",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML configuration file.",
    )
    parser.add_argument(
        "--model",
        type=str,
        help="Path to the exported detector (.onnx or .tflite). Overrides config.",
    )
    parser.add_argument(
        "--score-threshold",
        type=float,
        help="Class score threshold (0.0 - 1.0). Overrides config.",
    )
    parser.add_argument(
        "--iou-threshold",
        type=float,
        help="Same-class IoU suppression threshold (0.0 - 1.0). Overrides config.",
    )
    parser.add_argument(
        "--backend",
        type=str,
        choices=["cpu", "cuda"],
        help="Compute backend preference. Overrides config.",
    )
    parser.add_argument(
        "--auto-decimal",
        action="store_true",
        default=None,
        help="Insert a decimal point before the last digit of readings "
             "that have none. Overrides config.",
    )
    parser.add_argument(
        "--output-mode",
        type=str,
        help="Output mode(s). Use comma-separated values for multiple outputs: "
             "print, json, display. Example: 'print,display'. Overrides config.",
    )

    return parser.parse_args()


def _cli_overrides(args: argparse.Namespace) -> dict:
    """Map parsed arguments onto config sections. Unset arguments are None."""
    return {
        "input": {"source": args.source},
        "model": {"path": args.model, "backend": args.backend},
        "detection": {
            "score_threshold": args.score_threshold,
            "iou_threshold": args.iou_threshold,
        },
        "reading": {"auto_decimal": args.auto_decimal},
        "output": {"mode": args.output_mode},
    }


def main() -> int:
    """Main execution loop."""
    args = parse_args()

    # 1. Load Configuration (CLI args > ENV > YAML > Defaults)
    try:
        config = load_config(args.config, overrides=_cli_overrides(args))
        logger.info("Configuration active for this run.")

    except Exception as e:
        logger.error("Configuration error: %s", e)
        return 1

    # 2. Initialize Components
    try:
        reader = MeterReader(config)
        input_handler = InputHandler(source=config.input.source)
        output_handler = OutputHandler(config)

    except (FileNotFoundError, ValueError, RuntimeError) as e:
        logger.error("Initialization failed: %s", e)
        return 1
    except Exception as e:
        logger.exception("Unexpected initialization error: %s", e)
        return 1

    # 3. Processing Loop
    logger.info("Reading %d image(s).", len(input_handler))

    image_count = 0
    start_time = time.perf_counter()

    try:
        for source, frame in input_handler:
            image_count += 1

            result = reader.read(frame)

            if not output_handler.process_result(source, result):
                logger.info("Stopping loop per user request.")
                break

    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
    except Exception as e:
        logger.exception("Runtime error during processing: %s", e)
        return 1
    finally:
        # 4. Cleanup
        elapsed = time.perf_counter() - start_time
        output_handler.finalize()

        logger.info(
            "Processing finished. Total images: %d in %.2fs.",
            image_count, elapsed,
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
