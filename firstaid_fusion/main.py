"""Command-line entry point: fuse one saved detector response and print the result."""

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from .config.settings import load_config
from .core.exceptions import AnnotationError, ConfigError
from .core.logging_config import configure_logging, get_logging_manager
from .services.annotation_parser import load_annotation_file
from .services.fusion_service import FusionService
from .services.mock_detector import mock_fusion_result
from .services.summary_formatter import build_heuristic_summary

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_INPUT = 2


def _image_size(value: str) -> Tuple[int, int]:
    try:
        w, h = value.lower().split("x", 1)
        size = (int(w), int(h))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got '{value}'")
    if size[0] <= 0 or size[1] <= 0:
        raise argparse.ArgumentTypeError(f"image size must be positive, got '{value}'")
    return size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="firstaid-fusion",
        description="Fuse object, text and label annotations into first-aid findings",
    )
    parser.add_argument("annotation", nargs="?", help="Detector response JSON file")
    parser.add_argument("--config", default="config.json", help="Config JSON file")
    parser.add_argument("--env-file", default=None, help=".env file with overrides")
    parser.add_argument("--image-size", type=_image_size, default=None,
                        help="WIDTHxHEIGHT, used to normalize pixel vertices")
    parser.add_argument("--mock", action="store_true", help="Serve the canned mock result")
    parser.add_argument("--summary", action="store_true",
                        help="Print the heuristic text summary instead of JSON")
    parser.add_argument("--notes", action="store_true", help="Include item notes in the summary")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config, env_file=args.env_file)
    configure_logging(
        log_level=args.log_level or ("DEBUG" if config.debug else config.log_level),
        log_dir=config.log_dir,
        enable_file_logging=config.enable_file_logging,
        structured_logging=config.structured_logging,
    )
    get_logging_manager().set_correlation_id()

    if args.mock or config.use_mock_detector:
        result = mock_fusion_result()
    else:
        if not args.annotation:
            parser.error("an annotation file is required unless --mock is given")
        try:
            annotation = load_annotation_file(args.annotation, image_size=args.image_size)
            result = FusionService(config.fusion_settings()).fuse(annotation)
        except (AnnotationError, ConfigError) as e:
            logger.error(f"Cannot process '{args.annotation}': {e}")
            return EXIT_BAD_INPUT

    if args.summary:
        print(build_heuristic_summary(result, include_notes=args.notes))
    else:
        print(json.dumps(result.to_dict(), indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
