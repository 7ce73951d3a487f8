"""Logging configuration for the autoscaler renderer."""

import logging
import sys


def setup_logging(level: str = "INFO", format_json: bool = False) -> None:
    """
    Setup logging configuration.

    Logs go to stderr so rendered manifests on stdout stay parseable.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, use JSON format (for structured logging)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_json:
        log_format = '{"time":"%(asctime)s","level":"%(levelname)s","name":"%(name)s","message":"%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    # Set kubernetes client logging to WARNING to reduce noise
    logging.getLogger("kubernetes").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
