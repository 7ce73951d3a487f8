"""Command-line entry point for rendering the cluster-autoscaler manifests."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from hcpautoscaler.config.loader import ConfigLoadError, ConfigLoader
from hcpautoscaler.config.validator import ConfigValidator
from hcpautoscaler.reconcile.renderer import render_yaml
from hcpautoscaler.reconcile.validation import ReconcileConfigurationError
from hcpautoscaler.utils.logger import setup_logging

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def parse_args(argv: Optional[list[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="hcpautoscaler",
        description="Render the cluster-autoscaler Deployment and RBAC for a hosted control plane",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Render manifests to stdout
  python -m hcpautoscaler render --inputs inputs.yaml

  # Render manifests to a file and pipe them into kubectl later
  python -m hcpautoscaler render --inputs inputs.yaml --output autoscaler.yaml

  # Only check the inputs document
  python -m hcpautoscaler validate --inputs inputs.yaml
        """,
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--log-format",
        type=str,
        default="text",
        choices=["text", "json"],
        help="Log output format (default: text)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"hcpautoscaler {VERSION}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render the Role, RoleBinding and Deployment")
    render.add_argument(
        "--inputs",
        type=str,
        required=True,
        help="YAML file with an AutoscalerInputs document",
    )
    render.add_argument(
        "--output",
        type=str,
        help="Write manifests to this file instead of stdout",
    )

    validate = subparsers.add_parser("validate", help="Validate an inputs document")
    validate.add_argument(
        "--inputs",
        type=str,
        required=True,
        help="YAML file with an AutoscalerInputs document",
    )

    return parser.parse_args(argv)


def run_validate(inputs_path: str) -> int:
    """Validate an inputs file and print the result."""
    try:
        inputs = ConfigLoader.load_from_file(inputs_path)
    except ConfigLoadError as e:
        logger.error(str(e))
        return 1
    except ValidationError as e:
        print(f"✗ Inputs are invalid\n\n{e}")
        return 1

    result = ConfigValidator.validate(inputs)
    print(result)
    return 0 if result.valid else 1


def run_render(inputs_path: str, output: Optional[str]) -> int:
    """Render the manifests for an inputs file."""
    try:
        inputs = ConfigLoader.load_from_file(inputs_path)
    except (ConfigLoadError, ValidationError) as e:
        logger.error(f"Cannot load inputs: {e}")
        return 1

    validation = ConfigValidator.validate(inputs)
    if not validation.valid:
        logger.error(f"Invalid inputs: {validation.errors}")
        return 1
    for warning in validation.warnings:
        logger.warning(warning)

    try:
        manifests = render_yaml(inputs)
    except ReconcileConfigurationError as e:
        logger.error(f"Cannot reconcile autoscaler: {e}")
        return 1

    if output:
        try:
            Path(output).write_text(manifests, encoding="utf-8")
        except OSError as e:
            logger.error(f"Cannot write manifests to {output}: {e}")
            return 1
        logger.info(f"Wrote manifests to {output}")
    else:
        sys.stdout.write(manifests)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(
        level=args.log_level,
        format_json=args.log_format == "json",
    )

    try:
        if args.command == "validate":
            return run_validate(args.inputs)
        return run_render(args.inputs, args.output)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
