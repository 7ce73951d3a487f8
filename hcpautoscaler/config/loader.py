"""Inputs loader for the autoscaler renderer."""

import logging
from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from hcpautoscaler.config.models import ReconcileInputs

logger = logging.getLogger(__name__)


class ConfigLoadError(Exception):
    """Raised when inputs loading fails."""

    pass


class ConfigLoader:
    """Load and parse autoscaler inputs documents."""

    @staticmethod
    def load_from_file(file_path: Union[str, Path]) -> ReconcileInputs:
        """
        Load ReconcileInputs from a YAML file.

        Args:
            file_path: Path to the YAML inputs file

        Returns:
            Validated ReconcileInputs instance

        Raises:
            ConfigLoadError: If file cannot be read or parsed
            ValidationError: If inputs are invalid
        """
        path = Path(file_path)

        if not path.exists():
            raise ConfigLoadError(f"Inputs file not found: {path}")

        if not path.is_file():
            raise ConfigLoadError(f"Path is not a file: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Failed to parse YAML file {path}: {e}") from e
        except OSError as e:
            raise ConfigLoadError(f"Failed to read file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigLoadError(f"Inputs file must contain a YAML object, got {type(data).__name__}")

        try:
            inputs = ReconcileInputs.model_validate(data)
        except ValidationError as e:
            logger.error(f"Validation error in {path}: {e}")
            raise

        logger.debug(
            f"Loaded inputs for control plane "
            f"{inputs.hosted_control_plane.metadata.namespace}/{inputs.hosted_control_plane.metadata.name} "
            f"from {path}"
        )
        return inputs

    @staticmethod
    def load_from_dict(data: dict) -> ReconcileInputs:
        """
        Load ReconcileInputs from a dictionary.

        Raises:
            ValidationError: If inputs are invalid
        """
        return ReconcileInputs.model_validate(data)

    @staticmethod
    def load_from_yaml_string(yaml_str: str) -> ReconcileInputs:
        """
        Load ReconcileInputs from a YAML string.

        Args:
            yaml_str: YAML inputs as string

        Returns:
            Validated ReconcileInputs instance

        Raises:
            ConfigLoadError: If YAML cannot be parsed
            ValidationError: If inputs are invalid
        """
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Failed to parse YAML string: {e}") from e

        if not isinstance(data, dict):
            raise ConfigLoadError(f"Inputs must be a YAML object, got {type(data).__name__}")

        return ReconcileInputs.model_validate(data)
