"""Semantic validation of autoscaler inputs."""

import logging
from typing import Optional

from pydantic import ValidationError

from hcpautoscaler.config.models import ReconcileInputs

logger = logging.getLogger(__name__)

# The autoscaler waits at most this long for pods to terminate gracefully
# before it force-deletes them during scale down.
MAX_REASONABLE_GRACE_PERIOD = 600


class ValidationResult:
    """Result of inputs validation."""

    def __init__(self, valid: bool, errors: Optional[list[str]] = None, warnings: Optional[list[str]] = None):
        """
        Initialize validation result.

        Args:
            valid: Whether the inputs are valid
            errors: List of validation errors
            warnings: List of validation warnings
        """
        self.valid = valid
        self.errors = errors or []
        self.warnings = warnings or []

    def __bool__(self) -> bool:
        """Return validation status."""
        return self.valid

    def __str__(self) -> str:
        """Return human-readable validation result."""
        lines = []
        if self.valid:
            lines.append("✓ Inputs are valid")
        else:
            lines.append("✗ Inputs are invalid")

        if self.errors:
            lines.append("\nErrors:")
            for error in self.errors:
                lines.append(f"  - {error}")

        if self.warnings:
            lines.append("\nWarnings:")
            for warning in self.warnings:
                lines.append(f"  - {warning}")

        return "\n".join(lines)


class ConfigValidator:
    """Validate autoscaler inputs beyond what the models enforce."""

    @staticmethod
    def validate(inputs: ReconcileInputs) -> ValidationResult:
        """
        Validate a ReconcileInputs document.

        Args:
            inputs: The inputs to validate

        Returns:
            ValidationResult with any errors or warnings
        """
        errors: list[str] = []
        warnings: list[str] = []

        # Images are opaque, but an empty one can never be pulled
        if not inputs.images.cluster_autoscaler.strip():
            errors.append("images.clusterAutoscaler: image reference cannot be empty")
        if not inputs.images.availability_prober.strip():
            errors.append("images.availabilityProber: image reference cannot be empty")

        hcp = inputs.hosted_control_plane
        if not hcp.metadata.uid:
            warnings.append(
                f"HostedControlPlane '{hcp.metadata.name}' has no uid. "
                "Owner references without a uid are ignored by the garbage collector."
            )

        if not hcp.spec.release_image:
            warnings.append(
                f"HostedControlPlane '{hcp.metadata.name}' has no releaseImage. "
                "The release image annotation will be empty."
            )

        for ref_name, ref in (
            ("serviceAccount", inputs.service_account),
            ("kubeconfigSecret", inputs.kubeconfig_secret),
        ):
            if ref.namespace and ref.namespace != hcp.metadata.namespace:
                warnings.append(
                    f"{ref_name} namespace '{ref.namespace}' differs from the control plane "
                    f"namespace '{hcp.metadata.namespace}'"
                )

        options = inputs.autoscaling
        if options.max_nodes_total == 0:
            warnings.append(
                "autoscaling.maxNodesTotal is 0. The autoscaler will never add nodes."
            )

        if options.max_pod_grace_period is not None and options.max_pod_grace_period > MAX_REASONABLE_GRACE_PERIOD:
            warnings.append(
                f"autoscaling.maxPodGracePeriod ({options.max_pod_grace_period}s) exceeds "
                f"{MAX_REASONABLE_GRACE_PERIOD}s. Scale down may stall on slow pods."
            )

        valid = len(errors) == 0
        return ValidationResult(valid=valid, errors=errors, warnings=warnings)

    @staticmethod
    def validate_from_dict(data: dict) -> ValidationResult:
        """
        Validate inputs from a dictionary.

        Args:
            data: Dictionary containing inputs

        Returns:
            ValidationResult with any errors or warnings
        """
        try:
            inputs = ReconcileInputs.model_validate(data)
            return ConfigValidator.validate(inputs)
        except ValidationError as e:
            errors = []
            for error in e.errors():
                loc = " -> ".join(str(x) for x in error["loc"])
                errors.append(f"{loc}: {error['msg']}")
            return ValidationResult(valid=False, errors=errors)
