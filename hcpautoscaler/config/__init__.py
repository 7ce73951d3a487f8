"""Inputs and shared defaults for the autoscaler reconciler."""

from hcpautoscaler.config.loader import ConfigLoadError, ConfigLoader
from hcpautoscaler.config.models import (
    ClusterAutoscaling,
    ControlPlaneMetadata,
    ControlPlaneSpec,
    HostedControlPlane,
    Images,
    ObjectReference,
    ReconcileInputs,
)
from hcpautoscaler.config.validator import ConfigValidator, ValidationResult

__all__ = [
    "ClusterAutoscaling",
    "ConfigLoadError",
    "ConfigLoader",
    "ConfigValidator",
    "ControlPlaneMetadata",
    "ControlPlaneSpec",
    "HostedControlPlane",
    "Images",
    "ObjectReference",
    "ReconcileInputs",
    "ValidationResult",
]
