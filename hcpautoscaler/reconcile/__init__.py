"""Builders computing the desired state of the autoscaler objects."""

from hcpautoscaler.reconcile.deployment import autoscaler_flags, reconcile_autoscaler_deployment
from hcpautoscaler.reconcile.flags import Flag, FlagSet
from hcpautoscaler.reconcile.rbac import reconcile_autoscaler_role, reconcile_autoscaler_role_binding
from hcpautoscaler.reconcile.renderer import AutoscalerObjects, reconcile_all, render_manifests, render_yaml
from hcpautoscaler.reconcile.validation import ReconcileConfigurationError

__all__ = [
    "AutoscalerObjects",
    "Flag",
    "FlagSet",
    "ReconcileConfigurationError",
    "autoscaler_flags",
    "reconcile_all",
    "reconcile_autoscaler_deployment",
    "reconcile_autoscaler_role",
    "reconcile_autoscaler_role_binding",
    "render_manifests",
    "render_yaml",
]
