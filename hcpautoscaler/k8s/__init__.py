"""Kubernetes object helpers for the autoscaler reconciler."""

from hcpautoscaler.k8s.availability import inject_availability_prober, kas_ready_url
from hcpautoscaler.k8s.deployment_config import DeploymentConfig, Scheduling
from hcpautoscaler.k8s.ownership import OwnerRef
from hcpautoscaler.k8s.serialization import dump_all, to_dict, to_yaml

__all__ = [
    "DeploymentConfig",
    "OwnerRef",
    "Scheduling",
    "dump_all",
    "inject_availability_prober",
    "kas_ready_url",
    "to_dict",
    "to_yaml",
]
