"""Render every autoscaler object from one inputs document."""

import logging
from dataclasses import dataclass

from kubernetes import client

from hcpautoscaler.config.models import ReconcileInputs
from hcpautoscaler.k8s import manifests
from hcpautoscaler.k8s.ownership import OwnerRef
from hcpautoscaler.k8s.serialization import dump_all, to_dict
from hcpautoscaler.reconcile.deployment import reconcile_autoscaler_deployment
from hcpautoscaler.reconcile.rbac import reconcile_autoscaler_role, reconcile_autoscaler_role_binding

logger = logging.getLogger(__name__)


@dataclass
class AutoscalerObjects:
    """The reconciled objects, in the order they should be applied."""

    role: client.V1Role
    role_binding: client.V1RoleBinding
    deployment: client.V1Deployment

    def as_list(self) -> list:
        return [self.role, self.role_binding, self.deployment]


def reconcile_all(inputs: ReconcileInputs) -> AutoscalerObjects:
    """
    Build fresh handles and run all three builders against them.

    Args:
        inputs: Validated inputs document

    Returns:
        AutoscalerObjects holding the populated Role, RoleBinding and Deployment

    Raises:
        ReconcileConfigurationError: If an identity input is unusable
    """
    hcp = inputs.hosted_control_plane
    namespace = hcp.metadata.namespace
    owner = OwnerRef.from_hosted_control_plane(hcp)

    sa = manifests.service_account(inputs.service_account, namespace)
    kubeconfig_secret = manifests.secret(inputs.kubeconfig_secret, namespace)

    role = manifests.autoscaler_role(namespace)
    reconcile_autoscaler_role(role, owner)

    role_binding = manifests.autoscaler_role_binding(namespace)
    reconcile_autoscaler_role_binding(role_binding, role, sa, owner)

    deployment = manifests.autoscaler_deployment(namespace)
    reconcile_autoscaler_deployment(
        deployment,
        hcp,
        sa,
        kubeconfig_secret,
        inputs.autoscaling,
        inputs.images.cluster_autoscaler,
        inputs.images.availability_prober,
        inputs.set_default_security_context,
    )

    logger.info(f"Reconciled autoscaler objects for control plane {namespace}/{hcp.metadata.name}")
    return AutoscalerObjects(role=role, role_binding=role_binding, deployment=deployment)


def render_manifests(inputs: ReconcileInputs) -> list[dict]:
    """Return the reconciled objects as plain dictionaries."""
    return [to_dict(obj) for obj in reconcile_all(inputs).as_list()]


def render_yaml(inputs: ReconcileInputs) -> str:
    """Return the reconciled objects as a multi-document YAML stream."""
    return dump_all(reconcile_all(inputs).as_list())
