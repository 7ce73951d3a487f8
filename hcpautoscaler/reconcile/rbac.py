"""RBAC objects granting the autoscaler access to the machine API."""

import logging

from kubernetes import client

from hcpautoscaler.k8s.manifests import RBAC_API_GROUP
from hcpautoscaler.k8s.ownership import OwnerRef
from hcpautoscaler.reconcile.validation import ReconcileConfigurationError, require_named

logger = logging.getLogger(__name__)

MACHINE_API_GROUP = "cluster.x-k8s.io"
MACHINE_RESOURCES = (
    "machinedeployments",
    "machinedeployments/scale",
    "machines",
    "machinesets",
    "machinesets/scale",
)


def autoscaler_rules() -> list[client.V1PolicyRule]:
    """The fixed rule set the autoscaler needs to add and remove machines."""
    return [
        client.V1PolicyRule(
            api_groups=[MACHINE_API_GROUP],
            resources=list(MACHINE_RESOURCES),
            verbs=["*"],
        ),
    ]


def reconcile_autoscaler_role(role: client.V1Role, owner: OwnerRef) -> None:
    """
    Set the autoscaler Role's rules.

    Args:
        role: Role handle to mutate in place
        owner: Owner to stamp on the role
    """
    owner.apply_to(role)
    role.rules = autoscaler_rules()
    logger.debug(f"Reconciled autoscaler role {role.metadata.name}")


def reconcile_autoscaler_role_binding(
    binding: client.V1RoleBinding,
    role: client.V1Role,
    sa: client.V1ServiceAccount,
    owner: OwnerRef,
) -> None:
    """
    Bind the autoscaler Role to the autoscaler's service account.

    Only the role's name is used, so the binding stays valid when the role
    is recreated under the same name.

    Args:
        binding: RoleBinding handle to mutate in place
        role: Role to bind
        sa: Service account that receives the role
        owner: Owner to stamp on the binding

    Raises:
        ReconcileConfigurationError: If the role or service account is
            missing or unnamed. The binding is left untouched in that case.
    """
    role_name = require_named(role, "role")
    sa_name = require_named(sa, "service account")
    if not sa.metadata.namespace:
        raise ReconcileConfigurationError(f"service account {sa_name} must have a namespace")

    owner.apply_to(binding)
    binding.role_ref = client.V1RoleRef(
        api_group=RBAC_API_GROUP,
        kind="Role",
        name=role_name,
    )
    binding.subjects = [
        client.RbacV1Subject(
            kind="ServiceAccount",
            name=sa_name,
            namespace=sa.metadata.namespace,
        ),
    ]
    logger.debug(f"Bound role {role_name} to service account {sa.metadata.namespace}/{sa_name}")
