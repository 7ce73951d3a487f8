"""Named, otherwise empty object handles for the autoscaler's resources."""

from kubernetes import client

from hcpautoscaler.config.models import ObjectReference

AUTOSCALER_NAME = "cluster-autoscaler"
RBAC_API_GROUP = "rbac.authorization.k8s.io"


def autoscaler_deployment(namespace: str) -> client.V1Deployment:
    """Return an empty Deployment handle for the autoscaler."""
    return client.V1Deployment(
        api_version="apps/v1",
        kind="Deployment",
        metadata=client.V1ObjectMeta(name=AUTOSCALER_NAME, namespace=namespace),
    )


def autoscaler_role(namespace: str) -> client.V1Role:
    """Return an empty Role handle for the autoscaler."""
    return client.V1Role(
        api_version=f"{RBAC_API_GROUP}/v1",
        kind="Role",
        metadata=client.V1ObjectMeta(name=AUTOSCALER_NAME, namespace=namespace),
    )


def autoscaler_role_binding(namespace: str) -> client.V1RoleBinding:
    """Return an empty RoleBinding handle for the autoscaler.

    The client model insists on a role reference, so the handle starts
    with a placeholder that the binding builder overwrites.
    """
    return client.V1RoleBinding(
        api_version=f"{RBAC_API_GROUP}/v1",
        kind="RoleBinding",
        metadata=client.V1ObjectMeta(name=AUTOSCALER_NAME, namespace=namespace),
        role_ref=client.V1RoleRef(api_group=RBAC_API_GROUP, kind="Role", name=""),
    )


def service_account(ref: ObjectReference, default_namespace: str) -> client.V1ServiceAccount:
    """Return a ServiceAccount handle for a reference."""
    return client.V1ServiceAccount(
        api_version="v1",
        kind="ServiceAccount",
        metadata=client.V1ObjectMeta(name=ref.name, namespace=ref.namespace or default_namespace),
    )


def secret(ref: ObjectReference, default_namespace: str) -> client.V1Secret:
    """Return a Secret handle for a reference. Its data is never read."""
    return client.V1Secret(
        api_version="v1",
        kind="Secret",
        metadata=client.V1ObjectMeta(name=ref.name, namespace=ref.namespace or default_namespace),
    )
