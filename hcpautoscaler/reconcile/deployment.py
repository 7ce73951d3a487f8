"""Desired state of the cluster-autoscaler Deployment."""

import logging

from kubernetes import client

from hcpautoscaler.config.defaults import (
    CONTROL_PLANE_COMPONENT_LABEL,
    DEFAULT_PRIORITY_CLASS,
    RECOMMENDED_LEASE_DURATION,
    RECOMMENDED_RENEW_DEADLINE,
    RECOMMENDED_RETRY_PERIOD,
)
from hcpautoscaler.config.models import ClusterAutoscaling, HostedControlPlane
from hcpautoscaler.k8s.availability import inject_availability_prober, kas_ready_url
from hcpautoscaler.k8s.deployment_config import DeploymentConfig, Scheduling
from hcpautoscaler.k8s.manifests import AUTOSCALER_NAME
from hcpautoscaler.k8s.ownership import OwnerRef
from hcpautoscaler.reconcile.flags import FlagSet
from hcpautoscaler.reconcile.validation import require_named

logger = logging.getLogger(__name__)

AUTOSCALER_COMMAND = "/usr/bin/cluster-autoscaler"
KUBECONFIG_VOLUME = "target-kubeconfig"
KUBECONFIG_MOUNT_PATH = "/mnt/kubeconfig"
KUBECONFIG_SECRET_KEY = "value"
NAMESPACE_ENV_VAR = "MY_NAMESPACE"
HEALTH_CHECK_PATH = "/health-check"
METRICS_PORT = 8085

# The selector is immutable once the Deployment exists. Never change it.
SELECTOR_LABELS = {"app": AUTOSCALER_NAME}


def pod_labels() -> dict[str, str]:
    """Descriptive labels of the autoscaler pods."""
    return {
        "app": AUTOSCALER_NAME,
        CONTROL_PLANE_COMPONENT_LABEL: AUTOSCALER_NAME,
    }


def autoscaler_flags(options: ClusterAutoscaling) -> FlagSet:
    """
    Build the autoscaler's command-line flags.

    Mandatory flags come first in a fixed order, followed by one flag
    per option that is set.

    Args:
        options: User-tunable autoscaler options

    Returns:
        Ordered FlagSet
    """
    flags = FlagSet()
    flags.add("cloud-provider", "clusterapi")
    flags.add("node-group-auto-discovery", f"clusterapi:namespace=$({NAMESPACE_ENV_VAR})")
    flags.add("kubeconfig", f"{KUBECONFIG_MOUNT_PATH}/{KUBECONFIG_VOLUME}")
    flags.add("clusterapi-cloud-config-authoritative")
    # Some control plane add-ons (grafana, image-registry) use local storage.
    # Skipping those nodes could leave the cluster stuck at its scaled-out size.
    flags.add("skip-nodes-with-local-storage", False)
    flags.add("alsologtostderr")
    flags.add("leader-elect-lease-duration", RECOMMENDED_LEASE_DURATION)
    flags.add("leader-elect-retry-period", RECOMMENDED_RETRY_PERIOD)
    flags.add("leader-elect-renew-deadline", RECOMMENDED_RENEW_DEADLINE)
    flags.add("v", 4)

    flags.add_optional("max-nodes-total", options.max_nodes_total)
    flags.add_optional("max-graceful-termination-sec", options.max_pod_grace_period)
    flags.add_optional("max-node-provision-time", options.max_node_provision_time)
    flags.add_optional("expendable-pods-priority-cutoff", options.pod_priority_threshold)
    return flags


def _health_probe(initial_delay: int, failure_threshold: int) -> client.V1Probe:
    return client.V1Probe(
        http_get=client.V1HTTPGetAction(
            path=HEALTH_CHECK_PATH,
            port=METRICS_PORT,
            scheme="HTTP",
        ),
        initial_delay_seconds=initial_delay,
        period_seconds=60,
        success_threshold=1,
        failure_threshold=failure_threshold,
        timeout_seconds=5,
    )


def _autoscaler_container(image: str, args: list[str]) -> client.V1Container:
    return client.V1Container(
        name=AUTOSCALER_NAME,
        image=image,
        image_pull_policy="IfNotPresent",
        command=[AUTOSCALER_COMMAND],
        args=args,
        volume_mounts=[
            client.V1VolumeMount(
                name=KUBECONFIG_VOLUME,
                mount_path=KUBECONFIG_MOUNT_PATH,
                read_only=True,
            ),
        ],
        env=[
            client.V1EnvVar(
                name=NAMESPACE_ENV_VAR,
                value_from=client.V1EnvVarSource(
                    field_ref=client.V1ObjectFieldSelector(field_path="metadata.namespace"),
                ),
            ),
        ],
        # Requests only: a CPU limit would throttle the autoscaler during scaling storms
        resources=client.V1ResourceRequirements(
            requests={"memory": "35Mi", "cpu": "10m"},
        ),
        # Readiness trips before liveness so dependents react before a restart
        liveness_probe=_health_probe(initial_delay=60, failure_threshold=5),
        readiness_probe=_health_probe(initial_delay=15, failure_threshold=3),
        ports=[client.V1ContainerPort(name="metrics", container_port=METRICS_PORT)],
    )


def reconcile_autoscaler_deployment(
    deployment: client.V1Deployment,
    hcp: HostedControlPlane,
    sa: client.V1ServiceAccount,
    kubeconfig_secret: client.V1Secret,
    options: ClusterAutoscaling,
    cluster_autoscaler_image: str,
    availability_prober_image: str,
    set_default_security_context: bool,
) -> None:
    """
    Populate the autoscaler Deployment with its complete desired state.

    The deployment's spec is replaced wholesale, so calling this again with
    the same inputs produces an identical object.

    Args:
        deployment: Deployment handle to mutate in place
        hcp: Owning hosted control plane
        sa: Service account the autoscaler runs as
        kubeconfig_secret: Secret holding the guest cluster kubeconfig
        options: User-tunable autoscaler options
        cluster_autoscaler_image: Image of the autoscaler binary
        availability_prober_image: Image of the availability prober
        set_default_security_context: Run the pod as the default non-root user

    Raises:
        ReconcileConfigurationError: If the service account or secret is
            missing. The deployment is left untouched in that case.
        TypeError: If an option holds a value no flag can carry. The
            deployment is left untouched in that case too.
    """
    sa_name = require_named(sa, "service account")
    secret_name = require_named(kubeconfig_secret, "kubeconfig secret")
    args = autoscaler_flags(options).render()

    OwnerRef.from_hosted_control_plane(hcp).apply_to(deployment)

    deployment.spec = client.V1DeploymentSpec(
        replicas=1,
        selector=client.V1LabelSelector(match_labels=dict(SELECTOR_LABELS)),
        template=client.V1PodTemplateSpec(
            metadata=client.V1ObjectMeta(labels=pod_labels()),
            spec=client.V1PodSpec(
                service_account_name=sa_name,
                termination_grace_period_seconds=10,
                tolerations=[
                    client.V1Toleration(
                        key="node-role.kubernetes.io/master",
                        effect="NoSchedule",
                    ),
                ],
                volumes=[
                    client.V1Volume(
                        name=KUBECONFIG_VOLUME,
                        secret=client.V1SecretVolumeSource(
                            secret_name=secret_name,
                            items=[
                                client.V1KeyToPath(key=KUBECONFIG_SECRET_KEY, path=KUBECONFIG_VOLUME),
                            ],
                        ),
                    ),
                ],
                containers=[_autoscaler_container(cluster_autoscaler_image, args)],
            ),
        ),
    )

    inject_availability_prober(
        kas_ready_url(hcp.api_port),
        availability_prober_image,
        deployment.spec.template.spec,
    )

    deployment_config = DeploymentConfig(
        replicas=1,
        scheduling=Scheduling(priority_class=DEFAULT_PRIORITY_CLASS),
        set_default_security_context=set_default_security_context,
    )
    deployment_config.set_release_image_annotation(hcp.spec.release_image)
    deployment_config.set_colocation(hcp)
    deployment_config.set_restart_annotation(hcp)
    deployment_config.set_control_plane_isolation(hcp)
    deployment_config.apply_to(deployment)

    logger.debug(
        f"Reconciled autoscaler deployment {hcp.metadata.namespace}/{deployment.metadata.name} "
        f"with args {args}"
    )
