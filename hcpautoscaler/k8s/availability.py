"""Availability prober init container."""

import logging

from kubernetes import client

logger = logging.getLogger(__name__)

AVAILABILITY_PROBER_CONTAINER = "availability-prober"
AVAILABILITY_PROBER_COMMAND = "/usr/bin/availability-prober"
KUBE_APISERVER_SERVICE = "kube-apiserver"


def kas_ready_url(api_port: int) -> str:
    """Return the in-cluster readiness URL of the hosted kube-apiserver."""
    return f"https://{KUBE_APISERVER_SERVICE}:{api_port}/readyz"


def inject_availability_prober(target_url: str, image: str, pod_spec: client.V1PodSpec) -> None:
    """
    Gate a pod's start on the availability of a URL.

    Adds an init container that polls ``target_url`` until it answers.
    An existing prober container is replaced so the pod spec holds
    exactly one, always first in the init container list.

    Args:
        target_url: URL that must respond before the pod's containers start
        image: Image providing the availability prober binary
        pod_spec: Pod spec to mutate
    """
    prober = client.V1Container(
        name=AVAILABILITY_PROBER_CONTAINER,
        image=image,
        image_pull_policy="IfNotPresent",
        command=[AVAILABILITY_PROBER_COMMAND],
        args=["--target", target_url],
        resources=client.V1ResourceRequirements(
            requests={"memory": "10Mi", "cpu": "10m"},
        ),
        termination_message_policy="FallbackToLogsOnError",
    )

    others = [
        c for c in (pod_spec.init_containers or [])
        if c.name != AVAILABILITY_PROBER_CONTAINER
    ]
    pod_spec.init_containers = [prober] + others
    logger.debug(f"Availability prober gates pod start on {target_url}")
