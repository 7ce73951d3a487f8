"""Uniform deployment policy for control-plane components."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from kubernetes import client

from hcpautoscaler.config.defaults import (
    CLUSTER_NODE_LABEL,
    COLOCATION_LABEL,
    CONTROL_PLANE_NODE_LABEL,
    DEFAULT_SECURITY_CONTEXT_USER,
    RELEASE_IMAGE_ANNOTATION,
    RESTART_DATE_ANNOTATION,
)
from hcpautoscaler.config.models import HostedControlPlane

logger = logging.getLogger(__name__)

HOSTNAME_TOPOLOGY_KEY = "kubernetes.io/hostname"


@dataclass
class Scheduling:
    """Pod scheduling settings shared by control-plane components."""

    priority_class: str = ""
    tolerations: list[client.V1Toleration] = field(default_factory=list)
    pod_affinity: list[client.V1WeightedPodAffinityTerm] = field(default_factory=list)
    node_affinity: list[client.V1PreferredSchedulingTerm] = field(default_factory=list)

    def affinity(self) -> Optional[client.V1Affinity]:
        """Return the pod affinity to set, or None when nothing is preferred."""
        if not self.pod_affinity and not self.node_affinity:
            return None
        affinity = client.V1Affinity()
        if self.pod_affinity:
            affinity.pod_affinity = client.V1PodAffinity(
                preferred_during_scheduling_ignored_during_execution=list(self.pod_affinity),
            )
        if self.node_affinity:
            affinity.node_affinity = client.V1NodeAffinity(
                preferred_during_scheduling_ignored_during_execution=list(self.node_affinity),
            )
        return affinity


@dataclass
class DeploymentConfig:
    """
    Declarative policy applied on top of a component's own deployment spec.

    The setters only record values; nothing touches a Deployment until
    ``apply_to`` is called.
    """

    replicas: int = 1
    scheduling: Scheduling = field(default_factory=Scheduling)
    additional_labels: dict[str, str] = field(default_factory=dict)
    additional_annotations: dict[str, str] = field(default_factory=dict)
    set_default_security_context: bool = False

    def set_release_image_annotation(self, release_image: str) -> None:
        """Record which release image the pods were rendered for."""
        self.additional_annotations[RELEASE_IMAGE_ANNOTATION] = release_image

    def set_restart_annotation(self, hcp: HostedControlPlane) -> None:
        """Propagate the control plane's restart trigger so a new value rolls the pods."""
        restart_date = hcp.metadata.annotations.get(RESTART_DATE_ANNOTATION)
        if restart_date is not None:
            self.additional_annotations[RESTART_DATE_ANNOTATION] = restart_date

    def set_colocation(self, hcp: HostedControlPlane) -> None:
        """Prefer scheduling next to the other pods of the same control plane."""
        cluster_key = hcp.metadata.namespace
        self.additional_labels[COLOCATION_LABEL] = cluster_key
        self.scheduling.pod_affinity = [
            client.V1WeightedPodAffinityTerm(
                weight=100,
                pod_affinity_term=client.V1PodAffinityTerm(
                    label_selector=client.V1LabelSelector(
                        match_labels={COLOCATION_LABEL: cluster_key},
                    ),
                    topology_key=HOSTNAME_TOPOLOGY_KEY,
                ),
            ),
        ]

    def set_control_plane_isolation(self, hcp: HostedControlPlane) -> None:
        """Keep the pods on nodes dedicated to this control plane, away from tenant workloads."""
        cluster_key = hcp.metadata.namespace
        self.scheduling.tolerations = [
            client.V1Toleration(
                key=CONTROL_PLANE_NODE_LABEL,
                operator="Equal",
                value="true",
                effect="NoSchedule",
            ),
            client.V1Toleration(
                key=CLUSTER_NODE_LABEL,
                operator="Equal",
                value=cluster_key,
                effect="NoSchedule",
            ),
        ]
        self.scheduling.node_affinity = [
            client.V1PreferredSchedulingTerm(
                weight=50,
                preference=client.V1NodeSelectorTerm(
                    match_expressions=[
                        client.V1NodeSelectorRequirement(
                            key=CONTROL_PLANE_NODE_LABEL,
                            operator="In",
                            values=["true"],
                        ),
                    ],
                ),
            ),
            client.V1PreferredSchedulingTerm(
                weight=100,
                preference=client.V1NodeSelectorTerm(
                    match_expressions=[
                        client.V1NodeSelectorRequirement(
                            key=CLUSTER_NODE_LABEL,
                            operator="In",
                            values=[cluster_key],
                        ),
                    ],
                ),
            ),
        ]

    def apply_to(self, deployment: client.V1Deployment) -> None:
        """
        Apply the recorded policy to a deployment.

        Pod labels and annotations are merged, tolerations are added once,
        affinity and priority class are overwritten. The selector is never
        touched.

        Args:
            deployment: Deployment whose spec and pod template get mutated
        """
        if deployment.spec is None:
            deployment.spec = client.V1DeploymentSpec(
                selector=client.V1LabelSelector(),
                template=client.V1PodTemplateSpec(),
            )
        spec = deployment.spec
        spec.replicas = self.replicas

        template = spec.template
        if template.metadata is None:
            template.metadata = client.V1ObjectMeta()
        if template.spec is None:
            template.spec = client.V1PodSpec(containers=[])

        if self.additional_labels:
            labels = dict(template.metadata.labels or {})
            labels.update(self.additional_labels)
            template.metadata.labels = labels

        if self.additional_annotations:
            annotations = dict(template.metadata.annotations or {})
            annotations.update(self.additional_annotations)
            template.metadata.annotations = annotations

        pod_spec = template.spec
        if self.scheduling.priority_class:
            pod_spec.priority_class_name = self.scheduling.priority_class

        tolerations = list(pod_spec.tolerations or [])
        for toleration in self.scheduling.tolerations:
            if toleration not in tolerations:
                tolerations.append(toleration)
        if tolerations:
            pod_spec.tolerations = tolerations

        affinity = self.scheduling.affinity()
        if affinity is not None:
            pod_spec.affinity = affinity

        if self.set_default_security_context:
            if pod_spec.security_context is None:
                pod_spec.security_context = client.V1PodSecurityContext()
            if pod_spec.security_context.run_as_user is None:
                pod_spec.security_context.run_as_user = DEFAULT_SECURITY_CONTEXT_USER

        logger.debug(
            f"Applied deployment policy to {deployment.metadata.name if deployment.metadata else '<unnamed>'}: "
            f"replicas={self.replicas}, priorityClass={self.scheduling.priority_class or '<none>'}"
        )
