"""Tests for the deployment policy applier."""

import pytest
from kubernetes import client

from hcpautoscaler.config.models import ControlPlaneMetadata, ControlPlaneSpec, HostedControlPlane
from hcpautoscaler.k8s.deployment_config import DeploymentConfig, Scheduling


@pytest.fixture
def hcp():
    """Create a hosted control plane descriptor."""
    return HostedControlPlane(
        metadata=ControlPlaneMetadata(
            name="guest",
            namespace="clusters-guest",
            uid="5a1b",
            annotations={"hypershift.openshift.io/restart-date": "2022-01-01T00:00:00Z"},
        ),
        spec=ControlPlaneSpec(release_image="release:4.10"),
    )


@pytest.fixture
def deployment():
    """Create a deployment with a minimal pod template."""
    return client.V1Deployment(
        metadata=client.V1ObjectMeta(name="cluster-autoscaler", namespace="clusters-guest"),
        spec=client.V1DeploymentSpec(
            replicas=3,
            selector=client.V1LabelSelector(match_labels={"app": "cluster-autoscaler"}),
            template=client.V1PodTemplateSpec(
                metadata=client.V1ObjectMeta(labels={"app": "cluster-autoscaler"}),
                spec=client.V1PodSpec(
                    containers=[client.V1Container(name="cluster-autoscaler")],
                    tolerations=[client.V1Toleration(key="node-role.kubernetes.io/master", effect="NoSchedule")],
                ),
            ),
        ),
    )


class TestScheduling:
    """Tests for Scheduling."""

    def test_no_affinity_when_empty(self):
        """Test that nothing is produced without preferences."""
        assert Scheduling().affinity() is None


class TestDeploymentConfig:
    """Tests for DeploymentConfig."""

    def test_replicas(self, deployment):
        """Test the replica count is overwritten."""
        DeploymentConfig(replicas=1).apply_to(deployment)
        assert deployment.spec.replicas == 1

    def test_priority_class(self, deployment):
        """Test the priority class is set on the pod."""
        DeploymentConfig(scheduling=Scheduling(priority_class="hypershift-control-plane")).apply_to(deployment)
        assert deployment.spec.template.spec.priority_class_name == "hypershift-control-plane"

    def test_release_image_annotation(self, deployment):
        """Test the release image ends up as a pod annotation."""
        config = DeploymentConfig()
        config.set_release_image_annotation("release:4.10")
        config.apply_to(deployment)

        annotations = deployment.spec.template.metadata.annotations
        assert annotations["hypershift.openshift.io/release-image"] == "release:4.10"

    def test_restart_annotation(self, deployment, hcp):
        """Test the restart trigger is copied from the control plane."""
        config = DeploymentConfig()
        config.set_restart_annotation(hcp)
        config.apply_to(deployment)

        annotations = deployment.spec.template.metadata.annotations
        assert annotations["hypershift.openshift.io/restart-date"] == "2022-01-01T00:00:00Z"

    def test_no_restart_annotation_when_absent(self, deployment, hcp):
        """Test nothing is copied when the control plane was never restarted."""
        hcp.metadata.annotations = {}
        config = DeploymentConfig()
        config.set_restart_annotation(hcp)
        config.apply_to(deployment)

        assert deployment.spec.template.metadata.annotations is None

    def test_colocation(self, deployment, hcp):
        """Test colocation label and pod affinity."""
        config = DeploymentConfig()
        config.set_colocation(hcp)
        config.apply_to(deployment)

        template = deployment.spec.template
        assert template.metadata.labels["hypershift.openshift.io/hosted-control-plane"] == "clusters-guest"
        assert template.metadata.labels["app"] == "cluster-autoscaler"

        preferred = template.spec.affinity.pod_affinity.preferred_during_scheduling_ignored_during_execution
        assert len(preferred) == 1
        assert preferred[0].weight == 100
        term = preferred[0].pod_affinity_term
        assert term.topology_key == "kubernetes.io/hostname"
        assert term.label_selector.match_labels == {"hypershift.openshift.io/hosted-control-plane": "clusters-guest"}

    def test_colocation_leaves_selector_alone(self, deployment, hcp):
        """Test that added pod labels never leak into the selector."""
        config = DeploymentConfig()
        config.set_colocation(hcp)
        config.apply_to(deployment)

        assert deployment.spec.selector.match_labels == {"app": "cluster-autoscaler"}

    def test_control_plane_isolation(self, deployment, hcp):
        """Test tolerations and node affinity for dedicated nodes."""
        config = DeploymentConfig()
        config.set_control_plane_isolation(hcp)
        config.apply_to(deployment)

        pod_spec = deployment.spec.template.spec
        keys = [(t.key, t.value) for t in pod_spec.tolerations]
        assert keys == [
            ("node-role.kubernetes.io/master", None),
            ("hypershift.openshift.io/control-plane", "true"),
            ("hypershift.openshift.io/cluster", "clusters-guest"),
        ]

        preferred = pod_spec.affinity.node_affinity.preferred_during_scheduling_ignored_during_execution
        assert [p.weight for p in preferred] == [50, 100]
        assert preferred[1].preference.match_expressions[0].values == ["clusters-guest"]

    def test_apply_twice_is_idempotent(self, deployment, hcp):
        """Test repeated application does not duplicate tolerations."""
        config = DeploymentConfig()
        config.set_control_plane_isolation(hcp)
        config.set_colocation(hcp)

        config.apply_to(deployment)
        first = deployment.to_dict()
        config.apply_to(deployment)

        assert deployment.to_dict() == first
        assert len(deployment.spec.template.spec.tolerations) == 3

    def test_default_security_context(self, deployment):
        """Test the pod runs as the default user when requested."""
        DeploymentConfig(set_default_security_context=True).apply_to(deployment)
        assert deployment.spec.template.spec.security_context.run_as_user == 1001

    def test_default_security_context_keeps_explicit_user(self, deployment):
        """Test an explicit user is not overridden."""
        deployment.spec.template.spec.security_context = client.V1PodSecurityContext(run_as_user=2000)
        DeploymentConfig(set_default_security_context=True).apply_to(deployment)
        assert deployment.spec.template.spec.security_context.run_as_user == 2000

    def test_no_security_context_by_default(self, deployment):
        """Test no security context is added unless requested."""
        DeploymentConfig().apply_to(deployment)
        assert deployment.spec.template.spec.security_context is None

    def test_apply_to_empty_deployment(self):
        """Test applying to a deployment without a spec."""
        deployment = client.V1Deployment(metadata=client.V1ObjectMeta(name="cluster-autoscaler"))
        DeploymentConfig(replicas=1, scheduling=Scheduling(priority_class="p")).apply_to(deployment)

        assert deployment.spec.replicas == 1
        assert deployment.spec.template.spec.priority_class_name == "p"
