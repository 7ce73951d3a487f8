"""Tests for owner references."""

import pytest
from kubernetes import client

from hcpautoscaler.config.models import ControlPlaneMetadata, HostedControlPlane
from hcpautoscaler.k8s.ownership import OwnerRef


@pytest.fixture
def hcp():
    """Create a hosted control plane descriptor."""
    return HostedControlPlane(metadata=ControlPlaneMetadata(name="guest", namespace="clusters-guest", uid="5a1b"))


@pytest.fixture
def owner(hcp):
    """Create the owner reference for the control plane."""
    return OwnerRef.from_hosted_control_plane(hcp)


class TestOwnerRef:
    """Tests for OwnerRef."""

    def test_from_hosted_control_plane(self, owner):
        """Test owner identity is taken from the control plane."""
        assert owner.api_version == "hypershift.openshift.io/v1alpha1"
        assert owner.kind == "HostedControlPlane"
        assert owner.name == "guest"
        assert owner.uid == "5a1b"

    def test_reference_is_controller(self, owner):
        """Test the reference marks the owner as controller."""
        ref = owner.reference()
        assert ref.controller is True
        assert ref.block_owner_deletion is True

    def test_apply_to_object(self, owner):
        """Test stamping an object."""
        role = client.V1Role(metadata=client.V1ObjectMeta(name="cluster-autoscaler"))

        owner.apply_to(role)

        assert role.metadata.owner_references == [owner.reference()]

    def test_apply_to_object_without_metadata(self, owner):
        """Test stamping an object that has no metadata yet."""
        role = client.V1Role()

        owner.apply_to(role)

        assert role.metadata is not None
        assert len(role.metadata.owner_references) == 1

    def test_apply_overwrites_existing_owners(self, owner):
        """Test that previously recorded owners are replaced."""
        stale = client.V1OwnerReference(api_version="v1", kind="ConfigMap", name="old", uid="0000")
        role = client.V1Role(metadata=client.V1ObjectMeta(name="cluster-autoscaler", owner_references=[stale]))

        owner.apply_to(role)

        assert role.metadata.owner_references == [owner.reference()]

    def test_apply_twice_is_idempotent(self, owner):
        """Test that reapplying yields the same reference set."""
        deployment = client.V1Deployment(metadata=client.V1ObjectMeta(name="cluster-autoscaler"))

        owner.apply_to(deployment)
        first = deployment.metadata.owner_references
        owner.apply_to(deployment)

        assert deployment.metadata.owner_references == first
        assert len(deployment.metadata.owner_references) == 1

    def test_apply_keeps_other_metadata(self, owner):
        """Test that stamping leaves name and labels alone."""
        deployment = client.V1Deployment(
            metadata=client.V1ObjectMeta(name="cluster-autoscaler", namespace="clusters-guest", labels={"a": "b"}),
        )

        owner.apply_to(deployment)

        assert deployment.metadata.name == "cluster-autoscaler"
        assert deployment.metadata.namespace == "clusters-guest"
        assert deployment.metadata.labels == {"a": "b"}
