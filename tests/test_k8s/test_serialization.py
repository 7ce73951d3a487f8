"""Tests for manifest serialization."""

import yaml
from kubernetes import client

from hcpautoscaler.k8s import manifests
from hcpautoscaler.k8s.serialization import dump_all, to_dict, to_yaml


class TestSerialization:
    """Tests for to_dict, to_yaml and dump_all."""

    def test_to_dict_uses_api_field_names(self):
        """Test keys are camelCase and unset fields are omitted."""
        binding = manifests.autoscaler_role_binding("clusters-guest")

        data = to_dict(binding)

        assert data["apiVersion"] == "rbac.authorization.k8s.io/v1"
        assert data["kind"] == "RoleBinding"
        assert data["metadata"] == {"name": "cluster-autoscaler", "namespace": "clusters-guest"}
        assert data["roleRef"] == {"apiGroup": "rbac.authorization.k8s.io", "kind": "Role", "name": ""}
        assert "subjects" not in data

    def test_to_yaml_round_trips(self):
        """Test YAML output parses back to the same data."""
        role = manifests.autoscaler_role("clusters-guest")
        role.rules = [client.V1PolicyRule(api_groups=[""], resources=["pods"], verbs=["get"])]

        assert yaml.safe_load(to_yaml(role)) == to_dict(role)

    def test_dump_all(self):
        """Test several objects become several documents in order."""
        objects = [
            manifests.autoscaler_role("clusters-guest"),
            manifests.autoscaler_deployment("clusters-guest"),
        ]

        documents = list(yaml.safe_load_all(dump_all(objects)))

        assert [d["kind"] for d in documents] == ["Role", "Deployment"]

    def test_output_is_stable(self):
        """Test serializing the same object twice yields identical text."""
        deployment = manifests.autoscaler_deployment("clusters-guest")
        assert to_yaml(deployment) == to_yaml(deployment)
