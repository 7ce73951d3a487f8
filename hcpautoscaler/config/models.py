"""Pydantic models for autoscaler reconciliation inputs."""

import re
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from hcpautoscaler.config.defaults import DEFAULT_API_PORT, HOSTED_CONTROL_PLANE_API_VERSION

DURATION_PATTERN = r"^([0-9]+(\.[0-9]+)?(ms|s|m|h))+$"


class ClusterAutoscaling(BaseModel):
    """User-tunable cluster-autoscaler options.

    Every field is optional. A field that is not set suppresses its
    command-line flag so the autoscaler's own default applies.
    """

    max_nodes_total: Optional[int] = Field(
        default=None,
        ge=0,
        alias="maxNodesTotal",
        description="Maximum number of nodes in all node groups"
    )
    max_pod_grace_period: Optional[int] = Field(
        default=None,
        ge=0,
        alias="maxPodGracePeriod",
        description="Seconds to wait for graceful pod termination before scaling down a node"
    )
    max_node_provision_time: Optional[str] = Field(
        default=None,
        alias="maxNodeProvisionTime",
        description="Maximum time to wait for a node to be provisioned (e.g. '15m')"
    )
    pod_priority_threshold: Optional[int] = Field(
        default=None,
        alias="podPriorityThreshold",
        description="Pods below this priority are expendable and never trigger scale up"
    )

    @field_validator("max_node_provision_time")
    @classmethod
    def validate_duration(cls, v: Optional[str]) -> Optional[str]:
        """Validate the provision time is a Go-style duration string."""
        if v is None or v == "":
            return v
        if not re.match(DURATION_PATTERN, v):
            raise ValueError(
                f"Invalid duration '{v}'. Use values like '15m', '1h30m' or '90s'"
            )
        return v

    model_config = {"populate_by_name": True, "validate_assignment": True}


class ObjectReference(BaseModel):
    """Name (and optional namespace) of an existing Kubernetes object."""

    name: str = Field(description="Name of the object")
    namespace: Optional[str] = Field(
        default=None,
        description="Namespace of the object (defaults to the control plane namespace)"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate object name follows Kubernetes naming conventions."""
        if not v:
            raise ValueError("Object name cannot be empty")
        if len(v) > 253:
            raise ValueError("Object name cannot exceed 253 characters")
        return v


class ControlPlaneMetadata(BaseModel):
    """Object metadata of a HostedControlPlane."""

    name: str = Field(description="Name of the hosted control plane")
    namespace: str = Field(description="Namespace hosting the control plane components")
    uid: str = Field(default="", description="UID of the hosted control plane object")
    annotations: dict[str, str] = Field(default_factory=dict, description="Object annotations")

    @field_validator("name", "namespace")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate identity fields are present."""
        if not v:
            raise ValueError("Control plane name and namespace cannot be empty")
        return v


class ControlPlaneSpec(BaseModel):
    """The parts of a HostedControlPlane spec the autoscaler depends on."""

    release_image: str = Field(
        default="",
        alias="releaseImage",
        description="Release image the control plane runs"
    )
    api_port: Optional[int] = Field(
        default=None,
        ge=1,
        le=65535,
        alias="apiPort",
        description="Port the hosted kube-apiserver listens on"
    )

    model_config = {"populate_by_name": True}


class HostedControlPlane(BaseModel):
    """Control-plane descriptor that owns the autoscaler objects."""

    api_version: str = Field(
        default=HOSTED_CONTROL_PLANE_API_VERSION,
        alias="apiVersion",
        description="API version"
    )
    kind: Literal["HostedControlPlane"] = Field(
        default="HostedControlPlane",
        description="Kind of resource"
    )
    metadata: ControlPlaneMetadata = Field(description="Control plane metadata")
    spec: ControlPlaneSpec = Field(
        default_factory=ControlPlaneSpec,
        description="Control plane specification"
    )

    @property
    def api_port(self) -> int:
        """Port of the hosted kube-apiserver, falling back to the default."""
        if self.spec.api_port is None:
            return DEFAULT_API_PORT
        return self.spec.api_port

    model_config = {"populate_by_name": True}


class Images(BaseModel):
    """Container images used by the autoscaler deployment."""

    cluster_autoscaler: str = Field(
        alias="clusterAutoscaler",
        description="Image running the cluster-autoscaler binary"
    )
    availability_prober: str = Field(
        alias="availabilityProber",
        description="Image running the availability prober init container"
    )

    model_config = {"populate_by_name": True}


class ReconcileInputs(BaseModel):
    """Root document describing everything needed to render the autoscaler."""

    api_version: str = Field(
        default="autoscaler.hypershift.openshift.io/v1",
        alias="apiVersion",
        description="API version"
    )
    kind: Literal["AutoscalerInputs"] = Field(
        default="AutoscalerInputs",
        description="Kind of document"
    )
    hosted_control_plane: HostedControlPlane = Field(
        alias="hostedControlPlane",
        description="Owning control plane"
    )
    autoscaling: ClusterAutoscaling = Field(
        default_factory=ClusterAutoscaling,
        description="Autoscaler options"
    )
    service_account: ObjectReference = Field(
        alias="serviceAccount",
        description="Service account the autoscaler runs as"
    )
    kubeconfig_secret: ObjectReference = Field(
        alias="kubeconfigSecret",
        description="Secret holding the guest cluster kubeconfig under the 'value' key"
    )
    images: Images = Field(description="Container images")
    set_default_security_context: bool = Field(
        default=False,
        alias="setDefaultSecurityContext",
        description="Run the pod as the default non-root user"
    )

    model_config = {"populate_by_name": True}
