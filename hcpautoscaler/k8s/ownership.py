"""Owner references linking generated objects to their HostedControlPlane."""

import logging
from dataclasses import dataclass

from kubernetes import client

from hcpautoscaler.config.defaults import HOSTED_CONTROL_PLANE_API_VERSION, HOSTED_CONTROL_PLANE_KIND
from hcpautoscaler.config.models import HostedControlPlane

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OwnerRef:
    """A controller owner reference that can be stamped onto any object."""

    api_version: str
    kind: str
    name: str
    uid: str

    @classmethod
    def from_hosted_control_plane(cls, hcp: HostedControlPlane) -> "OwnerRef":
        """Build the owner reference for objects owned by a control plane."""
        return cls(
            api_version=HOSTED_CONTROL_PLANE_API_VERSION,
            kind=HOSTED_CONTROL_PLANE_KIND,
            name=hcp.metadata.name,
            uid=hcp.metadata.uid,
        )

    def reference(self) -> client.V1OwnerReference:
        """Return a fresh V1OwnerReference for this owner."""
        return client.V1OwnerReference(
            api_version=self.api_version,
            kind=self.kind,
            name=self.name,
            uid=self.uid,
            controller=True,
            block_owner_deletion=True,
        )

    def apply_to(self, obj) -> None:
        """
        Replace the owner references of a Kubernetes object with this owner.

        Any previously recorded owners are dropped, so applying twice leaves
        exactly one reference behind.

        Args:
            obj: Any kubernetes client model carrying ``metadata``
        """
        if obj.metadata is None:
            obj.metadata = client.V1ObjectMeta()
        obj.metadata.owner_references = [self.reference()]
        logger.debug(f"Set owner {self.kind}/{self.name} on {obj.metadata.name}")
