"""Process-wide defaults shared by the control-plane components."""

# Leader election timings recommended for control-plane components.
RECOMMENDED_LEASE_DURATION = "137s"
RECOMMENDED_RENEW_DEADLINE = "107s"
RECOMMENDED_RETRY_PERIOD = "26s"

DEFAULT_PRIORITY_CLASS = "hypershift-control-plane"
DEFAULT_SECURITY_CONTEXT_USER = 1001
DEFAULT_API_PORT = 6443

HOSTED_CONTROL_PLANE_API_VERSION = "hypershift.openshift.io/v1alpha1"
HOSTED_CONTROL_PLANE_KIND = "HostedControlPlane"

# Well-known label and annotation keys
CONTROL_PLANE_COMPONENT_LABEL = "hypershift.openshift.io/control-plane-component"
COLOCATION_LABEL = "hypershift.openshift.io/hosted-control-plane"
CONTROL_PLANE_NODE_LABEL = "hypershift.openshift.io/control-plane"
CLUSTER_NODE_LABEL = "hypershift.openshift.io/cluster"
RELEASE_IMAGE_ANNOTATION = "hypershift.openshift.io/release-image"
RESTART_DATE_ANNOTATION = "hypershift.openshift.io/restart-date"
