"""Preconditions checked before a builder touches its object."""


class ReconcileConfigurationError(Exception):
    """Raised when a required identity input is missing or unnamed."""

    pass


def require_named(obj, what: str) -> str:
    """
    Return the name of a referenced object, failing if it has none.

    Args:
        obj: Kubernetes client model expected to carry ``metadata.name``
        what: Human-readable role of the object, used in the error

    Raises:
        ReconcileConfigurationError: If the object or its name is missing
    """
    if obj is None:
        raise ReconcileConfigurationError(f"{what} is required")
    if obj.metadata is None or not obj.metadata.name:
        raise ReconcileConfigurationError(f"{what} must have a name")
    return obj.metadata.name
