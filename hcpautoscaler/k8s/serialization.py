"""Serialize kubernetes client models to plain data and YAML."""

import logging
from typing import Any, Iterable, Optional

import yaml
from kubernetes import client

logger = logging.getLogger(__name__)

_api_client: Optional[client.ApiClient] = None


def _get_api_client() -> client.ApiClient:
    """Return the shared ApiClient used only for its serializer."""
    global _api_client
    if _api_client is None:
        _api_client = client.ApiClient()
    return _api_client


def to_dict(obj: Any) -> dict:
    """
    Convert a kubernetes client model to the dict the API server would receive.

    Keys use the API's camelCase names and unset fields are omitted.

    Args:
        obj: Any kubernetes client model

    Returns:
        Plain dictionary ready for JSON or YAML encoding
    """
    return _get_api_client().sanitize_for_serialization(obj)


def to_yaml(obj: Any) -> str:
    """Render a single object as a YAML document."""
    return yaml.safe_dump(to_dict(obj), default_flow_style=False, sort_keys=False)


def dump_all(objects: Iterable[Any]) -> str:
    """Render several objects as one multi-document YAML stream."""
    documents = [to_dict(obj) for obj in objects]
    logger.debug(f"Serializing {len(documents)} manifest(s)")
    return yaml.safe_dump_all(documents, default_flow_style=False, sort_keys=False)
