"""Utilities for the autoscaler renderer."""

from hcpautoscaler.utils.logger import setup_logging

__all__ = [
    "setup_logging",
]
