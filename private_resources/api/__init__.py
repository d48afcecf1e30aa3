"""
HTTP Integration

Flask hooks exposing the access pipeline.
"""

from .protected_resource_filter import register_protected_resource_filter

__all__ = ["register_protected_resource_filter"]
