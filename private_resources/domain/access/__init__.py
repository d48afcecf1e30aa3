"""
Access Domain

Guards and request model of the protected resource access pipeline.
"""

from .clock import Clock, FixedClock, SystemClock
from .guards import EXPIRATION_FORMAT, ContextBindingGuard, ExpirationGuard, parse_expiration
from .request import AccessRequest

__all__ = [
    "AccessRequest",
    "Clock",
    "ContextBindingGuard",
    "EXPIRATION_FORMAT",
    "ExpirationGuard",
    "FixedClock",
    "SystemClock",
    "parse_expiration",
]
