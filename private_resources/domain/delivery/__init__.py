"""
Delivery Domain

Contract for serving resolved files.
"""

from .strategy import DEFAULT_X_ACCEL_LOCATION, FileServeStrategy

__all__ = ["DEFAULT_X_ACCEL_LOCATION", "FileServeStrategy"]
