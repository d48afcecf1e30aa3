"""
Event Handlers

Infrastructure subscribers for access events.
"""

from .logging_handler import LoggingEventHandler

__all__ = ["LoggingEventHandler"]
