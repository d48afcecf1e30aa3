"""
Domain Events

Immutable records of what happened while serving a protected resource.
Events decouple side effects (logging, auditing) from the access pipeline.
"""

from abc import ABC
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Attributes:
        aggregate_id: Identifier of the resource the event is about (SHA-1 hex)
        occurred_at: Timestamp when the event occurred
    """
    aggregate_id: str
    occurred_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary for serialization.

        Returns:
            Dictionary representation of the event
        """
        return {
            "event_type": self.__class__.__name__,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
        }


@dataclass(frozen=True)
class ResourceServedEvent(DomainEvent):
    """
    Event emitted after a protected resource has been handed to a serve strategy.

    Attributes:
        aggregate_id: Resource identifier
        occurred_at: When the resource was served
        filename: Original filename of the resource
        media_type: Media type sent as Content-Type
        file_size: Size in bytes sent as Content-Length
        request_path: Path of the HTTP request
        remote_addr: Client address, if known
    """
    filename: str
    media_type: str
    file_size: int
    request_path: str
    remote_addr: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        base_dict = super().to_dict()
        base_dict.update({
            "filename": self.filename,
            "media_type": self.media_type,
            "file_size": self.file_size,
            "request_path": self.request_path,
            "remote_addr": self.remote_addr,
        })
        return base_dict


@dataclass(frozen=True)
class SecurityContextMismatchEvent(DomainEvent):
    """
    Event emitted when a token bound to a security context is used from another one.

    Attributes:
        aggregate_id: Resource identifier
        occurred_at: When the mismatch was detected
        token_context_hash: Fingerprint stored in the token
        current_context_hash: Fingerprint of the current request
        request_path: Path of the HTTP request
        remote_addr: Client address, if known
    """
    token_context_hash: str
    current_context_hash: Optional[str]
    request_path: str
    remote_addr: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        base_dict = super().to_dict()
        base_dict.update({
            "token_context_hash": self.token_context_hash,
            "current_context_hash": self.current_context_hash,
            "request_path": self.request_path,
            "remote_addr": self.remote_addr,
        })
        return base_dict
