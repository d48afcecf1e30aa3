"""
Access Request

Framework-neutral view of the HTTP request the pipeline works on.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class AccessRequest:
    """
    Request data the access pipeline needs.

    Attributes:
        token: Raw token argument, None if the request carries none
        path: Request path, used for events and logs
        remote_addr: Client address, if known
        http_request: The framework request object, handed untouched to the
            security context provider
    """
    token: Optional[str]
    path: str = "/"
    remote_addr: Optional[str] = None
    http_request: Any = None
