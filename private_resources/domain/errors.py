"""
Error Handling Module

Defines the access errors raised by the protected resource pipeline and the
user-facing messages attached to each error category.
Domain exceptions are pure and have no external dependencies.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    INVALID_SIGNATURE = "invalid_signature"
    MALFORMED_PAYLOAD = "malformed_payload"
    TOKEN_EXPIRED = "token_expired"
    CONTEXT_MISMATCH = "context_mismatch"
    RESOURCE_NOT_FOUND = "resource_not_found"
    UNCONFIGURED_STRATEGY = "unconfigured_strategy"
    UNKNOWN_STRATEGY = "unknown_strategy"
    ACCESS_DENIED = "access_denied"


# User-friendly error messages with actionable guidance
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.INVALID_SIGNATURE: {
        "title": "Invalid Link",
        "message": "The access link is invalid or has been modified.",
        "action": "Request a new link from the page that provided it.",
    },
    ErrorCategory.MALFORMED_PAYLOAD: {
        "title": "Invalid Link",
        "message": "The access link could not be read.",
        "action": "Request a new link from the page that provided it.",
    },
    ErrorCategory.TOKEN_EXPIRED: {
        "title": "Link Expired",
        "message": "The access link has expired.",
        "action": "Reload the page that provided the link to get a fresh one.",
    },
    ErrorCategory.CONTEXT_MISMATCH: {
        "title": "Access Denied",
        "message": "The access link was issued for a different session.",
        "action": "Log in with the account the link was created for.",
    },
    ErrorCategory.RESOURCE_NOT_FOUND: {
        "title": "Resource Not Found",
        "message": "The requested resource could not be found.",
        "action": "The file may have been removed. Contact the owner of the link.",
    },
    ErrorCategory.UNCONFIGURED_STRATEGY: {
        "title": "Server Misconfiguration",
        "message": "The server is not configured to deliver protected resources.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
    ErrorCategory.UNKNOWN_STRATEGY: {
        "title": "Server Misconfiguration",
        "message": "The server is not configured to deliver protected resources.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
    ErrorCategory.ACCESS_DENIED: {
        "title": "Access Denied",
        "message": "You are not allowed to access this resource.",
        "action": "Request a new link from the page that provided it.",
    },
}


class NotFoundReason(Enum):
    """Internal reason for a ResourceNotFoundError, used for diagnostics only."""

    METADATA = "metadata"
    FILE = "file"


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Domain exceptions can optionally wrap original errors for context.
    """

    def __init__(self, message: str, original_error: Exception = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.original_error = original_error


class ProtectedResourceError(DomainError):
    """
    Base class for every terminal failure of the access pipeline.

    The technical message is meant for logs. It may contain the resource
    identifier or the resolved path, but never the secret or the raw token.
    Use `title`/`message`/`action` for anything returned to the client.
    """

    category: ErrorCategory = ErrorCategory.ACCESS_DENIED
    code: int = 0
    http_status_code: int = 403

    def __init__(
        self,
        technical_message: str,
        original_error: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(technical_message, original_error)
        self.technical_message = technical_message
        self.context = context or {}

        error_info = ERROR_MESSAGES[self.category]
        self.title = error_info["title"]
        self.message = error_info["message"]
        self.action = error_info["action"]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        return {
            "error": self.category.value,
            "code": self.code,
            "title": self.title,
            "message": self.message,
            "action": self.action,
        }


class AccessDeniedError(ProtectedResourceError):
    """Base class for the 403-class failures."""

    http_status_code = 403


class InvalidSignatureError(AccessDeniedError):
    """Raised when the token HMAC is missing, malformed or does not match."""

    category = ErrorCategory.INVALID_SIGNATURE
    code = 1421241393


class MalformedPayloadError(AccessDeniedError):
    """Raised when an authenticated payload cannot be decoded or interpreted."""

    category = ErrorCategory.MALFORMED_PAYLOAD
    code = 1429696251


class TokenExpiredError(AccessDeniedError):
    """Raised when the token expiration date lies before the current time."""

    category = ErrorCategory.TOKEN_EXPIRED
    code = 1429697439


class ContextMismatchError(AccessDeniedError):
    """Raised when the token is bound to a different security context."""

    category = ErrorCategory.CONTEXT_MISMATCH
    code = 1429705633


class ResourceNotFoundError(ProtectedResourceError):
    """
    Raised when the referenced resource cannot be served.

    Missing metadata and a missing file render the same body and status so
    that clients cannot tell them apart. `reason` and the per-reason `code`
    keep the distinction for logs.
    """

    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status_code = 404
    public_code = 1429621743

    _CODES = {
        NotFoundReason.METADATA: 1429621743,
        NotFoundReason.FILE: 1429702284,
    }

    def __init__(
        self,
        technical_message: str,
        reason: NotFoundReason,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(technical_message, original_error, {"reason": reason.value})
        self.reason = reason
        self.code = self._CODES[reason]

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["code"] = self.public_code
        return data


class ConfigurationError(ProtectedResourceError):
    """Base class for server-side misconfiguration (500-class)."""

    http_status_code = 500


class UnconfiguredStrategyError(ConfigurationError):
    """Raised when no serve strategy is configured."""

    category = ErrorCategory.UNCONFIGURED_STRATEGY
    code = 1429704107


class UnknownStrategyError(ConfigurationError):
    """Raised when the configured serve strategy does not resolve to a FileServeStrategy."""

    category = ErrorCategory.UNKNOWN_STRATEGY
    code = 1429704284


def create_error_response(
    error: ProtectedResourceError,
    uniform_denial: bool = False,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for the HTTP layer.

    Note: Logging should be handled by the caller, not directly in this function.

    Args:
        error: The pipeline error to render
        uniform_denial: Collapse every 403-class error into a generic
            "access_denied" body so clients cannot learn why a token failed

    Returns:
        Tuple of (error_dict, status_code)
    """
    status_code = error.http_status_code
    if uniform_denial and isinstance(error, AccessDeniedError):
        info = ERROR_MESSAGES[ErrorCategory.ACCESS_DENIED]
        return {
            "error": ErrorCategory.ACCESS_DENIED.value,
            "title": info["title"],
            "message": info["message"],
            "action": info["action"],
        }, status_code

    return error.to_dict(), status_code
