"""
Protected Resource Configuration

Environment-based configuration of the access pipeline.
Options can also be given as a mapping using the original option names
(`basePath`, `serveStrategy`).
"""

import hashlib
import logging
import os
import secrets
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from private_resources.domain.delivery.strategy import DEFAULT_X_ACCEL_LOCATION
from private_resources.domain.errors import UnconfiguredStrategyError
from private_resources.domain.tokens.authenticator import DEFAULT_HMAC_ALGORITHM

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_ARGUMENT = "__protectedResource"
DEFAULT_BASE_PATH = "/tmp/private-resources"

_TRUE_VALUES = ("1", "true", "yes", "on")

# camelCase option name -> dataclass field
_OPTION_ALIASES = {
    "basePath": "base_path",
    "serveStrategy": "serve_strategy",
    "secretKey": "secret_key",
    "hmacAlgorithm": "hmac_algorithm",
    "tokenArgument": "token_argument",
    "uniformDenial": "uniform_denial",
    "xAccelLocation": "x_accel_location",
    "metadataBackend": "metadata_backend",
}


@dataclass
class ProtectedResourceConfig:
    """
    Access pipeline configuration.

    Attributes:
        base_path: Storage root of the protected resources
        serve_strategy: Strategy name (readfile, x_sendfile, x_accel_redirect)
            or dotted import path of a FileServeStrategy class
        secret_key: HMAC secret shared with the token issuer
        hmac_algorithm: hashlib digest name
        token_argument: Request argument carrying the token
        uniform_denial: Render every 403-class error identically
        x_accel_location: nginx internal location mapped to base_path
        metadata_backend: "memory" or "redis"
    """

    base_path: str = DEFAULT_BASE_PATH
    serve_strategy: Optional[str] = None
    secret_key: str = field(default="", repr=False)
    hmac_algorithm: str = DEFAULT_HMAC_ALGORITHM
    token_argument: str = DEFAULT_TOKEN_ARGUMENT
    uniform_denial: bool = False
    x_accel_location: str = DEFAULT_X_ACCEL_LOCATION
    metadata_backend: str = "memory"

    def __post_init__(self):
        if not self.secret_key:
            logger.warning(
                "No SECRET_KEY configured; generated a random one. "
                "Tokens signed elsewhere will not verify."
            )
            self.secret_key = secrets.token_hex(32)

    @classmethod
    def from_env(cls) -> "ProtectedResourceConfig":
        """
        Load configuration from environment variables.

        Returns:
            ProtectedResourceConfig instance with loaded configuration
        """
        return cls(
            base_path=os.getenv("PROTECTED_RESOURCES_BASE_PATH", DEFAULT_BASE_PATH),
            serve_strategy=os.getenv("PROTECTED_RESOURCES_SERVE_STRATEGY") or None,
            secret_key=os.getenv("SECRET_KEY", ""),
            hmac_algorithm=os.getenv("PROTECTED_RESOURCES_HMAC_ALGORITHM", DEFAULT_HMAC_ALGORITHM),
            token_argument=os.getenv("PROTECTED_RESOURCES_TOKEN_ARGUMENT", DEFAULT_TOKEN_ARGUMENT),
            uniform_denial=os.getenv("PROTECTED_RESOURCES_UNIFORM_DENIAL", "false").lower() in _TRUE_VALUES,
            x_accel_location=os.getenv("PROTECTED_RESOURCES_X_ACCEL_LOCATION", DEFAULT_X_ACCEL_LOCATION),
            metadata_backend=os.getenv("METADATA_BACKEND", "memory").lower(),
        )

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "ProtectedResourceConfig":
        """
        Build configuration from a mapping.

        Accepts both camelCase option names and the dataclass field names.
        Unknown keys are ignored with a warning.
        """
        kwargs: Dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                logger.warning(f"Ignoring unknown protected resource option: {key}")
                continue
            kwargs[name] = value

        if isinstance(kwargs.get("uniform_denial"), str):
            kwargs["uniform_denial"] = kwargs["uniform_denial"].lower() in _TRUE_VALUES
        return cls(**kwargs)

    def validate(self) -> None:
        """
        Check the configuration before serving requests.

        Raises:
            UnconfiguredStrategyError: If no serve strategy is configured
            ValueError: If another option is invalid
        """
        if not self.serve_strategy:
            raise UnconfiguredStrategyError('No "serveStrategy" configured')
        if not self.base_path:
            raise ValueError("base_path cannot be empty")
        if self.hmac_algorithm not in hashlib.algorithms_available:
            raise ValueError(f"Unsupported HMAC algorithm: {self.hmac_algorithm}")
        if not self.token_argument:
            raise ValueError("token_argument cannot be empty")
        if self.metadata_backend not in ("memory", "redis"):
            raise ValueError(f"Unknown metadata backend: {self.metadata_backend}")

    def strategy_options(self) -> Dict[str, Any]:
        """Keyword arguments for strategies loaded by import path."""
        return {
            "base_path": self.base_path,
            "x_accel_location": self.x_accel_location,
        }
