"""
Application Factory

Creates and configures a Flask application that serves protected resources.
Collaborators can be passed in to override the defaults built from the
configuration, which keeps the factory usable from tests.
"""

import logging
import os
import secrets
from typing import Optional

from flask import Flask, jsonify

from private_resources.api.protected_resource_filter import register_protected_resource_filter
from private_resources.application.access_pipeline import AccessPipeline
from private_resources.application.delivery_dispatcher import DeliveryDispatcher
from private_resources.application.event_publisher import EventPublisher
from private_resources.application.strategy_registry import StrategyRegistry
from private_resources.config.settings import ProtectedResourceConfig
from private_resources.domain.access.clock import Clock, SystemClock
from private_resources.domain.access.guards import ContextBindingGuard, ExpirationGuard
from private_resources.domain.resources.locator import ResourceLocator
from private_resources.domain.resources.repositories import ResourceMetadataRepository
from private_resources.domain.tokens.authenticator import TokenAuthenticator
from private_resources.domain.tokens.codec import TokenCodec
from private_resources.infrastructure.event_handlers import LoggingEventHandler
from private_resources.infrastructure.in_memory_metadata_repository import (
    InMemoryResourceMetadataRepository,
)
from private_resources.infrastructure.security_context import (
    FlaskSessionContextProvider,
    SecurityContextProvider,
)
from private_resources.infrastructure.serve_strategies import register_default_strategies

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[ProtectedResourceConfig] = None,
    metadata_repository: Optional[ResourceMetadataRepository] = None,
    context_provider: Optional[SecurityContextProvider] = None,
    clock: Optional[Clock] = None,
    event_publisher: Optional[EventPublisher] = None,
    registry: Optional[StrategyRegistry] = None,
    app: Optional[Flask] = None,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Pipeline configuration, loaded from the environment if None
        metadata_repository: Metadata lookup, built from `config.metadata_backend` if None
        context_provider: Security context fingerprint provider, Flask session based if None
        clock: Time source, system clock if None
        event_publisher: Publisher for access events, a new one if None
        registry: Strategy registry, one with the built-in strategies if None
        app: Existing Flask application to install the filter on

    Returns:
        Configured Flask application

    Raises:
        UnconfiguredStrategyError: If no serve strategy is configured
    """
    if config is None:
        config = ProtectedResourceConfig.from_env()
    config.validate()

    if app is None:
        app = Flask(__name__)
        app.secret_key = os.getenv("FLASK_SECRET_KEY")
        if not app.secret_key:
            logger.warning(
                "FLASK_SECRET_KEY not set, sessions will not survive a restart"
            )
            app.secret_key = secrets.token_hex(32)

    if metadata_repository is None:
        metadata_repository = _create_metadata_repository(config)
    if event_publisher is None:
        event_publisher = EventPublisher()
    if registry is None:
        registry = StrategyRegistry(config.strategy_options())
        register_default_strategies(registry, config.base_path, config.x_accel_location)

    LoggingEventHandler(logging.getLogger("private_resources.events")).subscribe_to(
        event_publisher
    )

    pipeline = AccessPipeline(
        authenticator=TokenAuthenticator(config.secret_key, config.hmac_algorithm),
        codec=TokenCodec(),
        expiration_guard=ExpirationGuard(clock or SystemClock()),
        binding_guard=ContextBindingGuard(event_publisher),
        locator=ResourceLocator(config.base_path, metadata_repository),
        dispatcher=DeliveryDispatcher(registry),
        context_provider=context_provider or FlaskSessionContextProvider(),
        event_publisher=event_publisher,
        serve_strategy=config.serve_strategy,
    )

    register_protected_resource_filter(
        app,
        pipeline,
        token_argument=config.token_argument,
        uniform_denial=config.uniform_denial,
    )
    app.event_publisher = event_publisher
    app.metadata_repository = metadata_repository

    _register_health_endpoint(app, config, metadata_repository)

    logger.info(
        f"Protected resources enabled: base_path={config.base_path}, "
        f"strategy={config.serve_strategy}, metadata={config.metadata_backend}"
    )
    return app


def _create_metadata_repository(config: ProtectedResourceConfig) -> ResourceMetadataRepository:
    """
    Create the metadata repository selected by the configuration.

    Args:
        config: Pipeline configuration
    """
    if config.metadata_backend == "redis":
        from private_resources.config.redis_config import RedisConfig
        from private_resources.infrastructure.redis_metadata_repository import (
            RedisResourceMetadataRepository,
        )

        return RedisResourceMetadataRepository(RedisConfig.from_env().create_store())

    return InMemoryResourceMetadataRepository()


def _get_health_status(
    config: ProtectedResourceConfig, metadata_repository: ResourceMetadataRepository
) -> tuple[dict, int]:
    """
    Get health status of the storage root and the metadata store.

    Returns:
        Tuple of (health_status_dict, http_status_code)
    """
    health_status = {
        "status": "ok",
        "storage": "unknown",
        "metadata": config.metadata_backend,
        "serve_strategy": config.serve_strategy,
    }

    if os.path.isdir(config.base_path) and os.access(config.base_path, os.R_OK):
        health_status["storage"] = "available"
    else:
        health_status["storage"] = "unavailable"
        health_status["status"] = "degraded"

    if not metadata_repository.is_available():
        health_status["metadata"] = f"{config.metadata_backend} (unavailable)"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code


def _register_health_endpoint(
    app: Flask, config: ProtectedResourceConfig, metadata_repository: ResourceMetadataRepository
) -> None:
    """
    Register health check endpoint.

    Args:
        app: Flask application
    """

    @app.route("/health", methods=["GET"])
    def health():
        """
        Health check endpoint.
        Returns overall health status of the storage root and metadata store.
        """
        health_status, status_code = _get_health_status(config, metadata_repository)
        return jsonify(health_status), status_code
