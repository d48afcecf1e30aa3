"""
Protected Resource Filter

Flask request hook that checks every request for the protected resource
argument. Requests without it continue through normal routing. Requests with
it are answered by the access pipeline and never reach a view function.
"""

from typing import Optional

from flask import Flask, current_app, jsonify, request

from private_resources.application.access_pipeline import AccessPipeline
from private_resources.domain.access.request import AccessRequest
from private_resources.domain.errors import create_error_response
from private_resources.config.settings import DEFAULT_TOKEN_ARGUMENT


def register_protected_resource_filter(
    app: Flask,
    pipeline: AccessPipeline,
    token_argument: str = DEFAULT_TOKEN_ARGUMENT,
    uniform_denial: bool = False,
) -> None:
    """
    Install the access pipeline as a `before_request` hook.

    Args:
        app: Flask application
        pipeline: Configured access pipeline
        token_argument: Request argument carrying the token
        uniform_denial: Render every 403-class error identically
    """
    app.extensions["private_resources"] = pipeline

    @app.before_request
    def serve_protected_resource():
        token = request.values.get(token_argument)
        if token is None:
            return None

        access_request = AccessRequest(
            token=token,
            path=request.path,
            remote_addr=_extract_client_ip(),
            http_request=request._get_current_object(),
        )
        response = current_app.response_class()

        outcome = pipeline.handle(access_request, response)

        if outcome.failed:
            error = outcome.error
            current_app.logger.info(
                f"[PROTECTED_RESOURCE] Denied {request.path}: "
                f"{error.category.value} ({error.code}) at {outcome.state.value}"
            )
            body, status_code = create_error_response(error, uniform_denial)
            return jsonify(body), status_code

        current_app.logger.debug(
            f"[PROTECTED_RESOURCE] Served {outcome.resource.metadata.sha1[:8]} for {request.path}"
        )
        # Returning a response ends request processing here
        return outcome.response


def _extract_client_ip() -> Optional[str]:
    """
    Extract client IP from the current request.

    Checks X-Forwarded-For first (for proxy/load balancer), then falls back
    to remote_addr for direct connections.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.remote_addr
