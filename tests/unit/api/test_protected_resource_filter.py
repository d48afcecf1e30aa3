"""
Unit Tests for the Protected Resource Filter

Tests the before_request hook against a bare Flask application.
"""

import pytest
from flask import Flask

from private_resources.api.protected_resource_filter import register_protected_resource_filter

from tests.fixtures import SAMPLE_IDENTIFIER, create_token, flip_character


@pytest.fixture
def app(pipeline):
    app = Flask(__name__)

    @app.route("/page")
    def page():
        return "regular page"

    register_protected_resource_filter(app, pipeline)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


class TestProtectedResourceFilter:
    def test_requests_without_token_reach_views(self, client, recording_strategy):
        response = client.get("/page")

        assert response.status_code == 200
        assert response.get_data(as_text=True) == "regular page"
        assert recording_strategy.calls == []

    def test_valid_token_short_circuits_the_view(self, client, recording_strategy):
        response = client.get("/page", query_string={"__protectedResource": create_token(SAMPLE_IDENTIFIER)})

        assert response.status_code == 200
        assert response.get_data(as_text=True) == ""
        assert response.headers["Content-Disposition"] == 'attachment;filename="report.pdf"'
        assert len(recording_strategy.calls) == 1

    def test_token_on_unrouted_path_is_served(self, client):
        response = client.get(
            "/anything/at/all", query_string={"__protectedResource": create_token(SAMPLE_IDENTIFIER)}
        )
        assert response.status_code == 200
        assert response.headers["Content-Type"] == "application/pdf"

    def test_token_in_form_body(self, client):
        response = client.post("/page", data={"__protectedResource": create_token(SAMPLE_IDENTIFIER)})
        assert response.status_code == 200
        assert response.headers["Content-Type"] == "application/pdf"

    def test_denied_request_renders_json_error(self, client, recording_strategy):
        token = create_token(SAMPLE_IDENTIFIER)
        response = client.get("/page", query_string={"__protectedResource": flip_character(token, len(token) - 1)})

        assert response.status_code == 403
        assert response.get_json()["error"] == "invalid_signature"
        assert response.get_json()["code"] == 1421241393
        assert "Content-Disposition" not in response.headers
        assert recording_strategy.calls == []

    def test_custom_argument_and_uniform_denial(self, pipeline):
        app = Flask(__name__)
        register_protected_resource_filter(app, pipeline, token_argument="t", uniform_denial=True)
        client = app.test_client()

        response = client.get("/", query_string={"t": "not-a-token"})

        assert response.status_code == 403
        assert response.get_json()["error"] == "access_denied"
        assert client.get("/", query_string={"__protectedResource": "x"}).status_code == 404

    def test_pipeline_is_stored_on_the_app(self, app, pipeline):
        assert app.extensions["private_resources"] is pipeline

    def test_forwarded_client_address_is_reported(self, client, recorded_events):
        client.get(
            "/page",
            query_string={"__protectedResource": create_token(SAMPLE_IDENTIFIER)},
            headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
        )

        assert recorded_events[-1].remote_addr == "203.0.113.7"
