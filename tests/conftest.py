"""
Shared pytest fixtures and configuration for the private-resources test suite.

This module provides:
- Hypothesis configuration for property-based testing
- A sharded storage root with one stored resource
- Pipeline collaborators wired the way the application factory wires them
"""

from typing import List

import pytest
from hypothesis import HealthCheck, Phase, settings

from private_resources.application.access_pipeline import AccessPipeline
from private_resources.application.delivery_dispatcher import DeliveryDispatcher
from private_resources.application.event_publisher import EventPublisher
from private_resources.application.strategy_registry import StrategyRegistry
from private_resources.domain.access.clock import FixedClock
from private_resources.domain.access.guards import ContextBindingGuard, ExpirationGuard
from private_resources.domain.events import DomainEvent
from private_resources.domain.resources.locator import ResourceLocator
from private_resources.domain.tokens.authenticator import TokenAuthenticator
from private_resources.domain.tokens.codec import TokenCodec
from private_resources.infrastructure.in_memory_metadata_repository import (
    InMemoryResourceMetadataRepository,
)
from private_resources.infrastructure.security_context import StaticContextProvider

from tests.fixtures import SAMPLE_IDENTIFIER, TEST_SECRET, create_metadata, store_file
from tests.fixtures.doubles import (
    CURRENT_CONTEXT_HASH,
    NOW,
    SAMPLE_CONTENT,
    FakeResponse,
    RecordingStrategy,
)

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.load_profile("default")

# =============================================================================
# Storage Fixtures
# =============================================================================

@pytest.fixture
def storage_root(tmp_path):
    """Provide an empty storage root."""
    root = tmp_path / "resources"
    root.mkdir()
    return root


@pytest.fixture
def stored_resource(storage_root):
    """Store SAMPLE_CONTENT under SAMPLE_IDENTIFIER and return its metadata."""
    store_file(storage_root, SAMPLE_IDENTIFIER, SAMPLE_CONTENT)
    return create_metadata(SAMPLE_IDENTIFIER, file_size=len(SAMPLE_CONTENT))


@pytest.fixture
def metadata_repository(stored_resource):
    """Provide an in-memory metadata repository knowing the stored resource."""
    return InMemoryResourceMetadataRepository([stored_resource])


# =============================================================================
# Pipeline Fixtures
# =============================================================================

@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def event_publisher():
    return EventPublisher()


@pytest.fixture
def recorded_events(event_publisher) -> List[DomainEvent]:
    """Collect every event published during the test."""
    events: List[DomainEvent] = []
    event_publisher.subscribe_all(events.append)
    return events


@pytest.fixture
def recording_strategy():
    return RecordingStrategy()


@pytest.fixture
def strategy_registry(recording_strategy):
    registry = StrategyRegistry()
    registry.register_singleton("recording", recording_strategy)
    return registry


@pytest.fixture
def make_pipeline(storage_root, metadata_repository, clock, event_publisher, strategy_registry):
    """Factory building an AccessPipeline; keyword arguments override collaborators."""

    def _make(serve_strategy="recording", secret=TEST_SECRET, context_hash=CURRENT_CONTEXT_HASH):
        return AccessPipeline(
            authenticator=TokenAuthenticator(secret),
            codec=TokenCodec(),
            expiration_guard=ExpirationGuard(clock),
            binding_guard=ContextBindingGuard(event_publisher),
            locator=ResourceLocator(storage_root, metadata_repository),
            dispatcher=DeliveryDispatcher(strategy_registry),
            context_provider=StaticContextProvider(context_hash),
            event_publisher=event_publisher,
            serve_strategy=serve_strategy,
        )

    return _make


@pytest.fixture
def pipeline(make_pipeline):
    return make_pipeline()


@pytest.fixture
def fake_response():
    return FakeResponse()
