"""
Application Layer

Orchestration of the protected resource access pipeline.
"""

from .access_pipeline import AccessOutcome, AccessPipeline, PipelineState
from .delivery_dispatcher import DeliveryDispatcher, content_disposition
from .event_publisher import EventPublisher
from .strategy_registry import StrategyRegistry

__all__ = [
    "AccessOutcome",
    "AccessPipeline",
    "DeliveryDispatcher",
    "EventPublisher",
    "PipelineState",
    "StrategyRegistry",
    "content_disposition",
]
