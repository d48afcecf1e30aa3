"""
Strategy Registry

Resolves serve strategy names to FileServeStrategy instances. Strategies are
registered under short names as singletons or factories; any other name is
treated as a dotted import path (`package.module:ClassName` or
`package.module.ClassName`).
"""

import importlib
import logging
import threading
from typing import Any, Callable, Dict

from private_resources.domain.delivery.strategy import FileServeStrategy
from private_resources.domain.errors import UnknownStrategyError

logger = logging.getLogger(__name__)

StrategyFactory = Callable[[], Any]


class StrategyRegistry:
    """
    Registry of serve strategies.

    Supports singleton (single instance) and factory (new instance on each
    resolution) registrations plus test overrides. Thread-safe for
    concurrent access.
    """

    def __init__(self, strategy_options: Dict[str, Any] = None):
        """
        Initialize the registry.

        Args:
            strategy_options: Keyword arguments passed to a `from_options()`
                classmethod when a strategy class is loaded by import path
        """
        self._singletons: Dict[str, Any] = {}
        self._factories: Dict[str, StrategyFactory] = {}
        self._overrides: Dict[str, Any] = {}
        self._strategy_options = dict(strategy_options or {})
        self._lock = threading.Lock()

    def register_singleton(self, name: str, strategy: Any) -> None:
        """
        Register a strategy instance shared across all resolutions.

        Example:
            registry.register_singleton("x_sendfile", XSendfileStrategy())
        """
        with self._lock:
            self._singletons[name] = strategy
        logger.debug(f"Registered singleton strategy: {name}")

    def register_factory(self, name: str, factory: StrategyFactory) -> None:
        """
        Register a factory called on every resolution.

        Example:
            registry.register_factory("readfile", ReadfileStrategy)
        """
        with self._lock:
            self._factories[name] = factory
        logger.debug(f"Registered strategy factory: {name}")

    def override(self, name: str, strategy: Any) -> None:
        """Override a registration (primarily for testing)."""
        with self._lock:
            self._overrides[name] = strategy

    def clear_overrides(self) -> None:
        with self._lock:
            self._overrides.clear()

    def is_registered(self, name: str) -> bool:
        with self._lock:
            return (
                name in self._overrides
                or name in self._singletons
                or name in self._factories
            )

    def names(self):
        """Names registered under singleton or factory."""
        with self._lock:
            return sorted(set(self._singletons) | set(self._factories))

    def resolve(self, name: str) -> FileServeStrategy:
        """
        Resolve a strategy name.

        Args:
            name: Registered name or dotted import path

        Returns:
            The strategy instance

        Raises:
            UnknownStrategyError: If the name cannot be resolved, or resolves
                to something that is not a FileServeStrategy
        """
        with self._lock:
            if name in self._overrides:
                strategy = self._overrides[name]
                factory = None
            elif name in self._singletons:
                strategy = self._singletons[name]
                factory = None
            else:
                strategy = None
                factory = self._factories.get(name)

        # Call factories outside the lock
        if strategy is None:
            if factory is not None:
                strategy = factory()
            else:
                strategy = self._load_by_import_path(name)

        if not isinstance(strategy, FileServeStrategy):
            raise UnknownStrategyError(
                f'The strategy "{name}" resolves to {type(strategy).__name__}, '
                f"which does not implement FileServeStrategy"
            )
        return strategy

    def _load_by_import_path(self, name: str) -> Any:
        module_name, attribute = _split_import_path(name)
        if not module_name:
            raise UnknownStrategyError(f'No strategy registered under "{name}"')

        try:
            module = importlib.import_module(module_name)
            target = getattr(module, attribute)
        except (ImportError, AttributeError) as e:
            raise UnknownStrategyError(f'Could not load strategy "{name}": {e}', e) from e

        if not isinstance(target, type):
            return target

        from_options = getattr(target, "from_options", None)
        try:
            if callable(from_options):
                return from_options(**self._strategy_options)
            return target()
        except TypeError as e:
            raise UnknownStrategyError(f'Could not instantiate strategy "{name}": {e}', e) from e


def _split_import_path(name: str):
    if ":" in name:
        module_name, _, attribute = name.partition(":")
        return module_name, attribute
    if "." in name:
        module_name, _, attribute = name.rpartition(".")
        return module_name, attribute
    return "", name
