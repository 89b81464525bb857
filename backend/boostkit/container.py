"""Service container for clean dependency injection.

A container is built once per request / CLI invocation and passed down by
reference.  It is *not* shared between concurrent requests.
"""

import logging
from dataclasses import dataclass
from typing import Any
from typing import Callable
from typing import Dict
from typing import List

from boostkit.errors import ServiceNotFoundError

logger = logging.getLogger(__name__)

Resolver = Callable[["Container"], Any]


@dataclass
class _Binding:
    resolver: Any
    singleton: bool


class Container:
    """Stores factories keyed by name and resolves them lazily.

    Factories receive the container itself so they can resolve their own
    dependencies.  Registering a non-callable value binds that value directly.
    """

    def __init__(self):
        self._services: Dict[str, _Binding] = {}
        self._instances: Dict[str, Any] = {}

    def register(self, key: str, resolver: Any, singleton: bool = True) -> None:
        """Register a factory (or ready instance) under *key*.

        Re-registering overwrites the previous binding, e.g. to swap in a test
        double.  A cached singleton for the key is dropped with it.
        """
        self._services[key] = _Binding(resolver=resolver, singleton=singleton)
        self._instances.pop(key, None)
        logger.debug("Registered service %s (singleton=%s)", key, singleton)

    def resolve(self, key: str) -> Any:
        """Return the service for *key*, building it on first use for singletons.

        Raises:
            ServiceNotFoundError: If *key* was never registered
        """
        binding = self._binding(key)

        if binding.singleton and key in self._instances:
            return self._instances[key]

        if not callable(binding.resolver):
            return binding.resolver

        instance = binding.resolver(self)

        if binding.singleton:
            self._instances[key] = instance
            logger.debug("Built singleton %s", key)

        return instance

    def has(self, key: str) -> bool:
        return key in self._services

    def instance(self, key: str, value: Any) -> None:
        """Bind *value* as the singleton for *key* without any factory call."""
        self.register(key, value, singleton=True)
        self._instances[key] = value

    def make(self, key: str) -> Any:
        """Build a fresh service, bypassing the singleton cache entirely.

        Raises:
            ServiceNotFoundError: If *key* was never registered
        """
        binding = self._binding(key)

        if not callable(binding.resolver):
            return binding.resolver

        return binding.resolver(self)

    def keys(self) -> List[str]:
        return list(self._services)

    def _binding(self, key: str) -> _Binding:
        try:
            return self._services[key]
        except KeyError:
            raise ServiceNotFoundError(key) from None
