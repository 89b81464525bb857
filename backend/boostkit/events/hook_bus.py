"""Synchronous hook bus used for feature wiring and extension points."""

import logging
from enum import Enum
from typing import Any
from typing import Callable
from typing import Dict
from typing import List
from typing import Union

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Standardized hook names fired by the core."""

    # Extension point: subscribers register extra features into the registry
    REGISTER_FEATURES = "register_features"

    # Fired once boot completed, payload carries the container
    LOADED = "loaded"

    # Feature lifecycle
    FEATURE_ENABLED = "feature_enabled"
    FEATURE_DISABLED = "feature_disabled"
    FEATURE_SETTINGS_UPDATED = "feature_settings_updated"


HookName = Union[EventType, str]
HookCallback = Callable[[Dict[str, Any]], Any]


def _key(hook: HookName) -> str:
    return hook.value if isinstance(hook, EventType) else hook


class HookBus:
    """Named hooks with ordered subscribers.

    Hooks are either an :class:`EventType` or any plain string (features wire
    themselves to names such as ``"checkout.before_payment"``).  Each container
    owns its own bus.
    """

    def __init__(self):
        """Initialize an empty hook bus."""
        self._subscribers: Dict[str, List[HookCallback]] = {}

    def publish(self, hook: HookName, data: Dict[str, Any]) -> None:
        """Call every subscriber of *hook* in subscription order.

        A failing subscriber is logged and skipped; the others still run.

        Args:
            hook: The hook being fired
            data: Payload passed to each subscriber
        """
        name = _key(hook)
        if name not in self._subscribers:
            return

        logger.debug(f"Publishing hook {name}")

        for callback in list(self._subscribers[name]):
            try:
                callback(data)
            except Exception as e:
                logger.error(f"Error in hook handler for {name}: {str(e)}")

    def subscribe(self, hook: HookName, callback: HookCallback) -> None:
        """Subscribe to a hook.

        Args:
            hook: The hook to subscribe to
            callback: Callable receiving the payload mapping
        """
        callbacks = self._subscribers.setdefault(_key(hook), [])
        if callback not in callbacks:
            callbacks.append(callback)
        logger.debug(f"Added subscriber for hook {_key(hook)}")

    def unsubscribe(self, hook: HookName, callback: HookCallback) -> None:
        """Unsubscribe from a hook.

        Args:
            hook: The hook to unsubscribe from
            callback: The callback function to remove
        """
        name = _key(hook)
        if name in self._subscribers:
            if callback in self._subscribers[name]:
                self._subscribers[name].remove(callback)
                logger.debug(f"Removed subscriber for hook {name}")

            # Clean up empty subscriber lists
            if not self._subscribers[name]:
                del self._subscribers[name]

    def has_subscribers(self, hook: HookName) -> bool:
        return bool(self._subscribers.get(_key(hook)))
