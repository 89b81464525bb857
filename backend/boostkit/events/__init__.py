"""Hook bus package."""

from boostkit.events.hook_bus import EventType
from boostkit.events.hook_bus import HookBus

__all__ = ["EventType", "HookBus"]
