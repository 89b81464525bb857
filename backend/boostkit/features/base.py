"""Feature contract and the shared settings/lifecycle implementation.

A feature is an independently toggleable unit with its own settings mapping,
persisted in the option store under ``<option_prefix>feature_<id>``.

Enable/disable/update are plain read-modify-write cycles against the option
store.  Two concurrent requests toggling the same feature race and the last
write wins; there is no compare-and-swap.
"""

import logging
from abc import ABC
from abc import abstractmethod
from typing import Any
from typing import Dict
from typing import Mapping
from typing import Optional
from typing import Protocol
from typing import runtime_checkable

from boostkit.container import Container
from boostkit.events import EventType
from boostkit.events import HookBus
from boostkit.features.categories import FeatureCategory
from boostkit.options import OptionStore

logger = logging.getLogger(__name__)

DEFAULT_OPTION_PREFIX = "boostkit_"


@runtime_checkable
class FeatureInterface(Protocol):
    """What the registry and the boot sequence rely on."""

    def init(self) -> None: ...

    def get_id(self) -> str: ...

    def get_name(self) -> str: ...

    def get_description(self) -> str: ...

    def get_category(self) -> str: ...

    def get_icon(self) -> str: ...

    def get_priority(self) -> int: ...

    def is_enabled(self) -> bool: ...

    def enable(self) -> bool: ...

    def disable(self) -> bool: ...

    def get_settings(self) -> Dict[str, Any]: ...

    def update_settings(self, settings: Mapping[str, Any]) -> bool: ...

    def to_dict(self) -> Dict[str, Any]: ...


class BaseFeature(ABC):
    """Base class carrying metadata, settings and enable/disable handling.

    Subclasses set the class attributes and implement :meth:`init`.
    """

    id: str = ""
    name: str = ""
    description: str = ""
    category: str = FeatureCategory.OTHERS
    icon: str = ""
    priority: int = 10

    # EntityRepository subclass; registered as ``repository.<id>``
    repository_class: Optional[type] = None

    def __init__(self, container: Container):
        self.container = container
        prefix = DEFAULT_OPTION_PREFIX
        if container.has("app.settings"):
            prefix = container.resolve("app.settings").option_prefix
        self.option_name = f"{prefix}feature_{self.id}"

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def get_id(self) -> str:
        return self.id

    def get_name(self) -> str:
        return self.name

    def get_description(self) -> str:
        return self.description

    def get_category(self) -> str:
        return self.category

    def get_icon(self) -> str:
        return self.icon

    def get_priority(self) -> int:
        return self.priority

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    @property
    def options(self) -> OptionStore:
        return self.container.resolve("options")

    @property
    def hooks(self) -> Optional[HookBus]:
        return self.container.resolve("hooks") if self.container.has("hooks") else None

    def get_repository(self):
        """Return this feature's entity repository from the container."""
        return self.container.resolve(f"repository.{self.id}")

    def _publish(self, event: EventType) -> None:
        if self.hooks is not None:
            self.hooks.publish(event, {"feature": self})

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_default_settings(self) -> Dict[str, Any]:
        return {"enabled": False}

    def get_settings(self) -> Dict[str, Any]:
        """Defaults overlaid (top level only) with the persisted overrides."""
        stored = self.options.get(self.option_name, {})
        if not isinstance(stored, Mapping):
            stored = {}
        return {**self.get_default_settings(), **stored}

    def save_settings(self, settings: Mapping[str, Any]) -> bool:
        saved = self.options.set(self.option_name, dict(settings))
        if not saved:
            logger.error("Could not persist settings for feature %s", self.id)
        return saved

    def update_settings(self, settings: Mapping[str, Any]) -> bool:
        """Merge *settings* over the current ones; ``False`` when not persisted."""
        saved = self.save_settings({**self.get_settings(), **settings})
        if saved:
            self._publish(EventType.FEATURE_SETTINGS_UPDATED)
        return saved

    def is_enabled(self) -> bool:
        return bool(self.get_settings().get("enabled", False))

    def enable(self) -> bool:
        return self._set_enabled(True, EventType.FEATURE_ENABLED)

    def disable(self) -> bool:
        return self._set_enabled(False, EventType.FEATURE_DISABLED)

    def _set_enabled(self, enabled: bool, event: EventType) -> bool:
        settings = self.get_settings()
        settings["enabled"] = enabled
        if not self.save_settings(settings):
            return False
        logger.info("Feature %s %s", self.id, "enabled" if enabled else "disabled")
        self._publish(event)
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @abstractmethod
    def init(self) -> None:
        """Wire the feature into its hooks.  Called once per boot when enabled."""

    def to_dict(self) -> Dict[str, Any]:
        settings = self.get_settings()
        return {
            "id": self.get_id(),
            "name": self.get_name(),
            "description": self.get_description(),
            "category": self.get_category(),
            "icon": self.get_icon(),
            "priority": self.get_priority(),
            "enabled": bool(settings.get("enabled", False)),
            "settings": settings,
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"
