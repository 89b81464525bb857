"""Feature registry: the set of features known to one container."""

import logging
from typing import Any
from typing import Dict
from typing import Iterator
from typing import List
from typing import Optional

from boostkit.errors import FeatureNotFoundError
from boostkit.events import EventType
from boostkit.events import HookBus
from boostkit.features.base import FeatureInterface
from boostkit.features.categories import FeatureCategory

logger = logging.getLogger(__name__)


class FeatureRegistry:
    """Ordered collection of features keyed by id.

    Built fresh for every container; addons add their own features through
    :meth:`fire_addon_hook` before the enabled features are initialised.
    """

    def __init__(self, hooks: Optional[HookBus] = None):
        self.hooks = hooks
        self._features: Dict[str, FeatureInterface] = {}

    def register(self, feature: FeatureInterface) -> None:
        """Add *feature*; an already registered id is replaced in place."""
        feature_id = feature.get_id()
        if feature_id in self._features:
            logger.debug("Replacing feature %s", feature_id)
        self._features[feature_id] = feature

    def get(self, feature_id: str) -> Optional[FeatureInterface]:
        return self._features.get(feature_id)

    def require(self, feature_id: str) -> FeatureInterface:
        """Like :meth:`get` but raises :class:`FeatureNotFoundError`."""
        try:
            return self._features[feature_id]
        except KeyError:
            raise FeatureNotFoundError(feature_id) from None

    def has(self, feature_id: str) -> bool:
        return feature_id in self._features

    def get_all(self) -> List[FeatureInterface]:
        return list(self._features.values())

    def get_all_sorted(self) -> List[FeatureInterface]:
        """Features by display priority; ties keep registration order."""
        return sorted(self._features.values(), key=lambda feature: feature.get_priority())

    def get_enabled(self) -> List[FeatureInterface]:
        return [feature for feature in self._features.values() if feature.is_enabled()]

    def get_disabled(self) -> List[FeatureInterface]:
        return [feature for feature in self._features.values() if not feature.is_enabled()]

    def get_by_category(self, category: str) -> List[FeatureInterface]:
        return [feature for feature in self._features.values() if feature.get_category() == category]

    def get_categories(self) -> Dict[str, Dict[str, Any]]:
        return FeatureCategory.get_all()

    def fire_addon_hook(self, **context: Any) -> None:
        """Let addons register extra features into this registry.

        Subscribers receive ``{"registry": self, **context}``; the boot
        sequence passes the container along so addons can bind services.
        """
        if self.hooks is None:
            return
        self.hooks.publish(EventType.REGISTER_FEATURES, {"registry": self, **context})

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[FeatureInterface]:
        return iter(list(self._features.values()))

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._features
