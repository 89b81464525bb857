"""Registers the built-in features and shared services into a container."""

import logging
from typing import List
from typing import Set
from typing import Type

from boostkit.container import Container
from boostkit.features.base import BaseFeature
from boostkit.features.free_shipping_bar.feature import FreeShippingBarFeature
from boostkit.features.order_bump.feature import OrderBumpFeature
from boostkit.features.post_purchase_upsells.feature import PostPurchaseUpsellsFeature
from boostkit.features.smart_recommendations.feature import SmartRecommendationsFeature
from boostkit.options import SqlOptionStore
from boostkit.registry import FeatureRegistry

logger = logging.getLogger(__name__)

BUILTIN_FEATURES: List[Type[BaseFeature]] = [
    OrderBumpFeature,
    SmartRecommendationsFeature,
    PostPurchaseUpsellsFeature,
    FreeShippingBarFeature,
]


def _session_factory(container: Container):
    return container.resolve("db.session_factory") if container.has("db.session_factory") else None


class ServiceProvider:
    """Two-phase wiring: :meth:`register` binds factories, :meth:`boot` runs them."""

    def __init__(self, features: List[Type[BaseFeature]] = None):
        self.feature_classes = list(BUILTIN_FEATURES if features is None else features)
        self._features: List[str] = []
        self._booted: Set[str] = set()

    def register(self, container: Container) -> None:
        self._register_utilities(container)
        self._register_features(container)

    def boot(self, container: Container) -> None:
        """Fire the addon hook, then ``init()`` each enabled feature once."""
        registry: FeatureRegistry = container.resolve("feature.registry")
        registry.fire_addon_hook(container=container)

        for feature in registry.get_all():
            feature_id = feature.get_id()
            if feature_id in self._booted or not feature.is_enabled():
                continue
            feature.init()
            self._booted.add(feature_id)
            logger.debug("Initialised feature %s", feature_id)

    def get_features(self) -> List[str]:
        """Container keys of the registered built-in features."""
        return list(self._features)

    def is_booted(self, feature_id: str) -> bool:
        return feature_id in self._booted

    def _register_features(self, container: Container) -> None:
        for feature_class in self.feature_classes:
            key = f"feature.{feature_class.id}"
            container.register(key, feature_class)
            self._features.append(key)

            if feature_class.repository_class is not None:
                container.register(
                    f"repository.{feature_class.id}",
                    lambda c, repository_class=feature_class.repository_class: repository_class(
                        session_factory=_session_factory(c)
                    ),
                )

        def build_registry(c: Container) -> FeatureRegistry:
            registry = FeatureRegistry(c.resolve("hooks") if c.has("hooks") else None)
            for key in self._features:
                registry.register(c.resolve(key))
            return registry

        container.register("feature.registry", build_registry)

    def _register_utilities(self, container: Container) -> None:
        container.register("options", lambda c: SqlOptionStore(session_factory=_session_factory(c)))
