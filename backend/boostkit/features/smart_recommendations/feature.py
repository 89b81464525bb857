"""Smart Recommendations – rule driven "pairs well with" sections."""

from typing import Any
from typing import Dict

from boostkit.features.base import BaseFeature
from boostkit.features.categories import FeatureCategory
from boostkit.features.smart_recommendations.repository import RecommendationRepository

PRODUCT_SUMMARY_HOOK = "product.after_single_product_summary"


class SmartRecommendationsFeature(BaseFeature):
    id = "smart_recommendations"
    name = "Smart Recommendations"
    description = "Manage your product recommendation rules"
    category = FeatureCategory.PRODUCT_DISCOVERY
    icon = "record"
    priority = 1

    repository_class = RecommendationRepository

    def init(self) -> None:
        if self.get_settings().get("show_on_product_page"):
            self.hooks.subscribe(PRODUCT_SUMMARY_HOOK, self.render_recommendations)

    def render_recommendations(self, data: Dict[str, Any]) -> None:
        """Attach the rules matching ``data["product"]`` to ``data["blocks"]``.

        ``product`` carries ``id``, ``category_slugs`` and ``tag_slugs``.
        """
        product = data.get("product") or {}
        if "id" not in product:
            return

        rules = self.get_repository().get_rules_for_product(
            product["id"],
            product.get("category_slugs", ()),
            product.get("tag_slugs", ()),
        )
        if not rules:
            return

        settings = self.get_settings()
        data.setdefault("blocks", []).append(
            {
                "feature": self.id,
                "title": settings.get("section_title"),
                "layout": settings.get("layout"),
                "rules": [rule.model_dump() for rule in rules],
            }
        )

    def get_default_settings(self) -> Dict[str, Any]:
        return {
            **super().get_default_settings(),
            "show_on_product_page": True,
            "show_on_cart_page": False,
            "show_on_mini_cart": False,
            "layout": "grid",
            "section_title": "Pairs perfectly with",
            "behavior_if_in_cart": "hide",
        }
