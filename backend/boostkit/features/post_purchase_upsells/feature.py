"""Post-Purchase Upsells – one-click offers on the thank-you page."""

from typing import Any
from typing import Dict
from typing import List

from boostkit.features.base import BaseFeature
from boostkit.features.categories import FeatureCategory
from boostkit.features.post_purchase_upsells.repository import PostPurchaseUpsellsRepository
from boostkit.schemas import schemas
from boostkit.utils.sanitize import coerce_int

THANK_YOU_HOOK = "order.before_thankyou"


class PostPurchaseUpsellsFeature(BaseFeature):
    id = "post_purchase_upsells"
    name = "Post-Purchase Upsells"
    description = "Display one-click upsell offers on the thank you page after checkout to increase order value"
    category = FeatureCategory.CHECKOUT_BOOSTER
    icon = "seal-percent"
    priority = 90

    repository_class = PostPurchaseUpsellsRepository

    def init(self) -> None:
        self.hooks.subscribe(THANK_YOU_HOOK, self.render_thank_you_upsells)

    def get_offers(self) -> List[schemas.Entity]:
        display = self.get_settings().get("display") or {}
        limit = max(coerce_int(display.get("max_display"), 2), 0)
        return self.get_repository().get_active()[:limit]

    def render_thank_you_upsells(self, data: Dict[str, Any]) -> None:
        offers = self.get_offers()
        if not offers:
            return

        timing = self.get_settings().get("timing") or {}
        data.setdefault("blocks", []).append(
            {
                "feature": self.id,
                "order_id": data.get("order_id"),
                "expires_after": timing.get("expires_after"),
                "show_countdown": timing.get("show_countdown"),
                "offers": [offer.model_dump() for offer in offers],
            }
        )

    def get_default_settings(self) -> Dict[str, Any]:
        return {
            **super().get_default_settings(),
            "enabled": True,
            "display": {
                "mode": "all",
                "max_display": 2,
            },
            "timing": {
                "show_countdown": True,
                "expires_after": 10,
            },
        }
