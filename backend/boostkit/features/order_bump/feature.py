"""Order Bump – one-click upsell offers shown during checkout."""

import logging
from typing import Any
from typing import Dict
from typing import List

from boostkit.features.base import BaseFeature
from boostkit.features.categories import FeatureCategory
from boostkit.features.order_bump.repository import BumpRepository
from boostkit.schemas import schemas
from boostkit.utils.sanitize import coerce_int

logger = logging.getLogger(__name__)

# Checkout position setting -> hook name fired by the checkout renderer
POSITION_HOOKS = {
    "before_payment": "checkout.review_order_before_payment",
    "after_order_review": "checkout.after_order_review",
    "before_billing": "checkout.before_billing_form",
    "after_billing": "checkout.after_billing_form",
}
DEFAULT_POSITION = "before_payment"


class OrderBumpFeature(BaseFeature):
    id = "order_bump"
    name = "Order Bump"
    description = "Display one-click upsell offers during checkout to increase order value"
    category = FeatureCategory.CHECKOUT_BOOSTER
    icon = "plus-circle"
    priority = 1

    repository_class = BumpRepository

    def init(self) -> None:
        position = self.get_settings().get("default_position", DEFAULT_POSITION)
        hook = POSITION_HOOKS.get(position, POSITION_HOOKS[DEFAULT_POSITION])
        self.hooks.subscribe(hook, self.render_bumps)
        logger.debug("Order bump wired to %s", hook)

    def get_display_bumps(self) -> List[schemas.Entity]:
        """Active bumps in priority order, capped by ``max_bumps_per_page``."""
        limit = max(coerce_int(self.get_settings().get("max_bumps_per_page"), 3), 0)
        return self.get_repository().get_active()[:limit]

    def render_bumps(self, data: Dict[str, Any]) -> None:
        blocks = data.setdefault("blocks", [])
        for bump in self.get_display_bumps():
            blocks.append({"feature": self.id, "entity": bump.model_dump()})

    def get_default_settings(self) -> Dict[str, Any]:
        return {
            **super().get_default_settings(),
            "default_position": DEFAULT_POSITION,
            "max_bumps_per_page": 3,
            "show_product_image": True,
            "checkbox_style": "default",
        }
