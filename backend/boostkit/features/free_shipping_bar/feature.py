"""Free Shipping Bar – progress towards the free shipping threshold."""

import math
from typing import Any
from typing import Dict
from typing import Optional

from boostkit.features.base import BaseFeature
from boostkit.features.categories import FeatureCategory

# ``show_on`` location -> hook name fired by the cart/checkout renderer
LOCATION_HOOKS = {
    "top_cart": "cart.before_cart",
    "bottom_cart": "cart.before_cart_collaterals",
    "top_checkout": "checkout.before_checkout_form",
    "bottom_checkout": "checkout.after_checkout_form",
    "mini_cart": "cart.before_mini_cart",
}


def calculate_progress(threshold: float, cart_total: float) -> Dict[str, Any]:
    progress = min(100.0, (cart_total / threshold) * 100) if threshold > 0 else 100.0
    return {
        "remaining": max(0.0, threshold - cart_total),
        "achieved": cart_total >= threshold,
        "progress": round(progress, 2),
    }


def format_message(template: str, remaining: float, threshold: float, current: float) -> str:
    return (
        template.replace("{remaining}", f"{remaining:.2f}")
        .replace("{threshold}", f"{threshold:.2f}")
        .replace("{current}", f"{current:.2f}")
    )


def _coerce_amount(value: Any) -> Optional[float]:
    """Finite float from *value*, or ``None`` when it is not a usable amount."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return amount if math.isfinite(amount) else None


class FreeShippingBarFeature(BaseFeature):
    id = "free_shipping_bar"
    name = "Free Shipping Bar"
    description = "Display a progress bar to encourage customers to reach free shipping threshold"
    category = FeatureCategory.CART_OPTIMIZER
    icon = "truck"
    priority = 1

    def init(self) -> None:
        for location in self.get_settings().get("show_on") or []:
            hook = LOCATION_HOOKS.get(location)
            if hook is not None:
                self.hooks.subscribe(hook, self.render_bar)

    def get_bar_data(
        self,
        cart_total: float,
        threshold: Optional[float] = None,
        requires_coupon: bool = False,
        has_coupon: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """Bar state for *cart_total*; ``None`` when there is nothing to show.

        *threshold* defaults to the configured one.  A shipping method that
        needs a coupon shows the coupon hint once the amount is reached.
        """
        settings = self.get_settings()
        if threshold is None:
            threshold = settings.get("threshold")

        threshold = _coerce_amount(threshold)
        if threshold is None:
            return None
        cart_total = _coerce_amount(cart_total) or 0.0
        state = calculate_progress(threshold, cart_total)

        if not state["achieved"]:
            message = format_message(settings["message_progress"], state["remaining"], threshold, cart_total)
        elif requires_coupon and not has_coupon:
            message = settings["message_coupon"]
        else:
            message = settings["message_achieved"]

        return {
            **state,
            "threshold": threshold,
            "cart_total": cart_total,
            "message": message,
            "show_progress_bar": bool(settings.get("show_progress_bar", True)),
            "colors": {
                "bar": settings.get("bar_color"),
                "background": settings.get("background_color"),
                "text": settings.get("text_color"),
            },
        }

    def render_bar(self, data: Dict[str, Any]) -> None:
        bar = self.get_bar_data(data.get("cart_total", 0.0))
        if bar is not None:
            data.setdefault("blocks", []).append({"feature": self.id, **bar})

    def get_default_settings(self) -> Dict[str, Any]:
        return {
            **super().get_default_settings(),
            "threshold": 50,
            "message_progress": "Add {remaining} more for free shipping!",
            "message_achieved": "Congratulations! You have free shipping!",
            "message_coupon": "Please enter coupon code to receive free shipping",
            "bar_color": "#4CAF50",
            "background_color": "#e8f5e9",
            "text_color": "#2e7d32",
            "show_on": ["top_cart", "top_checkout"],
            "show_progress_bar": True,
        }
