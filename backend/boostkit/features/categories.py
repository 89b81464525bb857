"""Feature category definitions used to group features in listings."""

from typing import Any
from typing import Dict
from typing import List
from typing import Optional


class FeatureCategory:
    CART_OPTIMIZER = "cart_optimizer"
    CHECKOUT_BOOSTER = "checkout_booster"
    PRODUCT_DISCOVERY = "product_discovery"
    URGENCY_SCARCITY = "urgency_scarcity"
    OTHERS = "others"

    _CATEGORIES: Dict[str, Dict[str, Any]] = {
        CART_OPTIMIZER: {
            "name": "Cart Optimizer",
            "description": "Features to optimize cart experience and increase AOV",
            "icon": "shopping-cart",
            "priority": 10,
        },
        CHECKOUT_BOOSTER: {
            "name": "Checkout Booster",
            "description": "Features to boost conversions at checkout",
            "icon": "credit-card",
            "priority": 20,
        },
        PRODUCT_DISCOVERY: {
            "name": "Product Discovery",
            "description": "Features to help customers discover products",
            "icon": "search",
            "priority": 30,
        },
        URGENCY_SCARCITY: {
            "name": "Urgency & Scarcity",
            "description": "Features to create urgency and drive action",
            "icon": "clock",
            "priority": 40,
        },
        OTHERS: {
            "name": "Others",
            "description": "Features not included in the above categories.",
            "icon": "dots-three-vertical",
            "priority": 50,
        },
    }

    @classmethod
    def get_all(cls) -> Dict[str, Dict[str, Any]]:
        return {category_id: dict(meta) for category_id, meta in cls._CATEGORIES.items()}

    @classmethod
    def get(cls, category_id: str) -> Optional[Dict[str, Any]]:
        meta = cls._CATEGORIES.get(category_id)
        return dict(meta) if meta is not None else None

    @classmethod
    def exists(cls, category_id: str) -> bool:
        return category_id in cls._CATEGORIES

    @classmethod
    def get_ids(cls) -> List[str]:
        return list(cls._CATEGORIES)
