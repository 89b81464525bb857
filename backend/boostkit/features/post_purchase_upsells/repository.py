from typing import Optional

from sqlalchemy.orm import sessionmaker

from boostkit.crud.entity_repository import EntityRepository


class PostPurchaseUpsellsRepository(EntityRepository):
    """Thank-you page offers, scope ``(post_purchase_upsells, purchase)``."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        super().__init__("post_purchase_upsells", "purchase", session_factory=session_factory)
