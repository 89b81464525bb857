from typing import Optional

from sqlalchemy.orm import sessionmaker

from boostkit.crud.entity_repository import EntityRepository


class BumpRepository(EntityRepository):
    """Order bump offers, scope ``(order_bump, bump)``."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        super().__init__("order_bump", "bump", session_factory=session_factory)
