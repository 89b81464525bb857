from typing import Any
from typing import Iterable
from typing import List
from typing import Optional
from typing import Set

from sqlalchemy.orm import sessionmaker

from boostkit.crud.entity_repository import EntityRepository
from boostkit.crud.entity_repository import storage_guard
from boostkit.database import db_session
from boostkit.models.enums import EntityStatus
from boostkit.models.models import Entity
from boostkit.schemas import schemas


def _trigger_matches(trigger_value: Any, candidates: Set[str]) -> bool:
    if isinstance(trigger_value, (list, tuple)):
        return any(_trigger_matches(item, candidates) for item in trigger_value)
    if isinstance(trigger_value, (str, int, float)) and not isinstance(trigger_value, bool):
        return str(trigger_value) in candidates
    return False


class RecommendationRepository(EntityRepository):
    """Recommendation rules, scope ``(smart_recommendations, recommendation)``."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        super().__init__("smart_recommendations", "recommendation", session_factory=session_factory)

    @storage_guard(list)
    def get_active_rules(self) -> List[schemas.Entity]:
        """Every active rule, unpaginated, by priority then id."""
        with db_session(self._session_factory) as db:
            rows = (
                self._scoped(db)
                .filter(Entity.status == EntityStatus.ACTIVE.value)
                .order_by(Entity.priority.asc(), Entity.id.asc())
                .all()
            )
            return [self._hydrate(row) for row in rows]

    def get_rules_for_product(
        self,
        product_id: int,
        category_slugs: Iterable[str] = (),
        tag_slugs: Iterable[str] = (),
    ) -> List[schemas.Entity]:
        """Rules whose trigger matches the viewed product.

        A rule triggers on ``when_customer_views_type`` (``product``,
        ``category`` or ``tag``, default ``category``) compared against
        ``when_customer_views_value``.  A list value matches when any of its
        items does.
        """
        category_slugs = {str(slug) for slug in category_slugs}
        tag_slugs = {str(slug) for slug in tag_slugs}
        matching = []

        for rule in self.get_active_rules():
            trigger_type = rule.settings.get("when_customer_views_type", "category")
            trigger_value = rule.settings.get("when_customer_views_value", "")

            if trigger_type == "product":
                matches = _trigger_matches(trigger_value, {str(product_id)})
            elif trigger_type == "category":
                matches = _trigger_matches(trigger_value, category_slugs)
            elif trigger_type == "tag":
                matches = _trigger_matches(trigger_value, tag_slugs)
            else:
                matches = False

            if matches:
                matching.append(rule)

        return matching
