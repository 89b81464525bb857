"""CRUD endpoints over the entities of one feature scope.

The scope comes from the ``feature_id`` path segment and the
``entity_type`` query parameter (``default`` when omitted).  The feature does
not have to be registered; an unknown scope is simply empty.
"""

from typing import Optional

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Path
from fastapi import Query
from fastapi import status

from boostkit.constants import DEFAULT_ENTITY_TYPE
from boostkit.container import Container
from boostkit.crud.entity_repository import EntityRepository
from boostkit.dependencies.container import get_container
from boostkit.models.enums import EntityStatus
from boostkit.schemas.schemas import BulkActionRequest
from boostkit.schemas.schemas import BulkActionResult
from boostkit.schemas.schemas import BulkActionType
from boostkit.schemas.schemas import Entity
from boostkit.schemas.schemas import EntityCreate
from boostkit.schemas.schemas import EntityList
from boostkit.schemas.schemas import EntityMutation
from boostkit.schemas.schemas import EntityUpdate
from boostkit.schemas.schemas import MessageResponse
from boostkit.schemas.schemas import ReorderRequest

router = APIRouter(
    prefix="/{feature_id}/entities",
    tags=["entities"],
)


def get_repository(
    feature_id: str = Path(..., pattern=r"^[a-zA-Z0-9_-]+$"),
    entity_type: str = Query(DEFAULT_ENTITY_TYPE),
    container: Container = Depends(get_container),
) -> EntityRepository:
    return EntityRepository(
        feature_id,
        entity_type or DEFAULT_ENTITY_TYPE,
        session_factory=container.resolve("db.session_factory"),
    )


def _find_or_404(repository: EntityRepository, entity_id: int) -> Entity:
    entity = repository.find(entity_id)
    if entity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entity not found.")
    return entity


@router.get("", response_model=EntityList)
def list_entities(
    status_filter: Optional[str] = Query(None, alias="status"),
    orderby: str = "priority",
    order: str = "ASC",
    per_page: int = 100,
    offset: int = 0,
    repository: EntityRepository = Depends(get_repository),
):
    items = repository.get_all(
        status=status_filter,
        orderby=orderby,
        order=order,
        limit=per_page,
        offset=offset,
    )
    return {"items": items, "total": repository.count(status_filter)}


@router.post("", response_model=EntityMutation)
def create_entity(
    *,
    entity_in: EntityCreate,
    repository: EntityRepository = Depends(get_repository),
):
    entity_id = repository.create(entity_in.model_dump())
    if not entity_id:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create entity.")

    return {"entity": _find_or_404(repository, entity_id), "message": "Entity created successfully."}


# Literal sub-paths must be declared before ``/{entity_id}``.


@router.put("/bulk", response_model=BulkActionResult)
def bulk_action(
    *,
    payload: BulkActionRequest,
    repository: EntityRepository = Depends(get_repository),
):
    """Activate, deactivate or delete several entities at once."""
    if not payload.ids:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No entities selected.")

    if payload.action == BulkActionType.ACTIVATE.value:
        count = repository.bulk_update_status(payload.ids, EntityStatus.ACTIVE.value)
    elif payload.action == BulkActionType.DEACTIVATE.value:
        count = repository.bulk_update_status(payload.ids, EntityStatus.INACTIVE.value)
    elif payload.action == BulkActionType.DELETE.value:
        count = repository.bulk_delete(payload.ids)
    else:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action.")

    return {"count": count, "message": f"{count} entities updated."}


@router.put("/reorder", response_model=MessageResponse)
def reorder_entities(
    *,
    payload: ReorderRequest,
    repository: EntityRepository = Depends(get_repository),
):
    if not payload.order:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid order data.")

    repository.reorder(payload.order)
    return {"message": "Order updated successfully."}


@router.get("/{entity_id}", response_model=Entity)
def read_entity(
    entity_id: int,
    repository: EntityRepository = Depends(get_repository),
):
    return _find_or_404(repository, entity_id)


@router.put("/{entity_id}", response_model=EntityMutation)
def update_entity(
    *,
    entity_id: int,
    entity_in: EntityUpdate,
    repository: EntityRepository = Depends(get_repository),
):
    """Partial update: only the fields sent in the body are written."""
    _find_or_404(repository, entity_id)

    if not repository.update(entity_id, entity_in.model_dump(exclude_unset=True)):
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update entity.")

    return {"entity": _find_or_404(repository, entity_id), "message": "Entity updated successfully."}


@router.delete("/{entity_id}", response_model=MessageResponse)
def delete_entity(
    entity_id: int,
    repository: EntityRepository = Depends(get_repository),
):
    _find_or_404(repository, entity_id)

    if not repository.delete(entity_id):
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete entity.")

    return {"message": "Entity deleted successfully."}


@router.post("/{entity_id}/duplicate", response_model=EntityMutation)
def duplicate_entity(
    entity_id: int,
    repository: EntityRepository = Depends(get_repository),
):
    _find_or_404(repository, entity_id)

    new_id = repository.duplicate(entity_id)
    if not new_id:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to duplicate entity.")

    return {"entity": _find_or_404(repository, new_id), "message": "Entity duplicated successfully."}
