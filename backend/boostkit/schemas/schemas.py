from datetime import datetime
from enum import Enum
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import Field


# Entity schemas
class Entity(BaseModel):
    """Hydrated entity row with its settings blob decoded."""

    id: int
    feature_id: str
    entity_type: str
    name: str = ""
    settings: Dict[str, Any] = Field(default_factory=dict)
    status: str
    priority: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EntityCreate(BaseModel):
    name: Optional[str] = ""
    settings: Optional[Dict[str, Any]] = None
    status: Optional[str] = "active"
    priority: Optional[Any] = 10


class EntityUpdate(BaseModel):
    name: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None
    status: Optional[str] = None
    priority: Optional[Any] = None


class EntityList(BaseModel):
    items: List[Entity]
    total: int


class EntityMutation(BaseModel):
    entity: Entity
    message: str


class BulkActionType(str, Enum):
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    DELETE = "delete"


class BulkActionRequest(BaseModel):
    # Plain str so an unknown action reaches the handler and gets a 400
    action: str
    ids: List[Any] = Field(default_factory=list)


class BulkActionResult(BaseModel):
    count: int
    message: str


class ReorderRequest(BaseModel):
    order: Dict[str, Any] = Field(default_factory=dict)


class MessageResponse(BaseModel):
    message: str


# ------------------------------------------------------------
# Feature schemas
# ------------------------------------------------------------


class FeatureOut(BaseModel):
    id: str
    name: str
    description: str
    category: str
    icon: str
    priority: int
    enabled: bool
    settings: Dict[str, Any]


class FeatureUpdate(BaseModel):
    enabled: Optional[bool] = None


class FeatureMutation(BaseModel):
    feature: FeatureOut
    message: str


class CategoryOut(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    priority: int
