from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from fastapi import APIRouter
from fastapi import Body
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Path
from fastapi import status

from boostkit.container import Container
from boostkit.dependencies.container import get_container
from boostkit.registry import FeatureRegistry
from boostkit.schemas.schemas import CategoryOut
from boostkit.schemas.schemas import FeatureMutation
from boostkit.schemas.schemas import FeatureOut
from boostkit.schemas.schemas import FeatureUpdate

FEATURE_ID_PATTERN = r"^[a-zA-Z0-9_-]+$"

router = APIRouter(
    tags=["features"],
)


def get_registry(container: Container = Depends(get_container)) -> FeatureRegistry:
    return container.resolve("feature.registry")


def _get_feature_or_404(registry: FeatureRegistry, feature_id: str):
    feature = registry.get(feature_id)
    if feature is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Feature not found.")
    return feature


@router.get("", response_model=List[FeatureOut])
def list_features(
    category: Optional[str] = None,
    registry: FeatureRegistry = Depends(get_registry),
):
    """All features in display order, optionally restricted to one category."""
    features = registry.get_all_sorted()
    if category:
        features = [feature for feature in features if feature.get_category() == category]
    return [feature.to_dict() for feature in features]


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(registry: FeatureRegistry = Depends(get_registry)):
    return [{"id": category_id, **meta} for category_id, meta in registry.get_categories().items()]


@router.get("/{feature_id}", response_model=FeatureOut)
def read_feature(
    feature_id: str = Path(..., pattern=FEATURE_ID_PATTERN),
    registry: FeatureRegistry = Depends(get_registry),
):
    return _get_feature_or_404(registry, feature_id).to_dict()


@router.put("/{feature_id}", response_model=FeatureMutation)
def update_feature(
    *,
    feature_id: str = Path(..., pattern=FEATURE_ID_PATTERN),
    payload: FeatureUpdate,
    registry: FeatureRegistry = Depends(get_registry),
):
    """Toggle a feature; a missing ``enabled`` leaves it unchanged."""
    feature = _get_feature_or_404(registry, feature_id)

    if payload.enabled is not None:
        saved = feature.enable() if payload.enabled else feature.disable()
        if not saved:
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update feature.")

    return {"feature": feature.to_dict(), "message": "Feature updated successfully."}


@router.put("/{feature_id}/settings", response_model=FeatureMutation)
def update_feature_settings(
    *,
    feature_id: str = Path(..., pattern=FEATURE_ID_PATTERN),
    settings: Dict[str, Any] = Body(...),
    registry: FeatureRegistry = Depends(get_registry),
):
    feature = _get_feature_or_404(registry, feature_id)
    if not feature.update_settings(settings):
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update settings.")
    return {"feature": feature.to_dict(), "message": "Settings updated successfully."}
