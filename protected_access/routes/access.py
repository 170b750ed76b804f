"""
Access catalogue API routes.

Handlers are plain functions so FastAPI runs them in its thread pool; the
asyncio-based operations start their own event loop there.
"""
import logging
from typing import List
from fastapi import APIRouter, HTTPException, status

from protected_access.models.schemas import AccessCategory, AccessResult, CategoryRun, PreparedResources
from protected_access.services.access_service import access_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/access", tags=["access"])


def _require_category(category: str):
    if category not in access_service.categories():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Access category {category} not found"
        )


@router.get("/", response_model=List[AccessCategory])
def list_categories():
    """List all access categories."""
    return access_service.list_categories()


@router.get("/{category}", response_model=AccessCategory)
def get_category(category: str):
    """Get a specific access category."""
    _require_category(category)
    return access_service.get_category(category)


@router.post("/{category}/prepare", response_model=PreparedResources)
def prepare_resources(category: str):
    """Seed the file fixtures a category works on."""
    _require_category(category)
    try:
        return access_service.prepare_resources(category)
    except OSError as e:
        logger.error(f"Failed to prepare {category} resources: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to prepare resources: {e}"
        )


@router.post("/{category}/{method_id}", response_model=AccessResult)
def invoke(category: str, method_id: int):
    """Invoke one method id of a category.

    Unsupported ids are not an HTTP error; they produce the failure message.
    """
    _require_category(category)
    return access_service.invoke(category, method_id)


@router.post("/{category}", response_model=CategoryRun)
def invoke_all(category: str):
    """Invoke every method id of a category."""
    _require_category(category)
    return access_service.invoke_all(category)
