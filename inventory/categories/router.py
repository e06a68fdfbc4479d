import logging
from typing import Annotated, Tuple

from fastapi import APIRouter, Depends, Query, Path, Response, HTTPException, status

from inventory.config import settings
from .service import PaginatedCategoryResponse
from .dependencies import CategoryServiceDep
from .models import CategoryRead, CategoryCreate, CategoryUpdate
from .exceptions import (
    CategoryNotFoundException,
    DuplicateCategoryNameException,
    CategoryInUseException,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# --- Pagination Helper ---
def get_pagination_params(
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0)
) -> Tuple[int, int]:
    return limit, offset

PaginationParams = Annotated[Tuple[int, int], Depends(get_pagination_params)]

# --- Error Handling Helper ---
def handle_category_service_errors(e: Exception):
    if isinstance(e, CategoryNotFoundException):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, (DuplicateCategoryNameException, CategoryInUseException)):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    else:
        logger.error(f"[Category API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error processing category request.")

# --- Category Endpoints --- #

@router.get("/", response_model=PaginatedCategoryResponse)
async def read_categories(service: CategoryServiceDep, pagination: PaginationParams):
    """Récupère une liste paginée de catégories."""
    limit, offset = pagination
    logger.info(f"API read_categories: limit={limit}, offset={offset}")
    try:
        return await service.list_categories(limit=limit, offset=offset)
    except Exception as e:
        handle_category_service_errors(e)

@router.post("/", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_new_category(category: CategoryCreate, service: CategoryServiceDep):
    """Crée une nouvelle catégorie."""
    logger.info(f"API create_category: name={category.name}")
    try:
        return await service.create_category(category)
    except Exception as e:
        handle_category_service_errors(e)

@router.get("/{category_id}", response_model=CategoryRead)
async def read_category(service: CategoryServiceDep, category_id: int = Path(..., ge=1)):
    try:
        return await service.get_category(category_id)
    except Exception as e:
        handle_category_service_errors(e)

@router.patch("/{category_id}", response_model=CategoryRead)
async def update_existing_category(
    category: CategoryUpdate,
    service: CategoryServiceDep,
    category_id: int = Path(..., ge=1),
):
    logger.info(f"API update_category: ID={category_id}")
    try:
        return await service.update_category(category_id, category)
    except Exception as e:
        handle_category_service_errors(e)

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_existing_category(service: CategoryServiceDep, category_id: int = Path(..., ge=1)):
    logger.info(f"API delete_category: ID={category_id}")
    try:
        await service.delete_category(category_id)
    except Exception as e:
        handle_category_service_errors(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
