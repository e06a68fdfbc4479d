import logging
from typing import Annotated, Optional, Tuple

from fastapi import APIRouter, Depends, Query, Path, Response, HTTPException, status

from inventory.config import settings
from inventory.categories.exceptions import CategoryNotFoundException
from .service import PaginatedProductResponse
from .dependencies import ProductServiceDep
from .models import ProductCreate, ProductRead, ProductUpdate
from .exceptions import ProductNotFoundException, ProductHasMovementsException

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
def handle_product_service_errors(e: Exception):
    if isinstance(e, ProductNotFoundException):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, CategoryNotFoundException):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    elif isinstance(e, ProductHasMovementsException):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    else:
        logger.error(f"[Product API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error processing product request.")

# --- Product Endpoints --- #

@router.get("/", response_model=PaginatedProductResponse)
async def list_products(
    service: ProductServiceDep,
    pagination: PaginationParams,
    search: Optional[str] = Query(None, description="Recherche sur le nom du produit ou de sa catégorie"),
    category_id: Optional[int] = Query(None, ge=1, description="Filtrer par catégorie"),
):
    """Liste paginée des produits avec leur statut de stock."""
    limit, offset = pagination
    logger.info(f"API list_products: search={search}, category={category_id}, limit={limit}, offset={offset}")
    try:
        return await service.list_products(limit=limit, offset=offset, search=search, category_id=category_id)
    except Exception as e:
        handle_product_service_errors(e)

@router.post("/", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(product: ProductCreate, service: ProductServiceDep):
    logger.info(f"API create_product: name={product.name}")
    try:
        return await service.create_product(product)
    except Exception as e:
        handle_product_service_errors(e)

@router.get("/{product_id}", response_model=ProductRead)
async def read_product(service: ProductServiceDep, product_id: int = Path(..., ge=1)):
    try:
        return await service.get_product(product_id)
    except Exception as e:
        handle_product_service_errors(e)

@router.patch("/{product_id}", response_model=ProductRead)
async def update_product(
    product: ProductUpdate,
    service: ProductServiceDep,
    product_id: int = Path(..., ge=1),
):
    """Met à jour un produit. Le stock ne se modifie que par les entrées/sorties."""
    logger.info(f"API update_product: ID={product_id}")
    try:
        return await service.update_product(product_id, product)
    except Exception as e:
        handle_product_service_errors(e)

@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(service: ProductServiceDep, product_id: int = Path(..., ge=1)):
    logger.info(f"API delete_product: ID={product_id}")
    try:
        await service.delete_product(product_id)
    except Exception as e:
        handle_product_service_errors(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
