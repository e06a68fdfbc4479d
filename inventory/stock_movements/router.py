import logging
from typing import Annotated, Optional, Tuple

from fastapi import APIRouter, Depends, Query, Path, HTTPException, status

from inventory.config import settings
from inventory.products.exceptions import ProductNotFoundException
from .constants import StockDirection
from .dependencies import StockMovementServiceDep
from .exceptions import StockConflictException, StockMovementNotFoundException
from .models import (
    StockInDefaults,
    StockInRequest,
    StockMovementRead,
    StockOutRequest,
    StockTransactionReceipt,
)
from .service import PaginatedStockMovementResponse, StockTransactionOutcome
from .validation import StockTransactionRejected

logger = logging.getLogger(__name__)

router = APIRouter()

# --- Pagination Helper ---
def get_pagination_params(
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0)
) -> Tuple[int, int]:
    return limit, offset

PaginationParams = Annotated[Tuple[int, int], Depends(get_pagination_params)]

# --- Error Handling Helpers ---
def handle_stock_movement_service_errors(e: Exception):
    if isinstance(e, (StockMovementNotFoundException, ProductNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, StockConflictException):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    else:
        logger.error(f"[StockMovement API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error processing stock movement request.")

def receipt_or_422(outcome: StockTransactionOutcome) -> StockTransactionReceipt:
    """Traduit un refus de validation en 422 avec son type d'erreur."""
    if isinstance(outcome, StockTransactionRejected):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=outcome.model_dump(mode="json", exclude={"accepted"}),
        )
    return outcome

# --- Stock Movement Endpoints --- #

@router.post("/stock-in", response_model=StockTransactionReceipt, status_code=status.HTTP_201_CREATED)
async def stock_in(request: StockInRequest, service: StockMovementServiceDep):
    """Enregistre une entrée de stock (réception fournisseur)."""
    logger.info(f"API stock_in: product={request.product_id}")
    try:
        outcome = await service.stock_in(request)
    except Exception as e:
        handle_stock_movement_service_errors(e)
    return receipt_or_422(outcome)

@router.post("/stock-out", response_model=StockTransactionReceipt, status_code=status.HTTP_201_CREATED)
async def stock_out(request: StockOutRequest, service: StockMovementServiceDep):
    """Enregistre une sortie de stock (vente, casse, usage interne, retour)."""
    logger.info(f"API stock_out: product={request.product_id}")
    try:
        outcome = await service.stock_out(request)
    except Exception as e:
        handle_stock_movement_service_errors(e)
    return receipt_or_422(outcome)

@router.get("/stock-in/defaults/{product_id}", response_model=StockInDefaults)
async def read_stock_in_defaults(service: StockMovementServiceDep, product_id: int = Path(..., ge=1)):
    """Valeurs de pré-remplissage du formulaire d'entrée de stock."""
    try:
        return await service.get_stock_in_defaults(product_id)
    except Exception as e:
        handle_stock_movement_service_errors(e)

@router.get("/", response_model=PaginatedStockMovementResponse)
async def list_stock_movements(
    service: StockMovementServiceDep,
    pagination: PaginationParams,
    product_id: Optional[int] = Query(None, ge=1, description="Filtrer par produit"),
    direction: Optional[StockDirection] = Query(None, description="Filtrer par sens (in, out)"),
):
    """Liste l'historique des mouvements de stock, du plus récent au plus ancien."""
    limit, offset = pagination
    logger.info(f"API list_stock_movements: limit={limit}, offset={offset}, product={product_id}, direction={direction}")
    try:
        return await service.list_movements(limit=limit, offset=offset, product_id=product_id, direction=direction)
    except Exception as e:
        handle_stock_movement_service_errors(e)

@router.get("/{movement_id}", response_model=StockMovementRead)
async def read_stock_movement(service: StockMovementServiceDep, movement_id: int = Path(..., ge=1)):
    """Récupère un mouvement de stock par son ID."""
    logger.info(f"API read_stock_movement: ID={movement_id}")
    try:
        return await service.get_movement(movement_id=movement_id)
    except Exception as e:
        handle_stock_movement_service_errors(e)
