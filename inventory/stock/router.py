import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from inventory.categories.dependencies import CategoryRepositoryDep
from inventory.products.dependencies import MovementRepositoryDep, ProductRepositoryDep
from .constants import AlertLevel
from .dependencies import StockAlertEvaluatorDep
from .models import InventorySummary, StockAlertListResponse
from .service import StockAlertService

logger = logging.getLogger(__name__)


def get_stock_alert_service(
    product_repository: ProductRepositoryDep,
    category_repository: CategoryRepositoryDep,
    movement_repository: MovementRepositoryDep,
    evaluator: StockAlertEvaluatorDep,
) -> StockAlertService:
    return StockAlertService(
        product_repository=product_repository,
        category_repository=category_repository,
        movement_repository=movement_repository,
        evaluator=evaluator,
    )

StockAlertServiceDep = Annotated[StockAlertService, Depends(get_stock_alert_service)]

router = APIRouter()

# --- Endpoints API ---

@router.get("/alerts", response_model=StockAlertListResponse, summary="Lister les alertes de stock bas")
async def list_stock_alerts(
    service: StockAlertServiceDep,
    severity: Optional[AlertLevel] = Query(None, description="Filtrer par niveau (medium, high, critical)"),
    search: Optional[str] = Query(None, description="Recherche sur le nom du produit ou la catégorie"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """Alertes recalculées à partir du stock courant, dans l'ordre des produits."""
    logger.info(f"[API Stock] Requête list_stock_alerts severity={severity}, search={search}, limit={limit}, offset={offset}")
    if severity == AlertLevel.NONE:
        raise HTTPException(status_code=400, detail="Le niveau 'none' ne correspond à aucune alerte.")
    try:
        return await service.list_alerts(severity=severity, search=search, limit=limit, offset=offset)
    except Exception as e:
        logger.exception(f"[API Stock] Erreur lors du listage des alertes: {e}")
        raise HTTPException(status_code=500, detail="Erreur interne lors de la récupération des alertes.")

@router.get("/summary", response_model=InventorySummary, summary="Synthèse de l'inventaire")
async def get_inventory_summary(service: StockAlertServiceDep):
    logger.info("[API Stock] Requête get_inventory_summary")
    try:
        return await service.get_summary()
    except Exception as e:
        logger.exception(f"[API Stock] Erreur lors du calcul de la synthèse: {e}")
        raise HTTPException(status_code=500, detail="Erreur interne lors du calcul de la synthèse.")
