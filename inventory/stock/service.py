import logging
from typing import Optional

from inventory.categories.interfaces.repositories import AbstractCategoryRepository
from inventory.core.utils import start_of_month, utc_now
from inventory.products.interfaces.repositories import AbstractProductRepository
from inventory.stock_movements.constants import StockDirection
from inventory.stock_movements.interfaces.repositories import AbstractStockMovementRepository
from .alerts import StockAlertEvaluator, count_by_level, filter_alerts
from .constants import AlertLevel
from .models import InventorySummary, StockAlertListResponse
from .utils import calculate_inventory_value

logger = logging.getLogger(__name__)


class StockAlertService:
    """Service applicatif des alertes de stock: lit les produits et délègue le classement à l'évaluateur."""

    def __init__(
        self,
        product_repository: AbstractProductRepository,
        category_repository: AbstractCategoryRepository,
        movement_repository: AbstractStockMovementRepository,
        evaluator: StockAlertEvaluator,
    ):
        self.product_repository = product_repository
        self.category_repository = category_repository
        self.movement_repository = movement_repository
        self.evaluator = evaluator

    async def list_alerts(
        self,
        severity: Optional[AlertLevel] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> StockAlertListResponse:
        """Alertes courantes, filtrées et paginées, dans l'ordre des produits."""
        logger.debug(f"[StockAlertService] Listage alertes: severity={severity}, search={search}, limit={limit}, offset={offset}")
        products = await self.product_repository.list_snapshots()
        alerts = self.evaluator.evaluate_all(products)
        filtered = filter_alerts(alerts, severity=severity, search=search)
        return StockAlertListResponse(
            items=filtered[offset:offset + limit],
            total=len(filtered),
            counts=count_by_level(alerts),
        )

    async def get_summary(self) -> InventorySummary:
        """Chiffres du tableau de bord: valeur du stock, alertes, volumes d'entrées/sorties (total et mois en cours)."""
        products = await self.product_repository.list_snapshots()
        alerts = self.evaluator.evaluate_all(products)
        period_start = start_of_month(utc_now())
        summary = InventorySummary(
            total_products=len(products),
            total_categories=await self.category_repository.count(),
            inventory_value=calculate_inventory_value(products),
            stock_alerts=len(alerts),
            alerts_by_level=count_by_level(alerts),
            stock_in_count=await self.movement_repository.count(direction=StockDirection.IN),
            stock_out_count=await self.movement_repository.count(direction=StockDirection.OUT),
            period_start=period_start,
            stock_in_this_month=await self.movement_repository.count(direction=StockDirection.IN, since=period_start),
            stock_out_this_month=await self.movement_repository.count(direction=StockDirection.OUT, since=period_start),
        )
        logger.info(f"[StockAlertService] Synthèse: {summary.total_products} produits, {summary.stock_alerts} alertes")
        return summary
