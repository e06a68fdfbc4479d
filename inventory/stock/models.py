from typing import Dict
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel

from inventory.core.schemas import PaginatedResponse
from .alerts import StockAlert

# --- Schémas API pour les alertes et la synthèse ---

class StockAlertListResponse(PaginatedResponse[StockAlert]):
    # Décompte par niveau sur l'ensemble des alertes, avant filtrage
    counts: Dict[str, int]

class InventorySummary(BaseModel):
    total_products: int
    total_categories: int
    inventory_value: Decimal
    stock_alerts: int
    alerts_by_level: Dict[str, int]
    stock_in_count: int
    stock_out_count: int
    # Mouvements du mois en cours (UTC)
    period_start: datetime
    stock_in_this_month: int
    stock_out_this_month: int
