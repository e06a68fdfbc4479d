from typing import Any, Optional
from datetime import datetime
from decimal import Decimal
from sqlmodel import SQLModel, Field

from inventory.core.utils import utc_now

from inventory.products.models import ProductRead
from .constants import StockDirection

# --- Modèle StockMovement SQLModel ---
# Enregistrement d'audit écrit avec chaque entrée/sortie acceptée.

class StockMovementBase(SQLModel):
    product_id: int = Field(foreign_key="products.id", index=True)
    direction: StockDirection
    quantity_change: int # Positif en entrée, négatif en sortie
    quantity_before: int
    quantity_after: int
    supplier: Optional[str] = Field(default=None, max_length=255)
    purchase_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    reason: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = Field(default=None)

class StockMovement(StockMovementBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now, nullable=False, index=True)

    __tablename__ = "stock_movements"

class StockMovementRead(StockMovementBase):
    id: int
    created_at: datetime

# --- Requêtes de mouvement ---
# quantity/purchase_price restent non typés: le validateur juge lui-même
# les valeurs nulles, négatives, décimales ou non numériques.

class StockInRequest(SQLModel):
    product_id: int
    quantity: Any = Field(default=None, description="Nombre d'unités reçues (entier > 0)")
    supplier: Optional[str] = None
    purchase_price: Any = Field(default=None, description="Prix d'achat unitaire (> 0)")
    notes: Optional[str] = None

class StockOutRequest(SQLModel):
    product_id: int
    quantity: Any = Field(default=None, description="Nombre d'unités sorties (entier > 0)")
    reason: Optional[str] = Field(default=None, description="Sale, Damaged, InternalUse, ReturnToSupplier ou Other")
    notes: Optional[str] = None

class StockTransactionReceipt(SQLModel):
    movement: StockMovementRead
    product: ProductRead

class StockInDefaults(SQLModel):
    product_id: int
    suggested_purchase_price: Decimal
    quantity: int = 1

# --- Fin Modèle StockMovement SQLModel ---
