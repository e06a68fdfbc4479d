from typing import Optional
from datetime import datetime
from decimal import Decimal
from sqlmodel import SQLModel, Field

from inventory.core.utils import utc_now

from inventory.stock_movements.constants import MAX_STOCK_QUANTITY

# --- Modèle Product SQLModel ---

class ProductBase(SQLModel):
    name: str = Field(index=True, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None)
    price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    # None = seuil par défaut (voir inventory.stock.constants)
    low_stock_threshold: Optional[int] = Field(default=None, ge=0, le=MAX_STOCK_QUANTITY)
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)

class Product(ProductBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    # Modifiée uniquement par les entrées/sorties de stock validées
    quantity: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: Optional[datetime] = Field(default=None)

    __tablename__ = "products"

# Schémas API pour Product
class ProductCreate(ProductBase):
    quantity: int = Field(default=0, ge=0, le=MAX_STOCK_QUANTITY, description="Stock initial")

class ProductUpdate(SQLModel):
    # Pas de quantity: le stock passe par les mouvements de stock
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    low_stock_threshold: Optional[int] = Field(default=None, ge=0, le=MAX_STOCK_QUANTITY)
    category_id: Optional[int] = None

class ProductRead(ProductBase):
    id: int
    quantity: int
    category: Optional[str] = None
    stock_status: str
    alert_level: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# --- Fin Modèle Product SQLModel ---
