from typing import Optional
from decimal import Decimal
from pydantic import BaseModel, ConfigDict

# Entité lue par les règles de stock (alertes, validation des mouvements).
# Aucune contrainte sur quantity/low_stock_threshold: les règles bornent
# elles-mêmes les valeurs négatives.

class ProductSnapshot(BaseModel):
    id: int
    name: str
    price: Decimal = Decimal("0")
    quantity: int
    low_stock_threshold: Optional[int] = None
    category: Optional[str] = None # Nom de la catégorie

    model_config = ConfigDict(from_attributes=True, frozen=True)
