from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import ConfigDict

from inventory.core.utils import utc_now

# --- Modèle de base pour les catégories ---
class CategoryBase(SQLModel):
    """Modèle de base pour les catégories."""
    name: str = Field(index=True, unique=True, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None)

# --- Modèle Category (Table) ---
class Category(CategoryBase, table=True):
    """Modèle de table pour les catégories."""
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: Optional[datetime] = Field(default=None)

    __tablename__ = "categories"

    model_config = ConfigDict(from_attributes=True)

# --- Schémas API ---
class CategoryCreate(CategoryBase):
    """Schéma pour la création d'une catégorie."""
    pass

class CategoryRead(CategoryBase):
    """Schéma pour la lecture d'une catégorie."""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class CategoryUpdate(SQLModel):
    """Schéma pour la mise à jour d'une catégorie."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
