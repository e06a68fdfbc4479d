from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from inventory.categories.models import CategoryCreate, CategoryRead


class AbstractCategoryRepository(ABC):
    """Interface abstraite pour le repository des catégories."""

    @abstractmethod
    async def get_by_id(self, category_id: int) -> Optional[CategoryRead]:
        """Récupère une catégorie par son ID (schéma Read)."""
        pass

    @abstractmethod
    async def exists_by_name(self, name: str) -> bool:
        pass

    @abstractmethod
    async def list(self, limit: int = 100, offset: int = 0) -> Tuple[List[CategoryRead], int]:
        """Liste les catégories avec pagination (schéma Read)."""
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def count_products(self, category_id: int) -> int:
        """Nombre de produits rattachés à la catégorie."""
        pass

    @abstractmethod
    async def create(self, category_data: CategoryCreate) -> CategoryRead:
        pass

    @abstractmethod
    async def update(self, category_id: int, update_data: Dict[str, Any]) -> Optional[CategoryRead]:
        """Met à jour les champs fournis (dictionnaire déjà filtré par le service)."""
        pass

    @abstractmethod
    async def delete(self, category_id: int) -> None:
        pass
