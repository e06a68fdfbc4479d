from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from inventory.products.entities import ProductSnapshot
from inventory.products.models import Product

# Ligne produit accompagnée du nom de sa catégorie
ProductRow = Tuple[Product, Optional[str]]


class AbstractProductRepository(ABC):
    """Interface abstraite pour le repository des produits.

    Seule ``compare_and_set_quantity`` modifie le stock: les mises à jour
    générales ne doivent jamais toucher à ``quantity``.
    """

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        """Récupère un produit par son ID (modèle Table)."""
        pass

    @abstractmethod
    async def get_row(self, product_id: int) -> Optional[ProductRow]:
        pass

    @abstractmethod
    async def get_snapshot(self, product_id: int) -> Optional[ProductSnapshot]:
        """Lit l'état courant d'un produit, tel que vu par les règles de stock."""
        pass

    @abstractmethod
    async def list_rows(
        self,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[ProductRow], int]:
        pass

    @abstractmethod
    async def list_snapshots(self, **filters) -> List[ProductSnapshot]:
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def create(self, product_data: Dict[str, Any]) -> Product:
        pass

    @abstractmethod
    async def update(self, product: Product, update_data: Dict[str, Any]) -> Product:
        pass

    @abstractmethod
    async def delete(self, product: Product) -> None:
        pass

    @abstractmethod
    async def compare_and_set_quantity(self, product_id: int, expected_quantity: int, new_quantity: int) -> bool:
        """Écrit new_quantity si la quantité stockée vaut encore expected_quantity.

        Returns:
            bool: True si exactement une ligne a été modifiée
        """
        pass
