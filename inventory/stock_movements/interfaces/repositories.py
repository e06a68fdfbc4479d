from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from inventory.stock_movements.constants import StockDirection
from inventory.stock_movements.models import StockMovement, StockMovementRead


class AbstractStockMovementRepository(ABC):
    """Interface abstraite pour l'historique des mouvements de stock."""

    @abstractmethod
    def add(self, movement: StockMovement) -> StockMovement:
        """Ajoute un mouvement à la transaction en cours (sans commit)."""
        pass

    @abstractmethod
    async def get_by_id(self, movement_id: int) -> Optional[StockMovementRead]:
        pass

    @abstractmethod
    async def list(
        self,
        limit: int = 100,
        offset: int = 0,
        product_id: Optional[int] = None,
        direction: Optional[StockDirection] = None,
    ) -> Tuple[List[StockMovementRead], int]:
        pass

    @abstractmethod
    async def count(
        self,
        product_id: Optional[int] = None,
        direction: Optional[StockDirection] = None,
        since: Optional[datetime] = None,
    ) -> int:
        """Nombre de mouvements, éventuellement depuis une date."""
        pass
