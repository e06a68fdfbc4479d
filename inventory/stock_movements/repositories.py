import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fastcrud import FastCRUD
from sqlalchemy.ext.asyncio import AsyncSession

from .constants import StockDirection
from .interfaces.repositories import AbstractStockMovementRepository
from .models import StockMovement, StockMovementRead

logger = logging.getLogger(__name__)


class SQLAlchemyStockMovementRepository(AbstractStockMovementRepository):
    """Historique des mouvements de stock (lecture via FastCRUD, ajout dans la transaction appelante)."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD(StockMovement)

    def add(self, movement: StockMovement) -> StockMovement:
        """Ajoute le mouvement à la session sans commit."""
        self.db.add(movement)
        return movement

    async def get_by_id(self, movement_id: int) -> Optional[StockMovementRead]:
        return await self.crud.get(
            db=self.db, schema_to_select=StockMovementRead, return_as_model=True, id=movement_id
        )

    async def list(
        self,
        limit: int = 100,
        offset: int = 0,
        product_id: Optional[int] = None,
        direction: Optional[StockDirection] = None,
    ) -> Tuple[List[StockMovementRead], int]:
        filters = {}
        if product_id is not None: filters["product_id"] = product_id
        if direction is not None: filters["direction"] = direction

        logger.debug(f"[StockMovementRepository] List Movements: filters={filters}, limit={limit}, offset={offset}")
        result = await self.crud.get_multi(
            db=self.db,
            limit=limit,
            offset=offset,
            schema_to_select=StockMovementRead,
            return_as_model=True,
            sort_columns=["created_at", "id"],
            sort_orders=["desc", "desc"],
            **filters,
        )
        return result.get("data", []), result.get("total_count", 0)

    async def count(
        self,
        product_id: Optional[int] = None,
        direction: Optional[StockDirection] = None,
        since: Optional[datetime] = None,
    ) -> int:
        filters = {}
        if product_id is not None: filters["product_id"] = product_id
        if direction is not None: filters["direction"] = direction
        if since is not None: filters["created_at__gte"] = since
        return await self.crud.count(db=self.db, **filters)
