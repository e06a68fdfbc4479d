import logging
from typing import Any, Dict, List, Optional, Tuple

from fastcrud import FastCRUD
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.categories.exceptions import DuplicateCategoryNameException
from inventory.categories.models import Category, CategoryCreate, CategoryRead
from inventory.categories.interfaces.repositories import AbstractCategoryRepository
from inventory.products.models import Product

logger = logging.getLogger(__name__)


class SQLAlchemyCategoryRepository(AbstractCategoryRepository):
    """Repository des catégories basé sur FastCRUD."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD(Category)

    async def get_by_id(self, category_id: int) -> Optional[CategoryRead]:
        logger.debug(f"[CategoryRepository] Getting category by ID: {category_id}")
        category = await self.crud.get(
            db=self.db, schema_to_select=CategoryRead, return_as_model=True, id=category_id
        )
        if not category:
            logger.warning(f"[CategoryRepository] Category not found by ID: {category_id}")
        return category

    async def exists_by_name(self, name: str) -> bool:
        return await self.crud.exists(db=self.db, name=name)

    async def list(self, limit: int = 100, offset: int = 0) -> Tuple[List[CategoryRead], int]:
        logger.debug(f"[CategoryRepository] Listing categories: limit={limit}, offset={offset}")
        result = await self.crud.get_multi(
            db=self.db,
            limit=limit,
            offset=offset,
            schema_to_select=CategoryRead,
            return_as_model=True,
            sort_columns="name",
        )
        return result.get("data", []), result.get("total_count", 0)

    async def count(self) -> int:
        return await self.crud.count(db=self.db)

    async def count_products(self, category_id: int) -> int:
        stmt = select(func.count()).select_from(Product).where(Product.category_id == category_id)
        return (await self.db.execute(stmt)).scalar_one()

    async def create(self, category_data: CategoryCreate) -> CategoryRead:
        logger.debug(f"[CategoryRepository] Creating category: {category_data.name}")
        try:
            return await self.crud.create(
                db=self.db, object=category_data, schema_to_select=CategoryRead, return_as_model=True
            )
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[CategoryRepository] Integrity error creating category {category_data.name}: {e}")
            raise DuplicateCategoryNameException(category_data.name)

    async def update(self, category_id: int, update_data: Dict[str, Any]) -> Optional[CategoryRead]:
        logger.debug(f"[CategoryRepository] Updating category ID: {category_id}")
        if not update_data:
            return await self.get_by_id(category_id)
        try:
            await self.crud.update(db=self.db, object=update_data, id=category_id)
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[CategoryRepository] Integrity error updating category {category_id}: {e}")
            raise DuplicateCategoryNameException(update_data.get("name") or "<unknown>")
        return await self.get_by_id(category_id)

    async def delete(self, category_id: int) -> None:
        logger.debug(f"[CategoryRepository] Deleting category ID: {category_id}")
        await self.crud.delete(db=self.db, id=category_id)
