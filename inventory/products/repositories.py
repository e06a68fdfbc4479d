import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.categories.models import Category
from inventory.core.utils import utc_now
from inventory.products.entities import ProductSnapshot
from inventory.products.interfaces.repositories import AbstractProductRepository, ProductRow
from inventory.products.models import Product

logger = logging.getLogger(__name__)


def to_snapshot(product: Product, category_name: Optional[str]) -> ProductSnapshot:
    return ProductSnapshot(
        id=product.id,
        name=product.name,
        price=product.price,
        quantity=product.quantity,
        low_stock_threshold=product.low_stock_threshold,
        category=category_name,
    )


class SQLAlchemyProductRepository(AbstractProductRepository):
    """Accès aux produits, y compris l'écriture conditionnelle de la quantité."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    def _rows_query(self):
        # populate_existing: la quantité peut avoir été écrite hors ORM (compare_and_set_quantity)
        return (
            select(Product, Category.name)
            .outerjoin(Category, Product.category_id == Category.id)
            .execution_options(populate_existing=True)
        )

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        return await self.db.get(Product, product_id, populate_existing=True)

    async def get_row(self, product_id: int) -> Optional[ProductRow]:
        result = await self.db.execute(self._rows_query().where(Product.id == product_id))
        row = result.first()
        return (row[0], row[1]) if row is not None else None

    async def get_snapshot(self, product_id: int) -> Optional[ProductSnapshot]:
        """Lit l'état courant d'un produit (avec le nom de sa catégorie)."""
        logger.debug(f"[ProductRepository] Snapshot produit ID: {product_id}")
        row = await self.get_row(product_id)
        return to_snapshot(*row) if row is not None else None

    async def list_rows(
        self,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[ProductRow], int]:
        """Liste les produits triés par ID, avec filtres optionnels. Retourne aussi le total."""
        query = self._rows_query()
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            query = query.where(or_(Product.name.ilike(pattern), Category.name.ilike(pattern)))
        if category_id is not None:
            query = query.where(Product.category_id == category_id)

        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))

        query = query.order_by(Product.id).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return [(product, category_name) for product, category_name in result.all()], total or 0

    async def list_snapshots(self, **filters) -> List[ProductSnapshot]:
        rows, _ = await self.list_rows(**filters)
        return [to_snapshot(product, category_name) for product, category_name in rows]

    async def count(self) -> int:
        return (await self.db.execute(select(func.count()).select_from(Product))).scalar_one()

    async def create(self, product_data: Dict[str, Any]) -> Product:
        product = Product(**product_data)
        self.db.add(product)
        await self.db.commit()
        await self.db.refresh(product)
        logger.info(f"[ProductRepository] Produit créé ID: {product.id}")
        return product

    async def update(self, product: Product, update_data: Dict[str, Any]) -> Product:
        for key, value in update_data.items():
            setattr(product, key, value)
        product.updated_at = utc_now()
        await self.db.commit()
        await self.db.refresh(product)
        return product

    async def delete(self, product: Product) -> None:
        await self.db.delete(product)
        await self.db.commit()

    async def compare_and_set_quantity(self, product_id: int, expected_quantity: int, new_quantity: int) -> bool:
        """Écrit new_quantity seulement si la quantité stockée vaut encore expected_quantity.

        Ne commit pas: l'appelant inclut l'écriture dans sa transaction.
        Retourne False si un autre écrivain a modifié le stock entre-temps.
        """
        stmt = (
            update(Product)
            .where(Product.id == product_id, Product.quantity == expected_quantity)
            .values(quantity=new_quantity, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        applied = result.rowcount == 1
        if not applied:
            logger.warning(
                f"[ProductRepository] Écriture conditionnelle refusée pour produit {product_id} "
                f"(attendu: {expected_quantity})"
            )
        return applied
