import logging
from typing import Optional

from inventory.categories.interfaces.repositories import AbstractCategoryRepository
from inventory.categories.exceptions import CategoryNotFoundException
from inventory.core.schemas import PaginatedResponse
from inventory.stock.alerts import StockAlertEvaluator
from inventory.stock.utils import calculate_stock_status
from inventory.stock_movements.interfaces.repositories import AbstractStockMovementRepository
from .exceptions import ProductNotFoundException, ProductHasMovementsException
from .models import Product, ProductCreate, ProductRead, ProductUpdate
from .interfaces.repositories import AbstractProductRepository
from .repositories import to_snapshot

logger = logging.getLogger(__name__)

# Champs pouvant être remis à null lors d'une mise à jour
NULLABLE_FIELDS = {"description", "low_stock_threshold", "category_id"}


class PaginatedProductResponse(PaginatedResponse[ProductRead]): pass


class ProductService:
    """Service applicatif pour la gestion des produits."""

    def __init__(
        self,
        product_repository: AbstractProductRepository,
        category_repository: AbstractCategoryRepository,
        movement_repository: AbstractStockMovementRepository,
        evaluator: Optional[StockAlertEvaluator] = None,
    ):
        self.product_repository = product_repository
        self.category_repository = category_repository
        self.movement_repository = movement_repository
        self.evaluator = evaluator or StockAlertEvaluator()

    def _to_read(self, product: Product, category_name: Optional[str]) -> ProductRead:
        snapshot = to_snapshot(product, category_name)
        return ProductRead(
            **product.model_dump(),
            category=category_name,
            stock_status=calculate_stock_status(snapshot, self.evaluator),
            alert_level=self.evaluator.evaluate(snapshot).value,
        )

    async def _ensure_category(self, category_id: Optional[int]) -> None:
        if category_id is not None and not await self.category_repository.get_by_id(category_id):
            raise CategoryNotFoundException(category_id)

    async def get_product(self, product_id: int) -> ProductRead:
        row = await self.product_repository.get_row(product_id)
        if row is None:
            raise ProductNotFoundException(product_id)
        return self._to_read(*row)

    async def list_products(
        self,
        limit: int = 100,
        offset: int = 0,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> PaginatedProductResponse:
        """Liste les produits (recherche sur le nom ou la catégorie)."""
        logger.debug(f"[ProductService] List Products: search={search}, category={category_id}, limit={limit}, offset={offset}")
        rows, total = await self.product_repository.list_rows(
            search=search, category_id=category_id, limit=limit, offset=offset
        )
        return PaginatedProductResponse(items=[self._to_read(*row) for row in rows], total=total)

    async def create_product(self, product_data: ProductCreate) -> ProductRead:
        logger.info(f"[ProductService] Create Product: name={product_data.name}, stock initial={product_data.quantity}")
        await self._ensure_category(product_data.category_id)
        product = await self.product_repository.create(product_data.model_dump())
        return await self.get_product(product.id)

    async def update_product(self, product_id: int, product_data: ProductUpdate) -> ProductRead:
        logger.info(f"[ProductService] Update Product ID: {product_id}")
        product = await self.product_repository.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundException(product_id)
        update_data = {
            key: value for key, value in product_data.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_FIELDS
        }
        if update_data.get("category_id") is not None:
            await self._ensure_category(update_data["category_id"])
        await self.product_repository.update(product, update_data)
        return await self.get_product(product_id)

    async def delete_product(self, product_id: int) -> None:
        """Supprime un produit sans historique de mouvements."""
        logger.info(f"[ProductService] Delete Product ID: {product_id}")
        product = await self.product_repository.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundException(product_id)
        if await self.movement_repository.count(product_id=product_id):
            raise ProductHasMovementsException(product_id)
        await self.product_repository.delete(product)
