import logging

from inventory.core.schemas import PaginatedResponse
from .interfaces.repositories import AbstractCategoryRepository
from .models import CategoryCreate, CategoryUpdate, CategoryRead
from .exceptions import (
    CategoryNotFoundException,
    DuplicateCategoryNameException,
    CategoryInUseException,
)

logger = logging.getLogger(__name__)

# Champs pouvant être remis à null lors d'une mise à jour
NULLABLE_FIELDS = {"description"}


class PaginatedCategoryResponse(PaginatedResponse[CategoryRead]): pass


class CategoryService:
    """Service applicatif pour la gestion des catégories via Repository."""

    def __init__(self, repository: AbstractCategoryRepository):
        self.repository = repository
        logger.debug("CategoryService initialized with repository.")

    async def list_categories(self, limit: int = 100, offset: int = 0) -> PaginatedCategoryResponse:
        logger.debug(f"[CategoryService] List Categories: limit={limit}, offset={offset}")
        categories, total_count = await self.repository.list(limit=limit, offset=offset)
        return PaginatedCategoryResponse(items=categories, total=total_count)

    async def get_category(self, category_id: int) -> CategoryRead:
        category = await self.repository.get_by_id(category_id)
        if not category:
            raise CategoryNotFoundException(category_id)
        return category

    async def create_category(self, category_data: CategoryCreate) -> CategoryRead:
        logger.info(f"[CategoryService] Create Category: name={category_data.name}")
        if await self.repository.exists_by_name(category_data.name):
            raise DuplicateCategoryNameException(category_data.name)
        return await self.repository.create(category_data)

    async def update_category(self, category_id: int, category_data: CategoryUpdate) -> CategoryRead:
        logger.info(f"[CategoryService] Update Category ID: {category_id}")
        current = await self.get_category(category_id)
        update_data = {
            key: value for key, value in category_data.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_FIELDS
        }
        if update_data.get("name") and update_data["name"] != current.name:
            if await self.repository.exists_by_name(update_data["name"]):
                raise DuplicateCategoryNameException(update_data["name"])
        updated = await self.repository.update(category_id, update_data)
        if not updated:
            raise CategoryNotFoundException(category_id)
        return updated

    async def delete_category(self, category_id: int) -> None:
        """Supprime une catégorie si aucun produit ne la référence."""
        logger.info(f"[CategoryService] Delete Category ID: {category_id}")
        await self.get_category(category_id)
        product_count = await self.repository.count_products(category_id)
        if product_count:
            raise CategoryInUseException(category_id, product_count)
        await self.repository.delete(category_id)
