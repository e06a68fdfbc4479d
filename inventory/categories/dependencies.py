import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.database import get_db_session
from inventory.categories.repositories import SQLAlchemyCategoryRepository
from inventory.categories.service import CategoryService

logger = logging.getLogger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_category_repository(session: SessionDep) -> SQLAlchemyCategoryRepository:
    """Fournit une instance du repository de catégories."""
    return SQLAlchemyCategoryRepository(db_session=session)

CategoryRepositoryDep = Annotated[SQLAlchemyCategoryRepository, Depends(get_category_repository)]


def get_category_service(repository: CategoryRepositoryDep) -> CategoryService:
    """Fournit une instance du service de gestion des catégories."""
    logger.debug("Providing CategoryService with injected repository")
    return CategoryService(repository=repository)

CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
