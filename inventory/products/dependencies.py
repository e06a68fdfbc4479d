import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.database import get_db_session
from inventory.categories.dependencies import CategoryRepositoryDep
from inventory.products.repositories import SQLAlchemyProductRepository
from inventory.products.service import ProductService
from inventory.stock.dependencies import StockAlertEvaluatorDep
from inventory.stock_movements.repositories import SQLAlchemyStockMovementRepository

logger = logging.getLogger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_product_repository(session: SessionDep) -> SQLAlchemyProductRepository:
    """Fournit une instance du repository de produits."""
    return SQLAlchemyProductRepository(db_session=session)

ProductRepositoryDep = Annotated[SQLAlchemyProductRepository, Depends(get_product_repository)]


def get_movement_repository(session: SessionDep) -> SQLAlchemyStockMovementRepository:
    """Fournit une instance du repository des mouvements de stock."""
    return SQLAlchemyStockMovementRepository(db_session=session)

MovementRepositoryDep = Annotated[SQLAlchemyStockMovementRepository, Depends(get_movement_repository)]


def get_product_service(
    product_repository: ProductRepositoryDep,
    category_repository: CategoryRepositoryDep,
    movement_repository: MovementRepositoryDep,
    evaluator: StockAlertEvaluatorDep,
) -> ProductService:
    """Fournit une instance du service de gestion des produits."""
    logger.debug("Providing ProductService")
    return ProductService(
        product_repository=product_repository,
        category_repository=category_repository,
        movement_repository=movement_repository,
        evaluator=evaluator,
    )

ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
