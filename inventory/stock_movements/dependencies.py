import logging
from typing import Annotated
from fastapi import Depends

from inventory.products.dependencies import (
    MovementRepositoryDep,
    ProductRepositoryDep,
    ProductServiceDep,
    SessionDep,
)
from inventory.stock_movements.service import StockMovementService
from inventory.stock_movements.validation import StockTransactionValidator

logger = logging.getLogger(__name__)


def get_stock_transaction_validator() -> StockTransactionValidator:
    return StockTransactionValidator()

StockTransactionValidatorDep = Annotated[StockTransactionValidator, Depends(get_stock_transaction_validator)]


def get_stock_movement_service(
    db: SessionDep,
    product_repository: ProductRepositoryDep,
    movement_repository: MovementRepositoryDep,
    product_service: ProductServiceDep,
    validator: StockTransactionValidatorDep,
) -> StockMovementService:
    """
    Fournit une instance du service de gestion des mouvements de stock.

    Toutes les dépendances partagent la même session de requête, ce qui
    garde l'écriture du stock et du mouvement dans une seule transaction.
    """
    logger.debug("Providing StockMovementService")
    return StockMovementService(
        db=db,
        product_repository=product_repository,
        movement_repository=movement_repository,
        product_service=product_service,
        validator=validator,
    )

StockMovementServiceDep = Annotated[StockMovementService, Depends(get_stock_movement_service)]
