import logging
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.schemas import PaginatedResponse
from inventory.products.entities import ProductSnapshot
from inventory.products.exceptions import ProductNotFoundException
from inventory.products.interfaces.repositories import AbstractProductRepository
from inventory.products.service import ProductService
from .constants import MAX_STOCK_QUANTITY, StockDirection
from .exceptions import StockConflictException, StockMovementNotFoundException
from .models import (
    StockInDefaults,
    StockInRequest,
    StockMovement,
    StockMovementRead,
    StockOutRequest,
    StockTransactionReceipt,
)
from .interfaces.repositories import AbstractStockMovementRepository
from .utils import suggest_purchase_price
from .validation import (
    StockErrorKind,
    StockTransactionAccepted,
    StockTransactionRejected,
    StockTransactionValidator,
    normalize_reason,
    parse_positive_price,
)

logger = logging.getLogger(__name__)


class PaginatedStockMovementResponse(PaginatedResponse[StockMovementRead]): pass


StockTransactionOutcome = Union[StockTransactionReceipt, StockTransactionRejected]


class StockMovementService:
    """Service applicatif des entrées/sorties de stock.

    Valide chaque demande sur l'état lu du produit, puis applique la nouvelle
    quantité par écriture conditionnelle et enregistre le mouvement d'audit
    dans la même transaction. Les refus de validation sont renvoyés tels quels.
    """

    def __init__(
        self,
        db: AsyncSession,
        product_repository: AbstractProductRepository,
        movement_repository: AbstractStockMovementRepository,
        product_service: ProductService,
        validator: Optional[StockTransactionValidator] = None,
    ):
        self.db = db
        self.product_repository = product_repository
        self.movement_repository = movement_repository
        self.product_service = product_service
        self.validator = validator or StockTransactionValidator()

    async def _load_snapshot(self, product_id: int) -> ProductSnapshot:
        snapshot = await self.product_repository.get_snapshot(product_id)
        if snapshot is None:
            raise ProductNotFoundException(product_id)
        return snapshot

    async def stock_in(self, request: StockInRequest) -> StockTransactionOutcome:
        logger.info(f"[StockMovementService] Entrée de stock: produit={request.product_id}, quantité={request.quantity!r}")
        snapshot = await self._load_snapshot(request.product_id)
        result = self.validator.validate_stock_in(
            snapshot, request.quantity, request.supplier, request.purchase_price
        )
        if isinstance(result, StockTransactionRejected):
            return result
        if result.new_quantity > MAX_STOCK_QUANTITY:
            logger.info(f"[StockMovementService] Refus: stock du produit {snapshot.id} au-delà de la capacité ({result.new_quantity})")
            return StockTransactionRejected(
                error=StockErrorKind.INVALID_QUANTITY,
                message=f"La quantité en stock ne peut pas dépasser {MAX_STOCK_QUANTITY} unités",
            )

        movement = StockMovement(
            product_id=snapshot.id,
            direction=StockDirection.IN,
            quantity_change=request.quantity,
            quantity_before=result.previous_quantity,
            quantity_after=result.new_quantity,
            supplier=request.supplier.strip(),
            purchase_price=parse_positive_price(request.purchase_price),
            notes=request.notes,
        )
        return await self._apply(snapshot, result, movement)

    async def stock_out(self, request: StockOutRequest) -> StockTransactionOutcome:
        logger.info(f"[StockMovementService] Sortie de stock: produit={request.product_id}, quantité={request.quantity!r}, motif={request.reason!r}")
        snapshot = await self._load_snapshot(request.product_id)
        result = self.validator.validate_stock_out(snapshot, request.quantity, request.reason)
        if isinstance(result, StockTransactionRejected):
            return result

        movement = StockMovement(
            product_id=snapshot.id,
            direction=StockDirection.OUT,
            quantity_change=-request.quantity,
            quantity_before=result.previous_quantity,
            quantity_after=result.new_quantity,
            reason=normalize_reason(request.reason),
            notes=request.notes,
        )
        return await self._apply(snapshot, result, movement)

    async def _apply(
        self,
        snapshot: ProductSnapshot,
        result: StockTransactionAccepted,
        movement: StockMovement,
    ) -> StockTransactionReceipt:
        """Écrit la nouvelle quantité et le mouvement, ou rien du tout."""
        try:
            applied = await self.product_repository.compare_and_set_quantity(
                snapshot.id, result.previous_quantity, result.new_quantity
            )
            if not applied:
                await self.db.rollback()
                raise StockConflictException(snapshot.id, result.previous_quantity)

            self.movement_repository.add(movement)
            await self.db.commit()
            await self.db.refresh(movement)
        except StockConflictException:
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(f"[StockMovementService] Erreur lors de l'application du mouvement pour produit {snapshot.id}: {e}", exc_info=True)
            raise

        logger.info(
            f"[StockMovementService] Mouvement {movement.id} appliqué: produit {snapshot.id} "
            f"{result.previous_quantity} -> {result.new_quantity}"
        )
        product = await self.product_service.get_product(snapshot.id)
        return StockTransactionReceipt(
            movement=StockMovementRead.model_validate(movement, from_attributes=True),
            product=product,
        )

    async def get_stock_in_defaults(self, product_id: int) -> StockInDefaults:
        snapshot = await self._load_snapshot(product_id)
        return StockInDefaults(product_id=product_id, suggested_purchase_price=suggest_purchase_price(snapshot))

    async def list_movements(
        self,
        limit: int = 100,
        offset: int = 0,
        product_id: Optional[int] = None,
        direction: Optional[StockDirection] = None,
    ) -> PaginatedStockMovementResponse:
        """Liste les mouvements de stock, du plus récent au plus ancien."""
        movements, total_count = await self.movement_repository.list(
            limit=limit, offset=offset, product_id=product_id, direction=direction
        )
        return PaginatedStockMovementResponse(items=movements, total=total_count)

    async def get_movement(self, movement_id: int) -> StockMovementRead:
        logger.debug(f"[StockMovementService] Get Movement ID: {movement_id}")
        movement = await self.movement_repository.get_by_id(movement_id)
        if not movement:
            raise StockMovementNotFoundException(movement_id)
        return movement
