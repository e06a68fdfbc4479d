"""
Validation des entrées et sorties de stock.

Le validateur ne lit que l'état fourni par l'appelant et ne modifie rien:
il calcule la nouvelle quantité ou renvoie un refus typé. La persistance
(écriture conditionnelle + mouvement d'audit) reste à la charge de l'appelant.

Aucune exception ne sort d'ici: chaque refus est un ``StockTransactionRejected``
portant un ``StockErrorKind`` distinct.
"""
import logging
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from inventory.products.entities import ProductSnapshot
from .constants import MAX_PURCHASE_PRICE, PURCHASE_PRICE_STEP, STOCK_OUT_REASONS, StockOutReason

logger = logging.getLogger(__name__)


class StockErrorKind(str, Enum):
    INVALID_QUANTITY = "InvalidQuantity"
    INVALID_PRICE = "InvalidPrice"
    MISSING_SUPPLIER = "MissingSupplier"
    INSUFFICIENT_STOCK = "InsufficientStock"
    MISSING_REASON = "MissingReason"


class StockTransactionAccepted(BaseModel):
    accepted: Literal[True] = True
    previous_quantity: int
    new_quantity: int

    model_config = ConfigDict(frozen=True)


class StockTransactionRejected(BaseModel):
    accepted: Literal[False] = False
    error: StockErrorKind
    message: str
    # Renseigné pour InsufficientStock
    available: Optional[int] = None

    model_config = ConfigDict(frozen=True)


StockTransactionResult = Union[StockTransactionAccepted, StockTransactionRejected]


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def parse_positive_price(value: Any) -> Optional[Decimal]:
    """Convertit un prix en Decimal, ou None s'il n'est pas un montant fini > 0 au centime près."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        return None
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not price.is_finite() or price <= 0 or price > MAX_PURCHASE_PRICE:
        return None
    # Au plus 2 décimales (centimes)
    if price != price.quantize(PURCHASE_PRICE_STEP):
        return None
    return price


def normalize_reason(reason: Any) -> Optional[str]:
    """Retourne le motif de sortie reconnu, ou None."""
    if isinstance(reason, StockOutReason):
        return reason.value
    if isinstance(reason, str) and reason.strip() in STOCK_OUT_REASONS:
        return reason.strip()
    return None


def _reject(product: ProductSnapshot, error: StockErrorKind, message: str, available: Optional[int] = None) -> StockTransactionRejected:
    logger.info(f"[StockTransactionValidator] Refus {error.value} pour produit {product.id}: {message}")
    return StockTransactionRejected(error=error, message=message, available=available)


class StockTransactionValidator:
    """Règles de validité des entrées/sorties de stock."""

    def validate_stock_in(
        self,
        product: ProductSnapshot,
        quantity_delta: Any,
        supplier: Any,
        purchase_price: Any,
    ) -> StockTransactionResult:
        if not _is_positive_int(quantity_delta):
            return _reject(product, StockErrorKind.INVALID_QUANTITY, "La quantité doit être un entier supérieur à 0")
        if parse_positive_price(purchase_price) is None:
            return _reject(product, StockErrorKind.INVALID_PRICE, "Le prix d'achat doit être un montant supérieur à 0, au centime près")
        if not isinstance(supplier, str) or not supplier.strip():
            return _reject(product, StockErrorKind.MISSING_SUPPLIER, "Le nom du fournisseur est obligatoire")

        return StockTransactionAccepted(
            previous_quantity=product.quantity,
            new_quantity=product.quantity + quantity_delta,
        )

    def validate_stock_out(
        self,
        product: ProductSnapshot,
        quantity_delta: Any,
        reason: Any,
    ) -> StockTransactionResult:
        if not _is_positive_int(quantity_delta):
            return _reject(product, StockErrorKind.INVALID_QUANTITY, "La quantité doit être un entier supérieur à 0")
        if quantity_delta > product.quantity:
            return _reject(
                product,
                StockErrorKind.INSUFFICIENT_STOCK,
                f"Impossible de sortir plus que la quantité disponible ({product.quantity} unités)",
                available=product.quantity,
            )
        if normalize_reason(reason) is None:
            return _reject(
                product,
                StockErrorKind.MISSING_REASON,
                f"Le motif doit être l'un de: {', '.join(r.value for r in StockOutReason)}",
            )

        return StockTransactionAccepted(
            previous_quantity=product.quantity,
            new_quantity=product.quantity - quantity_delta,
        )
