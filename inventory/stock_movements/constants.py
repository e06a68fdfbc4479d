"""
Constantes pour les mouvements de stock.
"""
from decimal import Decimal
from enum import Enum


class StockDirection(str, Enum):
    IN = "in"
    OUT = "out"


class StockOutReason(str, Enum):
    SALE = "Sale"
    DAMAGED = "Damaged"
    INTERNAL_USE = "InternalUse"
    RETURN_TO_SUPPLIER = "ReturnToSupplier"
    OTHER = "Other"


STOCK_OUT_REASONS = frozenset(reason.value for reason in StockOutReason)

# Prix d'achat proposé par défaut: 70% du prix de vente
PURCHASE_PRICE_SUGGESTION_RATIO = Decimal("0.7")

# Prix d'achat stocké en Numeric(10, 2)
PURCHASE_PRICE_STEP = Decimal("0.01")
MAX_PURCHASE_PRICE = Decimal("99999999.99")

# Plus grande quantité stockable (colonne entière 64 bits)
MAX_STOCK_QUANTITY = 2**63 - 1
