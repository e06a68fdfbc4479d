"""
Utilitaires pour le module de gestion des stocks.
"""
from decimal import Decimal
from typing import Iterable

from inventory.products.entities import ProductSnapshot
from .alerts import StockAlertEvaluator
from .constants import (
    STOCK_STATUS_AVAILABLE,
    STOCK_STATUS_LOW,
    STOCK_STATUS_OUT,
)

def calculate_stock_status(product: ProductSnapshot, evaluator: StockAlertEvaluator) -> str:
    """
    Calcule le statut affiché d'un produit.

    Args:
        product: État courant du produit
        evaluator: Évaluateur fournissant le seuil effectif

    Returns:
        str: Statut du stock (IN_STOCK, LOW_STOCK, OUT_OF_STOCK)
    """
    if product.quantity <= 0:
        return STOCK_STATUS_OUT
    elif product.quantity <= evaluator.effective_threshold(product):
        return STOCK_STATUS_LOW
    return STOCK_STATUS_AVAILABLE

def calculate_inventory_value(products: Iterable[ProductSnapshot]) -> Decimal:
    """
    Calcule la valeur totale du stock (prix de vente x quantité).

    Args:
        products: Produits à valoriser

    Returns:
        Decimal: Valeur totale du stock
    """
    total = sum((product.price * max(product.quantity, 0) for product in products), Decimal("0"))
    return total.quantize(Decimal("0.01"))
