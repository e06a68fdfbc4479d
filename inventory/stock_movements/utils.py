"""
Utilitaires pour les mouvements de stock.
"""
from decimal import Decimal, ROUND_HALF_UP

from inventory.products.entities import ProductSnapshot
from .constants import PURCHASE_PRICE_SUGGESTION_RATIO

def suggest_purchase_price(product: ProductSnapshot) -> Decimal:
    """
    Propose un prix d'achat pour pré-remplir une entrée de stock.

    Args:
        product: Produit réapprovisionné

    Returns:
        Decimal: 70% du prix de vente, arrondi au centime
    """
    return (product.price * PURCHASE_PRICE_SUGGESTION_RATIO).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
