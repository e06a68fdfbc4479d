"""
Évaluation des alertes de stock.

Chaque produit est classé à partir de son seul état courant:

- quantité nulle                          -> ``critical``
- quantité <= seuil * ratio               -> ``high``
- quantité <= seuil                       -> ``medium``
- au-dessus du seuil                      -> ``none`` (pas d'alerte)

L'évaluation est pure: mêmes données, même résultat, aucun effet de bord.
Les alertes ne sont jamais persistées, elles sont recalculées à la demande.
"""
import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from inventory.products.entities import ProductSnapshot
from .config import settings
from .constants import ALERT_LEVELS, AlertLevel

logger = logging.getLogger(__name__)


class AlertPolicy(BaseModel):
    """Points de coupure des niveaux d'alerte."""
    default_threshold: int = Field(default=settings.DEFAULT_LOW_STOCK_THRESHOLD, ge=0)
    high_ratio: float = Field(default=settings.HIGH_SEVERITY_RATIO, ge=0, le=1)

    model_config = ConfigDict(frozen=True)


class StockAlert(BaseModel):
    product_id: int
    product_name: str
    current_stock: int
    threshold: int
    category: Optional[str] = None
    alert_level: AlertLevel
    message: str

    model_config = ConfigDict(frozen=True)


def _non_negative(value: int, field: str, product_id: int) -> int:
    if value < 0:
        logger.warning(f"[StockAlertEvaluator] {field} négatif ({value}) pour produit {product_id}, ramené à 0")
        return 0
    return value


def _alert_message(product: ProductSnapshot, level: AlertLevel, quantity: int, threshold: int) -> str:
    if level == AlertLevel.CRITICAL:
        return f"{product.name} est en rupture de stock"
    if level == AlertLevel.HIGH:
        return f"Stock très bas pour {product.name}: {quantity} unité(s) (seuil: {threshold})"
    return f"Stock bas pour {product.name}: {quantity} unité(s) (seuil: {threshold})"


class StockAlertEvaluator:
    """Classe les produits par niveau d'alerte de stock."""

    def __init__(self, policy: Optional[AlertPolicy] = None):
        self.policy = policy or AlertPolicy()

    def effective_threshold(self, product: ProductSnapshot) -> int:
        """Seuil du produit, ou seuil par défaut s'il n'est pas défini."""
        if product.low_stock_threshold is None:
            return self.policy.default_threshold
        return _non_negative(product.low_stock_threshold, "low_stock_threshold", product.id)

    def evaluate(self, product: ProductSnapshot) -> AlertLevel:
        quantity = _non_negative(product.quantity, "quantity", product.id)
        threshold = self.effective_threshold(product)
        return self._level(quantity, threshold)

    def _level(self, quantity: int, threshold: int) -> AlertLevel:
        if quantity == 0:
            return AlertLevel.CRITICAL
        if quantity <= threshold:
            if quantity <= threshold * self.policy.high_ratio:
                return AlertLevel.HIGH
            return AlertLevel.MEDIUM
        return AlertLevel.NONE

    def build_alert(self, product: ProductSnapshot) -> StockAlert:
        quantity = _non_negative(product.quantity, "quantity", product.id)
        threshold = self.effective_threshold(product)
        level = self._level(quantity, threshold)
        return StockAlert(
            product_id=product.id,
            product_name=product.name,
            current_stock=quantity,
            threshold=threshold,
            category=product.category,
            alert_level=level,
            message=_alert_message(product, level, quantity, threshold),
        )

    def evaluate_all(self, products: Iterable[ProductSnapshot]) -> List[StockAlert]:
        """Alertes des produits en stock bas, dans l'ordre d'entrée."""
        alerts = []
        for product in products:
            alert = self.build_alert(product)
            if alert.alert_level != AlertLevel.NONE:
                alerts.append(alert)
        return alerts


def filter_alerts(
    alerts: Iterable[StockAlert],
    severity: Optional[AlertLevel] = None,
    search: Optional[str] = None,
) -> List[StockAlert]:
    """Filtre par niveau et par texte (nom du produit ou catégorie), sans retrier."""
    term = search.strip().lower() if search else ""
    filtered = []
    for alert in alerts:
        if severity is not None and alert.alert_level != severity:
            continue
        if term and term not in alert.product_name.lower() and term not in (alert.category or "").lower():
            continue
        filtered.append(alert)
    return filtered


def count_by_level(alerts: Iterable[StockAlert]) -> Dict[str, int]:
    counts = Counter(alert.alert_level for alert in alerts)
    return {level.value: counts.get(level, 0) for level in ALERT_LEVELS}
