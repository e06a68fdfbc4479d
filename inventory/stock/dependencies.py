from typing import Annotated
from fastapi import Depends

from .alerts import AlertPolicy, StockAlertEvaluator
from .config import settings

def get_stock_alert_evaluator() -> StockAlertEvaluator:
    """
    Fournit l'évaluateur d'alertes configuré par StockSettings.

    Returns:
        StockAlertEvaluator: Évaluateur utilisant le seuil et le ratio configurés
    """
    policy = AlertPolicy(
        default_threshold=settings.DEFAULT_LOW_STOCK_THRESHOLD,
        high_ratio=settings.HIGH_SEVERITY_RATIO,
    )
    return StockAlertEvaluator(policy=policy)

StockAlertEvaluatorDep = Annotated[StockAlertEvaluator, Depends(get_stock_alert_evaluator)]
