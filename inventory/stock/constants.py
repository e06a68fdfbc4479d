"""
Constantes pour le module de gestion des stocks.
"""
from enum import Enum

# Seuil de stock bas appliqué quand un produit n'en définit pas
DEFAULT_LOW_STOCK_THRESHOLD = 10

# En dessous de (seuil * ratio) l'alerte passe de "medium" à "high"
DEFAULT_HIGH_SEVERITY_RATIO = 0.5


class AlertLevel(str, Enum):
    NONE = "none"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# Niveaux remontés dans la liste des alertes, du plus au moins urgent
ALERT_LEVELS = (AlertLevel.CRITICAL, AlertLevel.HIGH, AlertLevel.MEDIUM)


# Statuts de stock affichés dans les listes de produits
STOCK_STATUS_AVAILABLE = "IN_STOCK"
STOCK_STATUS_LOW = "LOW_STOCK"
STOCK_STATUS_OUT = "OUT_OF_STOCK"
