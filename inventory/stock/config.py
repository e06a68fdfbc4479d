"""
Configuration pour le module de gestion des stocks.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_HIGH_SEVERITY_RATIO, DEFAULT_LOW_STOCK_THRESHOLD

class StockSettings(BaseSettings):
    """Paramètres de configuration pour les alertes de stock."""

    # Politique d'alerte
    DEFAULT_LOW_STOCK_THRESHOLD: int = DEFAULT_LOW_STOCK_THRESHOLD
    HIGH_SEVERITY_RATIO: float = DEFAULT_HIGH_SEVERITY_RATIO

    model_config = SettingsConfigDict(env_prefix="STOCK_", case_sensitive=True, extra="ignore")

# Instance des paramètres
settings = StockSettings()
