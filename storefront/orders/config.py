"""
Configuration spécifique au module Orders.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class OrderSettings(BaseSettings):
    """Paramètres du passage de commande (variables d'environnement préfixées par ORDER_)."""

    # Numéro de commande: <PREFIX>-<horodatage base36>-<suffixe aléatoire>
    NUMBER_PREFIX: str = "ORD"
    NUMBER_SUFFIX_LENGTH: int = 5
    # Nombre de générations tentées en cas de collision sur la contrainte d'unicité
    NUMBER_MAX_ATTEMPTS: int = 5

    MAX_ITEMS_PER_ORDER: int = 50

    # Autorise les retours en arrière (ex: delivered -> pending), comportement historique
    ALLOW_BACKWARD_TRANSITIONS: bool = False

    model_config = SettingsConfigDict(
        env_prefix="ORDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


order_settings = OrderSettings()
