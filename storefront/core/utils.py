from datetime import datetime, timezone


def utc_now() -> datetime:
    """Horodatage UTC avec fuseau, utilisé pour toutes les colonnes created_at/updated_at."""
    return datetime.now(timezone.utc)
