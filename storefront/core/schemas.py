from pydantic import BaseModel, ConfigDict

# ======================================================
# Configuration Commune Pydantic
# ======================================================

class OrmBaseModel(BaseModel):
    """Base des schémas de requête/réponse construits depuis des objets ORM."""
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )
