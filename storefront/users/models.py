"""
Modèles SQLModel pour l'entité User.

La table `users` est alimentée par le service d'authentification externe ;
cette API ne fait que la lire pour construire l'utilisateur courant et le
résumé propriétaire affiché dans les listes de commandes admin.
"""
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from storefront.core.utils import utc_now

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class UserBase(SQLModel):
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    name: Optional[str] = Field(default=None, max_length=100)
    role: str = Field(default=ROLE_USER, max_length=20, nullable=False)


# ----- Modèle de Table -----
class User(UserBase, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False)


# ----- Schémas API -----
class UserRead(UserBase):
    """Utilisateur authentifié tel que vu par les dépendances d'auth."""
    id: int

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class UserSummary(SQLModel):
    """Résumé propriétaire joint aux commandes dans la vue admin."""
    id: int
    email: str
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
