from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from storefront.core.utils import utc_now

# --- Modèle Product SQLModel ---

class ProductBase(SQLModel):
    name: str = Field(index=True, max_length=255)
    description: str = Field(default="")
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    image_url: str = Field(default="", max_length=500)
    # Stock disponible ; jamais négatif, garanti par les mises à jour conditionnelles du module stock
    stock: int = Field(default=0, ge=0)


class Product(ProductBase, table=True):
    __tablename__ = "products"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_by: Optional[int] = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False)
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))


# Schémas API pour Product
class ProductCreate(ProductBase):
    pass


class ProductRead(ProductBase):
    id: int
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProductUpdate(SQLModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = None
    # Passe par le registre de stock (écrasement admin)
    stock: Optional[int] = Field(default=None, ge=0)
