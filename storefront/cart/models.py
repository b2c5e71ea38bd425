from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import ConfigDict
from pydantic import Field as PydanticField
from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel

from storefront.core.schemas import OrmBaseModel
from storefront.core.utils import utc_now
from storefront.products.models import Product, ProductRead

# --- Modèle CartItem ---

class CartItemBase(SQLModel):
    user_id: int = Field(foreign_key="users.id", index=True)
    product_id: int = Field(foreign_key="products.id", index=True, ondelete="CASCADE")
    quantity: int = Field(gt=0)


class CartItem(CartItemBase, table=True):
    __tablename__ = "cart_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False)

    product: Optional[Product] = Relationship()


# --- Schémas API ---

class CartItemAdd(SQLModel):
    product_id: int
    quantity: int = 1


class CartItemUpdate(SQLModel):
    quantity: int


class CartItemRead(CartItemBase):
    """Ligne de panier avec le produit joint (nom, prix, stock au moment de la lecture)."""
    id: int
    created_at: datetime
    product: Optional[ProductRead] = None

    model_config = ConfigDict(from_attributes=True)


class CartLine(OrmBaseModel):
    """Instantané d'une ligne de panier transmis au passage de commande.

    Le prix unitaire est celui lu au moment de l'ajout/lecture du panier ;
    il est recopié tel quel dans la ligne de commande.
    """
    product_id: int
    quantity: int = PydanticField(gt=0)
    unit_price: Decimal = PydanticField(ge=0, max_digits=10, decimal_places=2)
