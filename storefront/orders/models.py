from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import ConfigDict, field_validator
from pydantic import Field as PydanticField
from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel

from storefront.cart.models import CartLine
from storefront.core.schemas import OrmBaseModel
from storefront.core.utils import utc_now
from storefront.orders.constants import OrderStatus
from storefront.products.models import Product, ProductRead
from storefront.users.models import User, UserSummary

# --- Modèles de base pour OrderItem ---

class OrderItemBase(SQLModel):
    """Base pour les champs de la table OrderItem."""
    quantity: int = Field(gt=0)
    # Prix figé au moment de la commande (instantané panier)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    # NULL si le produit a été supprimé depuis ; l'historique de la commande est conservé
    product_id: Optional[int] = Field(
        default=None, foreign_key="products.id", index=True, ondelete="SET NULL"
    )
    order_id: int = Field(foreign_key="orders.id", index=True, ondelete="CASCADE")


class OrderItem(OrderItemBase, table=True):
    """Modèle de table pour les lignes de commande."""
    id: Optional[int] = Field(default=None, primary_key=True)

    # Relations
    order: Optional["Order"] = Relationship(back_populates="items")
    product: Optional[Product] = Relationship()

    __tablename__ = "order_items"


# --- Modèles de base pour Order ---

class OrderBase(SQLModel):
    """Base pour les champs de la table Order."""
    order_number: str = Field(max_length=40, unique=True, index=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    status: str = Field(default=OrderStatus.PENDING.value, max_length=20, index=True)
    total_amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    # Livraison
    full_name: str = Field(max_length=255)
    phone: str = Field(max_length=50)
    city: str = Field(max_length=100)
    address: str = Field(max_length=500)
    postal_code: Optional[str] = Field(default=None, max_length=20)


class Order(OrderBase, table=True):
    """Modèle de table pour les commandes."""
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False)

    # Relations
    user: Optional[User] = Relationship()
    items: List["OrderItem"] = Relationship(back_populates="order")

    __tablename__ = "orders"


# --- Schémas API pour la création ---

class ShippingInfo(OrmBaseModel):
    """Coordonnées de livraison ; le code postal est le seul champ facultatif."""
    full_name: str = PydanticField(alias="fullName", max_length=255)
    phone: str = PydanticField(max_length=50)
    city: str = PydanticField(max_length=100)
    address: str = PydanticField(max_length=500)
    postal_code: Optional[str] = PydanticField(default=None, alias="postalCode", max_length=20)

    @field_validator("full_name", "phone", "city", "address")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Tous les champs de livraison sont requis")
        return value

    @field_validator("postal_code")
    @classmethod
    def blank_postal_code_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class OrderCreate(OrmBaseModel):
    """Demande de passage de commande: lignes du panier + livraison."""
    cart_items: List[CartLine] = PydanticField(alias="cartItems", min_length=1)
    shipping_info: ShippingInfo = PydanticField(alias="shippingInfo")


class OrderStatusUpdate(SQLModel):
    status: str = Field(max_length=20)


# --- Schémas API de lecture ---

class OrderItemRead(OrderItemBase):
    id: int
    product: Optional[ProductRead] = None

    model_config = ConfigDict(from_attributes=True)


class OrderRead(OrderBase):
    id: int
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemRead] = []

    model_config = ConfigDict(from_attributes=True)


class OrderReadWithUser(OrderRead):
    """Vue admin: commande + résumé du propriétaire."""
    user: Optional[UserSummary] = None
