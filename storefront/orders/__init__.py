"""
Module Orders - Passage et suivi des commandes
"""

# Exposer les modèles et schémas pour faciliter les imports
from storefront.orders.models import (
    Order, OrderItem,
    OrderCreate, OrderRead, OrderReadWithUser, OrderStatusUpdate,
    OrderItemRead, ShippingInfo,
)

__all__ = [
    "Order", "OrderItem",
    "OrderCreate", "OrderRead", "OrderReadWithUser", "OrderStatusUpdate",
    "OrderItemRead", "ShippingInfo",
]
