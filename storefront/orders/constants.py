"""
Statuts de commande et table des transitions autorisées.
"""
from enum import Enum
from typing import Dict, FrozenSet, List


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


ALLOWED_ORDER_STATUS: List[str] = [s.value for s in OrderStatus]

# (statut courant) -> statuts cibles autorisés.
# Avance possible sur pending -> processing -> shipped -> delivered (sauts compris),
# annulation depuis tout statut non annulé, et "touch" sur le même statut.
ORDER_STATUS_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    OrderStatus.PENDING.value: frozenset({
        OrderStatus.PENDING.value,
        OrderStatus.PROCESSING.value,
        OrderStatus.SHIPPED.value,
        OrderStatus.DELIVERED.value,
        OrderStatus.CANCELLED.value,
    }),
    OrderStatus.PROCESSING.value: frozenset({
        OrderStatus.PROCESSING.value,
        OrderStatus.SHIPPED.value,
        OrderStatus.DELIVERED.value,
        OrderStatus.CANCELLED.value,
    }),
    OrderStatus.SHIPPED.value: frozenset({
        OrderStatus.SHIPPED.value,
        OrderStatus.DELIVERED.value,
        OrderStatus.CANCELLED.value,
    }),
    OrderStatus.DELIVERED.value: frozenset({
        OrderStatus.DELIVERED.value,
        OrderStatus.CANCELLED.value,
    }),
    OrderStatus.CANCELLED.value: frozenset({
        OrderStatus.CANCELLED.value,
    }),
}
