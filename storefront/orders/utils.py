"""
Utilitaires pour le module de gestion des commandes.
"""
import secrets
import string
import time
from decimal import Decimal
from typing import Dict, Iterable

from storefront.cart.models import CartLine
from storefront.orders.config import order_settings
from storefront.orders.constants import ALLOWED_ORDER_STATUS, ORDER_STATUS_TRANSITIONS

BASE36_ALPHABET = string.digits + string.ascii_uppercase


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 n'accepte que des entiers positifs")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_order_number() -> str:
    """
    Génère un numéro de commande lisible: `ORD-<horodatage ms en base36>-<suffixe aléatoire>`.

    L'unicité n'est que probabiliste ; elle est garantie par la contrainte
    UNIQUE de `orders.order_number` et la boucle de régénération du repository.
    """
    timestamp = to_base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(order_settings.NUMBER_SUFFIX_LENGTH))
    return f"{order_settings.NUMBER_PREFIX}-{timestamp}-{suffix}"


def calculate_order_total(lines: Iterable[CartLine]) -> Decimal:
    """Somme des sous-totaux au prix de l'instantané panier (pas du prix produit courant)."""
    total = sum((line.unit_price * line.quantity for line in lines), Decimal("0"))
    return total.quantize(Decimal("0.01"))


def aggregate_quantities(lines: Iterable[CartLine]) -> Dict[int, int]:
    """Quantités demandées par produit ; un produit présent sur plusieurs lignes est cumulé."""
    requested: Dict[int, int] = {}
    for line in lines:
        requested[line.product_id] = requested.get(line.product_id, 0) + line.quantity
    return requested


def is_transition_allowed(current: str, target: str, allow_backward: bool = False) -> bool:
    if allow_backward:
        return target in ALLOWED_ORDER_STATUS
    return target in ORDER_STATUS_TRANSITIONS.get(current, frozenset())
