"""
Exceptions personnalisées pour le registre de stock.
"""
from storefront.core.exceptions import DomainException, ValidationException


class InsufficientStockException(DomainException):
    """Levée lorsque la quantité demandée dépasse le stock disponible."""
    def __init__(self, product_id: int, requested: int, available: int):
        super().__init__(
            f"Stock insuffisant pour le produit {product_id}. "
            f"Disponible: {available}, demandé: {requested}"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class InvalidQuantityException(ValidationException):
    """Levée pour une quantité de stock nulle ou négative."""
    def __init__(self, quantity: int):
        super().__init__(f"Quantité invalide: {quantity}")
        self.quantity = quantity
