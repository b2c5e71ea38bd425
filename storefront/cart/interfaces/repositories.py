from abc import ABC, abstractmethod
from typing import List, Optional

from storefront.cart.models import CartItem


class AbstractCartRepository(ABC):
    """Interface abstraite pour le repository du panier persistant."""

    @abstractmethod
    async def list_for_user(self, user_id: int) -> List[CartItem]:
        """Lignes du panier, produit joint, dans l'ordre d'ajout."""
        raise NotImplementedError

    @abstractmethod
    async def get_for_user(self, item_id: int, user_id: int) -> Optional[CartItem]:
        raise NotImplementedError

    @abstractmethod
    async def get_by_product(self, user_id: int, product_id: int) -> Optional[CartItem]:
        raise NotImplementedError

    @abstractmethod
    async def add(self, user_id: int, product_id: int, quantity: int) -> CartItem:
        raise NotImplementedError

    @abstractmethod
    async def set_quantity(self, item: CartItem, quantity: int) -> CartItem:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, item_id: int, user_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def clear(self, user_id: int) -> int:
        """Vide le panier et retourne le nombre de lignes supprimées."""
        raise NotImplementedError
