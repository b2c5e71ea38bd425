from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from storefront.orders.models import Order


class AbstractOrderRepository(ABC):
    """Interface abstraite pour le repository des commandes."""

    @abstractmethod
    async def get_by_id(self, order_id: int, include_user: bool = False) -> Optional[Order]:
        """Commande avec ses lignes (produit joint) et, si demandé, son propriétaire."""
        raise NotImplementedError

    @abstractmethod
    async def list_by_user(self, user_id: int) -> List[Order]:
        """Commandes d'un utilisateur, les plus récentes d'abord."""
        raise NotImplementedError

    @abstractmethod
    async def list_all(self) -> List[Order]:
        """Toutes les commandes avec leur propriétaire, les plus récentes d'abord."""
        raise NotImplementedError

    @abstractmethod
    async def order_number_exists(self, order_number: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def create_order_with_items(
        self,
        order_data: Dict[str, Any],
        items_data: List[Dict[str, Any]],
        number_factory: Callable[[], str],
        max_attempts: int,
    ) -> Order:
        """Insère l'en-tête (numéro unique) puis les lignes, sans commit."""
        raise NotImplementedError

    @abstractmethod
    async def update_status(self, order: Order, status: str) -> Order:
        raise NotImplementedError
