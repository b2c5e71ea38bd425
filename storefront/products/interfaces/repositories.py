from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from storefront.products.models import ProductRead


class AbstractProductRepository(ABC):
    """Interface abstraite pour le repository des produits."""

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[ProductRead]:
        raise NotImplementedError

    @abstractmethod
    async def exists(self, product_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def list(self, limit: int, offset: int) -> Tuple[List[ProductRead], int]:
        """Liste les produits, plus récents d'abord, avec le total."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, product_data: Dict[str, Any]) -> ProductRead:
        raise NotImplementedError

    @abstractmethod
    async def update(self, product_id: int, update_data: Dict[str, Any]) -> Optional[ProductRead]:
        """Met à jour les champs descriptifs ; retourne None si le produit n'existe pas."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, product_id: int) -> bool:
        raise NotImplementedError
