import logging
from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.products.exceptions import ProductNotFoundException
from storefront.stock import crud as stock_crud
from storefront.stock.exceptions import InsufficientStockException, InvalidQuantityException

logger = logging.getLogger(__name__)


class StockService:
    """Service applicatif du registre de stock (un compteur entier par produit).

    Ne commite jamais : les réservations et restitutions font partie de la
    transaction du workflow appelant, qui décide du commit ou du rollback.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_stock(self, product_id: int) -> int:
        logger.debug(f"[StockService] Lecture stock produit ID: {product_id}")
        return await stock_crud.get_stock(self.db, product_id)

    async def get_stocks(self, product_ids: List[int]) -> Dict[int, int]:
        return await stock_crud.get_stocks(self.db, product_ids)

    async def set_stock(self, product_id: int, quantity: int) -> None:
        """Écrasement administrateur ; la quantité doit déjà être validée (>= 0)."""
        if quantity < 0:
            raise InvalidQuantityException(quantity)
        await stock_crud.set_stock(self.db, product_id, quantity)

    def check_available(self, product_id: int, requested: int, available: Dict[int, int]) -> None:
        """Vérifie une ligne contre un instantané de stock déjà lu."""
        if product_id not in available:
            logger.warning(f"[StockService] Produit {product_id} introuvable.")
            raise ProductNotFoundException(product_id=product_id)
        if available[product_id] < requested:
            logger.warning(
                f"[StockService] Stock insuffisant pour produit {product_id}. "
                f"Demandé: {requested}, Disponible: {available[product_id]}"
            )
            raise InsufficientStockException(product_id, requested, available[product_id])

    async def reserve(self, product_id: int, quantity: int) -> None:
        """Décrémente le stock de façon atomique ou lève une exception sans rien modifier."""
        if quantity <= 0:
            raise InvalidQuantityException(quantity)
        if await stock_crud.decrement_if_available(self.db, product_id, quantity):
            logger.info(f"[StockService] Stock réservé: produit {product_id} qty={quantity}")
            return

        # Rien n'a été modifié : relire pour distinguer produit absent et stock insuffisant
        current = await stock_crud.find_stock(self.db, product_id)
        if current is None:
            raise ProductNotFoundException(product_id=product_id)
        logger.warning(
            f"[StockService] Réservation refusée pour produit {product_id}. "
            f"Demandé: {quantity}, Disponible: {current}"
        )
        raise InsufficientStockException(product_id, quantity, current)

    async def release(self, product_id: int, quantity: int) -> None:
        """Restitue une quantité au stock (annulation de commande)."""
        if quantity <= 0:
            raise InvalidQuantityException(quantity)
        await stock_crud.increment(self.db, product_id, quantity)
        logger.info(f"[StockService] Stock restitué: produit {product_id} qty={quantity}")
