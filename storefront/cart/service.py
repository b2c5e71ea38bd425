import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.cart.exceptions import CartItemNotFoundException
from storefront.cart.interfaces.repositories import AbstractCartRepository
from storefront.cart.models import CartItemAdd, CartItemRead, CartLine
from storefront.stock.exceptions import InsufficientStockException, InvalidQuantityException
from storefront.stock.service import StockService

logger = logging.getLogger(__name__)


class CartService:
    """Service applicatif du panier et lecteur d'instantané pour le passage de commande."""

    def __init__(self, db: AsyncSession, cart_repository: AbstractCartRepository, stock_service: StockService):
        self.db = db
        self.cart_repository = cart_repository
        self.stock_service = stock_service

    async def get_cart(self, user_id: int) -> List[CartItemRead]:
        """Lignes du panier avec les données produit jointes au moment de la lecture."""
        items = await self.cart_repository.list_for_user(user_id)
        return [CartItemRead.model_validate(item) for item in items]

    async def get_checkout_lines(self, user_id: int) -> List[CartLine]:
        """Construit l'instantané `CartLine` qui alimente le passage de commande.

        Le prix unitaire est le prix produit lu maintenant ; le stock n'est pas
        revérifié ici, le workflow de commande s'en charge. Les lignes dont le
        produit a disparu sont ignorées.
        """
        items = await self.cart_repository.list_for_user(user_id)
        lines = []
        for item in items:
            if item.product is None:
                logger.warning(f"[CartService] Ligne {item.id} ignorée: produit {item.product_id} introuvable.")
                continue
            lines.append(CartLine(product_id=item.product_id, quantity=item.quantity, unit_price=item.product.price))
        return lines

    async def _ensure_in_stock(self, product_id: int, quantity: int) -> None:
        available = await self.stock_service.get_stock(product_id)
        if available < quantity:
            raise InsufficientStockException(product_id, quantity, available)

    async def add_item(self, user_id: int, item_in: CartItemAdd) -> CartItemRead:
        """Ajoute un produit ; fusionne avec la ligne existante pour ce produit."""
        if item_in.quantity <= 0:
            raise InvalidQuantityException(item_in.quantity)
        try:
            existing = await self.cart_repository.get_by_product(user_id, item_in.product_id)
            new_quantity = existing.quantity + item_in.quantity if existing else item_in.quantity
            await self._ensure_in_stock(item_in.product_id, new_quantity)

            if existing:
                item = await self.cart_repository.set_quantity(existing, new_quantity)
            else:
                item = await self.cart_repository.add(user_id, item_in.product_id, item_in.quantity)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(f"[CartService] Panier user {user_id}: produit {item_in.product_id} qty={new_quantity}")
        return CartItemRead.model_validate(item)

    async def update_item(self, user_id: int, item_id: int, quantity: int) -> CartItemRead:
        if quantity <= 0:
            raise InvalidQuantityException(quantity)
        try:
            item = await self.cart_repository.get_for_user(item_id, user_id)
            if item is None:
                raise CartItemNotFoundException(item_id)
            await self._ensure_in_stock(item.product_id, quantity)
            item = await self.cart_repository.set_quantity(item, quantity)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return CartItemRead.model_validate(item)

    async def remove_item(self, user_id: int, item_id: int) -> None:
        try:
            if not await self.cart_repository.delete(item_id, user_id):
                raise CartItemNotFoundException(item_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def clear_cart(self, user_id: int) -> int:
        try:
            removed = await self.cart_repository.clear(user_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(f"[CartService] Panier user {user_id} vidé ({removed} lignes).")
        return removed
