import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from storefront.cart.interfaces.repositories import AbstractCartRepository
from storefront.cart.models import CartItem

logger = logging.getLogger(__name__)


class SQLAlchemyCartRepository(AbstractCartRepository):
    """Implémentation SQLAlchemy du panier persistant."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    def _select_with_product(self):
        return (
            select(CartItem)
            .options(selectinload(CartItem.product))
            .execution_options(populate_existing=True)
        )

    async def list_for_user(self, user_id: int) -> List[CartItem]:
        logger.debug(f"[CartRepository] Listing cart for user ID: {user_id}")
        stmt = (
            self._select_with_product()
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.created_at, CartItem.id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user(self, item_id: int, user_id: int) -> Optional[CartItem]:
        stmt = self._select_with_product().where(CartItem.id == item_id, CartItem.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_by_product(self, user_id: int, product_id: int) -> Optional[CartItem]:
        stmt = self._select_with_product().where(CartItem.user_id == user_id, CartItem.product_id == product_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def add(self, user_id: int, product_id: int, quantity: int) -> CartItem:
        item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
        self.db.add(item)
        await self.db.flush()
        logger.info(f"[CartRepository] Cart item {item.id} added for user {user_id} (product {product_id}).")
        return await self.get_for_user(item.id, user_id)

    async def set_quantity(self, item: CartItem, quantity: int) -> CartItem:
        item.quantity = quantity
        await self.db.flush()
        return item

    async def delete(self, item_id: int, user_id: int) -> bool:
        result = await self.db.execute(
            delete(CartItem).where(CartItem.id == item_id, CartItem.user_id == user_id)
        )
        return result.rowcount > 0

    async def clear(self, user_id: int) -> int:
        result = await self.db.execute(delete(CartItem).where(CartItem.user_id == user_id))
        return result.rowcount
