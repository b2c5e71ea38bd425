# storefront/orders/repositories.py
import logging
from typing import Any, Callable, Dict, List, Optional

from fastcrud import FastCRUD
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from storefront.core.utils import utc_now
from storefront.orders.exceptions import OrderCreationFailedException
from storefront.orders.interfaces.repositories import AbstractOrderRepository
from storefront.orders.models import Order, OrderItem

logger = logging.getLogger(__name__)


class SQLAlchemyOrderRepository(AbstractOrderRepository):
    """Implémentation SQLAlchemy du repository des commandes avec FastCRUD et gestion des relations.

    Aucune méthode ne commite : le service décide du commit ou du rollback de
    l'ensemble (en-tête, lignes et mouvements de stock).
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        # CRUD pour Order (utilisé pour les opérations simples)
        self.crud_order = FastCRUD(Order)

    def _select_with_relations(self, include_user: bool = False):
        options = [selectinload(Order.items).selectinload(OrderItem.product)]
        if include_user:
            options.append(selectinload(Order.user))
        return select(Order).options(*options).execution_options(populate_existing=True)

    async def get_by_id(self, order_id: int, include_user: bool = False) -> Optional[Order]:
        logger.debug(f"[OrderRepository] Getting order by ID: {order_id}")
        stmt = self._select_with_relations(include_user).where(Order.id == order_id)
        result = await self.db.execute(stmt)
        order = result.scalars().first()
        if not order:
            logger.warning(f"[OrderRepository] Order not found by ID: {order_id}")
        return order

    async def list_by_user(self, user_id: int) -> List[Order]:
        logger.debug(f"[OrderRepository] Listing orders for user ID: {user_id}")
        stmt = (
            self._select_with_relations()
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_all(self) -> List[Order]:
        logger.debug("[OrderRepository] Listing all orders")
        stmt = self._select_with_relations(include_user=True).order_by(Order.created_at.desc(), Order.id.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def order_number_exists(self, order_number: str) -> bool:
        return await self.crud_order.exists(db=self.db, order_number=order_number)

    async def create_order_with_items(
        self,
        order_data: Dict[str, Any],
        items_data: List[Dict[str, Any]],
        number_factory: Callable[[], str],
        max_attempts: int,
    ) -> Order:
        logger.debug(f"[OrderRepository] Creating order for user {order_data.get('user_id')}")

        # 1. Créer l'Order ; chaque tentative dans un SAVEPOINT pour survivre à une collision de numéro
        created_order = None
        for attempt in range(1, max_attempts + 1):
            order_number = number_factory()
            candidate = Order(**order_data, order_number=order_number)
            try:
                async with self.db.begin_nested():
                    self.db.add(candidate)
                    await self.db.flush()
            except IntegrityError as e:
                if not await self.order_number_exists(order_number):
                    logger.error(f"[OrderRepository] Integrity error creating order: {e}", exc_info=True)
                    raise OrderCreationFailedException(f"Erreur d'intégrité lors de la création de la commande: {e.orig}")
                logger.warning(
                    f"[OrderRepository] Order number collision on '{order_number}' "
                    f"(attempt {attempt}/{max_attempts}), regenerating."
                )
                continue
            created_order = candidate
            break

        if created_order is None:
            raise OrderCreationFailedException(
                f"Impossible de générer un numéro de commande unique après {max_attempts} tentatives."
            )

        # 2. Créer les OrderItems
        items = [OrderItem(**item, order_id=created_order.id) for item in items_data]
        self.db.add_all(items)
        await self.db.flush()

        logger.info(
            f"[OrderRepository] Order ID {created_order.id} ({created_order.order_number}) "
            f"created with {len(items)} items."
        )
        return created_order

    async def update_status(self, order: Order, status: str) -> Order:
        logger.debug(f"[OrderRepository] Updating status for order ID: {order.id} to '{status}'")
        order.status = status
        order.updated_at = utc_now()
        self.db.add(order)
        await self.db.flush()
        return order
