import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import DomainException
from storefront.orders.config import order_settings
from storefront.orders.constants import ALLOWED_ORDER_STATUS, OrderStatus
from storefront.orders.exceptions import (
    InvalidOrderStatusException,
    OrderAccessForbiddenException,
    OrderCreationFailedException,
    OrderNotFoundException,
    OrderStatusTransitionException,
    OrderUpdateFailedException,
    OrderValidationException,
)
from storefront.orders.interfaces.repositories import AbstractOrderRepository
from storefront.orders.models import OrderCreate, OrderRead, OrderReadWithUser
from storefront.orders.utils import (
    aggregate_quantities,
    calculate_order_total,
    generate_order_number,
    is_transition_allowed,
)
from storefront.products.exceptions import ProductNotFoundException
from storefront.stock.service import StockService
from storefront.users.models import UserRead

logger = logging.getLogger(__name__)


class OrderService:
    """Service applicatif pour la gestion des commandes."""

    def __init__(self, db: AsyncSession, order_repository: AbstractOrderRepository, stock_service: StockService):
        self.db = db
        self.order_repository = order_repository
        self.stock_service = stock_service

    async def _read(self, order_id: int) -> OrderRead:
        order = await self.order_repository.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundException(order_id=order_id)
        return OrderRead.model_validate(order)

    async def get_order(self, order_id: int, requesting_user: UserRead) -> OrderRead:
        """Commande lisible par son propriétaire ou par un administrateur."""
        logger.debug(f"[OrderService] Get order ID: {order_id} requested by user {requesting_user.id}")
        order = await self.order_repository.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundException(order_id=order_id)
        if order.user_id != requesting_user.id and not requesting_user.is_admin:
            logger.warning(f"[OrderService] User {requesting_user.id} denied access to order {order_id}.")
            raise OrderAccessForbiddenException(order_id=order_id)
        return OrderRead.model_validate(order)

    async def list_user_orders(self, user_id: int) -> List[OrderRead]:
        orders = await self.order_repository.list_by_user(user_id)
        return [OrderRead.model_validate(o) for o in orders]

    async def list_all_orders(self) -> List[OrderReadWithUser]:
        orders = await self.order_repository.list_all()
        return [OrderReadWithUser.model_validate(o) for o in orders]

    def _validate_order_input(self, order_in: OrderCreate) -> None:
        if not order_in.cart_items:
            raise OrderValidationException("Le panier est vide")
        if len(order_in.cart_items) > order_settings.MAX_ITEMS_PER_ORDER:
            raise OrderValidationException(
                f"Une commande ne peut pas contenir plus de {order_settings.MAX_ITEMS_PER_ORDER} lignes"
            )
        if order_in.shipping_info is None:
            raise OrderValidationException("Tous les champs de livraison sont requis")

    async def create_order(self, user_id: int, order_in: OrderCreate) -> OrderRead:
        """
        Passe une commande de façon atomique.

        1. Passe de validation: lecture du stock de chaque produit et comparaison
           aux quantités demandées (cumulées par produit). Aucune écriture.
        2. Passe de commit: en-tête (numéro unique), lignes au prix du panier,
           puis décrément conditionnel du stock par ordre croissant d'ID produit.

        Le tout dans une seule transaction: toute erreur annule l'en-tête, les
        lignes et les décréments déjà appliqués.
        """
        self._validate_order_input(order_in)
        lines = order_in.cart_items
        shipping = order_in.shipping_info
        requested = aggregate_quantities(lines)
        total_amount = calculate_order_total(lines)
        logger.info(
            f"[OrderService] Creating order for user {user_id}: {len(lines)} lines, total {total_amount}"
        )

        try:
            # 1. Validation
            available = await self.stock_service.get_stocks(list(requested))
            for product_id, quantity in requested.items():
                self.stock_service.check_available(product_id, quantity, available)

            # 2. Commit
            order_data = {
                "user_id": user_id,
                "status": OrderStatus.PENDING.value,
                "total_amount": total_amount,
                "full_name": shipping.full_name,
                "phone": shipping.phone,
                "city": shipping.city,
                "address": shipping.address,
                "postal_code": shipping.postal_code,
            }
            items_data = [
                {"product_id": line.product_id, "quantity": line.quantity, "price": line.unit_price}
                for line in lines
            ]
            order = await self.order_repository.create_order_with_items(
                order_data,
                items_data,
                number_factory=generate_order_number,
                max_attempts=order_settings.NUMBER_MAX_ATTEMPTS,
            )
            order_id = order.id
            order_number = order.order_number

            # Le décrément conditionnel revérifie le stock: protège contre les commandes concurrentes
            for product_id in sorted(requested):
                await self.stock_service.reserve(product_id, requested[product_id])

            await self.db.commit()
        except DomainException as e:
            await self.db.rollback()
            logger.warning(f"[OrderService] Order creation rejected for user {user_id}: {e}")
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(f"[OrderService] Unexpected error creating order for user {user_id}: {e}", exc_info=True)
            raise OrderCreationFailedException(f"Erreur lors de la création de la commande: {e}") from e

        logger.info(f"[OrderService] Order {order_number} (ID {order_id}) created for user {user_id}.")
        return await self._read(order_id)

    async def update_order_status(self, order_id: int, new_status: str) -> OrderRead:
        """
        Change le statut d'une commande (admin).

        Le passage à 'cancelled' restitue au stock la quantité de chaque ligne
        dont le produit existe encore, dans la même transaction.
        """
        if new_status not in ALLOWED_ORDER_STATUS:
            raise InvalidOrderStatusException(status=new_status, allowed=ALLOWED_ORDER_STATUS)

        try:
            order = await self.order_repository.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundException(order_id=order_id)

            current_status = order.status
            if not is_transition_allowed(current_status, new_status, order_settings.ALLOW_BACKWARD_TRANSITIONS):
                raise OrderStatusTransitionException(current=current_status, target=new_status)

            if new_status == OrderStatus.CANCELLED.value and current_status != OrderStatus.CANCELLED.value:
                for item in order.items:
                    if item.product_id is None:
                        logger.warning(
                            f"[OrderService] Order {order_id}: line {item.id} has no product anymore, stock not restored."
                        )
                        continue
                    try:
                        await self.stock_service.release(item.product_id, item.quantity)
                    except ProductNotFoundException as e:
                        raise OrderUpdateFailedException(
                            f"Restitution du stock impossible pour la commande {order_id}: {e}"
                        ) from e

            await self.order_repository.update_status(order, new_status)
            await self.db.commit()
        except DomainException:
            await self.db.rollback()
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(f"[OrderService] Error updating status for order {order_id}: {e}", exc_info=True)
            raise OrderUpdateFailedException(f"Erreur lors de la mise à jour de la commande: {e}") from e

        logger.info(f"[OrderService] Order {order_id} status: '{current_status}' -> '{new_status}'")
        return await self._read(order_id)
