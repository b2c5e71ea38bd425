import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from storefront.auth.dependencies import CurrentAdmin, CurrentUser
from storefront.orders.dependencies import OrderServiceDep
from storefront.orders.exceptions import (
    InvalidOrderStatusException,
    OrderAccessForbiddenException,
    OrderCreationFailedException,
    OrderNotFoundException,
    OrderStatusTransitionException,
    OrderUpdateFailedException,
    OrderValidationException,
)
from storefront.orders.models import OrderCreate, OrderRead, OrderReadWithUser, OrderStatusUpdate
from storefront.products.exceptions import ProductNotFoundException
from storefront.stock.exceptions import InsufficientStockException, InvalidQuantityException

logger = logging.getLogger(__name__)

order_router = APIRouter(prefix="/orders", tags=["Orders"])


@order_router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
async def create_order_endpoint(service: OrderServiceDep, current_user: CurrentUser, order_in: OrderCreate):
    """Passe une commande à partir des lignes du panier et des informations de livraison."""
    try:
        return await service.create_order(current_user.id, order_in)
    except (
        OrderValidationException,
        ProductNotFoundException,
        InsufficientStockException,
        InvalidQuantityException,
    ) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except OrderCreationFailedException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@order_router.get("/my-orders", response_model=List[OrderRead])
async def list_my_orders_endpoint(service: OrderServiceDep, current_user: CurrentUser):
    return await service.list_user_orders(current_user.id)


# Les routes admin sont déclarées avant /{order_id}
@order_router.get("/admin/all", response_model=List[OrderReadWithUser])
async def admin_list_orders_endpoint(service: OrderServiceDep, current_admin: CurrentAdmin):
    return await service.list_all_orders()


@order_router.put("/admin/{order_id}/status", response_model=OrderRead)
async def admin_update_order_status_endpoint(
    service: OrderServiceDep,
    current_admin: CurrentAdmin,
    order_id: int,
    status_in: OrderStatusUpdate,
):
    try:
        return await service.update_order_status(order_id, status_in.status)
    except OrderNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (InvalidOrderStatusException, OrderStatusTransitionException) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except OrderUpdateFailedException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@order_router.get("/{order_id}", response_model=OrderRead)
async def get_order_endpoint(service: OrderServiceDep, current_user: CurrentUser, order_id: int):
    try:
        return await service.get_order(order_id, current_user)
    except OrderNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except OrderAccessForbiddenException as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
