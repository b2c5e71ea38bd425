import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from storefront.auth.dependencies import CurrentUser
from storefront.cart.dependencies import CartServiceDep
from storefront.cart.exceptions import CartItemNotFoundException
from storefront.cart.models import CartItemAdd, CartItemRead, CartItemUpdate, CartLine
from storefront.products.exceptions import ProductNotFoundException
from storefront.stock.exceptions import InsufficientStockException, InvalidQuantityException

logger = logging.getLogger(__name__)

cart_router = APIRouter(prefix="/cart", tags=["Cart"])


@cart_router.get("", response_model=List[CartItemRead])
async def get_cart_endpoint(service: CartServiceDep, current_user: CurrentUser):
    """Panier de l'utilisateur avec les produits joints."""
    return await service.get_cart(current_user.id)


@cart_router.get("/checkout-lines", response_model=List[CartLine])
async def get_checkout_lines_endpoint(service: CartServiceDep, current_user: CurrentUser):
    """Instantané du panier au prix courant, à renvoyer tel quel en `cartItems` lors du passage de commande."""
    return await service.get_checkout_lines(current_user.id)


@cart_router.post("/add", response_model=CartItemRead)
async def add_to_cart_endpoint(service: CartServiceDep, current_user: CurrentUser, item_in: CartItemAdd):
    try:
        return await service.add_item(current_user.id, item_in)
    except (ProductNotFoundException, InsufficientStockException, InvalidQuantityException) as e:
        logger.warning(f"Ajout panier refusé pour user {current_user.id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@cart_router.put("/{item_id}", response_model=CartItemRead)
async def update_cart_item_endpoint(
    service: CartServiceDep,
    current_user: CurrentUser,
    item_id: int,
    item_in: CartItemUpdate,
):
    try:
        return await service.update_item(current_user.id, item_id, item_in.quantity)
    except CartItemNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ProductNotFoundException, InsufficientStockException, InvalidQuantityException) as e:
        logger.warning(f"MAJ panier refusée pour user {current_user.id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@cart_router.delete("/{item_id}")
async def remove_cart_item_endpoint(service: CartServiceDep, current_user: CurrentUser, item_id: int):
    try:
        await service.remove_item(current_user.id, item_id)
    except CartItemNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"message": "Article retiré du panier"}


@cart_router.delete("")
async def clear_cart_endpoint(service: CartServiceDep, current_user: CurrentUser):
    removed = await service.clear_cart(current_user.id)
    return {"message": "Panier vidé", "removed": removed}
