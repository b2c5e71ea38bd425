from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.cart.interfaces.repositories import AbstractCartRepository
from storefront.cart.repositories import SQLAlchemyCartRepository
from storefront.cart.service import CartService
from storefront.database import get_db_session
from storefront.stock.dependencies import StockServiceDep

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_cart_repository(session: SessionDep) -> AbstractCartRepository:
    return SQLAlchemyCartRepository(db_session=session)


def get_cart_service(
    db: SessionDep,
    cart_repository: Annotated[AbstractCartRepository, Depends(get_cart_repository)],
    stock_service: StockServiceDep,
) -> CartService:
    return CartService(db=db, cart_repository=cart_repository, stock_service=stock_service)


CartServiceDep = Annotated[CartService, Depends(get_cart_service)]
