from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.orders.interfaces.repositories import AbstractOrderRepository
from storefront.orders.repositories import SQLAlchemyOrderRepository
from storefront.orders.service import OrderService
from storefront.stock.dependencies import StockServiceDep

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_order_repository(session: SessionDep) -> AbstractOrderRepository:
    return SQLAlchemyOrderRepository(db_session=session)


def get_order_service(
    db: SessionDep,
    order_repository: Annotated[AbstractOrderRepository, Depends(get_order_repository)],
    stock_service: StockServiceDep,
) -> OrderService:
    return OrderService(db=db, order_repository=order_repository, stock_service=stock_service)


OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
