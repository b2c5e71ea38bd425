import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.products.interfaces.repositories import AbstractProductRepository
from storefront.products.repositories import SQLAlchemyProductRepository
from storefront.products.service import ProductService
from storefront.stock.dependencies import StockServiceDep

logger = logging.getLogger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_product_repository(session: SessionDep) -> AbstractProductRepository:
    """Fournit une instance du repository de produits."""
    return SQLAlchemyProductRepository(db_session=session)


ProductRepositoryDep = Annotated[AbstractProductRepository, Depends(get_product_repository)]


def get_product_service(
    db: SessionDep,
    product_repository: ProductRepositoryDep,
    stock_service: StockServiceDep,
) -> ProductService:
    logger.debug("Fourniture de ProductService")
    return ProductService(db=db, product_repository=product_repository, stock_service=stock_service)


ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
