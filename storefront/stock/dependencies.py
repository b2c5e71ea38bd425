from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.stock.service import StockService


def get_stock_service(
    db: Annotated[AsyncSession, Depends(get_db_session)]
) -> StockService:
    """Fournit une instance du service de registre de stock liée à la session de la requête."""
    return StockService(db=db)


StockServiceDep = Annotated[StockService, Depends(get_stock_service)]
