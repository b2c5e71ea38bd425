import logging
from typing import Any, Dict, List, Optional, Tuple

from fastcrud import FastCRUD
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.utils import utc_now
from storefront.products.interfaces.repositories import AbstractProductRepository
from storefront.products.models import Product, ProductRead

logger = logging.getLogger(__name__)


class SQLAlchemyProductRepository(AbstractProductRepository):
    """Implémentation SQLAlchemy du repository des produits (FastCRUD pour les lectures)."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD(Product)

    async def get_by_id(self, product_id: int) -> Optional[ProductRead]:
        logger.debug(f"[ProductRepository] Getting product by ID: {product_id}")
        return await self.crud.get(
            db=self.db,
            schema_to_select=ProductRead,
            return_as_model=True,
            id=product_id,
        )

    async def exists(self, product_id: int) -> bool:
        return await self.crud.exists(db=self.db, id=product_id)

    async def list(self, limit: int, offset: int) -> Tuple[List[ProductRead], int]:
        logger.debug(f"[ProductRepository] Listing products: limit={limit}, offset={offset}")
        result = await self.crud.get_multi(
            db=self.db,
            offset=offset,
            limit=limit,
            schema_to_select=ProductRead,
            return_as_model=True,
            sort_columns=["created_at", "id"],
            sort_orders=["desc", "desc"],
        )
        return result.get("data", []), result.get("total_count", 0)

    async def create(self, product_data: Dict[str, Any]) -> ProductRead:
        product = Product(**product_data)
        self.db.add(product)
        await self.db.flush()
        await self.db.refresh(product)
        logger.info(f"[ProductRepository] Product ID {product.id} created.")
        return ProductRead.model_validate(product)

    async def update(self, product_id: int, update_data: Dict[str, Any]) -> Optional[ProductRead]:
        product = await self.db.get(Product, product_id)
        if product is None:
            return None
        for key, value in update_data.items():
            setattr(product, key, value)
        product.updated_at = utc_now()
        await self.db.flush()
        await self.db.refresh(product)
        return ProductRead.model_validate(product)

    async def delete(self, product_id: int) -> bool:
        product = await self.db.get(Product, product_id)
        if product is None:
            return False
        await self.db.delete(product)
        await self.db.flush()
        logger.info(f"[ProductRepository] Product ID {product_id} deleted.")
        return True
