import logging
from typing import List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.products.exceptions import ProductNotFoundException
from storefront.products.interfaces.repositories import AbstractProductRepository
from storefront.products.models import ProductCreate, ProductRead, ProductUpdate
from storefront.stock.service import StockService

logger = logging.getLogger(__name__)

# Champs texte facultatifs: une valeur null les remet à vide
CLEARABLE_FIELDS = ("description", "image_url")


class ProductService:
    """Service applicatif du catalogue (lecture publique, CRUD admin)."""

    def __init__(self, db: AsyncSession, product_repository: AbstractProductRepository, stock_service: StockService):
        self.db = db
        self.product_repository = product_repository
        self.stock_service = stock_service

    async def list_products(self, limit: int, offset: int) -> Tuple[List[ProductRead], int]:
        return await self.product_repository.list(limit=limit, offset=offset)

    async def get_product(self, product_id: int) -> ProductRead:
        product = await self.product_repository.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundException(product_id=product_id)
        return product

    async def create_product(self, product_in: ProductCreate, created_by: int) -> ProductRead:
        logger.info(f"[ProductService] Création produit '{product_in.name}' par admin {created_by}")
        data = product_in.model_dump()
        data["created_by"] = created_by
        try:
            product = await self.product_repository.create(data)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return product

    async def update_product(self, product_id: int, product_in: ProductUpdate) -> ProductRead:
        update_data = product_in.model_dump(exclude_unset=True)
        # null ignoré pour les champs obligatoires
        for field in CLEARABLE_FIELDS:
            if field in update_data and update_data[field] is None:
                update_data[field] = ""
        update_data = {k: v for k, v in update_data.items() if v is not None}
        new_stock = update_data.pop("stock", None)
        logger.info(f"[ProductService] MAJ produit {product_id}: champs={list(update_data)} stock={new_stock}")
        try:
            if not await self.product_repository.exists(product_id):
                raise ProductNotFoundException(product_id=product_id)
            if update_data:
                await self.product_repository.update(product_id, update_data)
            if new_stock is not None:
                # Écrasement direct, non coordonné avec les commandes en cours
                await self.stock_service.set_stock(product_id, new_stock)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return await self.get_product(product_id)

    async def delete_product(self, product_id: int) -> None:
        try:
            if not await self.product_repository.delete(product_id):
                raise ProductNotFoundException(product_id=product_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(f"[ProductService] Produit {product_id} supprimé.")
