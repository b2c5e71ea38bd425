import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query, Response, status

from storefront.auth.dependencies import CurrentAdmin
from storefront.config import settings
from storefront.products.dependencies import ProductServiceDep
from storefront.products.exceptions import ProductNotFoundException
from storefront.products.models import ProductCreate, ProductRead, ProductUpdate

logger = logging.getLogger(__name__)

product_router = APIRouter(prefix="/products", tags=["Products"])
admin_product_router = APIRouter(prefix="/admin/products", tags=["Admin"])


async def _list_products(service, response: Response, limit: int, offset: int) -> List[ProductRead]:
    products, total_count = await service.list_products(limit=limit, offset=offset)
    end_range = offset + len(products) - 1 if products else offset
    response.headers["Content-Range"] = f"products {offset}-{end_range}/{total_count}"
    return products


@product_router.get("", response_model=List[ProductRead])
async def list_products_endpoint(
    service: ProductServiceDep,
    response: Response,
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
):
    """Catalogue public, produits les plus récents d'abord."""
    return await _list_products(service, response, limit, offset)


@product_router.get("/{product_id}", response_model=ProductRead)
async def get_product_endpoint(service: ProductServiceDep, product_id: int):
    try:
        return await service.get_product(product_id)
    except ProductNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# Endpoints Admin
@admin_product_router.get("", response_model=List[ProductRead])
async def admin_list_products_endpoint(
    service: ProductServiceDep,
    current_admin: CurrentAdmin,
    response: Response,
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
):
    return await _list_products(service, response, limit, offset)


@admin_product_router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def admin_create_product_endpoint(
    service: ProductServiceDep,
    current_admin: CurrentAdmin,
    product_in: ProductCreate,
):
    product = await service.create_product(product_in, created_by=current_admin.id)
    logger.info(f"Produit {product.id} créé par admin {current_admin.id}.")
    return product


@admin_product_router.put("/{product_id}", response_model=ProductRead)
async def admin_update_product_endpoint(
    service: ProductServiceDep,
    current_admin: CurrentAdmin,
    product_id: int,
    product_in: ProductUpdate,
):
    try:
        return await service.update_product(product_id, product_in)
    except ProductNotFoundException as e:
        logger.warning(f"MAJ produit {product_id} par admin {current_admin.id}: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@admin_product_router.delete("/{product_id}")
async def admin_delete_product_endpoint(
    service: ProductServiceDep,
    current_admin: CurrentAdmin,
    product_id: int,
):
    try:
        await service.delete_product(product_id)
    except ProductNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"message": "Produit supprimé"}
