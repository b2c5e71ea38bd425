"""
Accès au registre de stock : le champ `products.stock`.

Les fonctions ne commitent pas ; elles s'exécutent dans la transaction
de la session appelante.
"""
import logging
from typing import Dict, List, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.products.exceptions import ProductNotFoundException
from storefront.products.models import Product

logger = logging.getLogger(__name__)


async def find_stock(db: AsyncSession, product_id: int) -> Optional[int]:
    """Retourne le stock courant, ou None si le produit n'existe pas."""
    return await db.scalar(select(Product.stock).where(Product.id == product_id))


async def get_stock(db: AsyncSession, product_id: int) -> int:
    """Retourne le stock courant. Lève ProductNotFoundException si le produit n'existe pas."""
    stock = await find_stock(db, product_id)
    if stock is None:
        raise ProductNotFoundException(product_id=product_id)
    return stock


async def get_stocks(db: AsyncSession, product_ids: List[int]) -> Dict[int, int]:
    """Stocks pour une liste de produits ; les IDs inconnus sont absents du résultat."""
    if not product_ids:
        return {}
    result = await db.execute(select(Product.id, Product.stock).where(Product.id.in_(product_ids)))
    return {row.id: row.stock for row in result}


async def set_stock(db: AsyncSession, product_id: int, quantity: int) -> None:
    """Écrase le stock d'un produit. Aucun plancher n'est appliqué ici : c'est à l'appelant de valider."""
    result = await db.execute(
        update(Product)
        .where(Product.id == product_id)
        .values(stock=quantity)
        .execution_options(synchronize_session="evaluate")
    )
    if result.rowcount == 0:
        raise ProductNotFoundException(product_id=product_id)
    logger.info(f"Stock écrasé pour produit {product_id}. Nouvelle quantité: {quantity}")


async def decrement_if_available(db: AsyncSession, product_id: int, quantity: int) -> bool:
    """Décrément conditionnel atomique : `stock = stock - quantity` seulement si `stock >= quantity`.

    Retourne False si aucune ligne n'a été modifiée (stock insuffisant ou produit absent).
    La ligne reste verrouillée jusqu'à la fin de la transaction.
    """
    result = await db.execute(
        update(Product)
        .where(Product.id == product_id, Product.stock >= quantity)
        .values(stock=Product.stock - quantity)
        .execution_options(synchronize_session="evaluate")
    )
    return result.rowcount == 1


async def increment(db: AsyncSession, product_id: int, quantity: int) -> None:
    """Ajout inconditionnel (pas de plafond). Lève ProductNotFoundException si le produit n'existe pas."""
    result = await db.execute(
        update(Product)
        .where(Product.id == product_id)
        .values(stock=Product.stock + quantity)
        .execution_options(synchronize_session="evaluate")
    )
    if result.rowcount == 0:
        raise ProductNotFoundException(product_id=product_id)
