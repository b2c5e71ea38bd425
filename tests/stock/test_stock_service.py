import pytest

from storefront.products.exceptions import ProductNotFoundException
from storefront.stock.exceptions import InsufficientStockException, InvalidQuantityException


@pytest.mark.asyncio
async def test_reserve_decrements(stock_service, make_product, stock_of):
    product = await make_product(stock=5)
    product_id = product.id

    await stock_service.reserve(product_id, 3)

    assert await stock_of(product_id) == 2


@pytest.mark.asyncio
async def test_reserve_never_goes_negative(stock_service, make_product, stock_of):
    product = await make_product(stock=2)
    product_id = product.id

    with pytest.raises(InsufficientStockException) as exc_info:
        await stock_service.reserve(product_id, 3)

    assert exc_info.value.available == 2
    assert exc_info.value.requested == 3
    assert await stock_of(product_id) == 2


@pytest.mark.asyncio
async def test_reserve_exact_stock(stock_service, make_product, stock_of):
    product = await make_product(stock=3)
    product_id = product.id

    await stock_service.reserve(product_id, 3)

    assert await stock_of(product_id) == 0


@pytest.mark.asyncio
async def test_reserve_unknown_product(stock_service):
    with pytest.raises(ProductNotFoundException):
        await stock_service.reserve(12345, 1)


@pytest.mark.asyncio
async def test_release_and_set_stock(stock_service, make_product, stock_of):
    product = await make_product(stock=1)
    product_id = product.id

    await stock_service.release(product_id, 4)
    assert await stock_of(product_id) == 5

    await stock_service.set_stock(product_id, 0)
    assert await stock_of(product_id) == 0

    with pytest.raises(InvalidQuantityException):
        await stock_service.set_stock(product_id, -1)
    with pytest.raises(InvalidQuantityException):
        await stock_service.release(product_id, 0)
    with pytest.raises(ProductNotFoundException):
        await stock_service.release(9999, 1)


@pytest.mark.asyncio
async def test_check_available_against_snapshot(stock_service, make_product):
    product = await make_product(stock=4)
    product_id = product.id
    snapshot = await stock_service.get_stocks([product_id, 777])

    assert snapshot == {product_id: 4}
    stock_service.check_available(product_id, 4, snapshot)
    with pytest.raises(InsufficientStockException):
        stock_service.check_available(product_id, 5, snapshot)
    with pytest.raises(ProductNotFoundException):
        stock_service.check_available(777, 1, snapshot)
