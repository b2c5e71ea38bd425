# Standard Library
from decimal import Decimal
from typing import AsyncGenerator

# Third-Party Libraries
import pytest
import pytest_asyncio

from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.future import select
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

# First-Party Libraries (Your project)
from storefront.main import app
from storefront.database import get_db_session
from storefront.auth.security import create_access_token
from storefront.cart.models import CartLine
from storefront.orders.models import OrderCreate, ShippingInfo
from storefront.orders.repositories import SQLAlchemyOrderRepository
from storefront.orders.service import OrderService
from storefront.products.models import Product
from storefront.stock.service import StockService
from storefront.users.models import ROLE_ADMIN, ROLE_USER, User

# URL de base pour la DB en mémoire
TEST_DATABASE_BASE_URL = "sqlite+aiosqlite:///:memory:"


def _enable_sqlite_transactions(engine: AsyncEngine) -> None:
    """Transactions et SAVEPOINT fiables avec le driver sqlite, plus les clés étrangères."""

    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        # Désactive le BEGIN implicite du driver ; SQLAlchemy émet le sien
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


# --- Fixtures de Base ---

@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Crée un engine, des tables, et fournit une session DB en mémoire pour chaque test."""
    engine: AsyncEngine = create_async_engine(TEST_DATABASE_BASE_URL, echo=False, poolclass=StaticPool)
    _enable_sqlite_transactions(engine)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    TestingSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with TestingSessionLocal() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Fournit un AsyncClient httpx qui utilise la session DB de test isolée."""
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    del app.dependency_overrides[get_db_session]


# --- Fixtures Utilisateur et Authentification ---

async def _create_user(db_session: AsyncSession, email: str, name: str, role: str) -> User:
    user = User(email=email, name=name, role=role)
    db_session.add(user)
    await db_session.commit()  # Commit pour obtenir l'ID
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def test_user(db_session: AsyncSession) -> User:
    """Crée un utilisateur standard."""
    return await _create_user(db_session, "testuser@example.com", "Test User", ROLE_USER)


@pytest_asyncio.fixture(scope="function")
async def test_user_2(db_session: AsyncSession) -> User:
    """Crée un deuxième utilisateur standard."""
    return await _create_user(db_session, "testuser2@example.com", "Test User 2", ROLE_USER)


@pytest_asyncio.fixture(scope="function")
async def admin_user(db_session: AsyncSession) -> User:
    """Crée un utilisateur admin."""
    return await _create_user(db_session, "admin@example.com", "Admin User", ROLE_ADMIN)


def _bearer(user: User) -> dict[str, str]:
    if user.id is None:
        pytest.fail("L'ID utilisateur est None après commit/refresh.")
    access_token = create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def auth_headers_user(test_user: User) -> dict[str, str]:
    return _bearer(test_user)


@pytest.fixture
def auth_headers_user_2(test_user_2: User) -> dict[str, str]:
    return _bearer(test_user_2)


@pytest.fixture
def auth_headers_admin(admin_user: User) -> dict[str, str]:
    return _bearer(admin_user)


# --- Fixtures Produits ---

@pytest.fixture
def make_product(db_session: AsyncSession):
    """Fabrique de produits commités: `await make_product(stock=5, price="10.00")`."""
    async def _make(name: str = "Rosier", price: str = "10.00", stock: int = 5) -> Product:
        product = Product(name=name, description=f"{name} de test", price=Decimal(price), stock=stock)
        db_session.add(product)
        await db_session.commit()
        await db_session.refresh(product)
        return product
    return _make


@pytest_asyncio.fixture(scope="function")
async def test_product(make_product) -> Product:
    return await make_product(name="Rosier", price="12.50", stock=5)


@pytest.fixture
def stock_of(db_session: AsyncSession):
    """Relit le stock en base, sans passer par l'identity map."""
    async def _stock(product_id: int) -> int:
        return await db_session.scalar(select(Product.stock).where(Product.id == product_id))
    return _stock


# --- Fixtures Commandes ---

@pytest.fixture
def stock_service(db_session: AsyncSession) -> StockService:
    return StockService(db_session)


@pytest.fixture
def order_service(db_session: AsyncSession, stock_service: StockService) -> OrderService:
    return OrderService(db_session, SQLAlchemyOrderRepository(db_session), stock_service)


SHIPPING = {
    "fullName": "Jeanne Martin",
    "phone": "0600000000",
    "city": "Lyon",
    "address": "1 rue des Lilas",
    "postalCode": "69001",
}


@pytest.fixture
def order_request():
    """Construit une demande de commande à partir de tuples (product_id, quantity, unit_price)."""
    def _build(*lines) -> OrderCreate:
        return OrderCreate(
            cart_items=[CartLine(product_id=p, quantity=q, unit_price=Decimal(str(u))) for p, q, u in lines],
            shipping_info=ShippingInfo(**SHIPPING),
        )
    return _build
