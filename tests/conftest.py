# Standard Library
from decimal import Decimal
from typing import AsyncGenerator, Awaitable, Callable, Optional

# Third-Party Libraries
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

# First-Party Libraries
from inventory.main import app
from inventory.database import get_db_session
from inventory.config import settings
from inventory.categories.models import Category
from inventory.categories.repositories import SQLAlchemyCategoryRepository
from inventory.products.models import Product
from inventory.products.repositories import SQLAlchemyProductRepository
from inventory.products.service import ProductService
from inventory.stock.alerts import StockAlertEvaluator
from inventory.stock_movements.models import StockMovement  # noqa: F401 (enregistre la table)
from inventory.stock_movements.repositories import SQLAlchemyStockMovementRepository
from inventory.stock_movements.service import StockMovementService

# DB en mémoire partagée par toutes les connexions du test (StaticPool)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

API_PREFIX = settings.API_V1_PREFIX

# --- Fixtures de Base ---

@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Crée un engine, des tables, et fournit une session DB en mémoire pour chaque test."""
    engine: AsyncEngine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
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

# --- Fixtures Services ---

@pytest.fixture
def product_repository(db_session: AsyncSession) -> SQLAlchemyProductRepository:
    return SQLAlchemyProductRepository(db_session=db_session)

@pytest.fixture
def movement_repository(db_session: AsyncSession) -> SQLAlchemyStockMovementRepository:
    return SQLAlchemyStockMovementRepository(db_session=db_session)

@pytest.fixture
def product_service(
    db_session: AsyncSession,
    product_repository: SQLAlchemyProductRepository,
    movement_repository: SQLAlchemyStockMovementRepository,
) -> ProductService:
    return ProductService(
        product_repository=product_repository,
        category_repository=SQLAlchemyCategoryRepository(db_session=db_session),
        movement_repository=movement_repository,
        evaluator=StockAlertEvaluator(),
    )

@pytest.fixture
def movement_service(
    db_session: AsyncSession,
    product_repository: SQLAlchemyProductRepository,
    movement_repository: SQLAlchemyStockMovementRepository,
    product_service: ProductService,
) -> StockMovementService:
    return StockMovementService(
        db=db_session,
        product_repository=product_repository,
        movement_repository=movement_repository,
        product_service=product_service,
    )

# --- Fixtures Produits ---

@pytest_asyncio.fixture(scope="function")
async def test_category(db_session: AsyncSession) -> Category:
    """Crée une catégorie de test."""
    category = Category(name="Electronics", description="Test Desc")
    db_session.add(category)
    await db_session.commit()
    await db_session.refresh(category)
    return category

ProductFactory = Callable[..., Awaitable[Product]]

@pytest.fixture
def make_product(db_session: AsyncSession) -> ProductFactory:
    """Fabrique de produits persistés."""
    async def _make_product(
        name: str = "Test Product",
        quantity: int = 0,
        low_stock_threshold: Optional[int] = None,
        price: Decimal = Decimal("10.00"),
        category_id: Optional[int] = None,
    ) -> Product:
        product = Product(
            name=name,
            quantity=quantity,
            low_stock_threshold=low_stock_threshold,
            price=price,
            category_id=category_id,
        )
        db_session.add(product)
        await db_session.commit()
        await db_session.refresh(product)
        return product

    return _make_product
