"""
Test configuration for pytest
"""

import os
from decimal import Decimal
from typing import Generator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session

# Test environment variables
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_JSON"] = "false"

import barpos.models  # noqa: E402,F401
from barpos.core.database import get_session  # noqa: E402
from barpos.services import products as catalog  # noqa: E402
from barpos.services import tables as registry  # noqa: E402


# One in-memory database shared by the test and the request threadpool
test_engine = create_engine(
    "sqlite://",
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a clean database session for each test"""
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture
async def client(db: Session):
    """HTTP client bound to the app with the test database"""
    from barpos.main import app

    def override_get_session():
        with Session(test_engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def coffee(db: Session):
    """Coffee at $3"""
    return catalog.create_product(db, name="Coffee", price=Decimal("3.00"), category="Bebidas")


@pytest.fixture
def cake(db: Session):
    """Cake at $5"""
    return catalog.create_product(db, name="Cake", price=Decimal("5.00"), category="Postres")


@pytest.fixture
def table_five(db: Session):
    """FREE table number 5"""
    return registry.create_table(db, 5)
