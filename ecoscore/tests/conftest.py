"""Configuration et fixtures pytest"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ecoscore.core.database import Base, get_db
from ecoscore.core.dependencies import get_product_source
from ecoscore.core.security import create_access_token
from ecoscore.main import app
from ecoscore.models.product import Product
from ecoscore.models.user import User
from ecoscore.schemas.product import ProductRecord
from ecoscore.utils.exceptions import SourceUnavailableError

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_record(barcode, eco_score=50, price=None, category=None, **extra):
    """ProductRecord de test avec sous-scores cohérents"""
    return ProductRecord(
        barcode=barcode,
        name=extra.pop("name", f"Product {barcode}"),
        brand=extra.pop("brand", None),
        category=category,
        eco_score=eco_score,
        eco_score_grade=extra.pop("eco_score_grade", "C"),
        environmental_footprint=round(eco_score * 1.2),
        packaging_sustainability=min(100, eco_score + 10),
        carbon_impact=100 - eco_score,
        price=price,
        **extra,
    )


class FakeProductSource:
    """Remplace OpenFoodFactsClient : réponses en mémoire, appels enregistrés"""

    def __init__(self):
        self.products = {}
        self.search_results = []
        self.fetch_calls = []
        self.search_calls = []
        self.submitted = []
        self.submit_response = (200, {"status": 0})
        self.unavailable = False

    async def fetch_by_barcode(self, barcode):
        self.fetch_calls.append(barcode)
        if self.unavailable:
            raise SourceUnavailableError("fetch", "connection refused")
        return self.products.get(barcode)

    async def search_by_text(self, query, limit=10):
        self.search_calls.append((query, limit))
        if self.unavailable:
            raise SourceUnavailableError("search", "connection refused")
        return self.search_results[:limit]

    async def submit_product(self, fields):
        self.submitted.append(fields)
        if self.unavailable:
            raise SourceUnavailableError("contribution", "connection refused")
        return self.submit_response


@pytest.fixture(scope="function")
def db():
    """Fixture de base de données pour les tests"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def product_source():
    return FakeProductSource()


@pytest.fixture(scope="function")
def client(db, product_source):
    """Fixture du client de test FastAPI"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_product_source] = lambda: product_source

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db):
    user = User(open_id="open-id-user-1", name="Test User", email="test@example.com")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_user2(db):
    user = User(open_id="open-id-user-2", name="Test User 2", email="test2@example.com")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_product(db):
    """Produit déjà en cache local"""
    product = Product(
        barcode="3017620422003",
        name="Hazelnut Spread",
        brand="Ferrero",
        category="Spreads,Sweet spreads",
        eco_score=40,
        eco_score_grade="D",
        environmental_footprint=48,
        packaging_sustainability=50,
        carbon_impact=60,
        price="5.00",
        country="France",
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def test_product2(db):
    product = Product(
        barcode="8076800195057",
        name="Whole Wheat Pasta",
        brand="Barilla",
        category="Pasta",
        eco_score=80,
        eco_score_grade="B",
        environmental_footprint=96,
        packaging_sustainability=90,
        carbon_impact=20,
        price="2.10",
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def auth_headers(test_user):
    token = create_access_token({"sub": test_user.open_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers_user2(test_user2):
    token = create_access_token({"sub": test_user2.open_id})
    return {"Authorization": f"Bearer {token}"}
