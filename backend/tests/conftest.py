"""
Pytest fixtures for the roastery back office tests.

Provides an in-memory database, per-test table wipes, a test client and
small factories for users, products and stock.
"""

from decimal import Decimal

import pytest

from roastery import create_app
from roastery.extensions import db
from roastery.models import Inventory, Product, Sale, SaleItem, User


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'SQLALCHEMY_ENGINE_OPTIONS': {},
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def customer(db_session):
    """A customer account to own sales."""
    user = User(
        first_name="Rana",
        last_name="Haddad",
        email="rana@example.com",
        password="x",
        role="customer",
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture(scope='function')
def make_product(db_session):
    """Factory: product plus optional inventory row."""
    def _make(name="House Blend", price="5.00", stock=10, status="available", product_type="beans"):
        product = Product(
            product_name=name,
            description=f"{name} description",
            unit_price=Decimal(price),
            product_type=product_type,
            status=status,
        )
        db_session.add(product)
        db_session.flush()
        if stock is not None:
            db_session.add(Inventory(product_id=product.product_id, quantity_in_stock=stock))
        db_session.commit()
        return product
    return _make


def stock_of(product_id: int) -> int:
    """Committed quantity for a product, read fresh from the database."""
    db.session.expire_all()
    inv = db.session.query(Inventory).filter_by(product_id=product_id).one()
    return inv.quantity_in_stock


def row_counts() -> dict:
    db.session.expire_all()
    return {
        "sales": db.session.query(Sale).count(),
        "sale_items": db.session.query(SaleItem).count(),
    }
