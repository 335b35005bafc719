from datetime import datetime, timedelta

import pytest

from shopfront.app.config import TestConfig
from shopfront.app.extensions import db
from shopfront.app.factory import create_app
from shopfront.app.models import Account, Address, Order, OrderItem, Product


@pytest.fixture()
def app():
    app = create_app(TestConfig)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def products(app):
    """Three active products, returned as {sku: id}."""
    items = [
        Product(sku="BOX-001", name="Classic Gift Box", description="A sturdy box.", category="boxes", price_cents=2999, stock_qty=100),
        Product(sku="BASK-001", name="Wicker Basket", description="A wicker basket.", category="baskets", price_cents=4999, stock_qty=80),
        Product(sku="FILL-001", name="Chocolate Fillers", description="Assorted chocolates.", category="fillers", price_cents=1299, stock_qty=0),
    ]
    db.session.add_all(items)
    db.session.commit()
    return {p.sku: p.id for p in items}


@pytest.fixture()
def account(app):
    user = Account(email="test@test.com", password_hash="x", first_name="Test", last_name="User")
    db.session.add(user)
    db.session.flush()
    db.session.add(
        Address(
            account_id=user.id,
            first_name="Tessa",
            last_name="User",
            street="1 Main Street",
            city="Toronto",
            postal_code="M5V 2T6",
            country="CA",
        )
    )
    db.session.commit()
    return user.id


@pytest.fixture()
def login(client, account):
    with client.session_transaction() as sess:
        sess["user_id"] = account
    return account


def _make_order(account_id, product_ids, payment_status=Order.PAY_RECEIVED, age_days=1, payment_code="invoice"):
    order = Order(
        account_id=account_id,
        payment_status=payment_status,
        payment_code=payment_code,
        delivery_code="standard",
        first_name="Test",
        last_name="User",
        street="1 Main Street",
        city="Toronto",
        postal_code="M5V 2T6",
        country="CA",
        created_at=datetime.utcnow() - timedelta(days=age_days),
    )
    db.session.add(order)
    db.session.flush()
    for pid in product_ids:
        db.session.add(OrderItem(order_id=order.id, product_id=pid, quantity=1, unit_price_cents=1000))
    db.session.commit()
    return order.id


@pytest.fixture()
def make_order(app):
    """Create an order of the given products, returns its id."""
    return _make_order
