from __future__ import annotations

from datetime import datetime, timedelta
from flask import Blueprint
from werkzeug.security import generate_password_hash

from shopfront.app.extensions import db
from shopfront.app.models import Account, Address, Order, OrderItem, Product

cli_bp = Blueprint("cli", __name__)


@cli_bp.cli.command("init-db")
def init_db() -> None:
    """Create tables."""
    db.create_all()
    print("DB initialized (tables created).")


@cli_bp.cli.command("seed")
def seed_data() -> None:
    """Seed minimal dev data: an account, products and a paid order to review.

    Safe to run multiple times; it will no-op if data exists.
    """
    db.create_all()

    user = Account.query.filter_by(email="user@example.com").first()
    if not user:
        user = Account(
            email="user@example.com",
            password_hash=generate_password_hash("Password123!"),
            first_name="Demo",
            last_name="User",
        )
        db.session.add(user)
        db.session.flush()
        db.session.add(
            Address(
                account_id=user.id,
                first_name="Demo",
                last_name="User",
                street="1 Main Street",
                city="Toronto",
                postal_code="M5V 2T6",
                country="CA",
            )
        )

    if Product.query.count() == 0:
        products = [
            Product(sku="BOX-001", name="Classic Gift Box", description="A sturdy box.", category="boxes", price_cents=2999, stock_qty=100),
            Product(sku="BASK-001", name="Wicker Basket", description="A wicker basket.", category="baskets", price_cents=4999, stock_qty=80),
            Product(sku="FILL-001", name="Chocolate Fillers", description="Assorted chocolates.", category="fillers", price_cents=1299, stock_qty=300),
        ]
        db.session.add_all(products)
        db.session.flush()

        order = Order(
            account_id=user.id,
            payment_status=Order.PAY_RECEIVED,
            payment_code="invoice",
            delivery_code="standard",
            total_cents=4298,
            first_name="Demo",
            last_name="User",
            street="1 Main Street",
            city="Toronto",
            postal_code="M5V 2T6",
            country="CA",
            created_at=datetime.utcnow() - timedelta(days=14),
        )
        db.session.add(order)
        db.session.flush()
        db.session.add_all([
            OrderItem(order_id=order.id, product_id=products[0].id, quantity=1, unit_price_cents=2999),
            OrderItem(order_id=order.id, product_id=products[2].id, quantity=1, unit_price_cents=1299),
        ])

    db.session.commit()
    print("Seed complete. Account: user@example.com")
