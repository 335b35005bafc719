from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from shopfront.app.client import Context
from shopfront.app.common.errors import abort_client
from shopfront.app.extensions import db
from shopfront.app.models import Order, OrderItem
from shopfront.frontend.basket import Basket

logger = logging.getLogger(__name__)

# Payment status names accepted from payment provider notifications
PAYMENT_STATUS = {
    "pending": Order.PAY_PENDING,
    "authorized": Order.PAY_AUTHORIZED,
    "received": Order.PAY_RECEIVED,
}


class OrderController:
    def __init__(self, context: Context) -> None:
        self._context = context

    def store(self, basket: Basket) -> Order:
        """Checkout: basket -> order.

        Validates stock, decrements it and snapshots prices and address.
        """
        if not basket.items:
            abort_client(409, "conflict", "Basket is empty")
        if basket.address is None or basket.delivery is None or basket.payment is None:
            abort_client(400, "validation_error", "Address, delivery and payment are required")

        for item in basket.items:
            if item.product.stock_qty < item.quantity:
                abort_client(
                    409,
                    "conflict",
                    "Out of stock",
                    {"product_id": item.product.id, "available": item.product.stock_qty},
                )

        order = Order(
            account_id=self._context.user_id,
            status="PLACED",
            payment_status=Order.PAY_UNFINISHED,
            payment_code=basket.payment,
            delivery_code=basket.delivery,
            delivery_cents=basket.delivery_cents,
            tax_cents=basket.tax_cents,
            total_cents=basket.total_cents,
            created_at=datetime.utcnow(),
            **basket.address,
        )
        db.session.add(order)
        db.session.flush()  # assigns order.id

        for item in basket.items:
            item.product.stock_qty = item.product.stock_qty - item.quantity
            db.session.add(
                OrderItem(
                    order_id=order.id,
                    product_id=item.product.id,
                    quantity=item.quantity,
                    unit_price_cents=item.product.price_cents,
                )
            )

        db.session.commit()
        logger.info("Order %s placed, total %s cents", order.id, order.total_cents)
        return order

    def get(self, order_id: int) -> Optional[Order]:
        return Order.query.get(order_id)

    def reviewable(self, days_after: int = 0, size: int = 10) -> List[Order]:
        """Paid orders of the current account older than ``days_after`` days, newest first."""
        before = datetime.utcnow() - timedelta(days=days_after)
        return (
            Order.query.filter(
                Order.account_id == self._context.user_id,
                Order.payment_status > Order.PAY_PENDING,
                Order.created_at <= before,
            )
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(size)
            .all()
        )

    def update_push(self, code: str, order_id: int, status: str) -> Order:
        """Apply a payment status notification sent by the payment provider."""
        order = Order.query.get(order_id)
        if order is None:
            abort_client(400, "validation_error", f'Order "{order_id}" not found')
        if order.payment_code != code:
            abort_client(400, "validation_error", f'Order "{order_id}" was not paid using "{code}"')
        if status not in PAYMENT_STATUS:
            abort_client(400, "validation_error", f'Unknown payment status "{status}"')

        order.payment_status = PAYMENT_STATUS[status]
        db.session.commit()
        logger.info("Order %s payment status set to %s by %s", order.id, status, code)
        return order
