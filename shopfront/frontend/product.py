from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import func, or_, select

from shopfront.app.client import Context
from shopfront.app.extensions import db
from shopfront.app.models import OrderItem, Product


class ProductController:
    """Chainable product search used by the catalog and basket clients.

        products = ProductController(context).text("box").category("boxes").slice(0, 10).search()
    """

    def __init__(self, context: Context) -> None:
        self._context = context
        self._query = Product.query.filter(Product.is_active.is_(True))
        self._start = 0
        self._size: Optional[int] = None

    def text(self, value: Optional[str]) -> ProductController:
        value = (value or "").strip()
        if value:
            like = f"%{value}%"
            self._query = self._query.filter(
                or_(
                    Product.name.ilike(like),
                    Product.description.ilike(like),
                    Product.sku.ilike(like),
                )
            )
            # names starting with the text first
            self._query = self._query.order_by(Product.name.ilike(f"{value}%").desc())
        return self

    def category(self, name: Optional[str]) -> ProductController:
        if name:
            self._query = self._query.filter(Product.category == name)
        return self

    def in_stock(self) -> ProductController:
        self._query = self._query.filter(Product.stock_qty > 0)
        return self

    def product(self, ids: Iterable[int]) -> ProductController:
        self._query = self._query.filter(Product.id.in_(list(ids)))
        return self

    def slice(self, start: int, size: int) -> ProductController:
        self._start = max(0, start)
        self._size = max(0, size)
        return self

    def search(self) -> List[Product]:
        q = self._query.order_by(Product.name.asc(), Product.id.asc()).offset(self._start)
        if self._size is not None:
            q = q.limit(self._size)
        return q.all()

    def bought_together(self, product_ids: Iterable[int], size: int) -> List[Product]:
        """Products found most often in the orders containing ``product_ids``."""
        product_ids = list(product_ids)
        if not product_ids or size <= 0:
            return []

        order_ids = select(OrderItem.order_id).where(OrderItem.product_id.in_(product_ids))
        counts = (
            db.session.query(OrderItem.product_id, func.count(OrderItem.order_id.distinct()).label("cnt"))
            .filter(OrderItem.order_id.in_(order_ids), ~OrderItem.product_id.in_(product_ids))
            .group_by(OrderItem.product_id)
            .order_by(func.count(OrderItem.order_id.distinct()).desc(), OrderItem.product_id.asc())
            .all()
        )
        ranked = [pid for pid, _ in counts]
        if not ranked:
            return []

        by_id = {p.id: p for p in self._query.filter(Product.id.in_(ranked)).all()}
        return [by_id[pid] for pid in ranked if pid in by_id][:size]
