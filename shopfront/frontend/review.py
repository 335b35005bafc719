from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Set

from shopfront.app.client import Context
from shopfront.app.common.errors import abort_client
from shopfront.app.common.validation import to_int
from shopfront.app.extensions import db
from shopfront.app.models import Order, OrderItem, Product, Review


class ReviewController:
    def __init__(self, context: Context) -> None:
        self._context = context

    def reviewed(self, product_ids: Iterable[int]) -> Set[int]:
        """Ids of the given products the current account already reviewed."""
        product_ids = list(product_ids)
        if not product_ids:
            return set()
        rows = (
            db.session.query(Review.product_id)
            .filter(Review.account_id == self._context.user_id, Review.product_id.in_(product_ids))
            .all()
        )
        return {pid for (pid,) in rows}

    def create(self, values: Mapping[str, Any]) -> Review:
        """Build an unsaved review from posted values.

        A rating of 0 means "not rated"; such reviews are not meant to be saved.
        """
        rating = to_int(values.get("rating"))
        if rating < 0 or rating > 5:
            abort_client(400, "validation_error", "Rating must be between 1 and 5")

        comment = str(values.get("comment") or "").strip() or None
        return Review(
            account_id=self._context.user_id,
            product_id=to_int(values.get("product_id")),
            order_item_id=to_int(values.get("order_item_id")) or None,
            rating=rating,
            comment=comment,
        )

    def bought_item(self, review: Review) -> Optional[OrderItem]:
        """Order item of a paid order of the account the review refers to."""
        query = (
            OrderItem.query.join(Order, OrderItem.order_id == Order.id)
            .filter(
                Order.account_id == self._context.user_id,
                Order.payment_status > Order.PAY_PENDING,
                OrderItem.product_id == review.product_id,
            )
        )
        if review.order_item_id:
            query = query.filter(OrderItem.id == review.order_item_id)
        return query.order_by(OrderItem.id.desc()).first()

    def save(self, reviews: Iterable[Review]) -> List[Review]:
        """Validate all reviews, then store them in one transaction.

        Only products from paid orders of the account can be reviewed, each
        of them once.
        """
        reviews = list(reviews)
        done = self.reviewed(r.product_id for r in reviews)

        for review in reviews:
            if not review.rating:
                abort_client(400, "validation_error", "Rating must be between 1 and 5")
            if not Product.query.get(review.product_id):
                abort_client(404, "not_found", "Product not found")

            item = self.bought_item(review)
            if item is None:
                abort_client(403, "forbidden", "Only bought products can be reviewed", {"product_id": review.product_id})
            if review.product_id in done:
                abort_client(409, "conflict", "Product already reviewed", {"product_id": review.product_id})

            review.order_item_id = item.id
            done.add(review.product_id)

        db.session.add_all(reviews)
        db.session.commit()
        return reviews
