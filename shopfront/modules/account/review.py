from __future__ import annotations

from typing import Any, Dict, List

from shopfront.app.client import HtmlClient, View
from shopfront.frontend.customer import CustomerController
from shopfront.frontend.order import OrderController
from shopfront.frontend.product import ProductController
from shopfront.frontend.review import ReviewController


def posted_reviews(view: View) -> List[Dict[str, Any]]:
    """Group ``review-<n>-<field>`` parameters into one dict per review."""
    reviews: Dict[str, Dict[str, Any]] = {}
    for key, value in view.params("review-").items():
        idx, _, name = key.partition("-")
        if name:
            reviews.setdefault(idx, {})[name] = value
    return [reviews[idx] for idx in sorted(reviews, key=lambda i: int(i) if i.isdigit() else 0)]


class AccountReview(HtmlClient):
    """Products customers bought and haven't reviewed yet.

    Only paid orders older than ``ACCOUNT_REVIEW_DAYS_AFTER`` days are taken
    into account to avoid fake or revenge reviews.
    """

    template_body = "account/review/body.html"

    def data(self, view: View) -> View:
        context = self.context()
        size = context.config.get("ACCOUNT_REVIEW_SIZE", 10)
        days = context.config.get("ACCOUNT_REVIEW_DAYS_AFTER", 0)

        orders = OrderController(context).reviewable(days_after=days, size=size)

        # product id -> order item id, products of the newest orders first
        prod_map: Dict[int, int] = {}
        for order in orders:
            for item in order.items:
                prod_map.setdefault(item.product_id, item.id)

        exclude = ReviewController(context).reviewed(prod_map.keys())
        prod_ids = [pid for pid in prod_map if pid not in exclude]

        products = []
        if prod_ids:
            items = {p.id: p for p in ProductController(context).product(prod_ids).search()}
            for pid in prod_ids:
                if pid in items:
                    products.append({"product": items[pid], "order_item_id": prod_map[pid]})

        view.review_product_items = products[:size]
        return super().data(view)

    def init(self) -> None:
        view = self.view()
        reviews = posted_reviews(view)

        if reviews:
            context = self.context()
            cntl = ReviewController(context)
            addr = CustomerController(context).payment_address()
            account = CustomerController(context).get()
            name = addr.first_name if addr is not None else (account.first_name if account else None)

            items = []
            for values in reviews:
                item = cntl.create(values)
                item.name = name

                if item.rating:  # only if value is greater than 0
                    items.append(item)

            if items:
                cntl.save(items)
                context.logger.info("Saved %d reviews of account %s", len(items), context.user_id)
                view.infos = view.get("infos", []) + ["Thank you for your review!"]

        super().init()
