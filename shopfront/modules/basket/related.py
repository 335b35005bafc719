from __future__ import annotations

from shopfront.app.client import HtmlClient, View
from shopfront.frontend.basket import BasketController
from shopfront.frontend.product import ProductController


class BoughtTogether(HtmlClient):
    template_body = "basket/related/bought/body.html"

    def data(self, view: View) -> View:
        context = self.context()
        size = context.config.get("BASKET_RELATED_BOUGHT_SIZE", 6)
        basket = view.get("standard_basket") or BasketController(context).get()

        view.bought_items = ProductController(context).bought_together(basket.product_ids(), size)
        return view


class BasketRelated(HtmlClient):
    """Products related to the ones in the basket."""

    template_body = "basket/related/body.html"
    template_header = "basket/related/header.html"
    subparts_key = "BASKET_RELATED_SUBPARTS"
    subparts = ("bought",)
    subpart_types = {"bought": BoughtTogether}
