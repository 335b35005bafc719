from __future__ import annotations

from shopfront.app.client import HtmlClient, View
from shopfront.app.common.errors import ClientError
from shopfront.app.common.validation import to_int
from shopfront.frontend.basket import BasketController


class BasketStandard(HtmlClient):
    """Basket page listing the products and totals.

    ``b_action`` selects what ``init()`` does with the posted product:
    add, edit (set quantity) or delete.
    """

    template_body = "basket/standard/body.html"

    def init(self) -> None:
        view = self.view()
        action = view.param("b_action")
        if action is not None:
            self.update(view, action)
        super().init()

    def update(self, view: View, action: str) -> None:
        cntl = BasketController(self.context())
        product_id = to_int(view.param("b_prodid"))
        quantity = to_int(view.param("b_quantity"), 1)

        try:
            if action == "add":
                cntl.add_product(product_id, quantity)
            elif action == "edit":
                cntl.edit_product(product_id, quantity)
            elif action == "delete":
                cntl.delete_product(product_id)
            else:
                view.basket_errors = [f'Unknown basket action "{action}"']
        except ClientError as e:
            view.basket_errors = [e.message]

    def data(self, view: View) -> View:
        view.standard_basket = BasketController(self.context()).get()
        view.standard_url_checkout = view.link("checkout.standard")
        return super().data(view)
