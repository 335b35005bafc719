"""Sub-clients rendering the single checkout steps.

Each step processes its own form input in ``init()``. If the data of a step
is still missing afterwards, the step flags itself as the active step unless
an earlier step already did, so the customer can't skip it.
"""

from __future__ import annotations

import logging

from shopfront.app.client import HtmlClient, View
from shopfront.app.common.errors import ClientError
from shopfront.frontend.basket import ADDRESS_FIELDS, BasketController
from shopfront.frontend.customer import CustomerController
from shopfront.frontend.order import OrderController

logger = logging.getLogger(__name__)


def add_error(view: View, message: str) -> None:
    view.standard_errors = view.get("standard_errors", []) + [message]


def flag_step(view: View, step: str) -> None:
    if view.get("standard_step_active") is None:
        view.standard_step_active = step


class AddressPart(HtmlClient):
    template_body = "checkout/standard/address/body.html"

    def init(self) -> None:
        view = self.view()
        basket_cntl = BasketController(self.context())
        values = view.params("ca_billing-")

        if values:
            try:
                basket_cntl.set_address(values)
            except ClientError as e:
                add_error(view, e.message)
                view.address_missing = (e.details or {}).get("missing", [])
                flag_step(view, "address")

        if basket_cntl.get().address is None:
            flag_step(view, "address")

    def data(self, view: View) -> View:
        basket = view.get("standard_basket") or BasketController(self.context()).get()
        values = dict(basket.address or {})

        if not values:
            addr = CustomerController(self.context()).payment_address()
            values = addr.to_dict() if addr is not None else {}

        view.address_fields = ADDRESS_FIELDS
        view.address_values = values
        return view


class DeliveryPart(HtmlClient):
    template_body = "checkout/standard/delivery/body.html"

    def init(self) -> None:
        view = self.view()
        basket_cntl = BasketController(self.context())

        code = view.param("c_delivery")
        if code is not None:
            try:
                basket_cntl.set_delivery(code)
            except ClientError as e:
                add_error(view, e.message)
                flag_step(view, "delivery")

        if basket_cntl.get().delivery is None:
            flag_step(view, "delivery")

    def data(self, view: View) -> View:
        view.delivery_options = view.config("CHECKOUT_DELIVERY_OPTIONS", {})
        return view


class PaymentPart(HtmlClient):
    template_body = "checkout/standard/payment/body.html"

    def init(self) -> None:
        view = self.view()
        basket_cntl = BasketController(self.context())

        code = view.param("c_payment")
        if code is not None:
            try:
                basket_cntl.set_payment(code)
            except ClientError as e:
                add_error(view, e.message)
                flag_step(view, "payment")

        if basket_cntl.get().payment is None:
            flag_step(view, "payment")

    def data(self, view: View) -> View:
        view.payment_options = view.config("CHECKOUT_PAYMENT_OPTIONS", [])
        return view


class SummaryPart(HtmlClient):
    template_body = "checkout/standard/summary/body.html"

    def data(self, view: View) -> View:
        # "Buy now" places the order directly
        if view.get("standard_step_active") == "summary" and "process" in view.get("standard_steps", ()):
            view.standard_url_next = view.link("checkout.standard", c_step="process", cs_order=1)
        return view


class ProcessPart(HtmlClient):
    template_body = "checkout/standard/process/body.html"

    def init(self) -> None:
        view = self.view()
        if not view.param("cs_order"):
            return

        if view.get("standard_step_active") is not None:
            add_error(view, "Please complete all checkout steps first")
            return

        basket_cntl = BasketController(self.context())
        try:
            order = OrderController(self.context()).store(basket_cntl.get())
        except ClientError as e:
            logger.info("Order not placed: %s", e.message)
            add_error(view, e.message)
            view.standard_step_active = "summary"
            return

        basket_cntl.clear()
        self.context().session["checkout_order_id"] = order.id
        view.process_order = order

    def data(self, view: View) -> View:
        if view.get("process_order") is not None or view.get("standard_step_active") != "process":
            return view

        # the last order is shown once, and never for a basket not yet ordered
        order_id = self.context().session.pop("checkout_order_id", None)
        basket = view.get("standard_basket") or BasketController(self.context()).get()
        if order_id and not basket.items:
            view.process_order = OrderController(self.context()).get(order_id)
        return view
