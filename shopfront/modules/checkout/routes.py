from __future__ import annotations

from flask import Blueprint

from shopfront.app.client import Context, View
from shopfront.app.ui import render_page
from shopfront.modules.checkout.standard import CheckoutStandard
from shopfront.modules.checkout.update import CheckoutUpdate

bp = Blueprint("checkout", __name__)


@bp.route("/checkout", methods=["GET", "POST"], endpoint="standard")
def standard():
    """Checkout page; ``c_step`` selects the step to show."""
    client = CheckoutStandard(Context.from_request(), View.from_request())
    client.init()
    return render_page(client, title="Checkout")


@bp.route("/checkout/update", methods=["GET", "POST"], endpoint="update")
def update():
    """Payment status notification of a payment provider.

    Query params:
      - code: payment option the order was paid with
      - orderid: order id
      - status: pending|authorized|received (default: received)
    """
    client = CheckoutUpdate(Context.from_request(), View.from_request())
    client.init()
    return client.body(), client.view().update_status
