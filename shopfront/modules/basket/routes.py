from __future__ import annotations

from flask import Blueprint

from shopfront.app.client import Context, View
from shopfront.app.ui import render_page
from shopfront.modules.basket.related import BasketRelated
from shopfront.modules.basket.standard import BasketStandard

bp = Blueprint("basket", __name__)


@bp.route("/basket", methods=["GET", "POST"], endpoint="standard")
def standard():
    """Basket page with the "bought together" products below."""
    context, view = Context.from_request(), View.from_request()

    basket = BasketStandard(context, view)
    basket.init()
    related = BasketRelated(context, view)
    related.init()

    return render_page(basket, related, title="Basket")
