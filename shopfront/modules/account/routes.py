from __future__ import annotations

from flask import Blueprint

from shopfront.app.client import Context, View
from shopfront.app.common.auth import login_required
from shopfront.app.ui import render_page
from shopfront.modules.account.review import AccountReview

bp = Blueprint("account", __name__)


@bp.route("/account/review", methods=["GET", "POST"])
@login_required
def review():
    """Review form for bought products; POST saves the rated ones."""
    client = AccountReview(Context.from_request(), View.from_request())
    client.init()
    return render_page(client, title="Reviews")
