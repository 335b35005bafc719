from __future__ import annotations

from shopfront.app.client import HtmlClient
from shopfront.app.common.errors import ClientError
from shopfront.app.common.validation import require_params, to_int
from shopfront.app.extensions import db
from shopfront.frontend.order import OrderController


class CheckoutUpdate(HtmlClient):
    """Receives payment status notifications sent by payment providers.

    Providers only evaluate the status code, so the body stays empty.
    """

    template_header = "checkout/update/header.html"

    def init(self) -> None:
        view = self.view()
        view.update_status = 200
        view.update_message = "ok"

        try:
            params = {name: view.param(name) for name in ("code", "orderid", "status")}
            require_params(params, ["code", "orderid"])
            OrderController(self.context()).update_push(
                params["code"], to_int(params["orderid"]), params["status"] or "received"
            )
        except ClientError as e:
            view.update_status = e.status_code
            view.update_message = e.message
        except Exception:
            db.session.rollback()
            self.context().logger.exception("Payment status update failed")
            view.update_status = 500
            view.update_message = "Payment status update failed"

    def body(self) -> str:
        return ""
