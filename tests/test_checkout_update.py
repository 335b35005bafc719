from shopfront.app.extensions import db
from shopfront.app.models import Order
from shopfront.frontend.order import OrderController


def test_update_sets_payment_status(client, account, products, make_order):
    order_id = make_order(account, [products["BOX-001"]], payment_status=Order.PAY_UNFINISHED)

    r = client.get(f"/checkout/update?code=invoice&orderid={order_id}&status=authorized")
    assert r.status_code == 200
    assert r.data == b""

    db.session.expire_all()
    assert db.session.get(Order, order_id).payment_status == Order.PAY_AUTHORIZED


def test_update_defaults_to_received(client, account, products, make_order):
    order_id = make_order(account, [products["BOX-001"]], payment_status=Order.PAY_PENDING)

    r = client.post("/checkout/update", data={"code": "invoice", "orderid": order_id})
    assert r.status_code == 200

    db.session.expire_all()
    assert db.session.get(Order, order_id).payment_status == Order.PAY_RECEIVED


def test_update_missing_params(client):
    r = client.get("/checkout/update?code=invoice")
    assert r.status_code == 400
    assert r.data == b""


def test_update_unknown_order(client):
    r = client.get("/checkout/update?code=invoice&orderid=999")
    assert r.status_code == 400


def test_update_wrong_payment_code(client, account, products, make_order):
    order_id = make_order(account, [products["BOX-001"]], payment_status=Order.PAY_UNFINISHED)

    r = client.get(f"/checkout/update?code=paypalexpress&orderid={order_id}")
    assert r.status_code == 400

    db.session.expire_all()
    assert db.session.get(Order, order_id).payment_status == Order.PAY_UNFINISHED


def test_update_unknown_status(client, account, products, make_order):
    order_id = make_order(account, [products["BOX-001"]])

    r = client.get(f"/checkout/update?code=invoice&orderid={order_id}&status=refunded")
    assert r.status_code == 400


def test_update_unexpected_error(client, monkeypatch):
    def broken(self, code, order_id, status):
        raise RuntimeError("provider down")

    monkeypatch.setattr(OrderController, "update_push", broken)

    r = client.get("/checkout/update?code=invoice&orderid=1")
    assert r.status_code == 500
    assert r.data == b""
