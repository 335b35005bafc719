def _post(client, **data):
    return client.post("/basket", data=data)


def test_empty_basket(client):
    r = client.get("/basket")
    assert r.status_code == 200
    assert b"Your basket is empty" in r.data


def test_add_product(client, products):
    r = _post(client, b_action="add", b_prodid=products["BOX-001"], b_quantity=2)
    assert r.status_code == 200
    assert b"Classic Gift Box" in r.data
    assert b'<td class="quantity">2</td>' in r.data
    assert b"59.98" in r.data
    # 13% tax
    assert b"7.79" in r.data
    assert b"67.77" in r.data
    assert b'href="/checkout"' in r.data


def test_edit_and_delete_product(client, products):
    _post(client, b_action="add", b_prodid=products["BOX-001"])

    r = _post(client, b_action="edit", b_prodid=products["BOX-001"], b_quantity=3)
    assert b'<td class="quantity">3</td>' in r.data

    r = _post(client, b_action="edit", b_prodid=products["BOX-001"], b_quantity=0)
    assert b"Your basket is empty" in r.data

    _post(client, b_action="add", b_prodid=products["BASK-001"])
    r = _post(client, b_action="delete", b_prodid=products["BASK-001"])
    assert b"Your basket is empty" in r.data


def test_add_out_of_stock(client, products):
    r = _post(client, b_action="add", b_prodid=products["FILL-001"])
    assert r.status_code == 200
    assert b"Out of stock" in r.data
    assert b"Your basket is empty" in r.data


def test_add_unknown_product(client, products):
    r = _post(client, b_action="add", b_prodid=999)
    assert b"Product not found" in r.data


def test_unknown_action(client, products):
    r = _post(client, b_action="explode", b_prodid=products["BOX-001"])
    assert b'Unknown basket action "explode"' in r.data


def test_related_header_assets(client):
    r = client.get("/basket")
    assert b'<link rel="stylesheet" href="/static/css/basket-related.css">' in r.data
    assert b'<script defer src="/static/js/basket-related.js"></script>' in r.data
    assert b"basket-related-bought" not in r.data


def test_bought_together(client, account, products, make_order):
    make_order(account, [products["BOX-001"], products["BASK-001"]])

    r = _post(client, b_action="add", b_prodid=products["BOX-001"])
    assert b"basket-related-bought" in r.data
    assert b"Wicker Basket" in r.data


def test_bought_together_size(app, client, account, products, make_order):
    app.config["BASKET_RELATED_BOUGHT_SIZE"] = 0
    make_order(account, [products["BOX-001"], products["BASK-001"]])

    r = _post(client, b_action="add", b_prodid=products["BOX-001"])
    assert b"basket-related-bought" not in r.data
