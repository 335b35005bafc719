import logging

from shopfront.app.common.request_context import RequestIdFilter


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json["status"] == "ok"


def test_api_index(client):
    r = client.get("/api")
    assert r.status_code == 200
    assert "/checkout" in r.json["endpoints"]["pages"]


def test_unknown_page_renders_error(client):
    r = client.get("/does-not-exist")
    assert r.status_code == 404
    assert b"Error 404" in r.data


def test_request_id_shown_on_error_page(client):
    r = client.get("/does-not-exist", headers={"X-Request-ID": "req-123"})
    assert b"req-123" in r.data


def test_request_id_echoed(client):
    r = client.get("/health", headers={"X-Request-ID": "abc"})
    assert r.headers["X-Request-ID"] == "abc"

    r = client.get("/health")
    assert r.headers["X-Request-ID"]


def test_log_records_carry_request_id():
    record = logging.LogRecord("shopfront", logging.INFO, __file__, 1, "msg", None, None)
    assert RequestIdFilter().filter(record)
    assert record.request_id == "-"
