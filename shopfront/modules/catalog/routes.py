from __future__ import annotations

from flask import Blueprint

from shopfront.app.client import Context, View
from shopfront.modules.catalog.suggest import CatalogSuggest

bp = Blueprint("catalog", __name__)


def _suggest() -> CatalogSuggest:
    client = CatalogSuggest(Context.from_request(), View.from_request())
    client.init()
    return client


@bp.get("/catalog/suggest")
def suggest():
    """GET /catalog/suggest - HTML list for the search autocompletion.

    Query params:
      - f_search: entered text
      - f_catid: category to restrict suggestions to
    """
    return _suggest().body(), 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.get("/api/suggest")
def suggest_json():
    """GET /api/suggest - same suggestions as JSON."""
    client = _suggest()
    view = client.data(client.view())
    return {
        "items": [
            {
                "id": p.id,
                "sku": p.sku,
                "name": p.name,
                "category": p.category,
                "price_cents": p.price_cents,
                "image_url": p.image_url,
            }
            for p in view.suggest_items
        ]
    }, 200
