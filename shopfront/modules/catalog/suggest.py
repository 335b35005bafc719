from __future__ import annotations

from shopfront.app.client import HtmlClient, View
from shopfront.frontend.product import ProductController


class CatalogSuggest(HtmlClient):
    """Product suggestions for the full text search autocompletion.

    Suggestions are restricted to the selected category unless
    ``CATALOG_SUGGEST_RESTRICT`` is turned off.
    """

    template_body = "catalog/suggest/body.html"

    def data(self, view: View) -> View:
        config = self.context().config
        size = config.get("CATALOG_SUGGEST_SIZE", 24)

        cntl = ProductController(self.context()).text(view.param("f_search"))

        if config.get("CATALOG_SUGGEST_RESTRICT", True):
            cntl.category(view.param("f_catid", config.get("CATALOG_CATID_DEFAULT")))
            self.conditions(cntl, view)

        view.suggest_items = cntl.slice(0, size).search()
        return super().data(view)

    def conditions(self, cntl: ProductController, view: View) -> None:
        """Adds additional conditions for filtering."""
        if view.config("CATALOG_INSTOCK", False):
            cntl.in_stock()
