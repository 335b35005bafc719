from flask import Flask

from shopfront.modules.account.routes import bp as account_bp
from shopfront.modules.basket.routes import bp as basket_bp
from shopfront.modules.catalog.routes import bp as catalog_bp
from shopfront.modules.checkout.routes import bp as checkout_bp


def register_client_blueprints(app: Flask) -> None:
    app.register_blueprint(account_bp)
    app.register_blueprint(basket_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(checkout_bp)

    # Root API document
    @app.get("/api")
    def api_index():
        return {
            "name": "Shopfront",
            "version": "0.1.0",
            "endpoints": {
                "pages": ["/basket", "/checkout", "/account/review"],
                "fragments": ["/catalog/suggest"],
                "notifications": ["/checkout/update"],
                "api": ["/api/suggest"],
            },
        }, 200
